# Image rows whose URL contains this marker are stand-ins, never real photos
PLACEHOLDER_IMAGE_MARKER = "placeholder.webp"

# "<min>+" price buckets are normalized to this floor with no upper bound
OPEN_ENDED_PRICE_FLOOR = 1000

DEFAULT_DELIVERY = "по Києву"

# Shown in grouped search stubs when a product has no volume
MISSING_VOLUME = "Н/Д"

# Used by /filter-options when no store price exists
DEFAULT_MIN_PRICE = 0
DEFAULT_MAX_PRICE = 10000

TRUE_LITERAL = "true"
ALL_LIMIT = "all"

#####product select columns#####
PRODUCT_SCALAR_COLUMNS = [
    "p.id",
    "p.name",
    "p.volume",
    "p.type",
    "p.rating",
    "p.views",
    "p.code",
]

# (column, alias) pairs; every one must also appear in GROUP BY
PRODUCT_JOINED_COLUMNS = [
    ("c.name_ua", "category_name"),
    ("c.name_en", "category_id"),
    ("b.name", "brand_name"),
    ("pd.description", "description"),
    ("pd.composition", "composition"),
    ("pd.usage", "usage"),
    ("pd.description_full", "description_full"),
    ("pf.brand", "feature_brand"),
    ("pf.country", "country"),
    ("pf.type", "feature_type"),
    ("pf.class", "class"),
    ("pf.category", "feature_category"),
    ("pf.purpose", "purpose"),
    ("pf.gender", "gender"),
    ("pf.active_ingredients", "active_ingredients"),
]

FEATURE_COLUMN_MAP = {
    "brand": "feature_brand",
    "country": "country",
    "type": "feature_type",
    "class": "class",
    "category": "feature_category",
    "purpose": "purpose",
    "gender": "gender",
    "active_ingredients": "active_ingredients",
}
