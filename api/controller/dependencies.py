from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import Settings, get_settings
from core.database import get_db
from core.exceptions import AuthError
from core.security import PasswordHasher, TokenService
from services.accounts.auth_service import AuthService
from services.accounts.wishlist_service import WishlistService
from services.catalog.product_service import ProductService
from services.catalog.reference_service import ReferenceService

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService.from_settings(settings)


def get_product_service(db=Depends(get_db)) -> ProductService:
    return ProductService(db)


def get_reference_service(db=Depends(get_db)) -> ReferenceService:
    return ReferenceService(db)


def get_auth_service(
    db=Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(db, hasher, tokens)


def get_wishlist_service(db=Depends(get_db)) -> WishlistService:
    return WishlistService(db)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Dict[str, Any]:
    """Claims of the bearer token; 401 when absent, 403 when invalid."""
    if credentials is None or not credentials.credentials:
        raise AuthError("Token is missing")
    return tokens.verify(credentials.credentials)
