import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.exceptions import CatalogError, DataStoreError
from utils.logger import configure_logging, logger

# Import routers
from controller.catalog.product import controller as products
from controller.catalog.reference import controller as reference
from controller.accounts.auth import controller as auth
from controller.accounts.wishlist import controller as wishlist
from controller.health import health_controller

configure_logging()

app = FastAPI(
    title="Cosmetics Catalog API",
    version="1.0.0",
    description="Product search, store prices, accounts and wishlists for the cosmetics catalog"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins for development
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    logger.info("%s %s -> %s (%.4fs)", request.method, request.url.path, response.status_code, process_time)
    return response


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    if isinstance(exc, DataStoreError):
        logger.error("Data store failure on %s %s: %r", request.method, request.url.path, exc.cause)
        return JSONResponse(status_code=exc.status_code, content={"error": "Internal server error"})

    logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


app.include_router(
    products.router,
    prefix="/products",
    tags=["Catalog - Products"]
)

app.include_router(
    reference.router,
    tags=["Catalog - Reference"]
)

app.include_router(
    auth.router,
    tags=["Accounts - Auth"]
)

app.include_router(
    wishlist.router,
    prefix="/saved-products",
    tags=["Accounts - Wishlist"]
)

app.include_router(
    health_controller.router,
    tags=["System"]
)


@app.get("/", tags=["System"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": "Welcome to Cosmetics Catalog API",
        "version": "1.0.0",
        "docs": "/docs"
    }


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
