"""
Error taxonomy shared by services and controllers.

Services raise these; main.py turns them into JSON responses.
"""


class CatalogError(Exception):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    status_code = 400


class ConflictError(CatalogError):
    status_code = 400


class AuthError(CatalogError):
    status_code = 401


class InvalidTokenError(CatalogError):
    status_code = 403


class ForbiddenError(CatalogError):
    status_code = 403


class NotFoundError(CatalogError):
    status_code = 404


class DataStoreError(CatalogError):
    """Database failure. The public message never carries query text."""
    status_code = 500

    def __init__(self, message: str = "Internal server error", cause: Exception = None):
        super().__init__(message)
        self.cause = cause
