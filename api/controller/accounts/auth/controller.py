"""
Auth Controller - registration, login and profile endpoints
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from controller.dependencies import get_auth_service, get_current_user
from services.accounts.auth_service import AuthService
from utils.schema.accounts.auth_schema import LoginRequest, RegisterRequest, UpdateUserRequest


router = APIRouter()


@router.post("/register", response_model=dict)
def register(
    data: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user and return an access token.

    **Example:**
    ```json
    {"nickname": "olena", "email": "olena@example.com", "password": "secret"}
    ```
    """
    return service.register(data)


@router.post("/login", response_model=dict)
def login(
    data: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Log in with nickname or email"""
    return service.login(data)


@router.get("/profile", response_model=dict)
def get_profile(
    user: Dict[str, Any] = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return service.get_profile(user["id"])


@router.post("/update-user", response_model=dict)
def update_user(
    data: UpdateUserRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return service.update_user(user["id"], data)
