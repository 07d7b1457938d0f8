"""
Auth Service - registration, login and profile management
"""
import logging
from typing import Any, Dict

from core.exceptions import AuthError, NotFoundError, ValidationError
from core.security import PasswordHasher, TokenService
from utils.schema.accounts.auth_schema import LoginRequest, RegisterRequest, UpdateUserRequest

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, nickname, email, photo, gender, birth_date, is_admin"


class AuthService:
    """Credential store backed by the users table"""

    def __init__(self, db_connection, hasher: PasswordHasher, tokens: TokenService):
        self.crud = db_connection
        self.hasher = hasher
        self.tokens = tokens

    def _issue_for(self, user: Dict[str, Any]) -> str:
        return self.tokens.issue({
            "id": user["id"],
            "nickname": user["nickname"],
            "is_admin": bool(user.get("is_admin")),
        })

    def register(self, data: RegisterRequest) -> Dict[str, Any]:
        if not data.nickname or not data.email or not data.password:
            raise ValidationError("Nickname, email and password are required")

        logger.info("Registering user: nickname=%s", data.nickname)
        rows = self.crud.execute_returning(
            f"""
            INSERT INTO users (nickname, email, password, photo, gender, birth_date, is_admin)
            VALUES (:nickname, :email, :password, :photo, :gender, :birth_date, FALSE)
            RETURNING {USER_COLUMNS}
            """,
            {
                "nickname": data.nickname,
                "email": data.email,
                "password": self.hasher.hash(data.password),
                "photo": data.photo,
                "gender": data.gender,
                "birth_date": data.birth_date,
            },
        )
        user = rows[0]
        return {"token": self._issue_for(user), "user": user}

    def verify(self, identifier: str, password: str) -> Dict[str, Any]:
        """
        Look up a user by nickname or email and check the password.

        Raises:
            AuthError: unknown identifier or wrong password
        """
        user = self.crud.fetch_one(
            f"SELECT {USER_COLUMNS}, password FROM users WHERE nickname = :identifier OR email = :identifier",
            {"identifier": identifier},
        )
        if user is None or not self.hasher.verify(password, user.get("password")):
            raise AuthError("Wrong nickname/email or password")

        user.pop("password", None)
        return user

    def login(self, data: LoginRequest) -> Dict[str, Any]:
        if not data.identifier or not data.password:
            raise ValidationError("Identifier and password are required")

        user = self.verify(data.identifier, data.password)
        logger.info("User logged in: id=%s", user["id"])
        return {"token": self._issue_for(user), "user": user}

    def get_profile(self, user_id: int) -> Dict[str, Any]:
        user = self.crud.fetch_one(
            f"SELECT {USER_COLUMNS} FROM users WHERE id = :user_id", {"user_id": user_id}
        )
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_user(self, user_id: int, data: UpdateUserRequest) -> Dict[str, Any]:
        rows = self.crud.execute_returning(
            f"""
            UPDATE users
            SET email = :email, gender = :gender, birth_date = :birth_date
            WHERE id = :user_id
            RETURNING {USER_COLUMNS}
            """,
            {
                "email": data.email,
                "gender": data.gender,
                "birth_date": data.birth_date,
                "user_id": user_id,
            },
        )
        if not rows:
            raise NotFoundError("User not found")
        return {"user": rows[0]}
