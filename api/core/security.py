from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from core.config import Settings
from core.exceptions import InvalidTokenError


class PasswordHasher:
    """bcrypt-backed credential hashing"""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password."""
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(self.rounds)).decode("utf-8")

    def verify(self, password: str, digest: Optional[str]) -> bool:
        """Verify a plain password against a stored digest."""
        if not digest:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), digest.encode("utf-8"))
        except ValueError:
            # Digest is not a bcrypt hash
            return False


class TokenService:
    """Issues and verifies signed JWT access tokens"""

    def __init__(self, secret: str, algorithm: str = "HS256", default_ttl_minutes: int = 60):
        self.secret = secret
        self.algorithm = algorithm
        self.default_ttl = timedelta(minutes=default_ttl_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(settings.JWT_SECRET, settings.JWT_ALGORITHM, settings.ACCESS_TOKEN_TTL_MINUTES)

    def issue(self, claims: Dict[str, Any], ttl: Optional[timedelta] = None) -> str:
        """Create a JWT access token."""
        to_encode = claims.copy()
        to_encode["exp"] = datetime.now(timezone.utc) + (ttl or self.default_ttl)
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """Verify and decode a JWT token."""
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            raise InvalidTokenError("Invalid token")
