import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from app.config.settings import Settings, get_settings
from app.core.exceptions import UnauthorizedError

USER_TOKEN = "user"
ADMIN_TOKEN = "admin"


class TokenService:
    """
    Service for JWT tokens, password hashing and reset tokens.

    Users and admins get separate signing secrets so a user token can never
    pass an admin check.
    """

    ALGORITHM = "HS256"

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.TOKEN_EXPIRE_DAYS = self.settings.TOKEN_EXPIRE_DAYS
        self.RESET_TOKEN_EXPIRE_MINUTES = self.settings.RESET_TOKEN_EXPIRE_MINUTES

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Check a password against its bcrypt hash"""
        try:
            return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError:
            # malformed hash
            return False

    def get_password_hash(self, password: str) -> str:
        """Hash a password with a fresh salt"""
        hash_bytes = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=10))
        return hash_bytes.decode("utf-8")

    def _secret_for(self, token_type: str) -> str:
        if token_type == ADMIN_TOKEN:
            return self.settings.ADMIN_TOKEN_SECRET_KEY
        return self.settings.TOKEN_SECRET_KEY

    def create_access_token(
        self, subject: str, token_type: str = USER_TOKEN, expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create a signed JWT for a user or admin.

        Args:
            subject: Id of the user or admin (stored as `sub`)
            token_type: USER_TOKEN or ADMIN_TOKEN, selects the signing secret
            expires_delta: Lifetime (defaults to TOKEN_EXPIRE_DAYS)

        Returns:
            Encoded JWT
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(days=self.TOKEN_EXPIRE_DAYS))
        to_encode: Dict[str, Any] = {"sub": str(subject), "exp": expire, "iat": now, "token_type": token_type}
        return jwt.encode(to_encode, self._secret_for(token_type), algorithm=self.ALGORITHM)

    def create_user_token(self, user_id: Any) -> str:
        return self.create_access_token(str(user_id), USER_TOKEN)

    def create_admin_token(self, admin_id: Any) -> str:
        return self.create_access_token(str(admin_id), ADMIN_TOKEN)

    def decode_token(self, token: str, token_type: str = USER_TOKEN) -> Dict[str, Any]:
        """
        Decode and validate a JWT.

        Raises:
            UnauthorizedError: If the token is invalid, expired or of the wrong type
        """
        try:
            payload = jwt.decode(token, self._secret_for(token_type), algorithms=[self.ALGORITHM])
        except JWTError as e:
            raise UnauthorizedError("Not authorized, token failed") from e

        if payload.get("token_type") != token_type or not payload.get("sub"):
            raise UnauthorizedError("Not authorized, token failed")

        return payload

    def decode_user_token(self, token: str) -> str:
        """Return the user id carried by a user token."""
        return self.decode_token(token, USER_TOKEN)["sub"]

    def decode_admin_token(self, token: str) -> str:
        """Return the admin id carried by an admin token."""
        return self.decode_token(token, ADMIN_TOKEN)["sub"]

    def generate_reset_token(self) -> tuple[str, datetime]:
        """Return a random 40-hex-character reset token and its expiry."""
        expires = datetime.now(timezone.utc) + timedelta(minutes=self.RESET_TOKEN_EXPIRE_MINUTES)
        return secrets.token_hex(20), expires
