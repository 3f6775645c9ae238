import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from jose import JWTError

from babybook.core.security import (
    create_access_token,
    decode_access_token,
    expiry_from_now,
    get_password_hash,
    verify_password,
)
from babybook.db.errors import AuthError, BackendError

logger = logging.getLogger(__name__)


@dataclass
class SessionUser:
    id: str
    email: str


@dataclass
class Session:
    access_token: str
    user: SessionUser
    expires_at: datetime


class AuthClient:
    """Email/password accounts and the sessions issued to them."""

    def __init__(self, client, secret_key: str, algorithm: str = "HS256", session_minutes: int = 60 * 24 * 7):
        self.client = client
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.session_minutes = session_minutes

    def sign_up(self, email: str, password: str) -> SessionUser:
        email = email.strip().lower()
        existing = self.client.table("users").select("id").eq("email", email).maybe_single().execute()
        if existing.data:
            raise AuthError("User already registered", code="user_already_exists")

        created = self.client.table("users").insert({
            "email": email,
            "hashed_password": get_password_hash(password),
        }).execute()
        user = created.data[0]
        logger.info("Registered user %s", user["id"])
        return SessionUser(id=user["id"], email=user["email"])

    def sign_in_with_password(self, email: str, password: str) -> Session:
        email = (email or "").strip().lower()
        found = self.client.table("users").select("id,email,hashed_password").eq("email", email).maybe_single().execute()
        user = found.data
        if not user or not verify_password(password or "", user["hashed_password"]):
            raise AuthError("Invalid login credentials", code="invalid_credentials")

        expires_at = expiry_from_now(self.session_minutes)
        row = self.client.table("auth_sessions").insert({
            "user_id": user["id"],
            "expires_at": expires_at,
        }).execute().data[0]
        token = create_access_token(user["id"], row["id"], expires_at, self.secret_key, self.algorithm)
        logger.info("Signed in user %s", user["id"])
        return Session(access_token=token, user=SessionUser(id=user["id"], email=user["email"]), expires_at=expires_at)

    def get_session(self, access_token: Optional[str]) -> Optional[Session]:
        """The live session for ``access_token``, or None when it is missing, expired or signed out."""
        if not access_token:
            return None
        try:
            claims = decode_access_token(access_token, self.secret_key, self.algorithm)
        except JWTError as exc:
            logger.debug("Rejected access token: %s", exc)
            return None

        try:
            row = (
                self.client.table("auth_sessions")
                .select("id,user_id")
                .eq("id", claims.get("sid"))
                .maybe_single()
                .execute()
            ).data
            if not row or row["user_id"] != claims.get("sub"):
                return None
            user = self.client.table("users").select("id,email").eq("id", row["user_id"]).maybe_single().execute().data
        except BackendError as exc:
            logger.error("Session lookup failed: %s", exc.message)
            return None
        if not user:
            return None

        return Session(
            access_token=access_token,
            user=SessionUser(id=user["id"], email=user["email"]),
            expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
        )

    def sign_out(self, access_token: Optional[str]) -> None:
        if not access_token:
            return
        try:
            claims = decode_access_token(access_token, self.secret_key, self.algorithm)
        except JWTError:
            return
        self.client.table("auth_sessions").delete().eq("id", claims.get("sid")).execute()
        logger.info("Signed out user %s", claims.get("sub"))
