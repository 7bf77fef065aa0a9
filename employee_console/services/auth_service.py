"""Service for auth identities and bearer sessions."""
import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash, check_password_hash

from employee_console.core.config import settings
from employee_console.core.exceptions import AuthenticationError, ConflictError, InvalidInputError
from employee_console.core.logging import get_logger
from employee_console.db.models.employee import AuthUser, AuthSession
from employee_console.schemas.employee import AuthUserInDB

logger = get_logger(__name__)

PASSWORD_MIN_LENGTH = 6


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return check_password_hash(password_hash or "", password)
    except ValueError:
        # Stored with a hash method werkzeug does not know
        return False


def hash_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode()).hexdigest()


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AuthService:
    """Identity store: sign-up, password check and bearer sessions."""

    def __init__(self, db_session: Session, session_ttl_hours: Optional[int] = None):
        self.db = db_session
        self.session_ttl = timedelta(hours=session_ttl_hours or settings.SESSION_TTL_HOURS)

    def sign_up(
        self,
        email: str,
        password: str,
        role: str = "VENDOR",
        full_name: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> AuthUserInDB:
        """
        Create an auth identity.

        Args:
            email: Login email, stored lower-cased
            password: Plain password, stored as a salted hash
            role: Role recorded on the identity
            full_name: Display name
            metadata: Extra attributes kept with the identity

        Returns:
            The created identity

        Raises:
            InvalidInputError: Missing email or short password
            ConflictError: Email already registered
        """
        normalized_email = (email or "").strip().lower()
        if not normalized_email:
            raise InvalidInputError("Email is required")
        if len(password or "") < PASSWORD_MIN_LENGTH:
            raise InvalidInputError(f"Password should be at least {PASSWORD_MIN_LENGTH} characters")

        existing = self.db.query(AuthUser.id).filter(AuthUser.email == normalized_email).first()
        if existing:
            raise ConflictError("User already registered")

        user = AuthUser(
            email=normalized_email,
            password_hash=hash_password(password),
            role=role,
            full_name=full_name,
            user_metadata=dict(metadata or {}, role=role, full_name=full_name),
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"Created auth user {user.id} with role {role}")
        return AuthUserInDB.model_validate(user)

    def authenticate(self, email: str, password: str) -> AuthUserInDB:
        """Check an email/password pair"""
        normalized_email = (email or "").strip().lower()
        user = self.db.query(AuthUser).filter(AuthUser.email == normalized_email).first()
        if not user or not verify_password(password or "", user.password_hash):
            logger.warning(f"Failed sign-in for {normalized_email}")
            raise AuthenticationError("Invalid login credentials")
        return AuthUserInDB.model_validate(user)

    def issue_session(self, user_id) -> Tuple[str, datetime]:
        """
        Create a bearer session for a user.

        Returns:
            The raw token (only time it's visible) and its expiry
        """
        raw_token = f"ecs_{secrets.token_urlsafe(32)}"
        expires_at = datetime.now(timezone.utc) + self.session_ttl

        self.db.add(AuthSession(user_id=user_id, token_hash=hash_token(raw_token), expires_at=expires_at))
        self.db.commit()

        logger.info(f"Issued session for user {user_id}, expires {expires_at.isoformat()}")
        return raw_token, expires_at

    def resolve_session(self, raw_token: str) -> Optional[AuthUserInDB]:
        """Return the identity behind a bearer token, None when unknown or expired"""
        if not raw_token:
            return None

        auth_session = self.db.query(AuthSession).filter(
            AuthSession.token_hash == hash_token(raw_token)
        ).first()
        if not auth_session:
            return None

        if auth_session.expires_at and _as_utc(auth_session.expires_at) < datetime.now(timezone.utc):
            logger.warning(f"Session {auth_session.id} has expired")
            return None

        return AuthUserInDB.model_validate(auth_session.user)
