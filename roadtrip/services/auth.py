"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, defer

from roadtrip.config import Settings
from roadtrip.errors import AuthenticationError, ConflictError, ValidationError
from roadtrip.models.user import User

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def set_password(user: User, plain_password: str) -> None:
    """Replace the user's password verifier.

    This is the only code path that runs the slow hash. Saving a user for any
    other reason leaves ``password_hash`` untouched.
    """
    user.password_hash = get_password_hash(plain_password)


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively, so they are stored lower-cased."""
    return email.strip().lower()


def create_access_token(
    user_id: int, settings: Settings, expires_delta: timedelta | None = None
) -> str:
    """Create a JWT access token.

    Every call embeds a fresh ``jti``, so two tokens issued for the same user
    in the same second are still distinct.
    """
    issued_at = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + expires_delta,
        "jti": uuid4().hex,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> int:
    """Validate a JWT token and return the user id it was issued for."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise AuthenticationError("Not authorized, token failed") from e

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as e:
        raise AuthenticationError("Not authorized, token failed") from e


def authenticate_token(db: Session, settings: Settings, token: str | None) -> User:
    """Resolve a bearer token to the user it belongs to.

    Raises AuthenticationError when the token is absent, fails verification,
    or names a user that no longer exists.
    """
    if not token:
        raise AuthenticationError("Not authorized, no token")

    try:
        user_id = decode_access_token(token, settings)
    except AuthenticationError:
        logger.warning("Rejected bearer token")
        raise

    # The gate never needs the verifier, so it stays unloaded
    user = db.query(User).options(defer(User.password_hash)).filter(User.id == user_id).first()
    if user is None:
        logger.warning(f"Token for missing user {user_id}")
        raise AuthenticationError("Not authorized, user not found")
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def create_user(db: Session, username: str, email: str, password: str) -> User:
    """Create a new user."""
    user = User(username=username, email=normalize_email(email))
    set_password(user, password)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User already exists") from None
    db.refresh(user)
    return user


def register_user(
    db: Session,
    settings: Settings,
    username: str | None,
    email: str | None,
    password: str | None,
) -> tuple[User, str]:
    """Register an account and issue its first token."""
    username = username.strip() if username else None
    if not username or not email or not password:
        raise ValidationError("Please fill in all fields")

    if get_user_by_email(db, email):
        raise ConflictError("User already exists")
    if get_user_by_username(db, username):
        raise ConflictError("Username already taken")

    user = create_user(db, username, email, password)
    logger.info(f"Registered user {user.id}")
    return user, create_access_token(user.id, settings)


def login_user(
    db: Session, settings: Settings, email: str | None, password: str | None
) -> tuple[User, str]:
    """Check credentials and issue a token.

    Unknown email and wrong password fail the same way.
    """
    user = authenticate_user(db, email, password) if email and password else None
    if user is None:
        logger.warning("Failed login attempt")
        raise AuthenticationError("Invalid email or password")
    return user, create_access_token(user.id, settings)
