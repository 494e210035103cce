"""
Registration, password checks and bearer tokens.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from calorics.core.config import settings
from calorics.models.user import User
from calorics.services.errors import EmailTakenError, InvalidCredentialsError

logger = logging.getLogger(__name__)


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # malformed hash in the store
        return False


def create_access_token(user_id: int) -> str:
    expiration = datetime.now(timezone.utc) + timedelta(hours=settings.token_ttl_hours)
    return jwt.encode(
        {"sub": str(user_id), "exp": expiration},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> Optional[int]:
    """
    User id carried by a valid token, or None for expired/invalid tokens.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.InvalidTokenError:
        return None

    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        return None


def email_taken(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == email).first() is not None


def register_user(
    db: Session,
    name: str,
    email: str,
    password: str,
    gender: str,
    birthday: str,
    weight: Optional[int] = None,
    height: Optional[int] = None,
    waist: Optional[int] = None,
    neck: Optional[int] = None,
    hip: Optional[int] = None,
    goal: str = "maintain",
) -> User:
    if email_taken(db, email):
        raise EmailTakenError("Email already registered")

    user = User(
        name=name,
        email=email,
        password_hash=hash_password(password),
        gender=gender,
        birthday=birthday,
        weight=weight,
        height=height,
        waist=waist,
        neck=neck,
        hip=hip,
        goal=goal,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # concurrent registration won the unique email constraint
        db.rollback()
        raise EmailTakenError("Email already registered")
    except Exception:
        db.rollback()
        raise
    db.refresh(user)

    logger.info(f"[AUTH] Registered user_id={user.id}")
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Same error for unknown email and wrong password.
    """
    user = (
        db.query(User)
        .filter(User.email == email, User.deleted_at.is_(None))
        .first()
    )
    if not user or not check_password(password, user.password_hash):
        logger.info("[AUTH] Failed login attempt")
        raise InvalidCredentialsError("Invalid email or password")
    return user


def get_active_user(db: Session, user_id: int) -> Optional[User]:
    return (
        db.query(User)
        .filter(User.id == user_id, User.deleted_at.is_(None))
        .first()
    )
