import logging
from datetime import datetime
from typing import Optional

from fastapi import Cookie, Depends, HTTPException
from sqlalchemy.orm import Session

from .cache import cache, session_cache_key
from .config import SESSION_CACHE_TTL, SESSION_COOKIE_NAME
from .database import get_db
from .models import USER_TYPE_ADMIN, USER_TYPE_SUBADMIN, User, UserSession, UserSettings
from .schemas import ValidatedUser

logger = logging.getLogger(__name__)


def load_session_user(db: Session, token: str) -> Optional[ValidatedUser]:
    """Join a live session row to its user and settings. None when expired or logged out."""
    row = (
        db.query(UserSession, User, UserSettings)
        .join(User, User.id == UserSession.user_id)
        .outerjoin(UserSettings, UserSettings.user_id == User.id)
        .filter(
            UserSession.session_id == token,
            UserSession.expires > datetime.utcnow(),
            UserSession.logout.is_(False),
        )
        .first()
    )
    if not row:
        return None

    session, user, settings = row
    return ValidatedUser(
        user_id=user.id,
        slug=user.slug,
        username=user.username,
        email=user.email,
        user_type_id=user.user_type_id,
        theme_id=settings.theme_id if settings else 1,
        list_view=settings.list_view if settings else "consult",
        avatar_path=user.avatar_path,
        expires=session.expires,
    )


def validate_session(db: Session, token: str) -> Optional[ValidatedUser]:
    """
    Cache-aside session lookup.

    The cached record carries the session expiry, so a cached entry is
    rejected as soon as the session would have been rejected by the database.
    """
    key = session_cache_key(token)
    cached = cache.get(key)
    if cached is not None:
        user = ValidatedUser.model_validate(cached)
        if user.expires > datetime.utcnow():
            return user
        cache.delete(key)
        return None

    user = load_session_user(db, token)
    if user is None:
        return None

    remaining = int((user.expires - datetime.utcnow()).total_seconds())
    ttl = min(SESSION_CACHE_TTL, remaining)
    if ttl > 0:
        cache.set(key, user.model_dump(mode="json"), ttl)
    return user


async def get_optional_user(
    session_token: Optional[str] = Cookie(None, alias=SESSION_COOKIE_NAME),
    db: Session = Depends(get_db),
) -> Optional[ValidatedUser]:
    if not session_token:
        return None
    return validate_session(db, session_token)


async def get_current_user(
    user: Optional[ValidatedUser] = Depends(get_optional_user),
) -> ValidatedUser:
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated. Please log in.")
    return user


async def require_admin(user: ValidatedUser = Depends(get_current_user)) -> ValidatedUser:
    if user.user_type_id not in (USER_TYPE_ADMIN, USER_TYPE_SUBADMIN):
        logger.warning(f"⚠️ User {user.user_id} attempted admin access")
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def evict_user_sessions(db: Session, user_id: int) -> int:
    """Drop the cached records of every live session a user holds"""
    tokens = (
        db.query(UserSession.session_id)
        .filter(
            UserSession.user_id == user_id,
            UserSession.expires > datetime.utcnow(),
            UserSession.logout.is_(False),
        )
        .all()
    )
    for row in tokens:
        cache.delete(session_cache_key(row.session_id))
    return len(tokens)
