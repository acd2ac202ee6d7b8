"""Auth service - registration and session lifecycle"""

import logging
from datetime import datetime, timedelta

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...cache import cache, session_cache_key
from ...config import SESSION_TTL_DAYS
from ...models import USER_TYPE_ADMIN, USER_TYPE_REGULAR, User
from ...schemas import ValidationResponse
from ...security_utils import generate_session_token, hash_password_bcrypt, verify_password_bcrypt
from ...shared.validators import validate_email
from .repository import AuthRepository
from .schemas import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AuthRepository()

    def register(self, data: RegisterRequest) -> User:
        logger.info(f"📥 Registering user: {data.username}")

        if self.repo.get_user_by_username_or_email(self.db, data.username, data.email):
            raise HTTPException(status_code=409, detail="Username or email already registered")

        # The first account on a fresh install administers the rest
        user_type_id = USER_TYPE_ADMIN if self.repo.count_users(self.db) == 0 else USER_TYPE_REGULAR

        try:
            user = self.repo.create_user(
                self.db,
                username=data.username,
                email=data.email,
                password_hash=hash_password_bcrypt(data.password),
                user_type_id=user_type_id,
            )
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"⚠️ Duplicate registration for {data.username}: {e}")
            raise HTTPException(status_code=409, detail="Username or email already registered") from e

        logger.info(f"✅ Registered user {user.id} ({user.username})")
        return user

    def login(self, data: LoginRequest) -> tuple[str, datetime]:
        """Returns the new session token and its expiry"""
        user = self.repo.get_user_by_username(self.db, data.username.strip())
        if not user or not verify_password_bcrypt(data.password, user.password_hash):
            logger.warning(f"⚠️ Failed login for username: {data.username}")
            raise HTTPException(status_code=401, detail="Invalid Login Request")

        token = generate_session_token()
        expires = datetime.utcnow() + timedelta(days=SESSION_TTL_DAYS)
        self.repo.create_session(self.db, user, token, expires)

        logger.info(f"✅ User {user.id} logged in, session expires {expires.isoformat()}")
        return token, expires

    def logout(self, token: str) -> None:
        if self.repo.expire_session(self.db, token):
            logger.info("✅ Session logged out")
        cache.delete(session_cache_key(token))

    def check_email(self, email: str) -> ValidationResponse:
        try:
            email = validate_email(email)
        except ValueError:
            return ValidationResponse(msg="Incorrect Format.", class_="validation_error")

        if not email or len(email) < 3:
            return ValidationResponse(msg="Incorrect Format.", class_="validation_error")

        if self.repo.email_exists(self.db, email):
            return ValidationResponse(msg="Email already taken!", class_="validation_error")
        return ValidationResponse(msg="Email is available for use", class_="validation_success")
