"""User service - settings, subscriptions, feed and avatar"""

import logging
from datetime import datetime, timedelta

from fastapi import HTTPException, UploadFile
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...auth import evict_user_sessions
from ...models import (
    ENTITY_TYPE_CLIENT,
    ENTITY_TYPE_CONSULT,
    ENTITY_TYPE_CONSULTANT,
    ENTITY_TYPE_LOCATION,
    User,
)
from ...schemas import ValidatedUser
from ...storage import IMAGE_TYPES, delete_upload, save_upload
from .repository import SUBSCRIBABLE, SubscriptionRepository, UserRepository
from .schemas import (
    FeedItem,
    SubscriptionToggleResponse,
    UserSettingsResponse,
    UserSettingsUpdate,
    UserSubscriptions,
)

logger = logging.getLogger(__name__)

FEED_WINDOW_DAYS = 7


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()
        self.subs = SubscriptionRepository()

    def _get_user(self, current_user: ValidatedUser) -> User:
        user = self.repo.get_user(self.db, current_user.user_id)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return user

    def get_settings(self, current_user: ValidatedUser) -> UserSettingsResponse:
        user = self._get_user(current_user)
        settings = self.repo.get_or_create_settings(self.db, user)
        return UserSettingsResponse(
            slug=user.slug,
            username=user.username,
            email=user.email,
            theme_id=settings.theme_id,
            list_view=settings.list_view,
            avatar_path=user.avatar_path,
        )

    def update_settings(self, current_user: ValidatedUser, data: UserSettingsUpdate) -> UserSettingsResponse:
        user = self._get_user(current_user)
        logger.info(f"📥 Updating settings for user_id: {user.id}")

        if data.username and self.repo.username_taken(self.db, data.username, user.id):
            raise HTTPException(status_code=409, detail="Username already taken")
        if data.email and self.repo.email_taken(self.db, data.email, user.id):
            raise HTTPException(status_code=409, detail="Email already taken!")

        settings = self.repo.get_or_create_settings(self.db, user)
        if data.username:
            user.username = data.username
        if data.email:
            user.email = data.email
        if data.theme_id is not None:
            settings.theme_id = data.theme_id
        if data.list_view:
            settings.list_view = data.list_view

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise HTTPException(status_code=409, detail="Username or email already taken") from e

        # Every cached session record carries username/email/settings
        evict_user_sessions(self.db, user.id)

        return self.get_settings(current_user)

    def toggle_subscription(
        self, current_user: ValidatedUser, entity_type_id: int, slug: str
    ) -> SubscriptionToggleResponse:
        if entity_type_id not in SUBSCRIBABLE:
            raise HTTPException(status_code=400, detail="Unsupported entity type")

        entity = self.subs.get_entity(self.db, entity_type_id, slug)
        if not entity:
            raise HTTPException(status_code=404, detail="Record not found")

        existing = self.subs.get_subscription(self.db, current_user.user_id, entity_type_id, entity.id)
        if existing:
            self.subs.remove(self.db, existing)
            logger.info(f"🔕 User {current_user.user_id} unsubscribed from {entity_type_id}:{entity.id}")
            return SubscriptionToggleResponse(entity_type_id=entity_type_id, slug=slug, subscribed=False)

        try:
            self.subs.add(self.db, current_user.user_id, entity_type_id, entity.id)
        except IntegrityError:
            # A concurrent toggle already subscribed
            self.db.rollback()
        logger.info(f"🔔 User {current_user.user_id} subscribed to {entity_type_id}:{entity.id}")
        return SubscriptionToggleResponse(entity_type_id=entity_type_id, slug=slug, subscribed=True)

    def subscriptions(self, current_user: ValidatedUser) -> UserSubscriptions:
        def slugs(entity_type_id: int) -> list[str]:
            return self.subs.subscribed_slugs(
                self.db, current_user.user_id, entity_type_id, SUBSCRIBABLE[entity_type_id]
            )

        return UserSubscriptions(
            consultant_subs=slugs(ENTITY_TYPE_CONSULTANT),
            location_subs=slugs(ENTITY_TYPE_LOCATION),
            consult_subs=slugs(ENTITY_TYPE_CONSULT),
            client_subs=slugs(ENTITY_TYPE_CLIENT),
        )

    def feed(self, current_user: ValidatedUser) -> list[FeedItem]:
        since = datetime.utcnow() - timedelta(days=FEED_WINDOW_DAYS)
        rows = self.subs.feed(self.db, current_user.user_id, since)
        return [FeedItem(**row) for row in rows]

    async def upload_avatar(self, current_user: ValidatedUser, file: UploadFile) -> str:
        user = self._get_user(current_user)
        stored = await save_upload(file, f"avatars/{user.slug}", IMAGE_TYPES)
        user.avatar_path = stored.path
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            delete_upload(stored.path)
            logger.error(f"❌ Failed to save avatar for user_id {user.id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to save avatar") from e

        evict_user_sessions(self.db, user.id)
        logger.info(f"✅ Avatar updated for user_id: {user.id}")
        return stored.path
