"""User repository - settings, subscriptions and the activity feed"""

from datetime import datetime
from typing import Optional

from sqlalchemy import false, func, or_, select
from sqlalchemy.orm import Session

from ...models import (
    ENTITY_TYPE_CLIENT,
    ENTITY_TYPE_CONSULT,
    ENTITY_TYPE_CONSULTANT,
    ENTITY_TYPE_LOCATION,
    Client,
    Consult,
    Consultant,
    Location,
    User,
    UserSettings,
    UserSubscription,
)

SUBSCRIBABLE = {
    ENTITY_TYPE_CONSULTANT: Consultant,
    ENTITY_TYPE_LOCATION: Location,
    ENTITY_TYPE_CONSULT: Consult,
    ENTITY_TYPE_CLIENT: Client,
}


class UserRepository:
    @staticmethod
    def get_user(db: Session, user_id: int) -> Optional[User]:
        return db.get(User, user_id)

    @staticmethod
    def get_or_create_settings(db: Session, user: User) -> UserSettings:
        if user.settings is None:
            user.settings = UserSettings()
            db.flush()
        return user.settings

    @staticmethod
    def username_taken(db: Session, username: str, exclude_user_id: int) -> bool:
        return (
            db.query(User.id).filter(User.username == username, User.id != exclude_user_id).first()
            is not None
        )

    @staticmethod
    def email_taken(db: Session, email: str, exclude_user_id: int) -> bool:
        return (
            db.query(User.id)
            .filter(func.lower(User.email) == email.lower(), User.id != exclude_user_id)
            .first()
            is not None
        )


class SubscriptionRepository:
    @staticmethod
    def get_entity(db: Session, entity_type_id: int, slug: str):
        model = SUBSCRIBABLE[entity_type_id]
        return db.query(model).filter(model.slug == slug).first()

    @staticmethod
    def get_subscription(db: Session, user_id: int, entity_type_id: int, entity_id: int) -> Optional[UserSubscription]:
        return (
            db.query(UserSubscription)
            .filter(
                UserSubscription.user_id == user_id,
                UserSubscription.entity_type_id == entity_type_id,
                UserSubscription.entity_id == entity_id,
            )
            .first()
        )

    @staticmethod
    def add(db: Session, user_id: int, entity_type_id: int, entity_id: int) -> UserSubscription:
        subscription = UserSubscription(user_id=user_id, entity_type_id=entity_type_id, entity_id=entity_id)
        db.add(subscription)
        db.commit()
        return subscription

    @staticmethod
    def remove(db: Session, subscription: UserSubscription) -> None:
        db.delete(subscription)
        db.commit()

    @staticmethod
    def subscribed_ids(db: Session, user_id: int, entity_type_id: int) -> list[int]:
        rows = (
            db.query(UserSubscription.entity_id)
            .filter(UserSubscription.user_id == user_id, UserSubscription.entity_type_id == entity_type_id)
            .all()
        )
        return [row.entity_id for row in rows]

    @staticmethod
    def subscribed_slugs(db: Session, user_id: int, entity_type_id: int, model) -> list[str]:
        stmt = (
            select(model.slug)
            .join(
                UserSubscription,
                (UserSubscription.entity_id == model.id)
                & (UserSubscription.entity_type_id == entity_type_id),
            )
            .where(UserSubscription.user_id == user_id)
            .order_by(model.slug)
        )
        return list(db.execute(stmt).scalars().all())

    @staticmethod
    def feed(db: Session, user_id: int, since: datetime, limit: int = 50) -> list[dict]:
        """Consults touching anything the user follows, created or updated since `since`"""
        subs = {
            entity_type_id: SubscriptionRepository.subscribed_ids(db, user_id, entity_type_id)
            for entity_type_id in SUBSCRIBABLE
        }

        followed = [
            Consult.consultant_id.in_(subs[ENTITY_TYPE_CONSULTANT]),
            Consult.location_id.in_(subs[ENTITY_TYPE_LOCATION]),
            Consult.id.in_(subs[ENTITY_TYPE_CONSULT]),
            Consult.client_id.in_(subs[ENTITY_TYPE_CLIENT]),
        ]
        if not any(subs.values()):
            followed = [false()]

        stmt = (
            select(
                Consult.slug,
                (Consultant.f_name + " " + Consultant.l_name).label("consultant_name"),
                func.coalesce(Client.company_name, Client.f_name + " " + Client.l_name).label("client_name"),
                Location.name.label("location_name"),
                Consult.consult_start,
                Consult.consult_end,
                Consult.created_at,
                Consult.updated_at,
            )
            .join(Consultant, Consultant.id == Consult.consultant_id)
            .join(Client, Client.id == Consult.client_id)
            .join(Location, Location.id == Consult.location_id)
            .where(or_(*followed))
            .where(or_(Consult.created_at >= since, Consult.updated_at >= since))
            .order_by(func.coalesce(Consult.updated_at, Consult.created_at).desc(), Consult.id.desc())
            .limit(limit)
        )
        return [dict(row) for row in db.execute(stmt).mappings().all()]
