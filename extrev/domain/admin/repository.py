"""Admin repository - user records"""

from typing import Optional

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from ...models import User
from ...schemas import FilterOptions
from ...shared.listing import apply_list_options

SORT_COLUMNS = {
    "username": User.username,
    "email": User.email,
    "type": User.user_type_id,
    "created": User.created_at,
}


class AdminRepository:
    @staticmethod
    def list_statement(opts: FilterOptions) -> Select:
        stmt = select(
            User.slug,
            User.username,
            User.email,
            User.user_type_id,
            User.avatar_path,
            User.created_at,
            User.updated_at,
        )
        return apply_list_options(
            stmt,
            opts,
            search_columns=[User.username, User.email],
            sort_columns=SORT_COLUMNS,
            default_order=[User.username.asc(), User.id.asc()],
        )

    @staticmethod
    def get_user_by_slug(db: Session, slug: str) -> Optional[User]:
        return db.query(User).filter(User.slug == slug).first()

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

    @staticmethod
    def update_user(db: Session, user: User, **updates) -> User:
        for key, value in updates.items():
            if value is not None and hasattr(user, key):
                setattr(user, key, value)

        db.commit()
        db.refresh(user)
        return user
