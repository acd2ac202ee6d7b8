"""Auth repository - users and session rows"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ...models import User, UserSession, UserSettings


class AuthRepository:
    @staticmethod
    def get_user_by_username(db: Session, username: str) -> Optional[User]:
        return db.query(User).filter(User.username == username).first()

    @staticmethod
    def get_user_by_username_or_email(db: Session, username: str, email: str) -> Optional[User]:
        return (
            db.query(User)
            .filter(or_(User.username == username, func.lower(User.email) == email.lower()))
            .first()
        )

    @staticmethod
    def email_exists(db: Session, email: str) -> bool:
        return db.query(User.id).filter(func.lower(User.email) == email.lower()).first() is not None

    @staticmethod
    def count_users(db: Session) -> int:
        return db.query(func.count(User.id)).scalar() or 0

    @staticmethod
    def create_user(db: Session, **user_data) -> User:
        user = User(**user_data)
        user.settings = UserSettings()
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def create_session(db: Session, user: User, token: str, expires: datetime) -> UserSession:
        session = UserSession(session_id=token, user_id=user.id, expires=expires)
        db.add(session)
        db.commit()
        return session

    @staticmethod
    def expire_session(db: Session, token: str) -> bool:
        session = db.query(UserSession).filter(UserSession.session_id == token).first()
        if not session:
            return False
        now = datetime.utcnow()
        session.expires = now
        session.updated_at = now
        session.logout = True
        db.commit()
        return True
