"""Admin service - user management for admins and subadmins"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...auth import evict_user_sessions
from ...cache import cached_query
from ...config import LIST_CACHE_TTL
from ...models import ENTITY_TYPE_USER, USER_TYPE_ADMIN, User
from ...options import USER_TYPE_OPTIONS, state_codes, state_options
from ...schemas import FilterOptions, ResponsiveTableData, ValidatedUser
from ...shared.errors import form_error
from .repository import AdminRepository
from .schemas import (
    AdminUserEntity,
    AdminUserFormResponse,
    AdminUserUpdate,
    SubadminEntity,
    SubadminFormResponse,
    SubadminUpdate,
)

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AdminRepository()

    def list_users(self, opts: FilterOptions) -> ResponsiveTableData:
        rows = cached_query(self.db, self.repo.list_statement(opts), prefix="list", ttl=LIST_CACHE_TTL)
        return ResponsiveTableData.build(ENTITY_TYPE_USER, "/admin/list", opts, rows)

    def get_user(self, slug: str) -> User:
        user = self.repo.get_user_by_slug(self.db, slug)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return user

    def user_form(self, slug: str) -> AdminUserFormResponse:
        user = self.get_user(slug)
        return AdminUserFormResponse(
            header="Edit User",
            entity=AdminUserEntity.model_validate(user),
            options={"user_types": USER_TYPE_OPTIONS},
        )

    def subadmin_form(self, slug: str) -> SubadminFormResponse:
        user = self.get_user(slug)
        return SubadminFormResponse(
            header="Edit Subadmin",
            entity=SubadminEntity.model_validate(user),
            options={"user_types": USER_TYPE_OPTIONS, "states": state_options(self.db)},
        )

    def _check_privileges(self, acting: ValidatedUser, target: User, data: AdminUserUpdate, form: str) -> None:
        # Only full admins may touch admin accounts or hand out admin rights
        if acting.user_type_id != USER_TYPE_ADMIN and (
            target.user_type_id == USER_TYPE_ADMIN or data.user_type_id == USER_TYPE_ADMIN
        ):
            logger.warning(f"⚠️ User {acting.user_id} tried to change admin rights on user {target.id}")
            raise form_error(form, "Only an admin can manage admin accounts", status_code=403)

        if data.username and self.repo.username_taken(self.db, data.username, target.id):
            raise form_error(form, "Username already taken", status_code=409)
        if data.email and self.repo.email_taken(self.db, data.email, target.id):
            raise form_error(form, "Email already taken!", status_code=409)

    def _save(self, user: User, updates: dict, form: str) -> User:
        try:
            user = self.repo.update_user(self.db, user, **updates)
        except IntegrityError as e:
            self.db.rollback()
            raise form_error(form, "Username or email already taken", status_code=409) from e

        # Cached sessions carry the role, username and email
        evicted = evict_user_sessions(self.db, user.id)
        logger.info(f"✅ User {user.id} updated, {evicted} cached session(s) evicted")
        return user

    def update_user(self, slug: str, data: AdminUserUpdate, acting: ValidatedUser) -> User:
        user = self.get_user(slug)
        logger.info(f"📥 Admin {acting.user_id} updating user {user.id}")
        self._check_privileges(acting, user, data, "user")
        return self._save(user, data.model_dump(exclude_none=True), "user")

    def update_subadmin(self, slug: str, data: SubadminUpdate, acting: ValidatedUser) -> User:
        user = self.get_user(slug)
        logger.info(f"📥 Admin {acting.user_id} updating subadmin {user.id}")
        self._check_privileges(acting, user, data, "subadmin")
        if data.state is not None and data.state not in state_codes(self.db):
            raise form_error("subadmin", f"Unknown state: {data.state}")
        return self._save(user, data.model_dump(exclude_none=True), "subadmin")
