"""Admin router - user list and edit forms"""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query
from sqlalchemy.orm import Session

from ...auth import require_admin
from ...database import get_db
from ...schemas import FilterOptions, MessageResponse, ResponsiveTableData, ValidatedUser
from .schemas import AdminUserFormResponse, AdminUserUpdate, SubadminFormResponse, SubadminUpdate
from .service import AdminService

router = APIRouter(prefix="/admin", tags=["Admin"])


def get_admin_service(db: Session = Depends(get_db)) -> AdminService:
    return AdminService(db)


@router.get("/list", response_model=ResponsiveTableData)
async def list_users(
    opts: Annotated[FilterOptions, Query()],
    current_user: ValidatedUser = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    return service.list_users(opts)


@router.get("/form/user/{slug}", response_model=AdminUserFormResponse)
async def user_form(
    slug: str,
    current_user: ValidatedUser = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    return service.user_form(slug)


@router.patch("/form/user/{slug}", response_model=MessageResponse)
async def update_user(
    slug: str,
    data: Annotated[AdminUserUpdate, Form()],
    current_user: ValidatedUser = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    user = service.update_user(slug, data, current_user)
    return MessageResponse(message=f"User updated successfully: {user.username}", slug=user.slug)


@router.get("/form/subadmin/{slug}", response_model=SubadminFormResponse)
async def subadmin_form(
    slug: str,
    current_user: ValidatedUser = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    return service.subadmin_form(slug)


@router.patch("/form/subadmin/{slug}", response_model=MessageResponse)
async def update_subadmin(
    slug: str,
    data: Annotated[SubadminUpdate, Form()],
    current_user: ValidatedUser = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    user = service.update_subadmin(slug, data, current_user)
    return MessageResponse(message=f"Subadmin updated successfully: {user.username}", slug=user.slug)
