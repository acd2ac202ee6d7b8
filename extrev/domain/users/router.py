"""User router - settings, subscriptions, feed and avatar"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...schemas import ValidatedUser
from .schemas import (
    AvatarResponse,
    FeedItem,
    SubscriptionToggleResponse,
    UserSettingsResponse,
    UserSettingsUpdate,
    UserSubscriptions,
)
from .service import UserService

router = APIRouter(prefix="/user", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


@router.get("/settings", response_model=UserSettingsResponse)
async def get_settings(
    current_user: ValidatedUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return service.get_settings(current_user)


@router.patch("/settings", response_model=UserSettingsResponse)
async def update_settings(
    data: Annotated[UserSettingsUpdate, Form()],
    current_user: ValidatedUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return service.update_settings(current_user, data)


@router.post("/subscribe/{entity_type_id}/{slug}", response_model=SubscriptionToggleResponse)
async def toggle_subscription(
    slug: str,
    entity_type_id: int = Path(..., ge=4, le=7),
    current_user: ValidatedUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return service.toggle_subscription(current_user, entity_type_id, slug)


@router.get("/subscriptions", response_model=UserSubscriptions)
async def get_subscriptions(
    current_user: ValidatedUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return service.subscriptions(current_user)


@router.get("/feed", response_model=list[FeedItem])
async def get_feed(
    current_user: ValidatedUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return service.feed(current_user)


@router.post("/avatar", response_model=AvatarResponse)
async def upload_avatar(
    file: UploadFile = File(...),
    current_user: ValidatedUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    path = await service.upload_avatar(current_user, file)
    return AvatarResponse(avatar_path=path)
