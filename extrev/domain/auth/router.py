"""Auth router - register, login, logout and inline email check"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Cookie, Depends, Form, Query, Response
from sqlalchemy.orm import Session

from ...config import COOKIE_SECURE, SESSION_COOKIE_NAME, SESSION_MAX_AGE
from ...database import get_db
from ...rate_limiter import auth_rate_limiter
from ...schemas import MessageResponse, ValidationResponse
from .schemas import LoginRequest, RegisterRequest
from .service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


@router.post(
    "/register",
    status_code=201,
    response_model=MessageResponse,
    dependencies=[Depends(auth_rate_limiter)],
)
async def register(
    data: Annotated[RegisterRequest, Form()],
    service: AuthService = Depends(get_auth_service),
):
    user = service.register(data)
    return MessageResponse(message=f"Account created for {user.username}", slug=user.slug)


@router.post("/login", response_model=MessageResponse, dependencies=[Depends(auth_rate_limiter)])
async def login(
    data: Annotated[LoginRequest, Form()],
    response: Response,
    service: AuthService = Depends(get_auth_service),
):
    token, _expires = service.login(data)
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=SESSION_MAX_AGE,
        path="/",
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="lax",
    )
    response.headers["HX-Redirect"] = "/homepage"
    return MessageResponse(message="Login successful")


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    session_token: Optional[str] = Cookie(None, alias=SESSION_COOKIE_NAME),
    service: AuthService = Depends(get_auth_service),
):
    if session_token:
        service.logout(session_token)
    response.delete_cookie(SESSION_COOKIE_NAME, path="/")
    response.headers["HX-Redirect"] = "/"
    return MessageResponse(message="Logged out")


@router.get("/validate/email", response_model=ValidationResponse, response_model_by_alias=True)
async def validate_email_availability(
    email: str = Query(""),
    service: AuthService = Depends(get_auth_service),
):
    return service.check_email(email)
