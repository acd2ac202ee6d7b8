"""Consultant router"""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...schemas import FilterOptions, MessageResponse, ResponsiveTableData, ValidatedUser
from .schemas import ConsultantCreate, ConsultantFormResponse, ConsultantUpdate
from .service import ConsultantService

router = APIRouter(prefix="/consultant", tags=["Consultants"])


def get_consultant_service(db: Session = Depends(get_db)) -> ConsultantService:
    return ConsultantService(db)


@router.get("/list", response_model=ResponsiveTableData)
async def list_consultants(
    opts: Annotated[FilterOptions, Query()],
    current_user: ValidatedUser = Depends(get_current_user),
    service: ConsultantService = Depends(get_consultant_service),
):
    return service.list_consultants(opts, current_user)


@router.get("/form", response_model=ConsultantFormResponse)
async def consultant_form(
    current_user: ValidatedUser = Depends(get_current_user),
    service: ConsultantService = Depends(get_consultant_service),
):
    return service.add_form()


@router.get("/form/{slug}", response_model=ConsultantFormResponse)
async def consultant_edit_form(
    slug: str,
    current_user: ValidatedUser = Depends(get_current_user),
    service: ConsultantService = Depends(get_consultant_service),
):
    return service.edit_form(slug)


@router.post("/form", status_code=201, response_model=MessageResponse)
async def create_consultant(
    data: Annotated[ConsultantCreate, Form()],
    current_user: ValidatedUser = Depends(get_current_user),
    service: ConsultantService = Depends(get_consultant_service),
):
    consultant = service.create_consultant(data, current_user)
    return MessageResponse(
        message=f"Consultant added successfully: {consultant.full_name}", slug=consultant.slug
    )


@router.patch("/form/{slug}", response_model=MessageResponse)
async def update_consultant(
    slug: str,
    data: Annotated[ConsultantUpdate, Form()],
    current_user: ValidatedUser = Depends(get_current_user),
    service: ConsultantService = Depends(get_consultant_service),
):
    consultant = service.update_consultant(slug, data, current_user)
    return MessageResponse(
        message=f"Consultant updated successfully: {consultant.full_name}", slug=consultant.slug
    )
