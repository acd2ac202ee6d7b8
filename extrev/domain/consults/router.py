"""Consult router - appointments and attachments"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...schemas import FilterOptions, MessageResponse, ResponsiveTableData, ValidatedUser
from .schemas import AttachmentResponse, ConsultCreate, ConsultFormResponse, ConsultUpdate
from .service import ConsultService

router = APIRouter(prefix="/consult", tags=["Consults"])


def get_consult_service(db: Session = Depends(get_db)) -> ConsultService:
    return ConsultService(db)


# ============================================================================
# LIST AND FORMS
# ============================================================================


@router.get("/list", response_model=ResponsiveTableData)
async def list_consults(
    opts: Annotated[FilterOptions, Query()],
    current_user: ValidatedUser = Depends(get_current_user),
    service: ConsultService = Depends(get_consult_service),
):
    return service.list_consults(opts, current_user)


@router.get("/form", response_model=ConsultFormResponse)
async def consult_form(
    current_user: ValidatedUser = Depends(get_current_user),
    service: ConsultService = Depends(get_consult_service),
):
    return service.add_form()


@router.get("/form/{slug}", response_model=ConsultFormResponse)
async def consult_edit_form(
    slug: str,
    current_user: ValidatedUser = Depends(get_current_user),
    service: ConsultService = Depends(get_consult_service),
):
    return service.edit_form(slug)


@router.post("/form", status_code=201, response_model=MessageResponse)
async def create_consult(
    data: Annotated[ConsultCreate, Form()],
    current_user: ValidatedUser = Depends(get_current_user),
    service: ConsultService = Depends(get_consult_service),
):
    consult = service.create_consult(data, current_user)
    return MessageResponse(message="Consult added successfully", slug=consult.slug)


@router.patch("/form/{slug}", response_model=MessageResponse)
async def update_consult(
    slug: str,
    data: Annotated[ConsultUpdate, Form()],
    current_user: ValidatedUser = Depends(get_current_user),
    service: ConsultService = Depends(get_consult_service),
):
    consult = service.update_consult(slug, data, current_user)
    return MessageResponse(message="Consult updated successfully", slug=consult.slug)


# ============================================================================
# ATTACHMENTS
# ============================================================================


@router.get("/attachments/{slug}", response_model=list[AttachmentResponse])
async def list_attachments(
    slug: str,
    current_user: ValidatedUser = Depends(get_current_user),
    service: ConsultService = Depends(get_consult_service),
):
    return service.list_attachments(slug)


@router.post("/attachments/{slug}", status_code=201, response_model=AttachmentResponse)
async def upload_attachment(
    slug: str,
    file: UploadFile = File(...),
    short_desc: Optional[str] = Form(None),
    current_user: ValidatedUser = Depends(get_current_user),
    service: ConsultService = Depends(get_consult_service),
):
    return await service.add_attachment(slug, file, short_desc, current_user)
