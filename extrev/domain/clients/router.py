"""Client router - FastAPI endpoints for client operations"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...schemas import FilterOptions, MessageResponse, ResponsiveTableData, ValidatedUser
from .schemas import ClientCreate, ClientFormResponse, ClientUpdate
from .service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/client", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


# ============================================================================
# LIST
# ============================================================================


@router.get("/list", response_model=ResponsiveTableData)
async def list_clients(
    opts: Annotated[FilterOptions, Query()],
    current_user: ValidatedUser = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    return service.list_clients(opts, current_user)


# ============================================================================
# FORMS
# ============================================================================


@router.get("/form", response_model=ClientFormResponse)
async def client_form(
    current_user: ValidatedUser = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    return service.add_form()


@router.get("/form/{slug}", response_model=ClientFormResponse)
async def client_edit_form(
    slug: str,
    current_user: ValidatedUser = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    return service.edit_form(slug)


@router.post("/form", status_code=201, response_model=MessageResponse)
async def create_client(
    data: Annotated[ClientCreate, Form()],
    current_user: ValidatedUser = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    client = service.create_client(data, current_user)
    return MessageResponse(message=f"Client added successfully: {client.display_name}", slug=client.slug)


@router.patch("/form/{slug}", response_model=MessageResponse)
async def update_client(
    slug: str,
    data: Annotated[ClientUpdate, Form()],
    current_user: ValidatedUser = Depends(get_current_user),
    service: ClientService = Depends(get_client_service),
):
    client = service.update_client(slug, data, current_user)
    return MessageResponse(message=f"Client updated successfully: {client.display_name}", slug=client.slug)
