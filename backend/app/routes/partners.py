"""
StudyMate Backend — Partner Route Handlers
============================================

What:  HTTP surface for the `partners` collection.
How:   Extracts path/query/body, delegates to PartnerService, returns the
       schema object. Errors are raised as exceptions and formatted by the
       global handlers in main.py.

Routes:
    POST   /partners            create partner                (201)
    GET    /partners            list, ?subject= &sort=asc|desc
    GET    /topPartners         six best rated
    GET    /partners/{id}       one partner (404 if missing)
    GET    /myConnections       partners by exact ?email=
    PUT    /partners/{id}       full replace of editable fields
    PATCH  /sendRequest/{id}    partnerCount += 1
    DELETE /partners/{id}       delete partner

Paths are unprefixed and camelCase to stay compatible with the existing
frontend.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.database import get_database
from app.schemas.common import DeleteAck, ErrorResponse, InsertAck, UpdateAck
from app.schemas.partner import PartnerCreate, PartnerDocument, PartnerUpdate
from app.services.partner_service import partner_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Partners"])

_ID_ERRORS = {
    400: {"description": "Malformed identifier", "model": ErrorResponse},
    503: {"description": "Database unavailable", "model": ErrorResponse},
}


@router.post(
    "/partners",
    status_code=201,
    response_model=InsertAck,
    responses={400: {"description": "Invalid partner body", "model": ErrorResponse}},
    summary="Create a study partner profile",
)
async def create_partner(
    partner: PartnerCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> InsertAck:
    return await partner_service.create_partner(db=db, partner=partner)


@router.get(
    "/partners",
    response_model=List[PartnerDocument],
    summary="List partners",
    description=(
        "Returns every partner. `subject` filters by case-insensitive substring; "
        "`sort=asc|desc` orders by experienceLevel. Other sort values are ignored."
    ),
)
async def list_partners(
    subject: Optional[str] = Query(default=None, description="Substring of the subject, any case"),
    sort: Optional[str] = Query(default=None, description="'asc' or 'desc' on experienceLevel"),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[PartnerDocument]:
    return await partner_service.list_partners(db=db, subject=subject, sort=sort)


@router.get(
    "/topPartners",
    response_model=List[PartnerDocument],
    summary="Six highest-rated partners",
)
async def list_top_partners(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[PartnerDocument]:
    return await partner_service.list_top_partners(db=db)


@router.get(
    "/partners/{partner_id}",
    response_model=PartnerDocument,
    responses={**_ID_ERRORS, 404: {"description": "Partner not found", "model": ErrorResponse}},
    summary="Get a partner by id",
)
async def get_partner(
    partner_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> PartnerDocument:
    return await partner_service.get_partner(db=db, partner_id=partner_id)


@router.get(
    "/myConnections",
    response_model=List[PartnerDocument],
    responses={400: {"description": "email query parameter missing", "model": ErrorResponse}},
    summary="Partners owned by an email",
)
async def list_my_connections(
    email: Optional[str] = Query(default=None, description="Exact owner email"),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[PartnerDocument]:
    """
    Declared optional so that a missing email reaches the service, which
    answers with a `missing_parameter` error instead of FastAPI's generic 422.
    """
    return await partner_service.list_connections(db=db, email=email)


@router.put(
    "/partners/{partner_id}",
    response_model=UpdateAck,
    responses=_ID_ERRORS,
    summary="Replace a partner's profile fields",
)
async def update_partner(
    partner_id: str,
    partner: PartnerUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UpdateAck:
    return await partner_service.update_partner(db=db, partner_id=partner_id, partner=partner)


@router.patch(
    "/sendRequest/{partner_id}",
    response_model=UpdateAck,
    responses=_ID_ERRORS,
    summary="Count a study request against a partner",
)
async def send_request(
    partner_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UpdateAck:
    return await partner_service.send_request(db=db, partner_id=partner_id)


@router.delete(
    "/partners/{partner_id}",
    response_model=DeleteAck,
    responses=_ID_ERRORS,
    summary="Delete a partner",
)
async def delete_partner(
    partner_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> DeleteAck:
    return await partner_service.delete_partner(db=db, partner_id=partner_id)
