"""
StudyMate Backend — Request Route Handlers
============================================

What:  HTTP surface for the `requests` collection.

Routes:
    POST   /requests          create request                 (201)
    GET    /requests          requests by exact ?email= (userEmail)
    PUT    /requests/{id}     merge the given fields
    DELETE /requests/{id}     delete request
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.database import get_database
from app.schemas.common import DeleteAck, ErrorResponse, InsertAck, UpdateAck
from app.schemas.request import RequestCreate, RequestDocument, RequestUpdate
from app.services.request_service import request_service

router = APIRouter(tags=["Requests"])


@router.post(
    "/requests",
    status_code=201,
    response_model=InsertAck,
    responses={400: {"description": "Invalid request body", "model": ErrorResponse}},
    summary="Create a connection request",
)
async def create_request(
    new_request: RequestCreate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> InsertAck:
    return await request_service.create_request(db=db, new_request=new_request)


@router.get(
    "/requests",
    response_model=List[RequestDocument],
    responses={400: {"description": "email query parameter missing", "model": ErrorResponse}},
    summary="Requests sent by a user",
)
async def list_requests(
    email: Optional[str] = Query(default=None, description="Requester email (matches userEmail)"),
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> List[RequestDocument]:
    return await request_service.list_requests(db=db, email=email)


@router.put(
    "/requests/{request_id}",
    response_model=UpdateAck,
    responses={
        400: {"description": "Malformed identifier or empty body", "model": ErrorResponse},
        500: {"description": "Failed to update request", "model": ErrorResponse},
    },
    summary="Update fields of a request",
)
async def update_request(
    request_id: str,
    changes: RequestUpdate,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> UpdateAck:
    return await request_service.update_request(db=db, request_id=request_id, changes=changes)


@router.delete(
    "/requests/{request_id}",
    response_model=DeleteAck,
    responses={400: {"description": "Malformed identifier", "model": ErrorResponse}},
    summary="Delete a request",
)
async def delete_request(
    request_id: str,
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> DeleteAck:
    return await request_service.delete_request(db=db, request_id=request_id)
