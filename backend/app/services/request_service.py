"""
StudyMate Backend — Request Service
=====================================

What:  Create, list, merge-update and delete connection requests.
How:   Same shape as PartnerService: database handle per call, one store
       expression per method.

Partial update vs. partner update:
    PUT /requests/{id} merges only the keys it receives ($set of those keys);
    PUT /partners/{id} rewrites all nine partner fields.

Error handling:
    update_request converts any failure during the store call into
    UpdateFailedError with a fixed message. The other methods go through
    store_operation() like the partner service.
"""

import logging
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.database import store_operation
from app.exceptions import InvalidSchemaError, MissingParameterError, UpdateFailedError
from app.models.documents import (
    REQUESTS_COLLECTION,
    parse_object_id,
    serialize_document,
    utc_now,
)
from app.schemas.common import DeleteAck, InsertAck, UpdateAck
from app.schemas.request import RequestCreate, RequestDocument, RequestUpdate

logger = logging.getLogger(__name__)


class RequestService:
    """Business logic layer for connection requests."""

    @staticmethod
    def _collection(db: AsyncIOMotorDatabase):
        return db[REQUESTS_COLLECTION]

    async def create_request(self, db: AsyncIOMotorDatabase, new_request: RequestCreate) -> InsertAck:
        """Insert a request with a server-side createdAt."""
        document = new_request.stored_fields()
        document["createdAt"] = utc_now()

        with store_operation("create_request"):
            result = await self._collection(db).insert_one(document)

        logger.info("Request created: %s (partner=%s)", result.inserted_id, new_request.partner_id)
        return InsertAck.from_result(result)

    async def list_requests(
        self, db: AsyncIOMotorDatabase, email: Optional[str]
    ) -> List[RequestDocument]:
        """
        Requests sent by one user, matched on `userEmail` exactly.

        Note the field name: partners are matched on `email`, requests on
        `userEmail`.

        Raises:
            MissingParameterError: email absent or blank, before any store access
        """
        if not email or not email.strip():
            raise MissingParameterError("email")

        with store_operation("list_requests"):
            documents = await self._collection(db).find({"userEmail": email}).to_list(length=None)

        return [RequestDocument.model_validate(serialize_document(d)) for d in documents]

    async def update_request(
        self, db: AsyncIOMotorDatabase, request_id: str, changes: RequestUpdate
    ) -> UpdateAck:
        """
        Merge the given fields into an existing request.

        Fields not in the body are preserved. _id and createdAt in the body
        are ignored.

        Raises:
            InvalidIdentifierError: request_id is not an ObjectId
            InvalidSchemaError: the body has nothing to merge
            UpdateFailedError: the store call failed for any reason
        """
        oid = parse_object_id(request_id)
        fields = changes.stored_fields(include_unset=False)
        if not fields:
            raise InvalidSchemaError(message="Request update must contain at least one field")

        try:
            result = await self._collection(db).update_one({"_id": oid}, {"$set": fields})
        except Exception as e:
            logger.error("Failed to update request %s: %s", request_id, str(e), exc_info=True)
            raise UpdateFailedError(
                context={"request_id": request_id, "error_type": type(e).__name__}
            ) from e

        return UpdateAck.from_result(result)

    async def delete_request(self, db: AsyncIOMotorDatabase, request_id: str) -> DeleteAck:
        """Remove a request. A nonexistent id yields deletedCount 0."""
        oid = parse_object_id(request_id)

        with store_operation("delete_request", request_id=request_id):
            result = await self._collection(db).delete_one({"_id": oid})

        return DeleteAck.from_result(result)


request_service = RequestService()
