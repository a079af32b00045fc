"""
StudyMate Backend — Partner Service
=====================================

What:  Query and update construction for the `partners` collection.
Why:   Keeps filtering, sorting and update semantics out of the route layer.
How:   Each method receives the motor database handle (injected by the
       route), builds one store expression, runs it inside store_operation()
       for uniform error translation, and returns schema objects.
Who:   Called by routes/partners.py.

Update semantics at a glance:
    PUT   /partners/{id}     $set of all nine editable fields (full replace)
    PATCH /sendRequest/{id}  $inc partnerCount by 1 (atomic, no read first)

Concurrency:
    partnerCount only changes through $inc, which the server applies
    atomically per document. N concurrent send requests add exactly N.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from app.database import store_operation
from app.exceptions import MissingParameterError, NotFoundError
from app.models.documents import (
    PARTNERS_COLLECTION,
    parse_object_id,
    serialize_document,
    utc_now,
)
from app.schemas.common import DeleteAck, InsertAck, UpdateAck
from app.schemas.partner import PartnerCreate, PartnerDocument, PartnerUpdate

logger = logging.getLogger(__name__)

TOP_PARTNERS_LIMIT = 6

# Only these exact values sort; anything else keeps natural order
EXPERIENCE_SORT_DIRECTIONS = {"asc": ASCENDING, "desc": DESCENDING}


def build_partner_filter(subject: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the find() filter for GET /partners.

    subject is matched as a case-insensitive substring. It is escaped, so
    "C++" matches the literal text rather than being read as a regex.
    """
    query: Dict[str, Any] = {}
    if subject:
        query["subject"] = {"$regex": re.escape(subject), "$options": "i"}
    return query


def experience_sort_direction(sort: Optional[str]) -> Optional[int]:
    """Map the `sort` query parameter to a pymongo direction, or None."""
    if sort is None:
        return None
    return EXPERIENCE_SORT_DIRECTIONS.get(sort)


class PartnerService:
    """
    Business logic layer for partner operations.

    Stateless: the database handle arrives with each call, so the same
    instance serves every request and tests pass in a mock database.
    """

    @staticmethod
    def _collection(db: AsyncIOMotorDatabase):
        return db[PARTNERS_COLLECTION]

    async def create_partner(self, db: AsyncIOMotorDatabase, partner: PartnerCreate) -> InsertAck:
        """
        Insert a new partner profile.

        Attributes beyond the nine named fields are stored as sent. The
        server stamps createdAt and starts partnerCount at 0; client values
        for _id, createdAt and partnerCount were already dropped by the schema.
        """
        document = partner.model_dump(by_alias=True, exclude_none=True)
        document["createdAt"] = utc_now()
        document["partnerCount"] = 0

        with store_operation("create_partner"):
            result = await self._collection(db).insert_one(document)

        logger.info("Partner created: %s (subject=%s)", result.inserted_id, partner.subject)
        return InsertAck.from_result(result)

    async def list_top_partners(self, db: AsyncIOMotorDatabase) -> List[PartnerDocument]:
        """Six highest-rated partners, rating descending. Ties keep store order."""
        with store_operation("list_top_partners"):
            cursor = (
                self._collection(db)
                .find({})
                .sort("rating", DESCENDING)
                .limit(TOP_PARTNERS_LIMIT)
            )
            documents = await cursor.to_list(length=TOP_PARTNERS_LIMIT)

        return [PartnerDocument.model_validate(serialize_document(d)) for d in documents]

    async def list_partners(
        self,
        db: AsyncIOMotorDatabase,
        subject: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> List[PartnerDocument]:
        """
        All partners, optionally filtered by subject and sorted by experienceLevel.

        Args:
            subject: case-insensitive substring of `subject`
            sort: "asc" or "desc" on experienceLevel; any other value is ignored

        No pagination: every matching document is returned.
        """
        query = build_partner_filter(subject)
        direction = experience_sort_direction(sort)

        with store_operation("list_partners", subject=subject, sort=sort):
            cursor = self._collection(db).find(query)
            if direction is not None:
                cursor = cursor.sort("experienceLevel", direction)
            documents = await cursor.to_list(length=None)

        logger.debug("list_partners matched %d documents", len(documents))
        return [PartnerDocument.model_validate(serialize_document(d)) for d in documents]

    async def get_partner(self, db: AsyncIOMotorDatabase, partner_id: str) -> PartnerDocument:
        """
        Fetch one partner by id.

        Raises:
            InvalidIdentifierError: partner_id is not an ObjectId (→ 400)
            NotFoundError: no partner has that id (→ 404)
        """
        oid = parse_object_id(partner_id)

        with store_operation("get_partner", partner_id=partner_id):
            document = await self._collection(db).find_one({"_id": oid})

        if document is None:
            raise NotFoundError(resource="partner", resource_id=partner_id)
        return PartnerDocument.model_validate(serialize_document(document))

    async def list_connections(
        self, db: AsyncIOMotorDatabase, email: Optional[str]
    ) -> List[PartnerDocument]:
        """
        Partners whose `email` equals the given value exactly.

        Raises:
            MissingParameterError: email absent or blank, before any store access
        """
        if not email or not email.strip():
            raise MissingParameterError("email")

        with store_operation("list_connections"):
            documents = await self._collection(db).find({"email": email}).to_list(length=None)

        return [PartnerDocument.model_validate(serialize_document(d)) for d in documents]

    async def update_partner(
        self, db: AsyncIOMotorDatabase, partner_id: str, partner: PartnerUpdate
    ) -> UpdateAck:
        """
        Overwrite the nine editable fields of a partner.

        Fields missing from the body are written as null. _id, createdAt and
        partnerCount are never part of the $set.
        """
        oid = parse_object_id(partner_id)
        replacement = partner.model_dump(by_alias=True)

        with store_operation("update_partner", partner_id=partner_id):
            result = await self._collection(db).update_one({"_id": oid}, {"$set": replacement})

        logger.info(
            "Partner %s updated: matched=%d modified=%d",
            partner_id,
            result.matched_count,
            result.modified_count,
        )
        return UpdateAck.from_result(result)

    async def send_request(self, db: AsyncIOMotorDatabase, partner_id: str) -> UpdateAck:
        """Atomically add one to partnerCount."""
        oid = parse_object_id(partner_id)

        with store_operation("send_request", partner_id=partner_id):
            result = await self._collection(db).update_one(
                {"_id": oid}, {"$inc": {"partnerCount": 1}}
            )

        return UpdateAck.from_result(result)

    async def delete_partner(self, db: AsyncIOMotorDatabase, partner_id: str) -> DeleteAck:
        """
        Remove a partner. Its requests are left alone (no cascade).

        A nonexistent id yields deletedCount 0, not an error.
        """
        oid = parse_object_id(partner_id)

        with store_operation("delete_partner", partner_id=partner_id):
            result = await self._collection(db).delete_one({"_id": oid})

        logger.info("Partner %s delete: deleted=%d", partner_id, result.deleted_count)
        return DeleteAck.from_result(result)


# Stateless; one instance serves every request
partner_service = PartnerService()
