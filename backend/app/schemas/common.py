"""
StudyMate Backend — Shared Response Schemas
=============================================

What:  Write acknowledgments, the error envelope, and the health payload.
Why:   Every write endpoint echoes the store's acknowledgment. The keys are
       camelCase, so the frontend reads `insertedId`, `modifiedCount`, etc.
How:   snake_case attributes, camelCase on the wire via alias_generator.
       FastAPI serializes response models by alias.

Example (PATCH /sendRequest/{id}):
    {
        "acknowledged": true,
        "matchedCount": 1,
        "modifiedCount": 1,
        "upsertedCount": 0,
        "upsertedId": null
    }
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult


class _Acknowledgment(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    acknowledged: bool = Field(description="Whether the server acknowledged the write")


class InsertAck(_Acknowledgment):
    """Returned by POST /partners and POST /requests."""

    inserted_id: str = Field(description="Identifier of the new document")

    @classmethod
    def from_result(cls, result: InsertOneResult) -> "InsertAck":
        return cls(acknowledged=result.acknowledged, inserted_id=str(result.inserted_id))


class UpdateAck(_Acknowledgment):
    """
    Returned by PUT /partners/{id}, PATCH /sendRequest/{id}, PUT /requests/{id}.

    matched_count == 0 means no document had that id. This is not an error;
    the client decides what to do with it.
    """

    matched_count: int = Field(description="Documents matched by the filter (0 or 1)")
    modified_count: int = Field(description="Documents actually changed (0 or 1)")
    upserted_count: int = Field(default=0, description="Always 0; updates never upsert")
    upserted_id: Optional[str] = Field(default=None)

    @classmethod
    def from_result(cls, result: UpdateResult) -> "UpdateAck":
        upserted_id = result.upserted_id
        return cls(
            acknowledged=result.acknowledged,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_count=0 if upserted_id is None else 1,
            upserted_id=None if upserted_id is None else str(upserted_id),
        )


class DeleteAck(_Acknowledgment):
    """Returned by DELETE /partners/{id} and DELETE /requests/{id}."""

    deleted_count: int = Field(description="Documents removed (0 or 1)")

    @classmethod
    def from_result(cls, result: DeleteResult) -> "DeleteAck":
        return cls(acknowledged=result.acknowledged, deleted_count=result.deleted_count)


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "missing_parameter", "not_found")
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
