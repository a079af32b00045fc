"""
StudyMate Backend — Request Schemas
=====================================

What:  Pydantic models for connection-request bodies and documents.
Why:   Requests are free-form: the frontend copies partner details into them.
       Only userEmail (who sent it) and partnerId (whom it targets) are named;
       every other key is kept as sent (extra="allow").

No link integrity: partnerId is not checked against the partners collection.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.models.documents import SERVER_MANAGED_FIELDS


class RequestFields(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    user_email: Optional[str] = Field(default=None, description="Email of the requester")
    partner_id: Optional[str] = Field(default=None, description="Id of the requested partner")


class _RequestInput(RequestFields):
    @model_validator(mode="before")
    @classmethod
    def drop_server_managed_fields(cls, data: Any) -> Any:
        """_id and createdAt belong to the server; ignore them in bodies."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if k not in SERVER_MANAGED_FIELDS}
        return data

    @field_validator("user_email")
    @classmethod
    def validate_user_email(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and "@" not in v:
            raise ValueError("userEmail must contain '@'")
        return v

    def stored_fields(self, include_unset: bool = True) -> dict:
        """
        Keys to write to the store, camelCase, including extra keys.

        include_unset=False keeps only what the client actually sent
        (used by the partial update).
        """
        fields = dict(self.model_extra or {})
        if include_unset:
            fields.update(self.model_dump(by_alias=True, exclude_none=True))
        else:
            fields.update(self.model_dump(by_alias=True, exclude_unset=True))
        return fields


class RequestCreate(_RequestInput):
    """Body of POST /requests. userEmail is required so GET /requests can find it."""

    user_email: str = Field(min_length=3, description="Email of the requester")


class RequestUpdate(_RequestInput):
    """Body of PUT /requests/{id}. Only the keys present are merged."""


class RequestDocument(BaseModel):
    """A request as stored. Only `_id` is typed; every other key passes through."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: str = Field(alias="_id")
    user_email: Any = None
    partner_id: Any = None
    created_at: Any = None
