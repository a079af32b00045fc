"""
StudyMate Backend — Partner Schemas
=====================================

What:  Pydantic models for partner request bodies and partner documents.
Why:   The store enforces no schema. Bodies are validated here on the way
       in; documents coming out of the store are passed through as stored.
How:   snake_case attributes with camelCase aliases (`profile_image` ↔
       `profileImage`). Input accepts either spelling; output uses camelCase.

Field ownership:
    Client-supplied:  name, profileImage, subject, studyMode, availabilityTime,
                      location, experienceLevel, rating, email
                      (+ any other attribute on create)
    Server-managed:   _id, createdAt, partnerCount
Server-managed keys sent by a client are dropped.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.models.documents import SERVER_MANAGED_FIELDS

# partnerCount only moves through PATCH /sendRequest/{id}
PARTNER_SERVER_FIELDS = SERVER_MANAGED_FIELDS | {"partnerCount", "partner_count"}


class PartnerFields(BaseModel):
    """The nine client-editable partner attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    name: Optional[str] = None
    profile_image: Optional[str] = Field(default=None, description="Avatar URL")
    subject: Optional[str] = Field(default=None, examples=["Mathematics"])
    study_mode: Optional[str] = Field(default=None, examples=["Online", "Offline"])
    availability_time: Optional[str] = Field(default=None, examples=["Evening 6-9 PM"])
    location: Optional[str] = None
    experience_level: Optional[str] = Field(
        default=None, examples=["Beginner", "Intermediate", "Expert"]
    )
    rating: Optional[float] = Field(default=None, description="Average rating, used for /topPartners")
    email: Optional[str] = Field(default=None, description="Owner/contact email")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and "@" not in v:
            raise ValueError("email must contain '@'")
        return v

    @field_validator("rating")
    @classmethod
    def validate_rating(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError("rating must not be negative")
        return v


class PartnerCreate(PartnerFields):
    """
    Body of POST /partners.

    name and email are required: a profile nobody can find or contact is
    useless to the matching flow. Other attributes beyond the nine named
    ones are stored as sent. Omitted optional fields are not stored.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    email: str = Field(min_length=3)

    @model_validator(mode="before")
    @classmethod
    def drop_server_managed_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if k not in PARTNER_SERVER_FIELDS}
        return data


class PartnerUpdate(PartnerFields):
    """
    Body of PUT /partners/{id} — a full replace of the nine editable fields.

    Every field is written on each update. A field left out of the body is
    stored as null rather than kept, so clients must send the whole profile.
    Keys outside the nine are ignored.
    """


class PartnerDocument(BaseModel):
    """
    A partner as stored, returned by every partner read endpoint.

    Only `_id` is typed. Other keys are whatever the document holds, so an
    older document with a numeric experienceLevel or a list of subjects
    is returned unchanged.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: str = Field(alias="_id")
    name: Any = None
    profile_image: Any = None
    subject: Any = None
    study_mode: Any = None
    availability_time: Any = None
    location: Any = None
    experience_level: Any = None
    rating: Any = None
    email: Any = None
    partner_count: Any = Field(default=0, description="Requests received so far")
    created_at: Any = None
