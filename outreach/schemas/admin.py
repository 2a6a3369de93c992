import datetime as dt

from pydantic import BaseModel, Field, field_validator
from typing import ClassVar, List, Literal, Optional

from outreach.schemas.forms import FormFieldSpec, ensure_unique_ids

EventCategory = Literal["basketball", "swimming", "fitness", "social", "other"]
RegistrationType = Literal["none", "external", "internal"]


class AdminLogin(BaseModel):
    email: str
    password: str

class AdminToken(BaseModel):
    access_token: str
    token_type: str = "Bearer"


class SubmissionUpdate(BaseModel):
    status: Optional[Literal["new", "read", "replied", "archived"]] = None
    notes: Optional[str] = None


class RegistrationUpdate(BaseModel):
    status: Optional[Literal["confirmed", "waitlisted", "cancelled"]] = None
    notes: Optional[str] = None


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    date: dt.date
    time: str = Field(min_length=1, max_length=100)
    location: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    category: EventCategory
    image_url: Optional[str] = None
    registration_type: RegistrationType = "none"
    registration_url: Optional[str] = None
    registration_fields: Optional[List[FormFieldSpec]] = None
    max_registrations: Optional[int] = Field(default=None, ge=1)

    @field_validator("registration_fields")
    @classmethod
    def _unique_field_ids(cls, value):
        if value is None:
            return value
        return ensure_unique_ids(value)


class EventUpdate(BaseModel):
    REQUIRED_COLUMNS: ClassVar[set[str]] = {
        "title", "date", "time", "location", "description", "category", "registration_type",
    }

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    date: Optional[dt.date] = None
    time: Optional[str] = Field(default=None, min_length=1, max_length=100)
    location: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    category: Optional[EventCategory] = None
    image_url: Optional[str] = None
    registration_type: Optional[RegistrationType] = None
    registration_url: Optional[str] = None
    registration_fields: Optional[List[FormFieldSpec]] = None
    max_registrations: Optional[int] = Field(default=None, ge=1)

    @field_validator("registration_fields")
    @classmethod
    def _unique_field_ids(cls, value):
        if value is None:
            return value
        return ensure_unique_ids(value)


class SettingUpdate(BaseModel):
    value: str
