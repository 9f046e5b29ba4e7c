from __future__ import annotations

from datetime import date as date_type
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class TripDetails(BaseModel):
    id: str
    destination: str
    starts_at: datetime
    ends_at: datetime
    is_confirmed: bool = False


class TripCreate(BaseModel):
    destination: str
    starts_at: datetime
    ends_at: datetime
    emails_to_invite: list[str] = Field(default_factory=list)


class TripUpdate(BaseModel):
    id: str
    destination: str
    starts_at: datetime
    ends_at: datetime


class Activity(BaseModel):
    id: str
    occurs_at: datetime
    title: str


class DayActivities(BaseModel):
    date: date_type
    activities: list[Activity] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def keep_calendar_day(cls, value: object) -> object:
        """Accept full ISO timestamps by keeping their calendar day."""
        if isinstance(value, str) and len(value) > 10:
            return value[:10]
        return value


class Link(BaseModel):
    id: str
    title: str
    url: str


class Participant(BaseModel):
    id: str
    name: str | None = None  # Unset until the guest confirms
    email: str
    is_confirmed: bool = False
