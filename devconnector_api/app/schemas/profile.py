"""
Pydantic schemas for developer profiles.

A profile belongs to exactly one user and embeds two ordered lists,
``experience`` and ``education``, each newest first.  Input schemas
leave the required fields optional at the type level; the service
validates presence so that every violation is reported together.

Response schemas use the stored field names, including ``_id`` and the
``from`` date, via aliases.
"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from .user import UserSummary

SOCIAL_PLATFORMS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


def _parse_date(value):
    """Accept ISO dates (``2020-01-31``) and datetimes; treat "" as absent."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValueError("Please enter a valid date")
    return value


class ProfileCreate(BaseModel):
    """Fields accepted by the create-or-update endpoint.

    ``skills`` may be a comma separated string or a list.  The social
    platforms are flat fields here and are folded into ``social`` by the
    service.
    """

    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = Field(None, example="Developer")
    githubusername: Optional[str] = None
    skills: Optional[Union[List[str], str]] = Field(None, example="HTML, CSS, Python")
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


class ExperienceCreate(BaseModel):
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    from_: Optional[datetime] = Field(None, alias="from")
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("from_", "to", mode="before")
    @classmethod
    def parse_dates(cls, value):
        return _parse_date(value)


class EducationCreate(BaseModel):
    school: Optional[str] = None
    degree: Optional[str] = None
    fieldofstudy: Optional[str] = None
    from_: Optional[datetime] = Field(None, alias="from")
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("from_", "to", mode="before")
    @classmethod
    def parse_dates(cls, value):
        return _parse_date(value)


class ExperienceRead(BaseModel):
    id: str = Field(..., alias="_id")
    title: str
    company: str
    location: Optional[str] = None
    from_: datetime = Field(..., alias="from")
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None

    model_config = {
        "populate_by_name": True,
    }


class EducationRead(BaseModel):
    id: str = Field(..., alias="_id")
    school: str
    degree: str
    fieldofstudy: Optional[str] = None
    from_: datetime = Field(..., alias="from")
    to: Optional[datetime] = None
    current: bool = False
    description: Optional[str] = None

    model_config = {
        "populate_by_name": True,
    }


class Social(BaseModel):
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


class ProfileRead(BaseModel):
    """Schema for reading a profile.

    ``user`` is the owner's id on write responses and the joined
    ``{_id, name, avatar}`` summary on read responses.
    """

    id: str = Field(..., alias="_id")
    user: Union[UserSummary, str]
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: str
    githubusername: Optional[str] = None
    skills: List[str] = []
    social: Social = Social()
    experience: List[ExperienceRead] = []
    education: List[EducationRead] = []
    date: Optional[datetime] = None

    model_config = {
        "populate_by_name": True,
    }
