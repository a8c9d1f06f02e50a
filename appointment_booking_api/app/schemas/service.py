"""
Pydantic models for bookable services.

``ServiceBase`` holds the fields a client supplies; ``ServiceCreate``
and ``ServiceUpdate`` are used as request bodies (updates replace every
field) and ``ServiceRead`` adds the identifier and timestamps for
responses.  Content rules such as the duration bounds are enforced by
``domain.validators`` so that violations are reported as validation
errors in the response envelope.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ServiceBase(BaseModel):
    name: str = Field(..., examples=["Haircut"])
    description: str = Field(..., examples=["Wash, cut and style"])
    default_duration_in_minutes: int = Field(..., examples=[60])


class ServiceCreate(ServiceBase):
    """Schema for creating a service."""
    pass


class ServiceUpdate(ServiceBase):
    """Schema for updating a service.

    All fields are required; an update replaces the stored service.
    """
    pass


class ServiceRead(ServiceBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
    }
