"""
Package models - Rows owned by the hosted backend.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


class Destination(BaseModel):
    """A destination offered in the selector (read-only here)."""
    id: str
    name: str


class Place(BaseModel):
    """A point of interest belonging to a destination."""
    id: str
    destination_id: Optional[str] = None
    name: str = ""
    image_url: str = ""

    @field_validator("name", "image_url", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        return "" if v is None else v


class PackageData(BaseModel):
    """Save payload for a package (everything the backend does not assign)."""
    destination_id: str = Field(
        ...,
        description="Destination the package belongs to"
    )
    title: str = Field(..., description="Package title")
    description: str = Field(..., description="Package description")
    duration: int = Field(
        ...,
        ge=1,
        description="Number of days"
    )
    price: float = Field(
        ...,
        ge=0,
        description="Package price"
    )
    rating: float = Field(
        default=0,
        description="Carried over from the existing package, never edited here"
    )
    main_image_url: str = Field(..., description="Main image URL")


class Package(PackageData):
    """A persisted package, identity assigned by the backend."""
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
