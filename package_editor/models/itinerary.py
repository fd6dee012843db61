"""
Itinerary model - One row of per-day descriptions per package.
"""
from pydantic import BaseModel, Field


class PackageItinerary(BaseModel):
    """Day-by-day itinerary stored in the package_itinerary table."""
    package_id: str = Field(
        ...,
        description="Package this itinerary belongs to"
    )
    no_of_days: int = Field(
        ...,
        ge=0,
        description="Number of days covered"
    )
    description: list[str] = Field(
        default_factory=list,
        description="Ordered per-day descriptions"
    )

    def to_row(self) -> dict:
        """Row payload for insert/update."""
        return self.model_dump()
