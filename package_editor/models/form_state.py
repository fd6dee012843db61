"""
Package Form State - Editable fields of the add/edit package modal.
Field values are held as entered; the day-by-day itinerary slots are derived
from the duration field.
"""
import re
from pydantic import BaseModel, Field
from typing import Optional

from .package import Package, Place
from ..config import settings


_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

EDITABLE_FIELDS = ("title", "description", "duration", "price", "main_image_url")


def parse_int(text: Optional[str]) -> Optional[int]:
    """Leading integer of the text, e.g. '3 days' -> 3. None if there is none."""
    match = _INT_PREFIX.match(text or "")
    return int(match.group(1)) if match else None


def parse_float(text: Optional[str]) -> Optional[float]:
    """Leading decimal of the text, e.g. '12.50' -> 12.5. None if there is none."""
    match = _FLOAT_PREFIX.match(text or "")
    return float(match.group(1)) if match else None


def _to_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class PackageForm(BaseModel):
    """
    State of one add/edit package form.

    Seeded from an optional existing package. Everything here is local UI
    state; nothing is persisted until the save orchestrator runs.
    """
    package: Optional[Package] = Field(
        None,
        description="Package being edited, None when creating"
    )

    # Editable fields (as entered)
    title: str = ""
    description: str = ""
    duration: str = ""
    price: str = ""
    main_image_url: str = ""
    selected_destination_id: str = ""

    # Places
    available_places: list[Place] = Field(default_factory=list)
    selected_places: list[str] = Field(default_factory=list)

    # Day-by-day itinerary, one slot per day
    itinerary_descriptions: list[str] = Field(default_factory=list)

    # UI status
    loading: bool = False
    error: str = ""

    @classmethod
    def from_package(
        cls,
        package: Optional[Package] = None,
        destination_id: Optional[str] = None
    ) -> "PackageForm":
        """Build the initial form state for creating or editing."""
        form = cls(
            package=package,
            title=package.title if package else "",
            description=package.description if package else "",
            duration=_to_text(package.duration) if package else "",
            price=_to_text(package.price) if package else "",
            main_image_url=package.main_image_url if package else "",
            selected_destination_id=destination_id or (package.destination_id if package else "") or "",
        )
        form._sync_itinerary_slots()
        return form

    @property
    def is_editing(self) -> bool:
        return self.package is not None and bool(self.package.id)

    @property
    def day_count(self) -> int:
        """Number of itinerary slots implied by the duration field."""
        days = parse_int(self.duration) or 0
        return min(max(days, 0), settings.max_duration_days)

    def set_duration(self, value: str):
        """Update the duration and grow or truncate the itinerary slots."""
        self.duration = value
        self._sync_itinerary_slots()

    def _sync_itinerary_slots(self):
        days = self.day_count
        current = list(self.itinerary_descriptions)
        if days > len(current):
            current.extend([""] * (days - len(current)))
        elif days < len(current):
            del current[days:]
        self.itinerary_descriptions = current

    def set_itinerary_entry(self, index: int, value: str):
        """Replace the description for one day (0-based)."""
        if index < 0 or index >= len(self.itinerary_descriptions):
            raise IndexError(f"No itinerary slot for day {index + 1}")
        descriptions = list(self.itinerary_descriptions)
        descriptions[index] = value
        self.itinerary_descriptions = descriptions

    def replace_itinerary(self, descriptions: list[str]):
        """Replace all slots with stored descriptions."""
        self.itinerary_descriptions = list(descriptions)

    def toggle_place(self, place_id: str):
        """Add the place to the selection, or remove it if already selected."""
        if place_id in self.selected_places:
            self.selected_places = [pid for pid in self.selected_places if pid != place_id]
        else:
            self.selected_places = [*self.selected_places, place_id]

    def select_destination(self, destination_id: str) -> bool:
        """Select a destination. Returns True if the selection changed."""
        changed = destination_id != self.selected_destination_id
        self.selected_destination_id = destination_id
        return changed

    def update_fields(self, updates: dict):
        """Update plain fields; duration goes through set_duration."""
        for key, value in updates.items():
            if key not in EDITABLE_FIELDS or value is None:
                continue
            if key == "duration":
                self.set_duration(_to_text(value))
            else:
                setattr(self, key, _to_text(value))

    def to_display_dict(self) -> dict:
        """Convert to what the modal renders."""
        return {
            "heading": "Edit Package" if self.package else "Add Package",
            "destination_id": self.selected_destination_id,
            "title": self.title,
            "description": self.description,
            "duration": self.duration,
            "price": self.price,
            "main_image_url": self.main_image_url,
            "itinerary": [
                {
                    "day": index + 1,
                    "label": f"Day {index + 1}",
                    "placeholder": f"Enter itinerary for day {index + 1}",
                    "description": text,
                }
                for index, text in enumerate(self.itinerary_descriptions)
            ],
            "places": [
                {
                    "id": place.id,
                    "name": place.name,
                    "image_url": place.image_url,
                    "selected": place.id in self.selected_places,
                }
                for place in self.available_places
            ],
            "error": self.error,
            "loading": self.loading,
            "submit_label": "Saving..." if self.loading else "Save",
            "submit_disabled": self.loading,
        }
