"""Data models for the package editor."""
from .package import Package, PackageData, Place, Destination
from .itinerary import PackageItinerary
from .form_state import PackageForm
from .session import ModalSession, ModalState

__all__ = [
    "Package",
    "PackageData",
    "Place",
    "Destination",
    "PackageItinerary",
    "PackageForm",
    "ModalSession",
    "ModalState",
]
