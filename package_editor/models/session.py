"""
Modal sessions - One open add/edit package form per session.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum
import uuid

from .form_state import PackageForm
from .package import Package


class ModalState(str, Enum):
    """Current state of the modal."""
    IDLE = "idle"  # Editing, possibly showing an error
    SAVING = "saving"  # Submit in progress
    CLOSED = "closed"  # Saved or cancelled


class ModalSession(BaseModel):
    """An open add/edit package modal."""
    modal_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique modal identifier"
    )
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="When the modal was opened"
    )
    updated_at: datetime = Field(
        default_factory=datetime.now,
        description="Last update time"
    )
    state: ModalState = Field(
        default=ModalState.IDLE,
        description="Current modal state"
    )
    form: PackageForm = Field(
        default_factory=PackageForm,
        description="The package form"
    )
    saved_package: Optional[Package] = Field(
        None,
        description="Package returned by the last successful save"
    )

    def touch(self):
        self.updated_at = datetime.now()

    def begin_saving(self):
        self.state = ModalState.SAVING
        self.touch()

    def finish_saving(self, saved: Optional[Package] = None):
        """Back to idle after a failed submit, or closed after a successful one."""
        if saved is not None:
            self.saved_package = saved
            self.state = ModalState.CLOSED
        else:
            self.state = ModalState.IDLE
        self.touch()

    def close(self):
        self.state = ModalState.CLOSED
        self.touch()

    def get_summary(self) -> dict:
        """Display view plus modal status."""
        return {
            "modal_id": self.modal_id,
            "state": self.state.value,
            "form": self.form.to_display_dict(),
        }


# In-memory modal storage
class ModalStore:
    """Simple in-memory store of open modals."""

    def __init__(self):
        self._modals: dict[str, ModalSession] = {}

    def create(self, form: Optional[PackageForm] = None) -> ModalSession:
        """Open a new modal."""
        modal = ModalSession(form=form) if form is not None else ModalSession()
        self._modals[modal.modal_id] = modal
        return modal

    def get(self, modal_id: str) -> Optional[ModalSession]:
        """Get an open modal by ID."""
        return self._modals.get(modal_id)

    def update(self, modal: ModalSession):
        """Update a modal."""
        self._modals[modal.modal_id] = modal

    def delete(self, modal_id: str):
        """Forget a modal."""
        self._modals.pop(modal_id, None)


# Global modal store
modal_store = ModalStore()
