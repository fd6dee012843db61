"""
Save Orchestrator - Validates the package form and persists it.

The package goes through a caller-supplied save callback, then the itinerary
row is inserted (new package) or updated (existing package). The two writes
are sequential and not transactional: if the itinerary write fails the
package stays saved.
"""
import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from .backend_client import BackendClient, BackendError, get_backend_client
from .data_fetchers import ITINERARY_TABLE
from ..config import settings
from ..models.form_state import PackageForm, parse_float, parse_int
from ..models.itinerary import PackageItinerary
from ..models.package import Package, PackageData

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "An error occurred"

SaveCallback = Callable[[PackageData], Awaitable[Package]]
CloseCallback = Callable[[], Union[None, Awaitable[None]]]


class FormValidationError(Exception):
    """The form cannot be submitted; the message is shown to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def error_message(exc: BaseException) -> str:
    """User-facing text for a failed save."""
    if isinstance(exc, (BackendError, FormValidationError)) and exc.message:
        return exc.message
    return str(exc) or DEFAULT_ERROR_MESSAGE


def validate_form(form: PackageForm) -> None:
    """
    Check the form before any network call.

    Raises:
        FormValidationError: with the first problem found
    """
    if not form.selected_destination_id:
        raise FormValidationError("Please select a destination")

    if any(not desc.strip() for desc in form.itinerary_descriptions):
        raise FormValidationError("Please fill in all itinerary descriptions")

    if not form.title.strip():
        raise FormValidationError("Please enter a title")
    if not form.description.strip():
        raise FormValidationError("Please enter a description")

    days = parse_int(form.duration)
    if days is None or days < 1:
        raise FormValidationError("Duration must be at least 1 day")
    if days > settings.max_duration_days:
        raise FormValidationError(
            f"Duration cannot exceed {settings.max_duration_days} days"
        )

    price = parse_float(form.price)
    if price is None or price < 0:
        raise FormValidationError("Price must be a non-negative number")

    if not form.main_image_url.strip():
        raise FormValidationError("Please enter a main image URL")

    if len(form.itinerary_descriptions) != days:
        raise FormValidationError(
            f"Itinerary must have exactly one description per day ({days} days)"
        )


def build_package_data(form: PackageForm) -> PackageData:
    """Payload for the save callback. Assumes validate_form passed."""
    return PackageData(
        destination_id=form.selected_destination_id,
        title=form.title,
        description=form.description,
        duration=parse_int(form.duration),
        price=parse_float(form.price),
        rating=(form.package.rating if form.package else 0) or 0,
        main_image_url=form.main_image_url,
    )


class SaveOrchestrator:
    """Runs one submit of the package form."""

    def __init__(self, backend: Optional[BackendClient] = None):
        self.backend = backend or get_backend_client()

    async def submit(
        self,
        form: PackageForm,
        on_save: SaveCallback,
        on_close: CloseCallback
    ) -> Optional[Package]:
        """
        Validate and persist the form.

        Args:
            form: The form to submit; its loading and error fields are updated
            on_save: Persists the package and returns it with its id
            on_close: Called once everything is saved

        Returns:
            The saved package, or None if the submit failed (form.error is set)
        """
        form.error = ""
        form.loading = True

        try:
            validate_form(form)
        except FormValidationError as e:
            form.error = e.message
            form.loading = False
            return None

        # Both payloads come from the form as it was at submit time
        package_data = build_package_data(form)
        descriptions = list(form.itinerary_descriptions)
        existing_id = form.package.id if form.is_editing else None

        try:
            saved = await on_save(package_data)
            await self._write_itinerary(
                PackageItinerary(
                    package_id=saved.id,
                    no_of_days=package_data.duration,
                    description=descriptions,
                ),
                existing_id
            )
        except Exception as e:
            logger.error(f"Error saving package: {e}")
            form.error = error_message(e)
            return None
        finally:
            form.loading = False

        logger.info(f"Saved package {saved.id} with {len(descriptions)} itinerary days")

        result = on_close()
        if inspect.isawaitable(result):
            await result
        return saved

    async def _write_itinerary(
        self,
        itinerary: PackageItinerary,
        existing_id: Optional[str]
    ) -> None:
        """Update the row of the package being edited, or insert a new one."""
        if existing_id:
            rows = await self.backend.update(
                ITINERARY_TABLE,
                itinerary.to_row(),
                {"package_id": existing_id}
            )
            if not rows:
                logger.warning(f"No itinerary row matched package {existing_id}")
        else:
            await self.backend.insert(ITINERARY_TABLE, [itinerary.to_row()])


# Global save orchestrator
save_orchestrator: Optional[SaveOrchestrator] = None


def get_save_orchestrator() -> SaveOrchestrator:
    """Get or create the global save orchestrator."""
    global save_orchestrator
    if save_orchestrator is None:
        save_orchestrator = SaveOrchestrator()
    return save_orchestrator
