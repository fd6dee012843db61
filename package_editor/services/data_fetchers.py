"""
Data Fetchers - Load destination places and a stored itinerary into the form.
Read failures are logged and swallowed; the form keeps its current values.
"""
import logging
from typing import Optional

from .backend_client import BackendClient, get_backend_client
from ..models.form_state import PackageForm
from ..models.package import Place

logger = logging.getLogger(__name__)

PLACES_TABLE = "destination_places"
ITINERARY_TABLE = "package_itinerary"


class FormDataFetcher:
    """Fills a PackageForm with backend-owned data."""

    def __init__(self, backend: Optional[BackendClient] = None):
        self.backend = backend or get_backend_client()

    async def fetch_places(self, form: PackageForm) -> None:
        """Load all places of the selected destination."""
        destination_id = form.selected_destination_id
        if not destination_id:
            return

        try:
            rows = await self.backend.select(
                PLACES_TABLE,
                {"destination_id": destination_id}
            )
            if form.selected_destination_id != destination_id:
                logger.debug(f"Dropping stale places for destination {destination_id}")
                return
            form.available_places = [Place(**row) for row in rows or []]
        except Exception as e:
            logger.error(f"Error fetching places: {e}")

    async def fetch_existing_itinerary(self, form: PackageForm) -> None:
        """Replace the itinerary slots with the stored ones when editing."""
        if not form.is_editing:
            return

        try:
            rows = await self.backend.select(
                ITINERARY_TABLE,
                {"package_id": form.package.id}
            )
            if rows:
                form.replace_itinerary(rows[0].get("description") or [])
        except Exception as e:
            logger.error(f"Error fetching itinerary: {e}")

    async def load(self, form: PackageForm) -> None:
        """Run the fetches a freshly opened modal needs."""
        await self.fetch_places(form)
        await self.fetch_existing_itinerary(form)


# Global fetcher
data_fetcher: Optional[FormDataFetcher] = None


def get_data_fetcher() -> FormDataFetcher:
    """Get or create the global data fetcher."""
    global data_fetcher
    if data_fetcher is None:
        data_fetcher = FormDataFetcher()
    return data_fetcher
