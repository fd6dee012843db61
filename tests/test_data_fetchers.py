"""Tests for loading places and stored itineraries."""
import pytest
from unittest.mock import AsyncMock

from package_editor.models.form_state import PackageForm
from package_editor.models.package import Package, Place
from package_editor.services.backend_client import BackendError
from package_editor.services.data_fetchers import FormDataFetcher


def make_package() -> Package:
    return Package(
        id="pkg-1",
        destination_id="dest-1",
        title="River Cruise",
        description="Slow days on the water",
        duration=2,
        price=640.0,
        main_image_url="https://example.com/river.jpg",
    )


class TestPlaceFetch:
    """Test loading places for the selected destination."""

    @pytest.mark.asyncio
    async def test_loads_places_for_destination(self):
        backend = AsyncMock()
        backend.select.return_value = [
            {"id": "p1", "destination_id": "dest-1", "name": "Cathedral", "image_url": "https://example.com/c.jpg"},
            {"id": "p2", "destination_id": "dest-1", "name": "Bridge", "image_url": "https://example.com/b.jpg"},
        ]
        form = PackageForm.from_package(destination_id="dest-1")

        await FormDataFetcher(backend).fetch_places(form)

        backend.select.assert_awaited_once_with("destination_places", {"destination_id": "dest-1"})
        assert [p.name for p in form.available_places] == ["Cathedral", "Bridge"]

    @pytest.mark.asyncio
    async def test_no_destination_skips_fetch(self):
        backend = AsyncMock()
        form = PackageForm.from_package()

        await FormDataFetcher(backend).fetch_places(form)

        backend.select.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_is_silent(self):
        """A failed read is logged and leaves the list and error untouched."""
        backend = AsyncMock()
        backend.select.side_effect = BackendError("relation does not exist")
        form = PackageForm.from_package(destination_id="dest-1")
        form.available_places = [Place(id="old", name="Old")]

        await FormDataFetcher(backend).fetch_places(form)

        assert [p.id for p in form.available_places] == ["old"]
        assert form.error == ""


class TestItineraryFetch:
    """Test loading the stored itinerary when editing."""

    @pytest.mark.asyncio
    async def test_replaces_slots_with_stored_days(self):
        backend = AsyncMock()
        backend.select.return_value = [
            {"package_id": "pkg-1", "no_of_days": 2, "description": ["Board", "Disembark"]}
        ]
        form = PackageForm.from_package(make_package())

        await FormDataFetcher(backend).fetch_existing_itinerary(form)

        backend.select.assert_awaited_once_with("package_itinerary", {"package_id": "pkg-1"})
        assert form.itinerary_descriptions == ["Board", "Disembark"]

    @pytest.mark.asyncio
    async def test_no_stored_row_keeps_slots(self):
        backend = AsyncMock()
        backend.select.return_value = []
        form = PackageForm.from_package(make_package())

        await FormDataFetcher(backend).fetch_existing_itinerary(form)

        assert form.itinerary_descriptions == ["", ""]

    @pytest.mark.asyncio
    async def test_creating_skips_fetch(self):
        backend = AsyncMock()
        form = PackageForm.from_package(destination_id="dest-1")

        await FormDataFetcher(backend).fetch_existing_itinerary(form)

        backend.select.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failure_is_silent(self):
        backend = AsyncMock()
        backend.select.side_effect = BackendError("timeout")
        form = PackageForm.from_package(make_package())

        await FormDataFetcher(backend).fetch_existing_itinerary(form)

        assert form.itinerary_descriptions == ["", ""]
        assert form.error == ""


class TestPlaceRows:
    """Test tolerance of backend place rows."""

    @pytest.mark.asyncio
    async def test_null_columns_become_empty(self):
        backend = AsyncMock()
        backend.select.return_value = [
            {"id": "p1", "destination_id": "dest-1", "name": "Lighthouse", "image_url": None},
        ]
        form = PackageForm.from_package(destination_id="dest-1")

        await FormDataFetcher(backend).fetch_places(form)

        assert len(form.available_places) == 1
        assert form.available_places[0].image_url == ""

    @pytest.mark.asyncio
    async def test_stale_result_dropped(self):
        """Places for a destination that is no longer selected are discarded."""
        backend = AsyncMock()
        form = PackageForm.from_package(destination_id="dest-1")

        async def select(table, filters):
            form.select_destination("dest-2")
            return [{"id": "p1", "destination_id": "dest-1", "name": "Old Port", "image_url": ""}]

        backend.select.side_effect = select

        await FormDataFetcher(backend).fetch_places(form)

        assert form.available_places == []
