"""
API Routes for the package editor modal.
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Optional, Union

from ..models.form_state import PackageForm
from ..models.session import ModalSession, ModalState, modal_store
from ..services.backend_client import BackendError
from ..services.data_fetchers import FormDataFetcher, get_data_fetcher
from ..services.package_service import PackageService, get_package_service
from ..services.save_orchestrator import SaveOrchestrator, get_save_orchestrator


router = APIRouter(prefix="/api", tags=["package-editor"])


# Request/Response Models
class OpenModalRequest(BaseModel):
    package_id: Optional[str] = None
    destination_id: Optional[str] = None


class ModalResponse(BaseModel):
    modal_id: str
    state: str
    form: dict


class FieldUpdateRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[Union[str, int, float]] = None
    price: Optional[Union[str, int, float]] = None
    main_image_url: Optional[str] = None


class DestinationRequest(BaseModel):
    destination_id: str


class ItineraryEntryRequest(BaseModel):
    description: str


class SubmitResponse(BaseModel):
    success: bool
    modal_id: str
    state: str
    form: Optional[dict] = None
    package: Optional[dict] = None


def _get_modal(modal_id: str) -> ModalSession:
    modal = modal_store.get(modal_id)
    if not modal:
        raise HTTPException(status_code=404, detail="Modal not found")
    return modal


def _get_editable_modal(modal_id: str) -> ModalSession:
    modal = _get_modal(modal_id)
    if modal.state == ModalState.SAVING:
        raise HTTPException(status_code=409, detail="Save in progress")
    return modal


# Endpoints

@router.get("/destinations")
async def list_destinations(service: PackageService = Depends(get_package_service)):
    """Destinations available in the selector."""
    try:
        destinations = await service.list_destinations()
    except BackendError as e:
        raise HTTPException(status_code=502, detail=e.message)
    return {"destinations": [d.model_dump() for d in destinations]}


@router.post("/modal", response_model=ModalResponse)
async def open_modal(
    request: OpenModalRequest,
    service: PackageService = Depends(get_package_service),
    fetcher: FormDataFetcher = Depends(get_data_fetcher)
):
    """Open an add (no package_id) or edit modal."""
    package = None
    if request.package_id:
        try:
            package = await service.get_package(request.package_id)
        except BackendError as e:
            raise HTTPException(status_code=502, detail=e.message)
        if not package:
            raise HTTPException(status_code=404, detail="Package not found")

    form = PackageForm.from_package(package, request.destination_id)
    await fetcher.load(form)

    modal = modal_store.create(form)
    return ModalResponse(**modal.get_summary())


@router.get("/modal/{modal_id}", response_model=ModalResponse)
async def get_modal(modal_id: str):
    """Current display view of the form."""
    return ModalResponse(**_get_modal(modal_id).get_summary())


@router.put("/modal/{modal_id}/fields", response_model=ModalResponse)
async def update_fields(modal_id: str, request: FieldUpdateRequest):
    """Update plain form fields. Changing duration resizes the itinerary."""
    modal = _get_editable_modal(modal_id)
    modal.form.update_fields(request.model_dump(exclude_none=True))
    modal.touch()
    modal_store.update(modal)
    return ModalResponse(**modal.get_summary())


@router.put("/modal/{modal_id}/destination", response_model=ModalResponse)
async def select_destination(
    modal_id: str,
    request: DestinationRequest,
    fetcher: FormDataFetcher = Depends(get_data_fetcher)
):
    """Change the destination and reload its places."""
    modal = _get_editable_modal(modal_id)
    if modal.form.select_destination(request.destination_id):
        await fetcher.fetch_places(modal.form)
    modal.touch()
    modal_store.update(modal)
    return ModalResponse(**modal.get_summary())


@router.put("/modal/{modal_id}/itinerary/{index}", response_model=ModalResponse)
async def set_itinerary_entry(modal_id: str, index: int, request: ItineraryEntryRequest):
    """Set the description for one day (0-based index)."""
    modal = _get_editable_modal(modal_id)
    try:
        modal.form.set_itinerary_entry(index, request.description)
    except IndexError as e:
        raise HTTPException(status_code=400, detail=str(e))
    modal.touch()
    modal_store.update(modal)
    return ModalResponse(**modal.get_summary())


@router.post("/modal/{modal_id}/places/{place_id}/toggle", response_model=ModalResponse)
async def toggle_place(modal_id: str, place_id: str):
    """Select or deselect a place."""
    modal = _get_editable_modal(modal_id)
    modal.form.toggle_place(place_id)
    modal.touch()
    modal_store.update(modal)
    return ModalResponse(**modal.get_summary())


@router.post("/modal/{modal_id}/submit", response_model=SubmitResponse)
async def submit_modal(
    modal_id: str,
    service: PackageService = Depends(get_package_service),
    orchestrator: SaveOrchestrator = Depends(get_save_orchestrator)
):
    """Validate and save the package, then its itinerary."""
    modal = _get_modal(modal_id)
    if modal.state == ModalState.SAVING or modal.form.loading:
        raise HTTPException(status_code=409, detail="Save already in progress")

    def on_close():
        modal.close()
        modal_store.delete(modal.modal_id)

    package_id = modal.form.package.id if modal.form.is_editing else None

    modal.begin_saving()
    saved = await orchestrator.submit(
        modal.form,
        on_save=service.save_callback(package_id),
        on_close=on_close
    )
    modal.finish_saving(saved)

    if saved is None:
        modal_store.update(modal)
        return SubmitResponse(
            success=False,
            modal_id=modal.modal_id,
            state=modal.state.value,
            form=modal.form.to_display_dict()
        )

    return SubmitResponse(
        success=True,
        modal_id=modal.modal_id,
        state=modal.state.value,
        package=saved.model_dump(mode="json")
    )


@router.delete("/modal/{modal_id}")
async def close_modal(modal_id: str):
    """Cancel the modal without saving."""
    modal = _get_modal(modal_id)
    modal.close()
    modal_store.delete(modal_id)
    return {"success": True, "modal_id": modal_id, "state": modal.state.value}
