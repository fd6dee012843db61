"""Services for the package editor."""
from .backend_client import BackendClient, BackendError
from .data_fetchers import FormDataFetcher
from .save_orchestrator import SaveOrchestrator, FormValidationError
from .package_service import PackageService

__all__ = [
    "BackendClient",
    "BackendError",
    "FormDataFetcher",
    "SaveOrchestrator",
    "FormValidationError",
    "PackageService",
]
