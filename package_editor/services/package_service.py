"""
Package Service - Package and destination rows used by the admin screens.
Provides the default save callback handed to the save orchestrator.
"""
import logging
from typing import List, Optional

from .backend_client import BackendClient, BackendError, get_backend_client
from .save_orchestrator import SaveCallback
from ..models.package import Destination, Package, PackageData

logger = logging.getLogger(__name__)

PACKAGES_TABLE = "packages"
DESTINATIONS_TABLE = "destinations"


class PackageService:
    """Reads and writes packages; lists destinations."""

    def __init__(self, backend: Optional[BackendClient] = None):
        self.backend = backend or get_backend_client()

    async def list_destinations(self) -> List[Destination]:
        """All destinations available for selection."""
        rows = await self.backend.select(DESTINATIONS_TABLE)
        return [Destination(**row) for row in rows]

    async def get_package(self, package_id: str) -> Optional[Package]:
        rows = await self.backend.select(PACKAGES_TABLE, {"id": package_id})
        return Package(**rows[0]) if rows else None

    async def save_package(
        self,
        data: PackageData,
        package_id: Optional[str] = None
    ) -> Package:
        """Insert a new package, or update the existing one."""
        if package_id:
            rows = await self.backend.update(
                PACKAGES_TABLE, data.model_dump(), {"id": package_id}
            )
        else:
            rows = await self.backend.insert(PACKAGES_TABLE, [data.model_dump()])

        if not rows:
            raise BackendError("Package was not saved")

        package = Package(**rows[0])
        logger.info(f"Package {package.id} {'updated' if package_id else 'created'}")
        return package

    def save_callback(self, package_id: Optional[str] = None) -> SaveCallback:
        """Save callback bound to the package being edited (or None to create)."""
        async def on_save(data: PackageData) -> Package:
            return await self.save_package(data, package_id)
        return on_save


# Global package service
package_service: Optional[PackageService] = None


def get_package_service() -> PackageService:
    """Get or create the global package service."""
    global package_service
    if package_service is None:
        package_service = PackageService()
    return package_service
