"""
Single-entry cache of the current company's details.

Loaded once per session and shared by every page; pages that edit the
company go through update() so the cache stays current.
"""
import enum
import logging
from typing import Any, Optional

from careers_admin.client import REQUEST_ERRORS
from careers_admin.models import Company
from careers_admin.services.company import CompanyService

logger = logging.getLogger(__name__)

LOAD_ERROR = "Failed to load company details"
UPDATE_ERROR = "Failed to update company details"


class CacheStatus(str, enum.Enum):
    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class CompanyCache:

    def __init__(self, service: CompanyService):
        self.service = service
        self.status = CacheStatus.EMPTY
        self.value: Optional[Company] = None
        self.error: Optional[str] = None
        self.last_error: Optional[Exception] = None

    @property
    def loading(self) -> bool:
        return self.status == CacheStatus.LOADING

    async def ensure_loaded(self) -> Optional[Company]:
        """Fetch the company unless it is already cached."""
        if self.status == CacheStatus.READY:
            return self.value
        return await self.refresh()

    async def refresh(self) -> Optional[Company]:
        """Re-fetch. On failure the previous value is kept and the error recorded."""
        self.status = CacheStatus.LOADING
        self.error = None
        try:
            company = await self.service.get_company_details()
        except REQUEST_ERRORS as e:
            logger.error(f"Error fetching company details: {e}")
            self.status = CacheStatus.ERROR
            self.error = LOAD_ERROR
            self.last_error = e
            return self.value

        self.value = company
        self.status = CacheStatus.READY
        return company

    async def update(self, data: Any) -> Company:
        """
        PUT the company and replace the cached value with the server's answer.

        Raises:
            ApiError: The update failed; the cached value is unchanged
        """
        try:
            company = await self.service.update_company(data)
        except REQUEST_ERRORS as e:
            logger.error(f"Error updating company details: {e}")
            self.error = UPDATE_ERROR
            self.last_error = e
            raise

        self.set(company)
        return company

    def set(self, value: Company) -> None:
        self.value = value
        self.status = CacheStatus.READY
        self.error = None
