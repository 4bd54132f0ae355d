"""
Periodic refresh of the home dashboard statistics.
"""
import asyncio
import logging
from typing import Optional

from pydantic import ValidationError

from careers_admin.client import REQUEST_ERRORS
from careers_admin.config import settings
from careers_admin.models import DashboardStats
from careers_admin.services.analytics import DashboardService

logger = logging.getLogger(__name__)

LOAD_ERROR = "Failed to load dashboard statistics"


class DashboardPoller:
    """
    Fetches the stats immediately and then every `interval` seconds until
    stopped. Use as `async with DashboardPoller(service): ...`.
    """

    def __init__(self, service: DashboardService, interval: Optional[float] = None):
        self.service = service
        self.interval = settings.dashboard_refresh_seconds if interval is None else interval
        self.stats: Optional[DashboardStats] = None
        self.error: Optional[str] = None
        self.loading = False
        self.fetch_count = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh(self) -> Optional[DashboardStats]:
        self.loading = True
        try:
            self.stats = await self.service.get_stats()
            self.error = None
        except REQUEST_ERRORS as e:
            logger.error(f"Error fetching dashboard stats: {e}")
            self.error = LOAD_ERROR
        except ValidationError as e:
            logger.error(f"Malformed dashboard stats payload: {e}")
            self.error = LOAD_ERROR
        finally:
            self.loading = False
            self.fetch_count += 1
        return self.stats

    async def _run(self) -> None:
        while True:
            await self.refresh()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        if not self.running:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def __aenter__(self) -> "DashboardPoller":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
