"""
Generic list state behind the console's CRUD pages.

Every page follows the same cycle: load the list, run a mutation, reload
the list and show a success message for a few seconds. Errors end up in
`error`; nothing raises to the caller.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, List, Optional, TypeVar

from careers_admin.client import REQUEST_ERRORS
from careers_admin.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class ResourceList(Generic[T]):

    def __init__(
        self,
        name: str,
        loader: Callable[[], Awaitable[List[T]]],
        success_ttl: Optional[float] = None,
    ):
        self.name = name
        self.loader = loader
        self.success_ttl = settings.success_message_seconds if success_ttl is None else success_ttl

        self.items: List[T] = []
        self.loading = False
        self.error: Optional[str] = None
        self.success: Optional[str] = None
        self._success_timer: Optional[asyncio.TimerHandle] = None

    async def load(self) -> List[T]:
        self.loading = True
        self.error = None
        try:
            self.items = list(await self.loader())
        except REQUEST_ERRORS as e:
            logger.error(f"Error loading {self.name}: {e}")
            self.error = f"Failed to load {self.name}"
        finally:
            self.loading = False
        return self.items

    async def retry(self) -> List[T]:
        return await self.load()

    async def create(self, call: Callable[..., Awaitable[R]], *args: Any, message: Optional[str] = None) -> Optional[R]:
        return await self._mutate("create", call, args, message)

    async def update(self, call: Callable[..., Awaitable[R]], *args: Any, message: Optional[str] = None) -> Optional[R]:
        return await self._mutate("update", call, args, message)

    async def delete(self, call: Callable[..., Awaitable[R]], *args: Any, message: Optional[str] = None) -> Optional[R]:
        return await self._mutate("delete", call, args, message)

    async def _mutate(self, action: str, call, args, message: Optional[str]):
        self.error = None
        try:
            result = await call(*args)
        except REQUEST_ERRORS as e:
            logger.error(f"Error during {action} on {self.name}: {e}")
            self.error = getattr(e, "message", None) or f"Failed to {action} {self.name}"
            return None

        await self.load()
        self.flash(message or f"{self.name.capitalize()} {action}d successfully")
        return result

    def flash(self, message: str) -> None:
        """Show a success message, cleared after success_ttl seconds."""
        self._cancel_timer()
        self.success = message
        loop = asyncio.get_running_loop()
        self._success_timer = loop.call_later(self.success_ttl, self._clear_success)

    def _clear_success(self) -> None:
        self.success = None
        self._success_timer = None

    def _cancel_timer(self) -> None:
        if self._success_timer is not None:
            self._success_timer.cancel()
            self._success_timer = None

    def close(self) -> None:
        self._cancel_timer()
