from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from careers_admin.models import JobBoard, SyncResult
from careers_admin.services.base import BaseService


class JobBoardService(BaseService):

    async def list(self) -> list[JobBoard]:
        return self._many(JobBoard, await self.client.get("/job-boards"))

    async def get(self, board_id: UUID) -> JobBoard:
        return self._one(JobBoard, await self.client.get(f"/job-boards/{board_id}"))

    async def create(self, data: Any) -> JobBoard:
        return self._one(JobBoard, await self.client.post("/job-boards", data))

    async def update(self, board_id: UUID, data: Any) -> JobBoard:
        return self._one(JobBoard, await self.client.patch(f"/job-boards/{board_id}", data))

    async def delete(self, board_id: UUID) -> None:
        await self.client.delete(f"/job-boards/{board_id}")

    async def create_external(self, source: str, board_token: Optional[str] = None) -> JobBoard:
        """Get or create the board synced from an ATS (greenhouse or ashby)."""
        body = {"board_token": board_token} if board_token else None
        return self._one(JobBoard, await self.client.post(f"/job-boards/external/{source}", body))

    async def refresh(self, board_id: UUID) -> SyncResult:
        return self._one(SyncResult, await self.client.post(f"/job-boards/{board_id}/refresh"))
