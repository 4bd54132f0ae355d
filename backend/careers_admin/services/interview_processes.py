"""Interview processes per job role."""
from __future__ import annotations

from typing import Any
from uuid import UUID

from careers_admin.models import InterviewProcess
from careers_admin.services.base import BaseService


class InterviewProcessService(BaseService):
    path = "/interview-processes"

    async def list(self) -> list[InterviewProcess]:
        return self._many(InterviewProcess, await self.client.get(self.path))

    async def for_job_role(self, job_role_id: UUID) -> list[InterviewProcess]:
        return self._many(InterviewProcess, await self.client.get(f"{self.path}/job-role/{job_role_id}"))

    async def get(self, process_id: UUID) -> InterviewProcess:
        return self._one(InterviewProcess, await self.client.get(f"{self.path}/{process_id}"))

    async def create(self, data: Any) -> InterviewProcess:
        return self._one(InterviewProcess, await self.client.post(self.path, data))

    async def update(self, process_id: UUID, data: Any) -> InterviewProcess:
        return self._one(InterviewProcess, await self.client.put(f"{self.path}/{process_id}", data))

    async def delete(self, process_id: UUID) -> None:
        await self.client.delete(f"{self.path}/{process_id}")
