"""Job openings and their approval workflow."""
from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from careers_admin.models import Job
from careers_admin.services.base import BaseService


class JobService(BaseService):

    async def list(self, status: Optional[str] = None) -> list[Job]:
        return self._many(Job, await self.client.get("/jobs", params={"status": status}))

    async def get(self, job_id: UUID) -> Job:
        return self._one(Job, await self.client.get(f"/jobs/{job_id}"))

    async def create(self, data: Any) -> Job:
        return self._one(Job, await self.client.post("/jobs", data))

    async def update(self, job_id: UUID, data: Any) -> Job:
        return self._one(Job, await self.client.put(f"/jobs/{job_id}", data))

    async def delete(self, job_id: UUID) -> None:
        await self.client.delete(f"/jobs/{job_id}")

    async def pending_approval(self) -> list[Job]:
        return self._many(Job, await self.client.get("/jobs/pending-approval"))

    async def by_department(self, department_id: UUID) -> list[Job]:
        return self._many(Job, await self.client.get(f"/jobs/department/{department_id}"))

    async def by_office(self, office_id: UUID) -> list[Job]:
        return self._many(Job, await self.client.get(f"/jobs/office/{office_id}"))

    async def by_job_board(self, job_board_id: UUID) -> list[Job]:
        return self._many(Job, await self.client.get(f"/jobs/job-board/{job_board_id}"))

    # Workflow

    async def submit_for_approval(self, job_id: UUID) -> Job:
        return self._one(Job, await self.client.put(f"/jobs/{job_id}/submit-for-approval"))

    async def approve(self, job_id: UUID) -> Job:
        return self._one(Job, await self.client.put(f"/jobs/{job_id}/approve"))

    async def reject(self, job_id: UUID, rejection_reason: str) -> Job:
        return self._one(
            Job, await self.client.put(f"/jobs/{job_id}/reject", {"rejection_reason": rejection_reason})
        )

    async def publish(self, job_id: UUID) -> Job:
        return self._one(Job, await self.client.put(f"/jobs/{job_id}/publish"))

    async def archive(self, job_id: UUID) -> Job:
        return self._one(Job, await self.client.put(f"/jobs/{job_id}/archive"))
