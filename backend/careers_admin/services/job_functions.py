from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from careers_admin.models import JobFunction, JobRole
from careers_admin.services.base import BaseService


class JobFunctionService(BaseService):

    async def list(self) -> list[JobFunction]:
        return self._many(JobFunction, await self.client.get("/job-functions"))

    async def get(self, function_id: UUID) -> JobFunction:
        return self._one(JobFunction, await self.client.get(f"/job-functions/{function_id}"))

    async def create(self, data: Any) -> JobFunction:
        return self._one(JobFunction, await self.client.post("/job-functions", data))

    async def update(self, function_id: UUID, data: Any) -> JobFunction:
        return self._one(JobFunction, await self.client.patch(f"/job-functions/{function_id}", data))

    async def delete(self, function_id: UUID) -> None:
        await self.client.delete(f"/job-functions/{function_id}")


class JobRoleService(BaseService):

    async def list(self, job_function_id: Optional[UUID] = None) -> list[JobRole]:
        data = await self.client.get(
            "/job-roles", params={"job_function_id": str(job_function_id) if job_function_id else None}
        )
        return self._many(JobRole, data)

    async def get(self, role_id: UUID) -> JobRole:
        return self._one(JobRole, await self.client.get(f"/job-roles/{role_id}"))

    async def create(self, data: Any) -> JobRole:
        return self._one(JobRole, await self.client.post("/job-roles", data))

    async def update(self, role_id: UUID, data: Any) -> JobRole:
        return self._one(JobRole, await self.client.patch(f"/job-roles/{role_id}", data))

    async def delete(self, role_id: UUID) -> None:
        await self.client.delete(f"/job-roles/{role_id}")
