"""Company profile, offices and departments."""
from __future__ import annotations

from typing import Any
from uuid import UUID

from careers_admin.models import Company, Department, DepartmentNode, Office
from careers_admin.services.base import BaseService


class CompanyService(BaseService):

    async def get_company_details(self) -> Company:
        return self._one(Company, await self.client.get("/company"))

    async def save_company_details(self, data: Any) -> Company:
        return self._one(Company, await self.client.post("/company", data))

    async def update_company(self, data: Any) -> Company:
        return self._one(Company, await self.client.put("/company", data))

    async def update_settings(self, data: Any) -> Company:
        return self._one(Company, await self.client.put("/company/settings", data))


class OfficeService(BaseService):
    path = "/company/offices"

    async def list(self) -> list[Office]:
        return self._many(Office, await self.client.get(self.path))

    async def get(self, office_id: UUID) -> Office:
        return self._one(Office, await self.client.get(f"{self.path}/{office_id}"))

    async def get_main(self) -> Office:
        return self._one(Office, await self.client.get(f"{self.path}/main"))

    async def create(self, data: Any) -> Office:
        return self._one(Office, await self.client.post(self.path, data))

    async def update(self, office_id: UUID, data: Any) -> Office:
        return self._one(Office, await self.client.patch(f"{self.path}/{office_id}", data))

    async def delete(self, office_id: UUID) -> None:
        await self.client.delete(f"{self.path}/{office_id}")


class DepartmentService(BaseService):
    path = "/company/departments"

    async def list(self) -> list[Department]:
        return self._many(Department, await self.client.get(self.path))

    async def get_hierarchy(self) -> list[DepartmentNode]:
        return self._many(DepartmentNode, await self.client.get(f"{self.path}/hierarchy"))

    async def get(self, department_id: UUID) -> Department:
        return self._one(Department, await self.client.get(f"{self.path}/{department_id}"))

    async def create(self, data: Any) -> Department:
        return self._one(Department, await self.client.post(self.path, data))

    async def update(self, department_id: UUID, data: Any) -> Department:
        return self._one(Department, await self.client.patch(f"{self.path}/{department_id}", data))

    async def delete(self, department_id: UUID) -> None:
        await self.client.delete(f"{self.path}/{department_id}")
