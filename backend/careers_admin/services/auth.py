"""Login, session and user management."""
from __future__ import annotations

import logging
from typing import Any, Optional
from uuid import UUID

from careers_admin.models import AuthResponse, MagicLinkResponse, User
from careers_admin.services.base import BaseService

logger = logging.getLogger(__name__)


class AuthService(BaseService):

    async def signup(self, company_name: str, email: str, full_name: Optional[str] = None) -> MagicLinkResponse:
        data = await self.client.post(
            "/auth/signup", {"company_name": company_name, "email": email, "full_name": full_name}
        )
        return self._one(MagicLinkResponse, data)

    async def request_magic_link(self, email: str) -> MagicLinkResponse:
        data = await self.client.post("/auth/request-magic-link", {"email": email})
        return self._one(MagicLinkResponse, data)

    async def verify_token(self, token: str) -> AuthResponse:
        """Exchange a magic-link token for an access token and store it."""
        auth = self._one(AuthResponse, await self.client.post("/auth/verify-token", {"token": token}))
        self.client.tokens.save(
            auth.access_token,
            email=auth.email,
            role=auth.role,
            company_id=auth.company_id,
        )
        logger.info(f"Logged in as {auth.email}")
        return auth

    async def me(self) -> User:
        return self._one(User, await self.client.get("/auth/me"))

    async def logout(self) -> None:
        try:
            await self.client.post("/auth/logout")
        finally:
            self.client.tokens.clear()


class UserService(BaseService):

    async def list(self) -> list[User]:
        return self._many(User, await self.client.get("/users"))

    async def create(self, data: Any) -> User:
        return self._one(User, await self.client.post("/users", data))

    async def update(self, user_id: UUID, data: Any) -> User:
        return self._one(User, await self.client.patch(f"/users/{user_id}", data))

    async def delete(self, user_id: UUID) -> None:
        await self.client.delete(f"/users/{user_id}")
