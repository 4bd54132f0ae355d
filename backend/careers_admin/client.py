"""
Authenticated REST client for the careers API.

Every request carries `Authorization: Bearer <token>` from the token store.
A 401 clears the stored token and raises SessionExpiredError; any other
non-2xx response raises ApiError with the server's message.
"""
import json
import logging
from pathlib import Path
from typing import Any, Optional

import httpx
from pydantic import BaseModel

from careers_admin.config import settings

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Authentication expired. Please log in again."


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class SessionExpiredError(ApiError):
    """The access token was rejected; the user has to log in again."""

    def __init__(self):
        super().__init__(401, SESSION_EXPIRED_MESSAGE)


class TokenStore:
    """
    Persists the access token and basic session info.

    With path=None the token only lives in memory.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else None
        self._data: dict[str, Any] = {}
        if self.path and self.path.exists():
            try:
                self._data = json.loads(self.path.read_text())
            except (OSError, ValueError) as e:
                logger.warning(f"Ignoring unreadable token file {self.path}: {e}")
                self._data = {}

    @property
    def token(self) -> Optional[str]:
        return self._data.get("token")

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def save(self, token: str, **info: Any) -> None:
        self._data = {"token": token, **info}
        self._write()

    def clear(self) -> None:
        self._data = {}
        self._write()

    def is_authenticated(self) -> bool:
        return bool(self.token)

    def _write(self) -> None:
        if not self.path:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._data))


def _serialize(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    return body


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        message = data.get("detail") or data.get("message")
        if isinstance(message, str) and message:
            return message
        if message:
            # FastAPI validation errors come as a list of dicts
            return json.dumps(message)
    return f"API error: {response.status_code}"


class ApiClient:
    """
    Thin async wrapper over httpx.

    Pass `transport` (e.g. httpx.ASGITransport) to talk to an in-process app.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token_store: Optional[TokenStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.get_api_url()).rstrip("/")
        self.tokens = token_store if token_store is not None else TokenStore(settings.token_path)
        self._http = httpx.AsyncClient(base_url=self.base_url, transport=transport)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        headers = {"Accept": "application/json"}
        if self.tokens.token:
            headers["Authorization"] = f"Bearer {self.tokens.token}"
        if params:
            params = {key: value for key, value in params.items() if value is not None}

        response = await self._http.request(
            method,
            path,
            json=_serialize(body) if body is not None else None,
            params=params or None,
            headers=headers,
        )

        if response.status_code == 401:
            logger.warning(f"{method} {path} returned 401, clearing session")
            self.tokens.clear()
            raise SessionExpiredError()

        if response.is_error:
            message = _error_message(response)
            logger.debug(f"{method} {path} failed with {response.status_code}: {message}")
            raise ApiError(response.status_code, message)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any = None, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("POST", path, body=body, params=params)

    async def put(self, path: str, body: Any = None) -> Any:
        return await self.request("PUT", path, body=body)

    async def patch(self, path: str, body: Any = None) -> Any:
        return await self.request("PATCH", path, body=body)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)


# What page controllers catch: API errors plus transport failures
REQUEST_ERRORS = (ApiError, httpx.HTTPError)
