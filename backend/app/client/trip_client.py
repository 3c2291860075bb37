"""
Async HTTP client for the /api/trips endpoints
"""

from typing import Any

import httpx
from fastapi.encoders import jsonable_encoder

from app.core.config import TRIP_API_BASE_URL, TRIP_API_TIMEOUT
from app.core.logging import get_logger

logger = get_logger(__name__)


class TripApiError(Exception):
    """A trip API call failed; `errors` holds field errors for 400 responses."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: dict[str, str] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.errors = errors or {}
        super().__init__(message)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "TripApiError":
        message = f"Request failed with status code {response.status_code}"
        errors: dict[str, str] = {}
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            detail = body.get("detail", body)
            if isinstance(detail, dict):
                message = detail.get("message") or message
                errors = detail.get("errors") or {}
            elif isinstance(detail, str):
                message = detail

        return cls(message, status_code=response.status_code, errors=errors)


class TripApiClient:
    """
    Thin wrapper over httpx.AsyncClient. Returns decoded JSON, raises
    TripApiError for transport failures and non-2xx responses.
    """

    def __init__(
        self,
        base_url: str = TRIP_API_BASE_URL,
        timeout: float = TRIP_API_TIMEOUT,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, headers=headers, transport=transport
        )

    async def __aenter__(self) -> "TripApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, body: Any = None) -> Any:
        kwargs = {} if body is None else {"json": jsonable_encoder(body)}
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("trip_api_transport_error", method=method, path=path, error=str(e))
            raise TripApiError(str(e) or type(e).__name__) from e

        if response.is_error:
            error = TripApiError.from_response(response)
            logger.warning(
                "trip_api_error",
                method=method,
                path=path,
                status=response.status_code,
                message=error.message,
            )
            raise error
        return response.json()

    async def get_trips(self) -> list[dict]:
        return await self._request("GET", "/trips")

    async def get_trip(self, trip_id: str) -> dict:
        return await self._request("GET", f"/trips/{trip_id}")

    async def create_trip(self, trip_data: dict) -> dict:
        return await self._request("POST", "/trips", trip_data)

    async def update_trip(self, trip_id: str, trip_data: dict) -> dict:
        return await self._request("PUT", f"/trips/{trip_id}", trip_data)

    async def delete_trip(self, trip_id: str) -> dict:
        return await self._request("DELETE", f"/trips/{trip_id}")
