"""
HTTP client for the song API

songapp/client/api.py
"""
from typing import Any, Dict, Mapping, Optional
import logging

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, detail: str):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class SongApiClient:
    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self._client = client or httpx.AsyncClient(base_url=f"{base_url}/api", timeout=timeout)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        response = await self._client.request(method, path, **kwargs)
        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            logger.warning(f"{method} {path} failed with {response.status_code}: {detail}")
            raise ApiError(response.status_code, str(detail))
        return response.json()

    async def fetch_songs(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """One page of songs: {"data": [...], "pagination": {...}}"""
        params = {key: value for key, value in (params or {}).items() if value is not None}
        return await self._request("GET", "/songs", params=params)

    async def fetch_statistics(self) -> Dict[str, Any]:
        return await self._request("GET", "/songs/stats")

    async def create_song(self, data: Mapping[str, str]) -> Dict[str, Any]:
        return await self._request("POST", "/songs", json=dict(data))

    async def update_song(self, song_id: str, data: Mapping[str, str]) -> Dict[str, Any]:
        return await self._request("PUT", f"/songs/{song_id}", json=dict(data))

    async def delete_song(self, song_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/songs/{song_id}")
