# src/taskview/tasks/task_remote.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.errors import DecodeError, NetworkError
from .task_models import TaskCollection, tasks_from_payload

logger = logging.getLogger(__name__)


def make_timeout(connect_s: float, read_s: float) -> httpx.Timeout:
    return httpx.Timeout(
        connect=connect_s,
        read=read_s,
        write=10.0,
        pool=connect_s,
    )


class HttpTaskSource:
    """
    Fetch the full task collection with a single GET.

    Failure mapping:
    - transport errors, timeouts, non-2xx -> NetworkError
    - body is not JSON or not a list of task objects -> DecodeError

    The client can be injected (tests use httpx.MockTransport); otherwise one is
    created lazily and released by aclose().
    """

    def __init__(
        self,
        url: str,
        *,
        client: httpx.AsyncClient | None = None,
        connect_timeout_s: float = 5.0,
        read_timeout_s: float = 15.0,
    ) -> None:
        if not url or not url.strip():
            raise ValueError("url is required")
        self._url = url.strip()
        self._client = client
        self._owns_client = client is None
        self._timeout = make_timeout(connect_timeout_s, read_timeout_s)

    @property
    def url(self) -> str:
        return self._url

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def fetch_all(self) -> TaskCollection:
        client = self._get_client()
        logger.debug("GET %s", self._url)

        try:
            response = await client.get(self._url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NetworkError(f"Task endpoint returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Task endpoint unreachable: {e.__class__.__name__}: {e}") from e

        try:
            payload: Any = response.json()
        except ValueError as e:
            raise DecodeError("Task endpoint returned a non-JSON body") from e

        tasks = tasks_from_payload(payload)
        logger.info("Fetched %d tasks from %s", len(tasks), self._url)
        return tasks

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
