import asyncio
import logging
import time
from typing import Any, Callable, Optional

import httpx

from .config import DEFAULT_CLIENT_ID, DEFAULT_HOST_URL, DEFAULT_TIMEOUT
from .errors import CoachError, HostAPIError, HostConnectionError
from .result_utils import decode_tool_result

logger = logging.getLogger("pronunciation_coach.host")

DEFAULT_ASYNC_TIMEOUT = 3600.0
ProgressCallback = Callable[[float, str], None]


class SpeechHostClient:
    """
    Client for the speech host's tool API.

    Tools are invoked with ``POST /sdk/tools/call``. The host answers either
    synchronously with the tool result, or with ``mode: "async"`` and a task
    id, in which case the task is polled until it finishes.
    """

    def __init__(
        self,
        host_url: str = DEFAULT_HOST_URL,
        client_id: str = DEFAULT_CLIENT_ID,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        poll_interval: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._host_url = host_url.rstrip("/")
        self._client_id = client_id
        self._timeout = timeout
        self._poll_interval = poll_interval
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    @property
    def host_url(self) -> str:
        return self._host_url

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(
                base_url=self._host_url,
                timeout=httpx.Timeout(self._timeout),
                headers={
                    "Content-Type": "application/json",
                    "X-Client-ID": self._client_id,
                },
                transport=self._transport,
            )
        return self._http_client

    async def request(
        self,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        client = self._get_http_client()
        try:
            response = await client.request(method=method, url=path, json=json, params=params)
        except httpx.ConnectError as e:
            logger.error(f"Failed to connect to speech host at {self._host_url}: {e}")
            raise HostConnectionError(f"Unable to connect to speech host at {self._host_url}") from e
        except httpx.TimeoutException as e:
            logger.error(f"Request to speech host timed out: {e}")
            raise HostConnectionError(f"Request to speech host timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            logger.error(f"Unexpected error during speech host request: {e}")
            raise CoachError(f"Unexpected error: {e}") from e

        if response.status_code >= 400:
            try:
                error_data = response.json()
            except ValueError:
                error_data = None
            if isinstance(error_data, dict):
                detail = error_data.get("detail", str(error_data))
            else:
                detail = response.text
            raise HostAPIError(
                f"Speech host error: {response.status_code}",
                status_code=response.status_code,
                detail=str(detail),
            )

        try:
            data = response.json()
        except ValueError as e:
            raise HostAPIError("Speech host returned invalid JSON", status_code=response.status_code) from e
        if not isinstance(data, dict):
            raise HostAPIError("Speech host returned unexpected payload", status_code=response.status_code)
        if data.get("status") == "error":
            raise HostAPIError(data.get("message", "Unknown error"), detail=data.get("detail"))
        return data

    async def call_tool(
        self,
        tool_name: str,
        arguments: Optional[dict[str, Any]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Any:
        payload = {
            "tool_name": tool_name,
            "arguments": arguments or {},
            "timeout": timeout,
        }
        response = await self.request("POST", "/sdk/tools/call", json=payload)
        if response.get("mode") == "async":
            task_id = response.get("task_id")
            if not task_id:
                raise HostAPIError("Async task response missing task_id")
            logger.info(f"Tool '{tool_name}' submitted as async task {task_id}")
            return await self._wait_for_task(
                task_id,
                timeout=timeout if timeout > DEFAULT_TIMEOUT else DEFAULT_ASYNC_TIMEOUT,
                on_progress=on_progress,
            )
        return decode_tool_result(response.get("result", response))

    async def cancel_task(self, task_id: str) -> bool:
        response = await self.request("DELETE", f"/sdk/tasks/{task_id}")
        return str(response.get("status", "")).lower() == "success"

    async def _wait_for_task(
        self,
        task_id: str,
        timeout: float,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Any:
        try:
            return await self._poll_for_task_completion(task_id, timeout, on_progress)
        except asyncio.CancelledError:
            logger.info(f"Cancelling host task {task_id}")
            try:
                await asyncio.shield(self.cancel_task(task_id))
            except CoachError as e:
                logger.warning(f"Failed to cancel host task {task_id}: {e}")
            raise

    async def _poll_for_task_completion(
        self,
        task_id: str,
        timeout: float,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Any:
        start_time = time.monotonic()
        last_progress: Optional[float] = None
        last_message: Optional[str] = None
        while True:
            if time.monotonic() - start_time > timeout:
                raise HostConnectionError(f"Task {task_id} timed out after {timeout}s")
            response = await self.request("GET", f"/sdk/tasks/{task_id}")
            task = response.get("task")
            if not isinstance(task, dict):
                task = {}
            status = task.get("status")
            if on_progress:
                progress = task.get("progress", 0.0)
                message = task.get("progress_message", "")
                if progress != last_progress or message != last_message:
                    on_progress(progress, message)
                    last_progress = progress
                    last_message = message
            if status == "completed":
                logger.info(f"Task {task_id} completed")
                return decode_tool_result(task.get("result", {}))
            if status in ("failed", "cancelled"):
                error = task.get("error") or "Unknown error"
                raise HostAPIError(f"Task {status}: {error}", detail=str(error))
            await asyncio.sleep(self._poll_interval)

    async def close(self) -> None:
        if self._http_client and not self._http_client.is_closed:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "SpeechHostClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
