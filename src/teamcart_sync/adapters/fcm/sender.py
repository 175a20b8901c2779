"""FCM adapter – FcmPushSender over the HTTP v1 API (httpx)."""
from __future__ import annotations

import dataclasses
from typing import Any

import httpx

from teamcart_sync.kernel.errors import ExternalServiceError
from teamcart_sync.kernel.types import Err, Ok, Result
from teamcart_sync.observability.logging import get_logger


@dataclasses.dataclass
class FcmConfig:
    server_key: str
    project_id: str = ""
    api_url: str = "https://fcm.googleapis.com/v1/projects/{project_id}/messages:send"
    timeout: float = 10.0

    @property
    def endpoint(self) -> str:
        return self.api_url.format(project_id=self.project_id)


@dataclasses.dataclass(frozen=True)
class SendResult:
    """The delivery result for a single device token."""

    token: str
    success: bool
    error: str | None = None
    status_code: int | None = None


class FcmPushSender:
    """Sends one FCM message per token.

    The call succeeds when at least one token accepted the message; it is
    an ``Err`` only when every delivery failed.
    """

    def __init__(self, config: FcmConfig, client: httpx.AsyncClient | None = None, logger: Any = None) -> None:
        self._config = config
        self._client = client
        self._logger = logger or get_logger(__name__)

    def _build_message(
        self,
        token: str,
        data: dict[str, str],
        notification: dict[str, str] | None,
    ) -> dict[str, Any]:
        msg: dict[str, Any] = {
            "token": token,
            "data": {k: str(v) for k, v in data.items()},
            "android": {"priority": "high"},
        }
        if notification is not None:
            msg["notification"] = notification
        else:
            # silent delivery: wake the app without showing anything
            msg["apns"] = {
                "headers": {"apns-push-type": "background", "apns-priority": "5"},
                "payload": {"aps": {"content-available": 1}},
            }
        return {"message": msg}

    async def send_multicast_notification(
        self, tokens: list[str], title: str, body: str, data: dict[str, str]
    ) -> Result[list[SendResult], ExternalServiceError]:
        return await self._send_all(tokens, data, {"title": title, "body": body})

    async def send_multicast_data(
        self, tokens: list[str], data: dict[str, str]
    ) -> Result[list[SendResult], ExternalServiceError]:
        return await self._send_all(tokens, data, None)

    async def _send_all(
        self,
        tokens: list[str],
        data: dict[str, str],
        notification: dict[str, str] | None,
    ) -> Result[list[SendResult], ExternalServiceError]:
        if not tokens:
            return Ok([])
        if self._client is not None:
            results = [await self._send_one(self._client, t, data, notification) for t in tokens]
        else:
            async with httpx.AsyncClient(timeout=self._config.timeout) as client:
                results = [await self._send_one(client, t, data, notification) for t in tokens]

        failures = [r for r in results if not r.success]
        if failures:
            self._logger.warning("fcm.partial_failure", failed=len(failures), total=len(results))
        if len(failures) == len(results):
            first = failures[0]
            return Err(
                ExternalServiceError(
                    "fcm",
                    f"All {len(results)} FCM deliveries failed: {first.error}",
                    status_code=first.status_code,
                )
            )
        return Ok(results)

    async def _send_one(
        self,
        client: httpx.AsyncClient,
        token: str,
        data: dict[str, str],
        notification: dict[str, str] | None,
    ) -> SendResult:
        headers = {
            "Authorization": f"Bearer {self._config.server_key}",
            "Content-Type": "application/json",
        }
        try:
            resp = await client.post(
                self._config.endpoint,
                headers=headers,
                json=self._build_message(token, data, notification),
            )
        except httpx.HTTPError as exc:
            return SendResult(token=token, success=False, error=repr(exc))
        if resp.status_code in (200, 204):
            return SendResult(token=token, success=True, status_code=resp.status_code)
        return SendResult(token=token, success=False, error=self._error_message(resp), status_code=resp.status_code)

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            return resp.text
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(error, str):
            return error
        return resp.text

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()


__all__ = ["FcmConfig", "FcmPushSender", "SendResult"]
