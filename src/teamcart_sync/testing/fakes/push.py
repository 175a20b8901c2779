"""Testing fakes – InMemoryPushSender."""
from __future__ import annotations

import dataclasses

from teamcart_sync.adapters.fcm.sender import SendResult
from teamcart_sync.kernel.types import Err, Ok, Result


@dataclasses.dataclass(frozen=True)
class SentPush:
    tokens: list[str]
    data: dict[str, str]
    title: str | None = None
    body: str | None = None

    @property
    def data_only(self) -> bool:
        return self.title is None


class InMemoryPushSender:
    """Stands in for :class:`FcmPushSender`; captures what would be sent."""

    def __init__(self) -> None:
        self.sent: list[SentPush] = []
        self.fail_with: Exception | None = None

    async def send_multicast_notification(
        self, tokens: list[str], title: str, body: str, data: dict[str, str]
    ) -> Result[list[SendResult], Exception]:
        return self._capture(SentPush(list(tokens), dict(data), title, body))

    async def send_multicast_data(self, tokens: list[str], data: dict[str, str]) -> Result[list[SendResult], Exception]:
        return self._capture(SentPush(list(tokens), dict(data)))

    def _capture(self, push: SentPush) -> Result[list[SendResult], Exception]:
        if self.fail_with is not None:
            return Err(self.fail_with)
        self.sent.append(push)
        return Ok([SendResult(token=t, success=True) for t in push.tokens])

    async def aclose(self) -> None:
        return None


__all__ = ["InMemoryPushSender", "SentPush"]
