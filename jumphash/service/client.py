from __future__ import annotations

from typing import TYPE_CHECKING, Any

from aiohttp import ClientResponse, ClientSession, ClientTimeout
from loguru import logger
from orjson import loads
from ormsgpack import packb, unpackb

from jumphash.errors import InvalidArgumentError
from jumphash.service.server import MSGPACK_CONTENT_TYPE

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from jumphash.utils.config import ServiceConfig


class SlotClient:
    def __init__(self, base_url: str, request_timeout: float = 5.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = ClientTimeout(total=request_timeout)
        self._session: ClientSession | None = None

    @classmethod
    def from_config(
        cls,
        config: ServiceConfig,
        host: str | None = None,
    ) -> SlotClient:
        if host is None:
            host = "127.0.0.1" if config.host in ("0.0.0.0", "") else config.host
        return cls(
            f"http://{host}:{config.port}",
            request_timeout=config.request_timeout,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def request_timeout(self) -> float | None:
        return self._timeout.total

    async def __aenter__(self) -> SlotClient:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def start(self) -> None:
        if self._session is None:
            self._session = ClientSession(timeout=self._timeout)

    async def close(self) -> None:
        if self._session:
            await self._session.close()
            self._session = None

    def _require_session(self) -> ClientSession:
        if self._session is None:
            raise RuntimeError("SlotClient is not started")
        return self._session

    @staticmethod
    async def _decode(resp: ClientResponse) -> dict[str, Any]:
        raw = await resp.read()
        if resp.content_type == MSGPACK_CONTENT_TYPE:
            body = unpackb(raw)
        else:
            body = loads(raw)
        if resp.status == 400:
            logger.warning(f"Slot service rejected request: {body.get('error')}")
            raise InvalidArgumentError(body.get("error", "invalid request"))
        resp.raise_for_status()
        return body

    async def slot(self, key: str, slot_count: int | None = None) -> int:
        params = {"key": key}
        if slot_count is not None:
            params["slot_count"] = str(slot_count)
        session = self._require_session()
        async with session.get(f"{self._base_url}/slot", params=params) as resp:
            body = await self._decode(resp)
        return body["slot"]

    async def slots(
        self,
        keys: Sequence[Any],
        slot_count: int | None = None,
    ) -> list[int]:
        payload: dict[str, Any] = {"keys": list(keys)}
        if slot_count is not None:
            payload["slot_count"] = slot_count
        session = self._require_session()
        async with session.post(
            f"{self._base_url}/slots",
            data=packb(payload),
            headers={"Content-Type": MSGPACK_CONTENT_TYPE},
        ) as resp:
            body = await self._decode(resp)
        return body["slots"]

    async def health(self) -> dict[str, Any]:
        session = self._require_session()
        async with session.get(f"{self._base_url}/health") as resp:
            return await self._decode(resp)
