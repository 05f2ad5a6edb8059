from __future__ import annotations

from typing import TYPE_CHECKING, Any

from aiohttp.web import Application, AppRunner, Request, Response, TCPSite
from loguru import logger
from orjson import dumps, loads
from ormsgpack import packb, unpackb

from jumphash.errors import InvalidArgumentError
from jumphash.jump import check_slot_count
from jumphash.utils.metrics import MetricsCollector, Timer

if TYPE_CHECKING:
    from jumphash.jump import JumpHasher

MSGPACK_CONTENT_TYPE = "application/msgpack"
JSON_CONTENT_TYPE = "application/json"


def _reply(
    data: dict[str, Any],
    status: int = 200,
    msgpack: bool = False,
) -> Response:
    if msgpack:
        return Response(
            body=packb(data),
            status=status,
            content_type=MSGPACK_CONTENT_TYPE,
        )
    return Response(body=dumps(data), status=status, content_type=JSON_CONTENT_TYPE)


def _parse_slot_count(raw: Any, default: int) -> int:
    if raw is None:
        return default
    if isinstance(raw, str):
        try:
            return int(raw)
        except ValueError as e:
            raise InvalidArgumentError(f"slot_count is not an integer: {raw!r}") from e
    return raw


class SlotService:
    """HTTP front end answering slot lookups for a single :class:`JumpHasher`."""

    def __init__(
        self,
        hasher: JumpHasher,
        host: str = "0.0.0.0",
        port: int = 8000,
        default_slot_count: int = 1,
    ) -> None:
        self._hasher = hasher
        self._host = host
        self._port = port
        self._default_slot_count = default_slot_count
        self._metrics = MetricsCollector()
        self._app: Application | None = None
        self._runner: AppRunner | None = None
        self._running = False

    def create_app(self) -> Application:
        app = Application()
        app.router.add_get("/slot", self._handle_slot)
        app.router.add_post("/slots", self._handle_slots)
        app.router.add_get("/health", self._health_check)
        return app

    async def start(self) -> None:
        self._app = self.create_app()
        self._runner = AppRunner(self._app)
        await self._runner.setup()
        site = TCPSite(self._runner, self._host, self._port)
        await site.start()
        self._running = True
        logger.info(
            f"SlotService started on {self._host}:{self._port} "
            f"({self._hasher.algorithm_name})"
        )

    async def stop(self) -> None:
        self._running = False
        if self._runner:
            await self._runner.cleanup()
        logger.info("SlotService stopped")

    async def _handle_slot(self, request: Request) -> Response:
        status = "ok"
        with Timer(lambda t: self._metrics.record_request("slot", status, t)):
            key = request.query.get("key")
            if key is None:
                status = "invalid"
                return _reply({"error": "missing query parameter: key"}, status=400)
            try:
                slot_count = _parse_slot_count(
                    request.query.get("slot_count"), self._default_slot_count
                )
                slot = self._hasher.slot(key, slot_count)
            except (ValueError, TypeError) as e:
                status = "invalid"
                logger.warning(f"Rejected slot request: {e}")
                return _reply({"error": str(e)}, status=400)
            self._metrics.record_keys(1)
            return _reply({"key": key, "slot": slot, "slot_count": slot_count})

    async def _handle_slots(self, request: Request) -> Response:
        status = "ok"
        msgpack = request.content_type == MSGPACK_CONTENT_TYPE
        with Timer(lambda t: self._metrics.record_request("slots", status, t)):
            try:
                raw = await request.read()
                body = unpackb(raw) if msgpack else loads(raw)
                if not isinstance(body, dict) or not isinstance(body.get("keys"), list):
                    raise InvalidArgumentError("body must be a map with a 'keys' list")
                keys: list[Any] = body["keys"]
                slot_count = _parse_slot_count(
                    body.get("slot_count"), self._default_slot_count
                )
                check_slot_count(slot_count)
                slots = [self._hasher.slot(key, slot_count) for key in keys]
            except (ValueError, TypeError) as e:
                status = "invalid"
                logger.warning(f"Rejected batch slot request: {e}")
                return _reply({"error": str(e)}, status=400, msgpack=msgpack)
            self._metrics.record_keys(len(keys))
            return _reply(
                {"slots": slots, "slot_count": slot_count},
                msgpack=msgpack,
            )

    async def _health_check(self, _request: Request) -> Response:
        return _reply({"status": "healthy", "algorithm": self._hasher.algorithm_name})

    @property
    def is_running(self) -> bool:
        return self._running
