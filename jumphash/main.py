from __future__ import annotations

from asyncio import Event, get_running_loop, run
from signal import SIGINT, SIGTERM
from sys import stderr

from loguru import logger

from jumphash.jump import JumpHasher
from jumphash.service.server import SlotService
from jumphash.utils.config import Config
from jumphash.utils.metrics import MetricsCollector


def build_service(config: Config) -> SlotService:
    hasher = JumpHasher.from_config(config.hasher)
    return SlotService(
        hasher,
        host=config.service.host,
        port=config.service.port,
        default_slot_count=config.hasher.slot_count,
    )


async def run_service(service: SlotService, metrics_port: int) -> None:
    loop = get_running_loop()
    stop_event = Event()

    def signal_handler() -> None:
        stop_event.set()

    for sig in (SIGTERM, SIGINT):
        loop.add_signal_handler(sig, signal_handler)

    metrics = MetricsCollector()
    metrics.start_server(metrics_port)

    await service.start()

    await stop_event.wait()

    await service.stop()


def main() -> None:
    config = Config.from_env()

    logger.remove()
    logger.add(
        stderr,
        level=config.log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    )

    service = build_service(config)
    if not config.hasher.deterministic:
        logger.warning(
            "JUMPHASH_K1/JUMPHASH_K2 not set, slot placement is random per process"
        )

    logger.info(f"Starting slot service with {config.hasher.algorithm}")

    run(run_service(service, config.metrics_port))


if __name__ == "__main__":
    main()
