from __future__ import annotations

from pathlib import Path
from sys import path

path.insert(0, str(Path(__file__).parent.parent))

from pytest import fixture

from jumphash.jump import JumpHasher
from jumphash.service.server import SlotService

REFERENCE_SLOTS: list[tuple[str, int, int]] = [
    ("test1", 10_000_000, 8970050),
    ("test2", 1000, 10),
    ("test3", 1000, 76),
    ("test4", 1000, 161),
    ("test5", 50, 33),
    ("", 1000, 392),
    ("testz", 1, 0),
]


@fixture
def reference_hasher() -> JumpHasher:
    return JumpHasher.with_keys(0, 0)


@fixture
def random_hasher() -> JumpHasher:
    return JumpHasher.new()


@fixture
def sample_keys() -> list[str]:
    return [f"key-{i}" for i in range(2000)]


@fixture
def slot_service(reference_hasher: JumpHasher) -> SlotService:
    return SlotService(
        reference_hasher,
        host="127.0.0.1",
        port=0,
        default_slot_count=1000,
    )
