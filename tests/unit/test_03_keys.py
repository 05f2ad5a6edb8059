from __future__ import annotations

from dataclasses import dataclass

from pytest import raises

from jumphash.errors import InvalidArgumentError
from jumphash.hashing.keys import encode_key
from jumphash.jump import JumpHasher


@dataclass
class ShardKey:
    tenant: str
    user_id: int


class TestEncodeKey:
    def test_string_is_terminated(self) -> None:
        assert encode_key("ab") == b"ab\xff"
        assert encode_key("") == b"\xff"

    def test_string_is_utf8(self) -> None:
        assert encode_key("é") == b"\xc3\xa9\xff"

    def test_bytes_are_length_prefixed(self) -> None:
        assert encode_key(b"ab") == b"\x02" + b"\x00" * 7 + b"ab"
        assert encode_key(bytearray(b"ab")) == encode_key(b"ab")
        assert encode_key(memoryview(b"ab")) == encode_key(b"ab")

    def test_small_ints_are_eight_bytes(self) -> None:
        assert encode_key(1) == b"\x01" + b"\x00" * 7
        assert encode_key(-1) == b"\xff" * 8
        assert encode_key((1 << 64) - 1) == b"\xff" * 8

    def test_wide_ints_are_sixteen_bytes(self) -> None:
        assert encode_key(1 << 64) == b"\x00" * 8 + b"\x01" + b"\x00" * 7

    def test_huge_ints_overflow(self) -> None:
        with raises(OverflowError):
            encode_key(1 << 200)

    def test_bool_is_one_byte(self) -> None:
        assert encode_key(True) == b"\x01"
        assert encode_key(False) == b"\x00"

    def test_float_is_ieee_bits(self) -> None:
        assert encode_key(1.0) == bytes.fromhex("000000000000f03f")

    def test_none_writes_nothing(self) -> None:
        assert encode_key(None) == b""

    def test_tuple_concatenates(self) -> None:
        assert encode_key(("a", 1)) == encode_key("a") + encode_key(1)

    def test_list_is_length_prefixed(self) -> None:
        assert encode_key(["a"]) == b"\x01" + b"\x00" * 7 + b"a\xff"
        assert encode_key(["a"]) != encode_key(("a",))

    def test_terminator_separates_adjacent_strings(self) -> None:
        assert encode_key(("ab", "c")) != encode_key(("a", "bc"))

    def test_dict_order_does_not_matter(self) -> None:
        assert encode_key({"b": 1, "a": 2}) == encode_key({"a": 2, "b": 1})

    def test_dataclass_record(self) -> None:
        assert encode_key(ShardKey("acme", 7)) == encode_key(ShardKey("acme", 7))
        assert encode_key(ShardKey("acme", 7)) != encode_key(ShardKey("acme", 8))

    def test_unsupported_type(self) -> None:
        with raises(TypeError):
            encode_key(object())

    def test_dict_with_non_str_keys(self) -> None:
        with raises(TypeError):
            encode_key({1: "a"})

    def test_lone_surrogate_rejected(self) -> None:
        with raises(InvalidArgumentError):
            encode_key("\ud800")


class TestCompositeKeys:
    def test_record_keys_are_stable(self, reference_hasher: JumpHasher) -> None:
        key = ShardKey("acme", 42)
        assert reference_hasher.slot(key, 64) == reference_hasher.slot(
            ShardKey("acme", 42), 64
        )

    def test_dict_keys(self, reference_hasher: JumpHasher) -> None:
        slot = reference_hasher.slot({"tenant": "acme", "shard": 3}, 100)
        assert 0 <= slot < 100
        assert slot == reference_hasher.slot({"shard": 3, "tenant": "acme"}, 100)

    def test_nested_dict_keys(self, reference_hasher: JumpHasher) -> None:
        key = ("orders", {"region": {"zone": "eu-1"}, "ids": [1, 2]})
        assert 0 <= reference_hasher.slot(key, 7) < 7

    def test_surrogate_key_slot_is_invalid(self, reference_hasher: JumpHasher) -> None:
        with raises(InvalidArgumentError):
            reference_hasher.slot("bad\udc80key", 10)

    def test_int_and_string_keys_differ(self, reference_hasher: JumpHasher) -> None:
        assert reference_hasher.digest(1) != reference_hasher.digest("1")

    def test_tuple_keys_in_range(self, reference_hasher: JumpHasher) -> None:
        for i in range(100):
            assert 0 <= reference_hasher.slot(("region", i), 13) < 13
