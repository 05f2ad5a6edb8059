from __future__ import annotations

from pytest import fixture, raises

from jumphash.hashing.siphash import SipHasher13, SipHasher24

# Reference key 00 01 02 ... 0f read as two little-endian words.
K0 = 0x0706050403020100
K1 = 0x0F0E0D0C0B0A0908


class TestSipHasher24:
    def test_empty_message_vector(self) -> None:
        assert SipHasher24(K0, K1).intdigest() == 0x726FDB47DD0E0E31

    def test_fifteen_byte_vector(self) -> None:
        h = SipHasher24(K0, K1, bytes(range(15)))
        assert h.intdigest() == 0xA129CA6149BE45E5

    def test_digest_is_little_endian_bytes(self) -> None:
        h = SipHasher24(K0, K1)
        assert h.digest() == bytes.fromhex("310e0edd47db6f72")
        assert h.hexdigest() == "310e0edd47db6f72"


class TestSipHasher13:
    @fixture
    def message(self) -> bytes:
        return bytes(range(64)) + b"jump consistent hash"

    def test_differs_from_siphash24(self, message: bytes) -> None:
        assert SipHasher13(K0, K1, message).intdigest() != SipHasher24(
            K0, K1, message
        ).intdigest()

    def test_streaming_matches_one_shot(self, message: bytes) -> None:
        expected = SipHasher13(K0, K1, message).intdigest()
        for step in (1, 3, 7, 8, 9, 16):
            h = SipHasher13(K0, K1)
            for offset in range(0, len(message), step):
                h.update(message[offset : offset + step])
            assert h.intdigest() == expected

    def test_digest_does_not_consume_state(self, message: bytes) -> None:
        h = SipHasher13(K0, K1, message)
        assert h.intdigest() == h.intdigest()

    def test_copy_is_independent(self) -> None:
        base = SipHasher13(1, 2, b"prefix")
        clone = base.copy()
        clone.update(b"suffix")
        assert base.intdigest() == SipHasher13(1, 2, b"prefix").intdigest()
        assert clone.intdigest() == SipHasher13(1, 2, b"prefixsuffix").intdigest()
        assert type(clone) is SipHasher13

    def test_keys_change_output(self) -> None:
        assert SipHasher13(0, 0, b"x").intdigest() != SipHasher13(0, 1, b"x").intdigest()

    def test_output_fits_64_bits(self, message: bytes) -> None:
        assert 0 <= SipHasher13(K0, K1, message).intdigest() < 1 << 64

    def test_rejects_out_of_range_keys(self) -> None:
        with raises(ValueError):
            SipHasher13(-1, 0)
        with raises(ValueError):
            SipHasher13(0, 1 << 64)

    def test_repr_hides_keys(self) -> None:
        assert "12345" not in repr(SipHasher13(12345, 12345))
