import random

import pytest

from vinac.lz import compress, compress_fast, decompress


def _samples():
    rng = random.Random(1234)
    return [
        b"a",
        b"ab",
        b"abc",
        b"abcd",
        b"hello world, hello world, hello world!",
        bytes(range(256)) * 3,
        b"\x00" * 500,
        bytes(rng.randrange(256) for _ in range(2000)),
        bytes(rng.choice(b"abcde") for _ in range(3000)),
        b"The quick brown fox jumps over the lazy dog. " * 40,
    ]


@pytest.mark.parametrize("coder", [compress, compress_fast])
@pytest.mark.parametrize("data", _samples())
def test_round_trip(coder, data):
    packed = coder(data)
    assert decompress(packed, len(data)) == data


@pytest.mark.parametrize("coder", [compress, compress_fast])
def test_empty_input_gives_empty_output(coder):
    assert coder(b"") == b""
    assert decompress(b"", 0) == b""


def test_single_byte_uses_least_common_marker():
    # byte 0 never occurs, so it becomes the marker
    assert compress(b"a") == b"\x00a"


def test_marker_byte_is_escaped():
    # byte 0 occurs once, byte 1 never: marker is 1
    assert compress(b"\x00") == b"\x01\x00"
    assert compress(b"\x01") == b"\x00\x01"


@pytest.mark.parametrize("coder", [compress, compress_fast])
def test_first_byte_is_least_common_byte(coder):
    data = bytes(range(256)) * 2 + bytes(range(10, 256))
    packed = coder(data)
    counts = [data.count(b) for b in range(256)]
    assert counts[packed[0]] == min(counts)
    assert packed[0] == counts.index(min(counts))


@pytest.mark.parametrize("coder", [compress, compress_fast])
def test_repeated_data_shrinks(coder):
    data = bytes(range(256)) * 4
    assert len(coder(data)) < len(data)


@pytest.mark.parametrize("coder", [compress, compress_fast])
def test_worst_case_bound(coder):
    rng = random.Random(99)
    data = bytes(rng.randrange(256) for _ in range(4096))
    assert len(coder(data)) <= len(data) * 257 // 256 + 1


def test_fast_and_exhaustive_agree_on_simple_repeats():
    data = b"0123456789" * 30
    assert decompress(compress_fast(data), len(data)) == decompress(compress(data), len(data))


def test_overlapping_reference_is_decoded():
    # marker 0xff, literals "ab", then a reference of length 6 at offset 2
    packed = b"\xffab\xff\x06\x02"
    assert decompress(packed, 8) == b"abababab"


def test_wrong_size_raises():
    data = b"some data to pack, some data to pack"
    packed = compress(data)
    with pytest.raises(ValueError):
        decompress(packed, len(data) + 1)


def test_reference_outside_output_raises():
    with pytest.raises(ValueError):
        decompress(b"\x01\x01\x04\x05", 4)


def test_truncated_reference_raises():
    with pytest.raises(ValueError):
        decompress(b"\x01a\x01\x84", 5)


def test_marker_only_raises():
    with pytest.raises(ValueError):
        decompress(b"\x00", 0)


def test_empty_with_nonzero_size_raises():
    with pytest.raises(ValueError):
        decompress(b"", 3)