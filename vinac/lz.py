"""LZ77 block coder used for compressed archive members.

The stream starts with a marker byte, the least common byte of the input.
Literal bytes are copied as they are, except the marker, which is written as
the marker followed by a zero byte. A back reference is written as the
marker, then the match length and the backwards offset, each as a
variable-length integer carrying seven bits per byte.
"""

from __future__ import annotations

MAX_OFFSET = 100000
"""Largest distance searched for a previous occurrence of a string."""

_UINT_MASK = 0xFFFFFFFF


def _encode_varsize(value: int) -> bytes:
    """Encode an unsigned 32-bit integer in one to five bytes."""
    shifted = value >> 3
    num_bytes = 5
    while num_bytes >= 2:
        if shifted & 0xFE000000:
            break
        shifted = (shifted << 7) & _UINT_MASK
        num_bytes -= 1
    encoded = bytearray()
    for i in reversed(range(num_bytes)):
        byte = (value >> (i * 7)) & 0x7F
        if i > 0:
            byte |= 0x80
        encoded.append(byte)
    return bytes(encoded)


def _decode_varsize(data: bytes, pos: int) -> tuple[int, int]:
    """Decode a variable-length integer at ``pos``; return it and the new position."""
    value = 0
    while True:
        try:
            byte = data[pos]
        except IndexError:
            raise ValueError("truncated length or offset in compressed data") from None
        pos += 1
        value = ((value << 7) | (byte & 0x7F)) & _UINT_MASK
        if not byte & 0x80:
            return value, pos


def _match_length(data: bytes, a: int, b: int, start: int, limit: int) -> int:
    """Count how many bytes from ``start`` match at positions ``a`` and ``b``."""
    length = start
    while length < limit and data[a + length] == data[b + length]:
        length += 1
    return length


def _choose_marker(data: bytes) -> int:
    histogram = [0] * 256
    for byte in data:
        histogram[byte] += 1
    return min(range(256), key=histogram.__getitem__)


def _worth_encoding(length: int, offset: int) -> bool:
    return (
        length >= 8
        or (length == 4 and offset <= 0x0000007F)
        or (length == 5 and offset <= 0x00003FFF)
        or (length == 6 and offset <= 0x001FFFFF)
        or (length == 7 and offset <= 0x0FFFFFFF)
    )


def _check_size(data: bytes) -> None:
    if len(data) > _UINT_MASK:
        raise ValueError("input is too large to compress")


def _encode(data: bytes, find_match) -> bytes:
    """Drive the coding loop, asking ``find_match`` for the best match at each position."""
    size = len(data)
    marker = _choose_marker(data)
    out = bytearray([marker])
    inpos = 0
    bytesleft = size

    while True:
        best_length, best_offset = find_match(inpos, bytesleft)
        if _worth_encoding(best_length, best_offset):
            out.append(marker)
            out += _encode_varsize(best_length)
            out += _encode_varsize(best_offset)
            inpos += best_length
            bytesleft -= best_length
        else:
            symbol = data[inpos]
            inpos += 1
            out.append(symbol)
            if symbol == marker:
                out.append(0)
            bytesleft -= 1
        if bytesleft <= 3:
            break

    for symbol in data[inpos:]:
        out.append(symbol)
        if symbol == marker:
            out.append(0)
    return bytes(out)


def compress(data: bytes) -> bytes:
    """Compress ``data`` with an exhaustive search of the history window."""
    data = bytes(data)
    _check_size(data)
    if not data:
        return b""
    size = len(data)

    def find_match(inpos: int, bytesleft: int) -> tuple[int, int]:
        best_length, best_offset = 3, 0
        max_offset = min(inpos, MAX_OFFSET)
        first = data[inpos]
        for offset in range(3, max_offset + 1):
            candidate = inpos - offset
            probe = inpos + best_length
            if probe >= size:
                # No match can be longer than what is left of the input.
                break
            if data[candidate] != first or data[candidate + best_length] != data[probe]:
                continue
            limit = min(bytesleft, offset)
            length = _match_length(data, inpos, candidate, 0, limit)
            if length > best_length:
                best_length, best_offset = length, offset
        return best_length, best_offset

    return _encode(data, find_match)


def compress_fast(data: bytes) -> bytes:
    """Compress ``data`` following chains of earlier occurrences of each byte pair.

    The output uses the same format as :func:`compress` and is read back by
    :func:`decompress`.
    """
    data = bytes(data)
    _check_size(data)
    if not data:
        return b""
    size = len(data)

    last_index = [-1] * 65536
    jump_table = [-1] * size
    for i in range(size - 1):
        pair = (data[i] << 8) | data[i + 1]
        jump_table[i] = last_index[pair]
        last_index[pair] = i

    def find_match(inpos: int, bytesleft: int) -> tuple[int, int]:
        best_length, best_offset = 3, 0
        index = jump_table[inpos]
        while index != -1 and inpos - index < MAX_OFFSET:
            probe = inpos + best_length
            if probe < size and data[index + best_length] == data[probe]:
                offset = inpos - index
                limit = min(bytesleft, offset)
                length = _match_length(data, inpos, index, 2, limit)
                if length > best_length:
                    best_length, best_offset = length, offset
            index = jump_table[index]
        return best_length, best_offset

    return _encode(data, find_match)


def decompress(data: bytes, size: int) -> bytes:
    """Decode a compressed block that expands to exactly ``size`` bytes.

    Raises ValueError when the block is malformed or does not expand to
    ``size`` bytes.
    """
    data = bytes(data)
    if not data:
        if size != 0:
            raise ValueError(f"expected {size} bytes, compressed data is empty")
        return b""

    marker = data[0]
    inpos = 1
    end = len(data)
    out = bytearray()

    while True:
        if inpos >= end:
            raise ValueError("truncated compressed data")
        symbol = data[inpos]
        inpos += 1
        if symbol == marker:
            if inpos >= end:
                raise ValueError("truncated compressed data after marker")
            if data[inpos] == 0:
                out.append(marker)
                inpos += 1
            else:
                length, inpos = _decode_varsize(data, inpos)
                offset, inpos = _decode_varsize(data, inpos)
                if offset == 0 or offset > len(out):
                    raise ValueError("back reference points outside decoded data")
                start = len(out) - offset
                if offset >= length:
                    out += out[start:start + length]
                else:
                    for k in range(length):
                        out.append(out[start + k])
        else:
            out.append(symbol)
        if inpos >= end:
            break

    if len(out) != size:
        raise ValueError(f"decoded {len(out)} bytes, expected {size}")
    return bytes(out)