"""On-disk directory of an archive and the members it describes.

An archive holds the members' data back to back, followed by one fixed-size
record per member and, last of all, the member count as a 32-bit integer.
"""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterable, Sequence

from .lz import decompress

_MEMBER = struct.Struct("<100sIqqqi4xq")
_COUNT = struct.Struct("<i")

MEMBER_SIZE = _MEMBER.size
"""Size in bytes of one directory record."""

COUNT_SIZE = _COUNT.size
"""Size in bytes of the member count that ends an archive."""

NAME_LIMIT = 99
"""Longest member name, in bytes, that a record keeps."""


class ArchiveError(Exception):
    """Raised when an archive or one of its members is malformed."""


@dataclass
class Member:
    """One entry of the archive directory."""

    name: str
    uid: int
    original_size: int
    disk_size: int
    modified: int
    order: int
    offset: int

    def pack(self) -> bytes:
        """Return the fixed-size record that stores this member."""
        encoded = os.fsencode(self.name)[:NAME_LIMIT]
        return _MEMBER.pack(
            encoded,
            self.uid,
            self.original_size,
            self.disk_size,
            self.modified,
            self.order,
            self.offset,
        )

    def is_compressed(self) -> bool:
        """True when the stored data is compressed."""
        return self.disk_size != self.original_size


def _member_from_fields(fields: tuple) -> Member:
    name, uid, original_size, disk_size, modified, order, offset = fields
    return Member(
        name=os.fsdecode(name.split(b"\0", 1)[0]),
        uid=uid,
        original_size=original_size,
        disk_size=disk_size,
        modified=modified,
        order=order,
        offset=offset,
    )


def unpack_member(raw: bytes) -> Member:
    """Decode one directory record."""
    if len(raw) != MEMBER_SIZE:
        raise ArchiveError(
            f"directory record must be {MEMBER_SIZE} bytes, got {len(raw)}"
        )
    return _member_from_fields(_MEMBER.unpack(raw))


def read_directory(fh: BinaryIO) -> list[Member]:
    """Read the directory at the end of an open archive.

    An archive too short to hold a member count has no members.
    """
    fh.seek(0, os.SEEK_END)
    size = fh.tell()
    if size < COUNT_SIZE:
        return []
    fh.seek(size - COUNT_SIZE)
    (count,) = _COUNT.unpack(fh.read(COUNT_SIZE))
    if count < 0:
        raise ArchiveError(f"negative member count {count}")
    if count == 0:
        return []
    start = size - count * MEMBER_SIZE - COUNT_SIZE
    if start < 0:
        raise ArchiveError(f"archive too short for {count} directory records")
    fh.seek(start)
    raw = fh.read(count * MEMBER_SIZE)
    return [_member_from_fields(fields) for fields in _MEMBER.iter_unpack(raw)]


def write_directory(fh: BinaryIO, members: Iterable[Member]) -> None:
    """Write the directory at the current position and cut the file there."""
    members = list(members)
    fh.write(b"".join(member.pack() for member in members))
    fh.write(_COUNT.pack(len(members)))
    fh.truncate()


def find_member(members: Sequence[Member], name: str) -> int | None:
    """Return the index of the member called ``name``, or None."""
    return next(
        (index for index, member in enumerate(members) if member.name == name),
        None,
    )


def extract_member(archive_path: str | os.PathLike, member: Member) -> Path:
    """Write ``member`` out under its own name, expanding it if compressed."""
    with open(archive_path, "rb") as fh:
        fh.seek(member.offset)
        payload = fh.read(member.disk_size)
    if len(payload) != member.disk_size:
        raise ArchiveError(f"data of member {member.name} is truncated")
    if member.is_compressed():
        try:
            content = decompress(payload, member.original_size)
        except ValueError as exc:
            raise ArchiveError(f"cannot expand member {member.name}: {exc}") from exc
    else:
        content = payload
    target = Path(member.name)
    target.write_bytes(content)
    return target