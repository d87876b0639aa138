"""Adding files to an archive, as they are or compressed."""

from __future__ import annotations

import os
from typing import BinaryIO, Iterable

from .directory import (
    COUNT_SIZE,
    MEMBER_SIZE,
    ArchiveError,
    Member,
    find_member,
    read_directory,
    write_directory,
)
from .lz import compress


def _open_archive(archive_path: str | os.PathLike) -> BinaryIO:
    fd = os.open(archive_path, os.O_RDWR | os.O_CREAT | getattr(os, "O_BINARY", 0), 0o644)
    return os.fdopen(fd, "r+b")


def _current_uid() -> int:
    return os.getuid() if hasattr(os, "getuid") else 0


def _read_source(path: str) -> tuple[bytes, int]:
    with open(path, "rb") as fh:
        content = fh.read()
        modified = int(os.fstat(fh.fileno()).st_mtime)
    return content, modified


def _data_end(fh: BinaryIO, members: list[Member]) -> int:
    fh.seek(0, os.SEEK_END)
    size = fh.tell()
    if size < COUNT_SIZE:
        return size
    return size - len(members) * MEMBER_SIZE - COUNT_SIZE


def _store(
    archive_path: str | os.PathLike,
    name: str,
    payload: bytes,
    original_size: int,
    modified: int,
) -> Member:
    """Put ``payload`` into the archive under ``name``, replacing a member of that name."""
    with _open_archive(archive_path) as fh:
        members = read_directory(fh)
        end = _data_end(fh, members)
        index = find_member(members, name)
        if index is None:
            fh.seek(end)
            fh.write(payload)
            member = Member(
                name=name,
                uid=_current_uid(),
                original_size=original_size,
                disk_size=len(payload),
                modified=modified,
                order=len(members) + 1,
                offset=end,
            )
            members.append(member)
            end += len(payload)
        else:
            member = members[index]
            old_end = member.offset + member.disk_size
            fh.seek(old_end)
            tail = fh.read(end - old_end)
            fh.seek(member.offset)
            fh.write(payload)
            fh.write(tail)
            shift = len(payload) - member.disk_size
            for later in members[index + 1:]:
                later.offset += shift
            member.disk_size = len(payload)
            member.original_size = original_size
            end += shift
        fh.seek(end)
        write_directory(fh, members)
    return member


def insert_file(
    archive_path: str | os.PathLike,
    path: str | os.PathLike,
    sizes: tuple[int, int] | None = None,
) -> Member:
    """Store the file at ``path`` in the archive under its path.

    ``sizes`` gives the (original, on-disk) sizes to record when the file
    already holds compressed data; the on-disk size must match the file.
    A member of the same name is replaced in place.
    """
    name = os.fspath(path)
    content, modified = _read_source(name)
    if sizes is None:
        original_size = len(content)
    else:
        original_size, disk_size = sizes
        if disk_size != len(content):
            raise ValueError(
                f"on-disk size {disk_size} does not match the {len(content)} bytes of {name}"
            )
    return _store(archive_path, name, content, original_size, modified)


def insert_plain(
    archive_path: str | os.PathLike, paths: Iterable[str | os.PathLike]
) -> list[Member]:
    """Store each file uncompressed, in order."""
    return [insert_file(archive_path, path) for path in paths]


def insert_compressed(
    archive_path: str | os.PathLike, paths: Iterable[str | os.PathLike]
) -> list[Member]:
    """Store each file compressed, or as it is when compression does not shrink it.

    Every file is read and compressed before the archive is touched.
    """
    prepared = []
    for path in paths:
        name = os.fspath(path)
        content, modified = _read_source(name)
        if not content:
            raise ArchiveError(f"cannot compress empty file {name}")
        packed = compress(content)
        payload = packed if len(packed) < len(content) else content
        prepared.append((name, payload, len(content), modified))
    return [_store(archive_path, *item) for item in prepared]