"""Listing, moving, removing and extracting archive members."""

from __future__ import annotations

import os
import time
from pathlib import Path
from typing import BinaryIO, Iterable, Sequence

from .directory import (
    ArchiveError,
    Member,
    extract_member,
    find_member,
    read_directory,
    write_directory,
)

_RULE = "-" * 110
_TITLE = "ARQUIVOS DENTRO DO ARCHIVE.VC:"


def _read_payloads(fh: BinaryIO, members: Sequence[Member]) -> list[bytes]:
    payloads = []
    for member in members:
        fh.seek(member.offset)
        data = fh.read(member.disk_size)
        if len(data) != member.disk_size:
            raise ArchiveError(f"data of member {member.name} is truncated")
        payloads.append(data)
    return payloads


def _data_start(members: Sequence[Member]) -> int:
    return min((member.offset for member in members), default=0)


def _rewrite(
    fh: BinaryIO, members: Sequence[Member], payloads: Sequence[bytes], start: int
) -> None:
    """Lay the payloads out back to back from ``start`` and write the directory."""
    fh.seek(start)
    position = start
    for member, payload in zip(members, payloads):
        member.offset = position
        fh.write(payload)
        position += len(payload)
    write_directory(fh, members)


def list_members(archive_path: str | os.PathLike) -> list[Member]:
    """Return the members of the archive in directory order."""
    with open(archive_path, "rb") as fh:
        return read_directory(fh)


def format_listing(members: Sequence[Member]) -> str:
    """Render the members as a table; an empty directory renders as nothing."""
    if not members:
        return ""
    lines = [
        _TITLE,
        _RULE,
        f"| {'Nome':<20} | {'UID':<5} | {'Tamanho_Original':<17} | "
        f"{'Tamanho_em_Disco':<17} | {'Data_Modificação':<25} | {'Offset':<6} |",
        _RULE,
    ]
    for member in members:
        stamp = time.ctime(member.modified)[:24]
        lines.append(
            f"| {member.name:<20} | {member.uid:<5} | {member.original_size:<17} | "
            f"{member.disk_size:<17} | {stamp:<25} | {member.offset:<6} |"
        )
    lines.append(_RULE)
    return "\n".join(lines)


def move_member(
    archive_path: str | os.PathLike, name: str, target: str | None = None
) -> list[Member]:
    """Move member ``name`` to just after ``target``, or to the front.

    The front is used when ``target`` is None or names no member. The moved
    member's modification time is set to now. Returns the new directory.
    """
    with open(archive_path, "r+b") as fh:
        members = read_directory(fh)
        index = find_member(members, name)
        if index is None:
            raise ArchiveError(f"member {name} not found")
        destination = find_member(members, target) if target is not None else None
        if destination == index:
            return members
        payloads = _read_payloads(fh, members)
        start = _data_start(members)

        entries = list(zip(members, payloads))
        moving = entries.pop(index)
        moving[0].modified = int(time.time())
        if destination is None:
            position = 0
        elif destination < index:
            position = destination + 1
        else:
            position = destination
        entries.insert(position, moving)

        members = [member for member, _ in entries]
        _rewrite(fh, members, [payload for _, payload in entries], start)
    return members


def remove_member(archive_path: str | os.PathLike, name: str) -> bool:
    """Remove member ``name``, closing the gap; False when there is no such member."""
    with open(archive_path, "r+b") as fh:
        members = read_directory(fh)
        index = find_member(members, name)
        if index is None:
            return False
        payloads = _read_payloads(fh, members)
        start = _data_start(members)
        del members[index]
        del payloads[index]
        _rewrite(fh, members, payloads, start)
    return True


def extract(
    archive_path: str | os.PathLike, names: Iterable[str] | None = None
) -> list[Path]:
    """Write members out under their own names.

    With no names every member is extracted. A name that is not in the
    archive raises ArchiveError before anything is written.
    """
    members = list_members(archive_path)
    wanted = list(names) if names is not None else []
    if not wanted:
        chosen = members
    else:
        chosen = []
        for name in wanted:
            index = find_member(members, name)
            if index is None:
                raise ArchiveError(f"member {name} not found")
            chosen.append(members[index])
    return [extract_member(archive_path, member) for member in chosen]