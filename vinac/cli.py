"""Command line front end for the archiver."""

from __future__ import annotations

import getopt
import sys

from .directory import ArchiveError, find_member
from .insert import insert_compressed, insert_file
from .operations import extract, format_listing, list_members, move_member, remove_member

_OPTIONS = "i:m:x:r:c"
_FAILURES = (OSError, ArchiveError, ValueError)


def _report(exc: BaseException) -> None:
    print(f"vinac: {exc}", file=sys.stderr)


def _insert(mode: str, rest: list[str]) -> int:
    if mode not in ("p", "c"):
        return 0
    if not rest:
        print("Erro: esperado nome do archive após -i", file=sys.stderr)
        return 1
    archive, files = rest[0], rest[1:]
    status = 0
    for path in files:
        try:
            if mode == "p":
                insert_file(archive, path)
            else:
                insert_compressed(archive, [path])
        except _FAILURES as exc:
            _report(exc)
            status = 1
    if mode == "p":
        print(f"Arquivos inseridos com sucesso em {archive}")
    return status


def _move(archive: str, rest: list[str]) -> int:
    if not rest:
        print("Erro: esperado nome do membro a mover", file=sys.stderr)
        return 1
    name = rest[0]
    target = rest[1] if len(rest) > 1 else None
    try:
        if find_member(list_members(archive), name) is None:
            print("Arquivo a mover não encontrado no diretório.")
            return 1
        result = move_member(archive, name, target)
    except _FAILURES as exc:
        _report(exc)
        return 1
    if target is not None and find_member(result, target) is not None:
        print(f"Arquivo {name} movido para depois do {target} com sucesso.")
    else:
        print(f"Arquivo {name} movido para o início com sucesso.")
    return 0


def _extract(archive: str, rest: list[str]) -> int:
    try:
        if not rest:
            extract(archive)
            print(f"Arquivos de {archive} extraídos com sucesso.")
            return 0
        members = list_members(archive)
    except _FAILURES as exc:
        _report(exc)
        return 1
    status = 0
    for name in rest:
        if find_member(members, name) is None:
            print(f"Elemento {name} não encontrado para a extração!")
            continue
        try:
            extract(archive, [name])
        except _FAILURES as exc:
            _report(exc)
            status = 1
            continue
        print(f"Arquivo {name} extraído com sucesso.")
    return status


def _remove(archive: str, rest: list[str]) -> int:
    status = 0
    for name in rest:
        try:
            removed = remove_member(archive, name)
        except _FAILURES as exc:
            _report(exc)
            status = 1
            continue
        if removed:
            print(f"Arquivo {name} removido com sucesso.")
    return status


def _listing(rest: list[str]) -> int:
    if not rest:
        print("Erro: esperado nome do arquivo após -c", file=sys.stderr)
        return 1
    try:
        members = list_members(rest[0])
    except _FAILURES as exc:
        _report(exc)
        return 1
    if members:
        print(format_listing(members))
    else:
        print("Sem arquivos no archive.vc!")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the archiver with ``argv`` (defaults to the process arguments)."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        opts, rest = getopt.getopt(args, _OPTIONS)
    except getopt.GetoptError as exc:
        _report(exc)
        print("Fim, thanks!")
        return 1

    status = 0
    for option, value in opts:
        if option == "-i":
            outcome = _insert(value[:1], rest)
        elif option == "-m":
            outcome = _move(value, rest)
        elif option == "-x":
            outcome = _extract(value, rest)
        elif option == "-r":
            outcome = _remove(value, rest)
        else:
            outcome = _listing(rest)
        status = status or outcome
    return status


if __name__ == "__main__":
    sys.exit(main())