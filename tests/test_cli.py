import os
from pathlib import Path

import pytest

from vinac.cli import main
from vinac.operations import list_members

FILES = {
    "a.txt": b"alpha " * 5,
    "b.txt": b"bravo bravo",
    "c.txt": b"charlie-" * 7,
}
ARCHIVE = "arch.vc"


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name, content in FILES.items():
        Path(name).write_bytes(content)
    return tmp_path


def names(archive=ARCHIVE):
    return [member.name for member in list_members(archive)]


def test_insert_plain(workdir, capsys):
    assert main(["-ip", ARCHIVE, *FILES]) == 0
    assert names() == list(FILES)
    assert f"Arquivos inseridos com sucesso em {ARCHIVE}" in capsys.readouterr().out


def test_insert_plain_missing_file_continues(workdir, capsys):
    assert main(["-ip", ARCHIVE, "a.txt", "ghost.txt", "b.txt"]) == 1
    assert names() == ["a.txt", "b.txt"]
    assert "ghost.txt" in capsys.readouterr().err


def test_insert_compressed_then_extract(workdir):
    Path("big.txt").write_bytes(b"xyz!" * 300)
    assert main(["-ic", ARCHIVE, "big.txt"]) == 0
    (member,) = list_members(ARCHIVE)
    assert member.is_compressed()
    Path("big.txt").unlink()
    assert main(["-x", ARCHIVE, "big.txt"]) == 0
    assert Path("big.txt").read_bytes() == b"xyz!" * 300


def test_listing(workdir, capsys):
    main(["-ip", ARCHIVE, *FILES])
    capsys.readouterr()
    assert main(["-c", ARCHIVE]) == 0
    out = capsys.readouterr().out
    assert "ARQUIVOS DENTRO DO ARCHIVE.VC:" in out
    for name in FILES:
        assert name in out


def test_listing_empty_archive(workdir, capsys):
    Path("empty.vc").write_bytes(b"")
    assert main(["-c", "empty.vc"]) == 0
    assert "Sem arquivos no archive.vc!" in capsys.readouterr().out


def test_listing_without_archive_name(workdir, capsys):
    assert main(["-c"]) == 1
    assert "Erro: esperado nome do arquivo após -c" in capsys.readouterr().err


def test_move_after_target(workdir, capsys):
    main(["-ip", ARCHIVE, *FILES])
    capsys.readouterr()
    assert main(["-m", ARCHIVE, "a.txt", "c.txt"]) == 0
    assert names() == ["b.txt", "c.txt", "a.txt"]
    assert "movido para depois do c.txt" in capsys.readouterr().out


def test_move_to_front(workdir, capsys):
    main(["-ip", ARCHIVE, *FILES])
    capsys.readouterr()
    assert main(["-m", ARCHIVE, "c.txt"]) == 0
    assert names() == ["c.txt", "a.txt", "b.txt"]
    assert "movido para o início" in capsys.readouterr().out


def test_move_unknown_member(workdir, capsys):
    main(["-ip", ARCHIVE, *FILES])
    capsys.readouterr()
    assert main(["-m", ARCHIVE, "ghost.txt", "a.txt"]) == 1
    assert "Arquivo a mover não encontrado no diretório." in capsys.readouterr().out
    assert names() == list(FILES)


def test_remove_members(workdir, capsys):
    main(["-ip", ARCHIVE, *FILES])
    capsys.readouterr()
    assert main(["-r", ARCHIVE, "a.txt", "ghost.txt", "c.txt"]) == 0
    assert names() == ["b.txt"]
    out = capsys.readouterr().out
    assert "Arquivo a.txt removido com sucesso." in out
    assert "ghost.txt" not in out


def test_extract_all(workdir):
    main(["-ip", ARCHIVE, *FILES])
    for name in FILES:
        os.remove(name)
    assert main(["-x", ARCHIVE]) == 0
    assert {name: Path(name).read_bytes() for name in FILES} == FILES


def test_extract_unknown_member(workdir, capsys):
    main(["-ip", ARCHIVE, *FILES])
    capsys.readouterr()
    assert main(["-x", ARCHIVE, "ghost.txt"]) == 0
    assert "Elemento ghost.txt não encontrado para a extração!" in capsys.readouterr().out


def test_missing_archive_reports_error(workdir, capsys):
    assert main(["-r", "nope.vc", "a.txt"]) == 1
    assert "nope.vc" in capsys.readouterr().err


def test_unknown_option(workdir, capsys):
    assert main(["-z"]) == 1
    assert "Fim, thanks!" in capsys.readouterr().out