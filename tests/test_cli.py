import pytest

from spbuild.cli import main

SCRIPT = 'exe("app", ["main.c"])\n'


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    empty = tmp_path / "emptybin"
    empty.mkdir()
    monkeypatch.setenv("PATH", str(empty))
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_default_backend_writes_ninja(workdir, capsys):
    (workdir / "build.sp").write_text(SCRIPT)
    assert main([]) == 0
    content = (workdir / "build.ninja").read_text()
    assert "rule cc" in content
    assert SCRIPT in capsys.readouterr().out


def test_makefile_backend(workdir):
    (workdir / "build.sp").write_text(SCRIPT)
    assert main(["-G", "Makefile"]) == 0
    content = (workdir / "Makefile").read_text()
    assert "all: app \n" in content
    assert "clean:" in content
    assert not (workdir / "build.ninja").exists()


def test_explicit_script_name(workdir):
    (workdir / "other.sp").write_text(SCRIPT)
    assert main(["other.sp", "-G", "Ninja"]) == 0
    assert (workdir / "build.ninja").exists()


def test_missing_file(workdir, capsys):
    assert main(["absent.sp"]) == 1
    assert "absent.sp not found" in capsys.readouterr().err


def test_unknown_backend(workdir, capsys):
    (workdir / "build.sp").write_text(SCRIPT)
    assert main(["-G", "Bazel"]) == 1
    assert "ERROR" in capsys.readouterr().err
    assert not (workdir / "build.ninja").exists()


def test_missing_backend_value(workdir):
    (workdir / "build.sp").write_text(SCRIPT)
    assert main(["-G"]) == 1


def test_invalid_script(workdir, capsys):
    (workdir / "build.sp").write_text("exe(@)")
    assert main([]) == 1
    assert "ERROR" in capsys.readouterr().err
    assert not (workdir / "build.ninja").exists()