from pathlib import Path

import pytest

from spbuild.backend import BackendType, BuildError, output_filename
from spbuild.build import (
    Build,
    gen_build,
    interpret_expr_function_call,
    interpret_toplevel_function_call,
    parse_wildcard_format,
    render_build,
    run_build_tasks,
)
from spbuild.expr import Array, String
from spbuild.lang import Language, language_support
from spbuild.tasks import Executable, HeaderCheck, TaskFailedError


@pytest.fixture
def no_mold(tmp_path, monkeypatch):
    empty = tmp_path / "emptybin"
    empty.mkdir()
    monkeypatch.setenv("PATH", str(empty))


def _build_with_exe(name="app", sources=("main.c",)):
    build = Build()
    interpret_toplevel_function_call(build, "exe", [String(name), Array(list(sources))])
    return build


def test_parse_wildcard_format_splits_folder_and_extension():
    assert parse_wildcard_format("src/*.c") == ("src", ".c")
    assert parse_wildcard_format("a/b/*.cpp") == ("a/b", ".cpp")


@pytest.mark.parametrize("pattern", ["src/main.c", "src/*c", "nofolder"])
def test_parse_wildcard_format_rejects_bad_patterns(pattern):
    with pytest.raises(BuildError):
        parse_wildcard_format(pattern)


def test_wildcard_lists_matching_files(tmp_path):
    for name in ("b.c", "a.c", "c.h"):
        (tmp_path / name).write_text("")
    result = interpret_expr_function_call("wildcard", [String(f"{tmp_path}/*.c")])
    assert isinstance(result, Array)
    assert [Path(p).name for p in result.arr] == ["a.c", "b.c"]


def test_unknown_expr_function_raises():
    with pytest.raises(BuildError):
        interpret_expr_function_call("glob", [String("x")])


def test_exe_registers_executable_and_task():
    build = Build()
    interpret_toplevel_function_call(
        build, "exe", [String("app"), Array(["main.c"]), Array(["m"])]
    )
    assert build.executables == [Executable("app", ["main.c"], ["m"])]
    assert list(build.parallel_tasks) == build.executables


def test_cc_sets_compiler():
    build = Build()
    interpret_toplevel_function_call(build, "cc", [String("clang")])
    assert build.compiler_paths[Language.C] == "clang"


def test_check_header_queues_task():
    build = Build()
    interpret_toplevel_function_call(build, "check_header", [String("stdio.h"), String("HAVE")])
    assert list(build.parallel_tasks) == [HeaderCheck("stdio.h", "HAVE")]


def test_unknown_toplevel_function_raises():
    with pytest.raises(BuildError):
        interpret_toplevel_function_call(Build(), "library", [])


def test_wrong_argument_type_raises():
    with pytest.raises(BuildError):
        interpret_toplevel_function_call(Build(), "exe", [Array(["a"]), Array(["b"])])
    with pytest.raises(BuildError):
        interpret_toplevel_function_call(Build(), "cc", [])


def test_render_makefile(no_mold):
    text = render_build(_build_with_exe(), BackendType.MAKEFILE)
    assert text == (
        "cc = cc\n\n"
        "ldflags_global =  \n\n"
        "all: app \n\n"
        "ldflags_app = $(ldflags_global) \n\n"
        "app: main.c.o \n"
        "\t$(cc) $(ldflags_app) -o app main.c.o  \n\n"
        "main.c.o:\n\t$(cc) $(CFLAGS) -c -o main.c.o main.c \n\n"
        "clean:\n\trm -f app main.c.o \n\n"
    )


def test_render_ninja(no_mold):
    build = _build_with_exe()
    text = render_build(build, BackendType.NINJA)
    assert text.startswith(language_support({}, BackendType.NINJA, Language.C))
    assert "rule ld\n" in text
    assert "build main.c.o: cc main.c\n\n" in text
    assert "clean:" not in text
    assert not build.parallel_tasks


def test_shared_source_emitted_once(no_mold):
    build = Build()
    interpret_toplevel_function_call(build, "exe", [String("one"), Array(["common.c", "one.c"])])
    interpret_toplevel_function_call(build, "exe", [String("two"), Array(["common.c", "two.c"])])
    text = render_build(build, BackendType.NINJA)
    assert text.count("build common.c.o: cc common.c") == 1
    assert "build one.c.o: cc one.c" in text
    assert "build two.c.o: cc two.c" in text


def test_run_build_tasks_drains_queue():
    build = _build_with_exe()
    text, objects = run_build_tasks(build, BackendType.NINJA)
    assert objects == ["app", "main.c.o"]
    assert "app" in text
    assert len(build.parallel_tasks) == 0


def test_failing_header_check_raises(tmp_path, monkeypatch):
    monkeypatch.setenv("TMPDIR", str(tmp_path))
    build = Build()
    build.compiler_paths[Language.C] = "false"
    build.parallel_tasks.append(HeaderCheck("stdio.h"))
    with pytest.raises(TaskFailedError) as info:
        run_build_tasks(build, BackendType.NINJA)
    assert info.value.errors == ["header stdio.h not found"]
    assert not (tmp_path / "stdio.cpp").exists()


def test_passing_header_check_adds_nothing(tmp_path, monkeypatch):
    monkeypatch.setenv("TMPDIR", str(tmp_path))
    build = Build()
    build.compiler_paths[Language.C] = "true"
    build.parallel_tasks.append(HeaderCheck("stdio.h"))
    assert run_build_tasks(build, BackendType.NINJA) == ("", [])


@pytest.mark.parametrize("backend", list(BackendType))
def test_gen_build_writes_rendered_file(no_mold, tmp_path, backend):
    path = gen_build(_build_with_exe(), backend, tmp_path)
    assert path == tmp_path / output_filename(backend)
    assert path.read_text(encoding="utf-8") == render_build(_build_with_exe(), backend)