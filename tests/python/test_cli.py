import json
import os

import pytest

from dircompile.compilers import base_compiler
from dircompile.main import main

from fakes import FakeToolchain


def _run_cli(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


@pytest.fixture
def fake(monkeypatch):
    toolchain = FakeToolchain()
    monkeypatch.setattr(base_compiler.subprocess, "run", toolchain)
    return toolchain


def test_no_arguments_builds_current_directory(tmp_path, monkeypatch, fake):
    (tmp_path / "a.c").write_text("int main(void) { return 0; }\n")
    monkeypatch.chdir(tmp_path)

    assert _run_cli([]) == 0
    assert os.listdir(tmp_path / "build") == ["a.c.out"]


def test_exit_code_is_one_when_any_file_fails(tmp_path, fake):
    (tmp_path / "a.c").write_text("")
    (tmp_path / "bad.c").write_text("")
    fake.broken.add("bad.c")

    assert _run_cli(["build", "--source-dir", str(tmp_path)]) == 1
    assert os.listdir(tmp_path / "build") == ["a.c.out"]


def test_compiler_and_flag_options(tmp_path, fake):
    (tmp_path / "a.c").write_text("")
    (tmp_path / "b.cpp").write_text("")

    code = _run_cli(["--source-dir", str(tmp_path), "--cc", "clang", "--cxx", "clang++", "-O", "3"])

    assert code == 0
    assert fake.compilers_by_file() == {"a.c": "clang", "b.cpp": "clang++"}
    assert all(cmd[-1] == "-O3" for cmd, _ in fake.calls)


def test_plain_run_ignores_exported_compiler_variables(tmp_path, monkeypatch, fake):
    (tmp_path / "a.c").write_text("")
    monkeypatch.setenv("CC", "clang")
    monkeypatch.setenv("DIRCOMPILE_BUILD_DIR", "elsewhere")
    monkeypatch.chdir(tmp_path)

    assert _run_cli([]) == 0
    assert fake.compilers_by_file() == {"a.c": "gcc"}
    assert sorted(os.listdir(tmp_path)) == ["a.c", "build"]


def test_compiler_launcher_words_precede_the_source(tmp_path, fake):
    (tmp_path / "a.c").write_text("")

    assert _run_cli(["--source-dir", str(tmp_path), "--cc", "ccache gcc"]) == 0

    [(cmd, _)] = fake.calls
    assert cmd[:2] == ["ccache", "gcc"]
    assert cmd[2].endswith("a.c")
    assert fake.compilers_by_file() == {"a.c": "ccache gcc"}


def test_literal_match_mode_option(tmp_path, fake):
    (tmp_path / "foo.cpp").write_text("")

    _run_cli(["--source-dir", str(tmp_path), "--match-mode", "literal"])

    assert fake.compilers_by_file() == {"foo.cpp": "gcc"}


def test_json_report(tmp_path, fake, capsys):
    (tmp_path / "a.c").write_text("")

    assert _run_cli(["--source-dir", str(tmp_path), "--json"]) == 0

    out = capsys.readouterr().out
    report = json.loads(out[out.index("{"):])
    assert report["success"] is True
    assert report["succeeded"] == 1
    assert report["results"][0]["compiler"] == "gcc"


def test_clean_command(tmp_path, fake):
    (tmp_path / "build").mkdir()

    assert _run_cli(["clean", "--source-dir", str(tmp_path)]) == 0
    assert not (tmp_path / "build").exists()


def test_info_command(tmp_path, fake, capsys):
    main(["info", "--source-dir", str(tmp_path), "--cc", "definitely-not-a-compiler-cc"])

    out = capsys.readouterr().out
    assert "dircompile v" in out
    assert "definitely-not-a-compiler-cc" in out
    assert "[X] Not found" in out


def test_invalid_config_exits_with_error(tmp_path, fake, capsys):
    (tmp_path / "dircompile.yaml").write_text("match_mode: nonsense\n")

    assert _run_cli(["--source-dir", str(tmp_path)]) == 1
    assert "Error initializing dircompile" in capsys.readouterr().err


def test_log_file_receives_debug_output(tmp_path, fake):
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.c").write_text("")
    log_file = tmp_path / "dircompile.log"

    assert _run_cli(["--source-dir", str(src), "--log-file", str(log_file)]) == 0
    assert "Running: gcc" in log_file.read_text()
