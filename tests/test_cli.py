"""End-to-end CLI tests executed directly via :func:`pathrules.cli.main`."""

import argparse
import json
import logging
from pathlib import Path

import pytest

from pathrules import cli


def _write(path: Path, text: str) -> Path:
    path.write_text(text)
    return path


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_cli_match_text(capfd: pytest.CaptureFixture[str]) -> None:
    code = cli.main(["match", "-p", "**/*IT.java", "src/test/FooIT.java", "src/main/Foo.java"])
    assert code == 0
    assert capfd.readouterr().out == "src/test/FooIT.java\n"


def test_cli_match_invert(capfd: pytest.CaptureFixture[str]) -> None:
    code = cli.main(
        ["match", "-p", "*.txt", "-p", "data/", "--invert", "a.txt", "data/b.bin", "c.csv"]
    )
    assert code == 0
    assert capfd.readouterr().out == "c.csv\n"


def test_cli_match_json_from_file(
    tmp_path: Path, capfd: pytest.CaptureFixture[str]
) -> None:
    paths = _write(tmp_path / "paths.txt", "data/x.txt\nnotes.md\n")
    code = cli.main(
        [
            "match",
            "--pattern",
            "data/",
            "--pattern",
            "**/*.txt",
            "--paths",
            str(paths),
            "--format",
            "json",
        ]
    )
    assert code == 0
    payload = json.loads(capfd.readouterr().out)
    assert payload == [
        {"path": "data/x.txt", "matched": True, "patterns": ["data/", "**/*.txt"]},
        {"path": "notes.md", "matched": False, "patterns": []},
    ]


def test_cli_match_writes_out_file(tmp_path: Path) -> None:
    out = tmp_path / "matched.txt"
    code = cli.main(["match", "-p", "*.txt", "a.txt", "b/c.txt", "d.csv", "--out", str(out)])
    assert code == 0
    assert out.read_text() == "a.txt\n"


def test_cli_tokens_text(capfd: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["tokens", "src/*IT.java"]) == 0
    lines = capfd.readouterr().out.splitlines()
    assert lines == [
        "EXPR: src/*IT.java",
        "KIND: pattern",
        "DEPTH: 1",
        "TOKEN\tLITERAL\tsrc",
        "TOKEN\tPATH_SEPARATOR\t/",
        "TOKEN\tZERO_OR_MORE\t*",
        "TOKEN\tLITERAL\tIT.java",
        "SEGMENT\t0\tsrc",
        "SEGMENT\t1\t*IT.java",
    ]


def test_cli_tokens_json(capfd: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["tokens", "/a/b.txt", "--format", "json"]) == 0
    payload = json.loads(capfd.readouterr().out)
    assert payload["is_path"] is True
    assert payload["depth"] == 1
    assert payload["segments"] == ["a", "b.txt"]


def test_cli_classify_default_rules(capfd: pytest.CaptureFixture[str]) -> None:
    code = cli.main(["classify", "bagit.txt", "data/", "data/img.png", "manifest-md5.txt"])
    assert code == 0
    assert capfd.readouterr().out.splitlines() == [
        "bagit.txt\tBAG_DECL",
        "data/\tPAYLOAD_DIRECTORY",
        "data/img.png\tPAYLOAD_CONTENT",
        "manifest-md5.txt\tPAYLOAD_MANIFEST",
    ]


def test_cli_classify_custom_rules_json(
    tmp_path: Path, capfd: pytest.CaptureFixture[str]
) -> None:
    rules = tmp_path / "rules.json"
    rules.write_text(json.dumps({"rules": [{"role": "fetch", "pattern": "*.url"}]}))
    code = cli.main(
        ["classify", "--rules", str(rules), "--format", "json", "links.url", "bagit.txt"]
    )
    assert code == 0
    assert json.loads(capfd.readouterr().out) == {
        "links.url": "FETCH",
        "bagit.txt": "OTHER_TAG",
    }


def test_cli_errors_exit_with_code_two(
    tmp_path: Path, capfd: pytest.CaptureFixture[str]
) -> None:
    assert cli.main(["match", "-p", "*"]) == 2
    assert "no paths given" in capfd.readouterr().err

    bad_rules = _write(tmp_path / "rules.json", json.dumps([{"role": "nope", "pattern": "x"}]))
    assert cli.main(["classify", "--rules", str(bad_rules), "x"]) == 2
    assert "Unknown bag file role" in capfd.readouterr().err

    assert cli.main(["classify", "--rules", str(tmp_path / "missing.json"), "x"]) == 2
    assert "pathrules: error:" in capfd.readouterr().err


def test_pathrules_main_entrypoint(capfd: pytest.CaptureFixture[str]) -> None:
    from pathrules import main as pathrules_main

    assert pathrules_main(["match", "-p", "a/**", "a/b/c"]) == 0
    assert capfd.readouterr().out == "a/b/c\n"


def test_parse_log_level_errors() -> None:
    from pathrules.cli import _parse_log_level

    assert _parse_log_level("debug") == "DEBUG"
    with pytest.raises(argparse.ArgumentTypeError):
        _parse_log_level("loud")
