import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from lox import lox_cli

SRC_DIR = Path(__file__).resolve().parents[1] / "src"


def test_run_lox_string_input_prints(capsys: pytest.CaptureFixture[str]) -> None:
    status = lox_cli.run_lox(source="1 + 2", is_string=True)
    assert status == 0
    assert capsys.readouterr().out.strip() == "3"


def test_run_lox_file_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    file_path = tmp_path / "expr.lox"
    file_path.write_text("3 + 7 * (48 - 6)\n// the answer\n", encoding="utf-8")
    assert lox_cli.run_lox(source=str(file_path)) == 0
    assert capsys.readouterr().out.strip() == "297"


def test_run_lox_rejects_non_lox_files() -> None:
    with pytest.raises(ValueError, match="Only .lox files are supported."):
        lox_cli.run_lox(source="expr.txt")


def test_run_lox_prints_strings_raw(capsys: pytest.CaptureFixture[str]) -> None:
    lox_cli.run_lox(source='"a" + "b"', is_string=True)
    assert capsys.readouterr().out.strip() == "ab"


def test_run_lox_show_tokens(capsys: pytest.CaptureFixture[str]) -> None:
    lox_cli.run_lox(source="1 + 2", is_string=True, show_tokens=True)
    out = capsys.readouterr().out.splitlines()
    assert out == ["NUMBER 1 1.0", "PLUS +", "NUMBER 2 2.0", "EOF ", "3"]


def test_run_lox_show_ast(capsys: pytest.CaptureFixture[str]) -> None:
    lox_cli.run_lox(source="-123 * (45.67)", is_string=True, show_ast=True)
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "(* (neg 123) (group 45.67))"


def test_run_lox_json_dump(capsys: pytest.CaptureFixture[str]) -> None:
    lox_cli.run_lox(source="!nil", is_string=True, as_json=True)
    out = capsys.readouterr().out
    dump, _, result = out.rstrip("\n").rpartition("\n")
    assert result == "true"
    assert json.loads(dump) == {
        "kind": "unary",
        "line": 1,
        "op": "not",
        "operand": {"kind": "literal", "line": 1, "value": None},
    }


def test_run_lox_lexical_error(capsys: pytest.CaptureFixture[str]) -> None:
    status = lox_cli.run_lox(source="1 @ 2 $", is_string=True)
    captured = capsys.readouterr()
    assert status == lox_cli.EX_DATAERR
    assert captured.out == ""
    assert "[error] >>> [line 1] Error: Unexpected character '@'." in captured.err
    assert "Unexpected character '$'." in captured.err


def test_run_lox_tokens_still_shown_on_lexical_error(
    capsys: pytest.CaptureFixture[str],
) -> None:
    lox_cli.run_lox(source="1 @", is_string=True, show_tokens=True)
    assert "NUMBER 1 1.0" in capsys.readouterr().out


def test_run_lox_syntax_error(capsys: pytest.CaptureFixture[str]) -> None:
    status = lox_cli.run_lox(source="(1 + 2", is_string=True, show_ast=True)
    captured = capsys.readouterr()
    assert status == lox_cli.EX_DATAERR
    assert captured.out == ""
    assert "Error at end: Expect ')' after expression." in captured.err


def test_run_lox_trailing_tokens_are_a_syntax_error(
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert lox_cli.run_lox(source="1 2", is_string=True) == lox_cli.EX_DATAERR
    assert "Expect end of expression." in capsys.readouterr().err


def test_run_lox_runtime_error(capsys: pytest.CaptureFixture[str]) -> None:
    status = lox_cli.run_lox(source='1 + "a"', is_string=True)
    captured = capsys.readouterr()
    assert status == lox_cli.EX_SOFTWARE
    assert captured.out == ""
    assert "Operands of '+' must be two numbers or two strings" in captured.err


def test_main_evaluates_string(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["lox", "-s", "2 * 21"])
    lox_cli.main()
    assert capsys.readouterr().out.strip() == "42"


def test_main_exits_with_pipeline_status(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["lox", "-s", "-nil"])
    with pytest.raises(SystemExit) as excinfo:
        lox_cli.main()
    assert excinfo.value.code == lox_cli.EX_SOFTWARE


def test_main_reports_bad_file(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["lox", "missing.txt"])
    with pytest.raises(SystemExit) as excinfo:
        lox_cli.main()
    assert excinfo.value.code == 2
    assert "Only .lox files are supported." in capsys.readouterr().err


def test_main_reports_missing_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(sys, "argv", ["lox", str(tmp_path / "nope.lox")])
    with pytest.raises(SystemExit) as excinfo:
        lox_cli.main()
    assert excinfo.value.code == 2


def test_main_without_args_starts_repl(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, bool]] = []
    monkeypatch.setattr(sys, "argv", ["lox"])
    monkeypatch.setattr(
        "lox.lox_repl.start_repl", lambda **kwargs: calls.append(kwargs)
    )
    lox_cli.main()
    assert calls == [{}]


def test_main_repl_flag_passes_verbose(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, bool]] = []
    monkeypatch.setattr(sys, "argv", ["lox", "--repl", "--verbose"])
    monkeypatch.setattr(
        "lox.lox_repl.start_repl", lambda **kwargs: calls.append(kwargs)
    )
    lox_cli.main()
    assert calls == [{"verbose": True}]


def test_cli_as_module_subprocess() -> None:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(SRC_DIR), env.get("PYTHONPATH", "")) if p
    )
    result = subprocess.run(
        [sys.executable, "-m", "lox.lox_cli", "-s", "(1 + 2) * 3 == 9"],
        capture_output=True,
        text=True,
        env=env,
        check=False,
    )
    assert result.returncode == 0
    assert result.stdout.strip() == "true"


def test_cli_subprocess_syntax_error_status() -> None:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(SRC_DIR), env.get("PYTHONPATH", "")) if p
    )
    result = subprocess.run(
        [sys.executable, "-m", "lox.lox_cli", "-s", "1 +"],
        capture_output=True,
        text=True,
        env=env,
        check=False,
    )
    assert result.returncode == 65
    assert "Expect expression." in result.stderr


@pytest.mark.parametrize(
    "source", ["(" * 300 + "1" + ")" * 300, "-" * 2000 + "1", "!" * 1200 + "true"]
)  # type: ignore[misc]
def test_run_lox_deep_nesting_is_a_syntax_error(
    source: str, capsys: pytest.CaptureFixture[str]
) -> None:
    status = lox_cli.run_lox(source=source, is_string=True, show_ast=True)
    captured = capsys.readouterr()
    assert status == lox_cli.EX_DATAERR
    assert captured.out == ""
    assert captured.err.startswith("[error] >>> [line 1] Error at ")
    assert "Expression nested too deeply." in captured.err
    assert "Traceback" not in captured.err


def test_run_lox_json_with_overflowing_number(
    capsys: pytest.CaptureFixture[str],
) -> None:
    status = lox_cli.run_lox(source="1" + "0" * 400, is_string=True, as_json=True)
    assert status == 0
    dump, _, result = capsys.readouterr().out.rstrip("\n").rpartition("\n")
    assert result == "inf"
    assert "Infinity" not in dump
    assert json.loads(dump) == {"kind": "literal", "line": 1, "value": "inf"}


def test_cli_subprocess_deep_nesting_status() -> None:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(SRC_DIR), env.get("PYTHONPATH", "")) if p
    )
    result = subprocess.run(
        [sys.executable, "-m", "lox.lox_cli", "-s", "(" * 300 + "1" + ")" * 300],
        capture_output=True,
        text=True,
        env=env,
        check=False,
    )
    assert result.returncode == 65
    assert "[error] >>>" in result.stderr
    assert "Expression nested too deeply." in result.stderr
    assert "Traceback" not in result.stderr
