import io
from typing import Iterator

import pytest

from calculator.runtime import calculate
from repl import BANNER, format_tokens, is_exit_command, main, run_session


def _reader(lines: list[str]):
    remaining: Iterator[str] = iter(lines)

    def read_line(prompt: str) -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    return read_line


def _run(lines: list[str], **kwargs) -> list[str]:
    output: list[str] = []
    run_session(_reader(lines), output.append, **kwargs)
    return output


@pytest.mark.parametrize("line", ["exit", "EXIT", "  Exit  "])
def test_is_exit_command(line: str) -> None:
    assert is_exit_command(line)


def test_session_evaluates_each_line() -> None:
    assert _run(["2 + 3 * 4", "(2 + 3) * 4"]) == ["Result: 14", "Result: 20"]


def test_session_stops_on_exit_command() -> None:
    assert _run(["1 + 1", "Exit", "2 + 2"]) == ["Result: 2"]


def test_session_skips_empty_lines() -> None:
    assert _run(["", "   ", "7"]) == ["Result: 7"]


def test_session_continues_after_error() -> None:
    output = _run(["5 / 0", "10 / 2 / 5"])
    assert output[0].startswith("Error: Division by zero")
    assert output[1] == "Result: 1"


def test_session_stops_on_interrupt() -> None:
    def read_line(prompt: str) -> str:
        raise KeyboardInterrupt

    output: list[str] = []
    run_session(read_line, output.append)
    assert output == []


def test_session_shows_tokens() -> None:
    assert _run(["1+2"], show_tokens=True) == [
        "tokens: <NUMBER>1 <PLUS>+ <NUMBER>2 <EXPR_END>",
        "Result: 3",
    ]


def test_format_tokens_of_invalid_input() -> None:
    assert format_tokens("1 & 2") is None


def test_main_evaluates_arguments(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["2 + 3 * 4", "-(3+4)"]) == 0
    assert capsys.readouterr().out.splitlines() == ["Result: 14", "Result: -7"]


def test_main_reports_failure(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["1 + 1", "(1 + 2"]) == 1
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Result: 2"
    assert out[1] == "Error: Unbalanced parentheses"


def test_main_reads_piped_input(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("1 / 4\n\nexit\n2 + 2\n"))
    assert main([]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["Result: 0.25"]
    assert BANNER[0] not in out


@pytest.mark.parametrize(
    "argv, expected_out",
    [
        pytest.param(["--5"], ["Result: 5"]),
        pytest.param(["-(3+4)", "2 + 3 * 4", "--5"], ["Result: -7", "Result: 14", "Result: 5"]),
        pytest.param(["--log-level", "ERROR", "-5", "--", "--5"], ["Result: -5", "Result: 5"]),
    ],
)
def test_main_accepts_expressions_starting_with_minus(
    argv: list[str], expected_out: list[str], capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(argv) == 0
    assert capsys.readouterr().out.splitlines() == expected_out


def test_main_shows_tokens_of_arguments(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--tokens", "-1"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "tokens: <MINUS>- <NUMBER>1 <EXPR_END>",
        "Result: -1",
    ]


def test_main_output_matches_calculate(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["1 & 2"]) == 1
    assert capsys.readouterr().out == calculate("1 & 2") + "\n"
