import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from turnroute import cli
from turnroute.cli import EXIT_INPUT_ERROR, EXIT_TIMEOUT, app
from turnroute.errors import SearchTimeoutError

runner = CliRunner()


@pytest.fixture
def square_file(tmp_path: Path) -> Path:
    path = tmp_path / "square.txt"
    path.write_text("0 0\n1 0\n1 1\n0 1\n", encoding="utf-8")
    return path


@pytest.fixture
def triangle_file(tmp_path: Path) -> Path:
    path = tmp_path / "triangle.txt"
    path.write_text("0 0\n2 0\n1 2\n", encoding="utf-8")
    return path


def test_solve_prints_text_report(square_file: Path):
    result = runner.invoke(app, ["solve", str(square_file), "--dimension", "2"])

    assert result.exit_code == 0, result.output
    assert "Result:" in result.stdout
    assert "Length = 3.0" in result.stdout
    assert "Time:" in result.stdout


def test_solve_json_output(square_file: Path):
    result = runner.invoke(app, ["solve", str(square_file), "--format", "json", "--strategy", "heap"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["strategy"] == "heap"
    assert payload["length"] == 3.0
    assert len(payload["route"]) == 4


def test_solve_csv_output(square_file: Path):
    result = runner.invoke(app, ["solve", str(square_file), "-f", "csv"])

    assert result.exit_code == 0, result.output
    assert result.stdout.startswith("sequence,x0,x1,distance_from_prev")


def test_solve_infeasible_instance_is_not_an_error(triangle_file: Path):
    result = runner.invoke(app, ["solve", str(triangle_file)])

    assert result.exit_code == 0, result.output
    assert "No feasible route found." in result.stdout
    assert "Length = -1" in result.stdout


def test_solve_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["solve", str(tmp_path / "nope.txt")])

    assert result.exit_code == EXIT_INPUT_ERROR
    assert "does not exist" in result.output


def test_solve_dimension_mismatch(square_file: Path):
    result = runner.invoke(app, ["solve", str(square_file), "--dimension", "3"])

    assert result.exit_code == EXIT_INPUT_ERROR
    assert "Dimension mismatch" in result.output


def test_solve_unknown_strategy(square_file: Path):
    result = runner.invoke(app, ["solve", str(square_file), "--strategy", "bogus"])

    assert result.exit_code == EXIT_INPUT_ERROR
    assert "Unknown routing strategy" in result.output


def test_solve_timeout_exits_with_code_two(tmp_path: Path):
    path = tmp_path / "line.txt"
    path.write_text("".join(f"{i} 0\n" for i in range(11)), encoding="utf-8")

    result = runner.invoke(app, ["solve", str(path), "--strategy", "heap", "--time-limit", "0.01"])

    assert result.exit_code == EXIT_TIMEOUT
    assert "time limit" in result.output


def test_solve_rejects_non_finite_coordinates(tmp_path: Path):
    path = tmp_path / "nan.txt"
    path.write_text("nan 0\n1 0\n2 0\n", encoding="utf-8")

    result = runner.invoke(app, ["solve", str(path)])

    assert result.exit_code == EXIT_INPUT_ERROR
    assert "non-finite" in result.output


def test_strategies_lists_every_key():
    result = runner.invoke(app, ["strategies"])

    assert result.exit_code == 0
    for key in ("heap", "fixed_endpoints", "backtracking", "pruned", "nearest", "multi_start", "paired", "prefix"):
        assert key in result.stdout


def test_version_flag():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert "turnroute version" in result.stdout


def test_interactive_loop(square_file: Path, tmp_path: Path):
    user_input = "\n".join(
        [
            "0",
            "2",
            str(tmp_path / "missing.txt"),
            "2",
            str(square_file),
            "-1",
        ]
    )

    result = runner.invoke(app, ["interactive"], input=user_input + "\n")

    assert result.exit_code == 0, result.output
    assert "A dimension must be greater than 0." in result.stdout
    assert "does not exist" in result.stdout
    assert "Length = 3.0" in result.stdout
    assert "Stopping..." in result.stdout


def test_interactive_stops_at_end_of_input():
    result = runner.invoke(app, ["interactive"], input="")

    assert result.exit_code == 0


def test_interactive_reports_timeout_and_keeps_prompting(square_file: Path, monkeypatch):
    def timed_out(request):
        raise SearchTimeoutError(0.5)

    monkeypatch.setattr(cli, "solve_route", timed_out)

    result = runner.invoke(app, ["interactive"], input=f"2\n{square_file}\n-1\n")

    assert result.exit_code == 0, result.output
    assert "time limit" in result.stdout
    assert "Stopping..." in result.stdout
