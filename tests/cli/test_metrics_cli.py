from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from similarity_trait.cli.app import app
from similarity_trait.core.registry import SimilarityRegistry, reset_default_registry
from similarity_trait.shared.config import get_settings


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in ("ENVIRONMENT", "LOG_LEVEL", "LOG_JSON", "REGISTRY__ALLOW_OVERRIDE"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    reset_default_registry()
    yield
    get_settings.cache_clear()
    reset_default_registry()


def test_list_outputs_table(runner: CliRunner) -> None:
    result = runner.invoke(app, ["metrics", "list"])

    assert result.exit_code == 0
    assert "percent-change" in result.stdout
    assert "population-standard-deviation" in result.stdout


def test_list_outputs_json(runner: CliRunner) -> None:
    result = runner.invoke(app, ["metrics", "list", "--output", "json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    by_name = {item["name"]: item for item in payload}
    assert by_name["hamming-distance"]["shape"] == "pairwise"
    assert by_name["hamming-distance"]["input_type"] == "tuple[str, str]"
    assert by_name["hamming-distance"]["output_type"] == "int"
    assert by_name["population-standard-deviation"]["shape"] == "collection"


def test_show_outputs_entry(runner: CliRunner) -> None:
    result = runner.invoke(app, ["metrics", "show", "levenshtein-distance"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["implementation"] == "similarity_trait.metrics.text.LevenshteinDistance"


@pytest.mark.parametrize(
    "arguments",
    [
        ["metrics", "list", "--output", "json"],
        ["metrics", "show", "percent-change"],
    ],
)
def test_json_output_is_not_mixed_with_logs(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch, arguments: list[str]
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    result = runner.invoke(app, arguments)

    assert result.exit_code == 0
    assert "similarity_registered" not in result.stdout
    json.loads(result.stdout)


def test_list_reports_configuration_error(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("ENVIRONMENT", "moon")

    result = runner.invoke(app, ["metrics", "list"])

    assert result.exit_code == 1
    assert "設定の読み込みに失敗しました" in result.stdout


def test_show_unknown_metric(runner: CliRunner) -> None:
    result = runner.invoke(app, ["metrics", "show", "nope"])

    assert result.exit_code == 2
    assert "登録されていません" in result.stdout


@pytest.mark.parametrize(
    ("arguments", "expected"),
    [
        (["absolute-difference", "100", "120"], "result: 20"),
        (["percent-change", "100", "120"], "result: 20"),
        (["population-standard-deviation", "2", "4", "4", "4", "5", "5", "7", "9"], "result: 2"),
        (["hamming-distance", "information", "informatics"], "result: 2"),
        (
            ["maximum-hamming-distance", "information", "informatics", "affirmation"],
            "result: 5",
        ),
        (["levenshtein-distance", "inform", "information"], "result: 5"),
    ],
)
def test_run_builtin_metrics(runner: CliRunner, arguments: list[str], expected: str) -> None:
    result = runner.invoke(app, ["metrics", "run", *arguments])

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0] == f"metric: {arguments[0]}"
    assert expected in lines


def test_run_prints_input(runner: CliRunner) -> None:
    result = runner.invoke(app, ["metrics", "run", "percent-change", "100", "120"])

    assert "input: (100, 120)" in result.stdout.splitlines()


def test_run_accepts_negative_numbers_after_separator(runner: CliRunner) -> None:
    result = runner.invoke(app, ["metrics", "run", "percent-change", "--", "-50", "-25"])

    assert result.exit_code == 0
    assert "result: 50" in result.stdout.splitlines()


def test_run_outputs_json(runner: CliRunner) -> None:
    result = runner.invoke(
        app, ["metrics", "run", "hamming-distance", "information", "informatics", "-o", "json"]
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload == {
        "metric": "hamming-distance",
        "input": ["information", "informatics"],
        "result": 2,
    }


def _reject_constant(token: str) -> None:
    raise ValueError(f"non-standard JSON token {token}")


@pytest.mark.parametrize(
    ("values", "expected"),
    [(["0", "5"], "inf"), (["0", "-5"], "-inf"), (["0", "0"], "nan")],
)
def test_run_json_with_non_finite_result(
    runner: CliRunner, values: list[str], expected: str
) -> None:
    result = runner.invoke(app, ["metrics", "run", "percent-change", "-o", "json", "--", *values])

    assert result.exit_code == 0
    payload = json.loads(result.stdout, parse_constant=_reject_constant)
    assert payload["result"] == expected


def test_run_undefined_result(runner: CliRunner) -> None:
    result = runner.invoke(app, ["metrics", "run", "population-standard-deviation"])

    assert result.exit_code == 0
    assert "result: undefined" in result.stdout.splitlines()


def test_run_rejects_invalid_input(runner: CliRunner) -> None:
    result = runner.invoke(app, ["metrics", "run", "percent-change", "100", "abc"])

    assert result.exit_code == 2
    assert "入力値が不正です" in result.stdout


def test_run_rejects_wrong_arity(runner: CliRunner) -> None:
    result = runner.invoke(app, ["metrics", "run", "hamming-distance", "only"])

    assert result.exit_code == 2
    assert "値を 2 つ指定してください" in result.stdout


def test_run_unknown_metric(runner: CliRunner) -> None:
    result = runner.invoke(app, ["metrics", "run", "nope", "1"])

    assert result.exit_code == 2
    assert "登録されていません" in result.stdout


def test_run_reports_evaluation_failure(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch
) -> None:
    class Exploding:
        @staticmethod
        def similarity(values: list[str]) -> int:
            raise RuntimeError("boom")

    registry = SimilarityRegistry()
    registry.add("exploding", Exploding)
    monkeypatch.setattr(
        "similarity_trait.cli.commands.metrics.get_default_registry", lambda: registry
    )

    result = runner.invoke(app, ["metrics", "run", "exploding", "x"])

    assert result.exit_code == 1
    assert "類似度の算出に失敗しました" in result.stdout
    assert "boom" in result.stdout


def test_run_reports_configuration_error(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("ENVIRONMENT", "moon")

    result = runner.invoke(app, ["metrics", "run", "percent-change", "100", "120"])

    assert result.exit_code == 1
    assert "設定の読み込みに失敗しました" in result.stdout
