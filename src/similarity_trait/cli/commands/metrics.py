from __future__ import annotations

import json
import math
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table
from structlog.stdlib import BoundLogger

from similarity_trait.core.registry import (
    SimilarityEntry,
    SimilarityRegistryError,
    get_default_registry,
)
from similarity_trait.shared.config import get_settings
from similarity_trait.shared.exceptions import BaseAppError
from similarity_trait.shared.logging import bound_context, configure_from_settings, get_logger


class OutputFormat(str, Enum):
    """一覧の出力形式。"""

    TABLE = "table"
    JSON = "json"


class RunOutput(str, Enum):
    """実行結果の出力形式。"""

    TEXT = "text"
    JSON = "json"


app = typer.Typer(help="登録済みの類似度の一覧表示と実行")


@app.callback()
def configure() -> None:
    """設定を読み込み、すべてのサブコマンドのロギングを構成する。"""

    try:
        settings = get_settings()
    except BaseAppError as exc:
        typer.echo(f"設定の読み込みに失敗しました: {exc}")
        raise typer.Exit(code=1) from exc
    configure_from_settings(settings)


def _format_value(value: Any) -> str:
    if value is None:
        return "undefined"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (list, tuple)):
        inner = ", ".join(_format_value(item) for item in value)
        return f"({inner})" if isinstance(value, tuple) else f"[{inner}]"
    return str(value)


def _jsonable(value: Any) -> Any:
    # JSON に無い inf / -inf / nan は文字列で出す
    if isinstance(value, float) and not math.isfinite(value):
        return repr(value)
    if isinstance(value, tuple):
        return [_jsonable(item) for item in value]
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    return value


def _render_table(entries: Iterable[SimilarityEntry]) -> None:
    console = Console(force_terminal=False, color_system=None, width=160)
    table = Table(title="Similarity Metrics")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Shape")
    table.add_column("Input")
    table.add_column("Output")
    table.add_column("Description")

    for entry in entries:
        payload = entry.to_dict()
        table.add_row(
            payload["name"],
            payload["shape"],
            payload["input_type"],
            payload["output_type"],
            payload["description"] or "-",
        )

    console.print(table)


def _render_json(entries: Iterable[SimilarityEntry]) -> None:
    payload = [entry.to_dict() for entry in entries]
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def _parse_values(entry: SimilarityEntry, values: Sequence[str]) -> Any:
    if entry.parser is None:
        return list(values)
    return entry.parser(values)


@app.command("list")
def list_metrics(
    output: Annotated[
        OutputFormat,
        typer.Option(
            "--output",
            "-o",
            case_sensitive=False,
            help="出力形式(table/json)",
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """登録済みの類似度を一覧表示する。"""

    registry = get_default_registry()
    entries = registry.entries()
    if output is OutputFormat.JSON:
        _render_json(entries)
    else:
        _render_table(entries)


@app.command()
def show(
    name: Annotated[str, typer.Argument(help="表示する類似度の名前")],
) -> None:
    """1 件の類似度の詳細を JSON で表示する。"""

    registry = get_default_registry()
    try:
        entry = registry.get(name)
    except SimilarityRegistryError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=2) from exc
    typer.echo(json.dumps(entry.to_dict(), ensure_ascii=False, indent=2))


@app.command()
def run(
    name: Annotated[str, typer.Argument(help="実行する類似度の名前")],
    values: Annotated[
        list[str] | None,
        typer.Argument(help="入力値。負数を渡す場合は `--` の後に指定する"),
    ] = None,
    output: Annotated[
        RunOutput,
        typer.Option(
            "--output",
            "-o",
            case_sensitive=False,
            help="出力形式(text/json)",
        ),
    ] = RunOutput.TEXT,
) -> None:
    """入力値を解析し、指定した類似度を算出する。"""

    logger = get_logger("cli.metrics.run")

    with bound_context(metric=name):
        _run(name, values or [], output, logger)


def _run(name: str, values: Sequence[str], output: RunOutput, logger: BoundLogger) -> None:
    registry = get_default_registry()
    try:
        entry = registry.get(name)
    except SimilarityRegistryError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=2) from exc

    try:
        parsed = _parse_values(entry, values)
    except ValueError as exc:
        logger.warning("similarity_input_invalid", error=str(exc))
        typer.echo(f"入力値が不正です: {exc}")
        raise typer.Exit(code=2) from exc

    result = registry.evaluate(entry.name, parsed)
    if result.is_err:
        error = result.unwrap_err()
        typer.echo(f"類似度の算出に失敗しました: {error}")
        raise typer.Exit(code=1)

    value = result.unwrap()
    logger.info("similarity_computed", defined=value is not None)
    if output is RunOutput.JSON:
        payload = {"metric": entry.name, "input": _jsonable(parsed), "result": _jsonable(value)}
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2, allow_nan=False))
        return

    typer.echo(f"metric: {entry.name}")
    typer.echo(f"input: {_format_value(parsed)}")
    typer.echo(f"result: {_format_value(value)}")
