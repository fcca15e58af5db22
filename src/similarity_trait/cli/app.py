from __future__ import annotations

import typer

from similarity_trait.cli.commands import metrics
from similarity_trait.shared.logging import configure_logging

app = typer.Typer(help="類似度インターフェースの CLI")

app.add_typer(metrics.app, name="metrics", help="登録済み類似度の一覧と実行")


def main() -> None:
    """エントリポイント。"""

    configure_logging()
    app()


if __name__ == "__main__":  # pragma: no cover - CLI エントリ
    main()
