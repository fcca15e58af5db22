from __future__ import annotations

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """CLI テストが設定した structlog のキャッシュを他のテストへ持ち越さない。"""

    structlog.reset_defaults()
    yield
    structlog.reset_defaults()
