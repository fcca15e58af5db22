"""共有型・ユーティリティ。"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(slots=True)
class ValueObject:
    """DTO や VO のベースクラス。"""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class DTO(ValueObject):
    """データ転送オブジェクト用ベース。"""


def type_name(annotation: Any) -> str:
    """型注釈を表示用の文字列にする。"""

    if annotation is None:
        return "-"
    if isinstance(annotation, type) and not getattr(annotation, "__args__", None):
        return annotation.__qualname__
    return str(annotation).replace("typing.", "").replace("collections.abc.", "")


__all__ = [
    "ValueObject",
    "DTO",
    "type_name",
]
