"""類似度実装のレジストリ。"""

from __future__ import annotations

import inspect
import threading
import typing
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from structlog.stdlib import BoundLogger

from similarity_trait.core.protocols import SimilarityShape, is_static_similarity
from similarity_trait.shared.config import get_settings
from similarity_trait.shared.exceptions import DomainError, Result
from similarity_trait.shared.logging import get_logger
from similarity_trait.shared.types import DTO, type_name

ArgumentParser = Callable[[Sequence[str]], Any]


class SimilarityRegistryError(DomainError):
    """登録や参照に失敗したことを示す例外。"""

    default_message = "類似度レジストリの操作に失敗しました"


class SimilarityEvaluationError(DomainError):
    """実装の呼び出し中に発生した例外を包む。"""

    default_message = "類似度の算出に失敗しました"

    def __init__(self, message: str | None = None, *, name: str | None = None) -> None:
        super().__init__(message)
        self.name = name


@dataclass(slots=True)
class SimilarityEntry(DTO):
    """登録済み実装の記述子。"""

    name: str
    implementation: Any
    shape: SimilarityShape = SimilarityShape.EITHER
    input_type: Any = None
    output_type: Any = None
    description: str | None = None
    parser: ArgumentParser | None = field(default=None, compare=False)

    @property
    def operation(self) -> Callable[[Any], Any]:
        if inspect.isclass(self.implementation):
            return self.implementation.similarity
        return self.implementation

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "implementation": _qualified_name(self.implementation),
            "shape": self.shape.value,
            "input_type": type_name(self.input_type),
            "output_type": type_name(self.output_type),
            "description": self.description,
        }


@dataclass(slots=True)
class SimilarityRegistry:
    """名前と型ペアで実装を引けるレジストリ。

    登録はロックで保護する。呼び出しはロックを取らないため、
    共有状態を持つ実装は自前で同期する必要がある。
    """

    allow_override: bool = False
    logger: BoundLogger = field(
        default_factory=lambda: get_logger(__name__, component="similarity-registry")
    )
    _entries: dict[str, SimilarityEntry] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def add(
        self,
        name: str,
        implementation: Any,
        *,
        shape: SimilarityShape = SimilarityShape.EITHER,
        input_type: Any = None,
        output_type: Any = None,
        description: str | None = None,
        parser: ArgumentParser | None = None,
    ) -> SimilarityEntry:
        """実装を登録し、生成した記述子を返す。"""

        key = name.strip()
        if not key:
            msg = "name is required"
            raise SimilarityRegistryError(msg)

        operation = _resolve_operation(implementation)
        inferred_input, inferred_output = _infer_types(operation)
        entry = SimilarityEntry(
            name=key,
            implementation=implementation,
            shape=SimilarityShape(shape),
            input_type=input_type if input_type is not None else inferred_input,
            output_type=output_type if output_type is not None else inferred_output,
            description=description or _first_doc_line(implementation),
            parser=parser,
        )

        with self._lock:
            if key in self._entries:
                if not self.allow_override:
                    msg = f"'{key}' は既に登録されています"
                    raise SimilarityRegistryError(msg)
                self.logger.warning("similarity_overridden", name=key)
            self._entries[key] = entry

        self.logger.debug(
            "similarity_registered",
            name=key,
            implementation=_qualified_name(implementation),
            shape=entry.shape.value,
        )
        return entry

    def register(self, name: str, **options: Any) -> Callable[[Any], Any]:
        """``add`` のデコレータ版。対象をそのまま返す。"""

        def decorator(implementation: Any) -> Any:
            self.add(name, implementation, **options)
            return implementation

        return decorator

    def get(self, name: str) -> SimilarityEntry:
        try:
            return self._entries[name]
        except KeyError as exc:
            msg = f"'{name}' は登録されていません"
            raise SimilarityRegistryError(msg) from exc

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._entries)

    def entries(self) -> list[SimilarityEntry]:
        with self._lock:
            snapshot = dict(self._entries)
        return [snapshot[name] for name in sorted(snapshot)]

    def find(
        self, *, input_type: Any = None, output_type: Any = None
    ) -> list[SimilarityEntry]:
        """型ペアが一致する実装を返す。None を渡した側は条件にしない。"""

        return [
            entry
            for entry in self.entries()
            if (input_type is None or entry.input_type == input_type)
            and (output_type is None or entry.output_type == output_type)
        ]

    def evaluate(self, name: str, value: Any) -> Result[Any, SimilarityEvaluationError]:
        """名前で実装を呼び出し、Result で返す。

        実装が返した ``None`` (未定義) は成功として扱う。
        """

        try:
            entry = self.get(name)
        except SimilarityRegistryError as exc:
            return self._fail(name, "similarity_not_found", exc)

        try:
            output = entry.operation(value)
        except Exception as exc:  # noqa: BLE001
            return self._fail(name, "similarity_failed", exc)

        if output is None:
            self.logger.debug("similarity_undefined", name=name)
        return Result.ok(output)

    def _fail(
        self, name: str, event: str, exc: Exception
    ) -> Result[Any, SimilarityEvaluationError]:
        self.logger.warning(event, name=name, error=str(exc), error_type=type(exc).__name__)
        error = SimilarityEvaluationError(f"{name}: {exc}", name=name)
        error.__cause__ = exc
        return Result.err(error)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SimilarityEntry]:
        return iter(self.entries())


def _resolve_operation(implementation: Any) -> Callable[..., Any]:
    if inspect.isclass(implementation):
        if not is_static_similarity(implementation):
            msg = (
                f"{_qualified_name(implementation)} は similarity を "
                "staticmethod か classmethod で定義する必要があります"
            )
            raise SimilarityRegistryError(msg)
        operation = implementation.similarity
    elif callable(implementation):
        operation = implementation
    else:
        msg = f"{implementation!r} は呼び出し可能ではありません"
        raise SimilarityRegistryError(msg)

    try:
        signature = inspect.signature(operation)
    except (TypeError, ValueError):
        return operation
    required = [
        parameter
        for parameter in signature.parameters.values()
        if parameter.kind
        in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        and parameter.default is inspect.Parameter.empty
    ]
    if len(required) != 1:
        msg = f"{_qualified_name(implementation)} は入力を 1 つだけ受け取る必要があります"
        raise SimilarityRegistryError(msg)
    return operation


def _infer_types(operation: Callable[..., Any]) -> tuple[Any, Any]:
    try:
        hints = typing.get_type_hints(operation)
        signature = inspect.signature(operation)
    except (NameError, TypeError, ValueError):
        return None, None
    first = next(iter(signature.parameters), None)
    input_type = hints.get(first) if first is not None else None
    return input_type, hints.get("return")


def _first_doc_line(implementation: Any) -> str | None:
    doc = inspect.getdoc(implementation)
    if not doc:
        return None
    return doc.strip().splitlines()[0]


def _qualified_name(implementation: Any) -> str:
    module = getattr(implementation, "__module__", None)
    qualname = getattr(implementation, "__qualname__", None) or repr(implementation)
    return f"{module}.{qualname}" if module else qualname


def get_default_registry(allow_override: bool | None = None) -> SimilarityRegistry:
    """同梱の実装を登録済みのレジストリを返す。

    ``allow_override`` を省略した場合は設定 (``REGISTRY__ALLOW_OVERRIDE``) に従う。
    解決後の値ごとに同じインスタンスを返す。
    """

    if allow_override is None:
        allow_override = get_settings().registry.allow_override
    return _build_default_registry(bool(allow_override))


def reset_default_registry() -> None:
    """キャッシュ済みの既定レジストリを破棄する。"""

    _build_default_registry.cache_clear()


@lru_cache(maxsize=None)
def _build_default_registry(allow_override: bool) -> SimilarityRegistry:
    from similarity_trait.metrics import register_builtin_metrics

    registry = SimilarityRegistry(allow_override=allow_override)
    register_builtin_metrics(registry)
    return registry


__all__ = [
    "ArgumentParser",
    "SimilarityEntry",
    "SimilarityEvaluationError",
    "SimilarityRegistry",
    "SimilarityRegistryError",
    "get_default_registry",
    "reset_default_registry",
]
