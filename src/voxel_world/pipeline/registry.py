"""Generation strategy registration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import wraps
from typing import Callable, Dict, Mapping, Optional

StrategyCallable = Callable[["BuildContext"], Mapping[str, int]]


class StrategyKind(str, Enum):
    """Built-in strategies. Other names may be registered alongside these."""

    BLOCKS = "blocks"
    MESH = "mesh"


def _key(name: "str | StrategyKind") -> str:
    return name.value if isinstance(name, Enum) else str(name)


@dataclass(frozen=True)
class StrategyDescriptor:
    name: str
    callable: StrategyCallable
    implemented: bool = True
    description: Optional[str] = None


class StrategyRegistry:
    """Registry of block producers supporting decorator-based registration."""

    def __init__(self) -> None:
        self._strategies: Dict[str, StrategyDescriptor] = {}

    def register(self, descriptor: StrategyDescriptor) -> None:
        if descriptor.name in self._strategies:
            raise ValueError(f"Strategy '{descriptor.name}' already registered")
        self._strategies[descriptor.name] = descriptor

    def unregister(self, name: str) -> None:
        self._strategies.pop(_key(name), None)

    def get(self, name: str) -> StrategyDescriptor:
        try:
            return self._strategies[_key(name)]
        except KeyError as exc:
            raise KeyError(f"Unknown strategy '{name}'") from exc

    def clear(self) -> None:
        self._strategies.clear()

    def descriptors(self) -> Dict[str, StrategyDescriptor]:
        return dict(self._strategies)

    def __contains__(self, name: object) -> bool:
        return _key(name) in self._strategies  # type: ignore[arg-type]


_REGISTRY = StrategyRegistry()


def strategy(
    name: str,
    *,
    implemented: bool = True,
    description: str | None = None,
    target: StrategyRegistry | None = None,
) -> Callable[[StrategyCallable], StrategyCallable]:
    """Decorator registering a generation strategy."""

    def decorator(func: StrategyCallable) -> StrategyCallable:
        descriptor = StrategyDescriptor(
            name=_key(name),
            callable=func,
            implemented=implemented,
            description=description or getattr(func, "__doc__", None),
        )
        (target or _REGISTRY).register(descriptor)

        @wraps(func)
        def wrapper(context: "BuildContext") -> Mapping[str, int]:
            return func(context)

        return wrapper

    return decorator


def registry() -> StrategyRegistry:
    return _REGISTRY


__all__ = ["StrategyDescriptor", "StrategyKind", "StrategyRegistry", "registry", "strategy"]
