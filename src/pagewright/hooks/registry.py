"""Named, ordered callback collections shared by filters and actions."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any, ClassVar

Callback = Callable[..., Any]


class HookRegistry:
    """Registry of callbacks keyed by extension point name.

    Each name maps to an ordered list of callbacks. Registering an equal
    callback twice under one name keeps a single entry, and dispatch order is
    always registration order. Callbacks need not be hashable.
    """

    names: ClassVar[tuple[str, ...]] = ()

    def __init__(self) -> None:
        self._hooks: dict[str, list[Callback]] = {}
        self.reset()

    def reset(self) -> None:
        """Restore the enumerated extension points, each with no callbacks."""
        self._hooks = {str(name): [] for name in self.names}

    def add(self, name: str, callback: Callback) -> bool:
        if not isinstance(name, str) or not name or not callable(callback):
            return False

        callbacks = self._hooks.setdefault(str(name), [])
        if callback not in callbacks:
            callbacks.append(callback)
        return True

    def remove(self, name: str, callback: Callback) -> bool:
        if not isinstance(name, str) or not name or not callable(callback):
            return False

        callbacks = self._hooks.get(str(name))
        if callbacks is None or callback not in callbacks:
            return False

        callbacks.remove(callback)
        return True

    def set(self, hooks: Mapping[str, Callback | None]) -> bool:
        """Replace every registration with one callback per name.

        Returns False without touching the registry when ``hooks`` is not a
        non-empty mapping. ``None`` values are skipped.
        """
        if not isinstance(hooks, Mapping) or not hooks:
            return False

        self.reset()

        for name, callback in hooks.items():
            if callback is None:
                continue
            self.add(name, callback)

        return True

    def callbacks(self, name: str) -> tuple[Callback, ...]:
        callbacks = self._hooks.get(str(name)) if isinstance(name, str) else None
        return tuple(callbacks) if callbacks else ()

    @property
    def hook_names(self) -> tuple[str, ...]:
        return tuple(self._hooks)

    def __len__(self) -> int:
        return len(self._hooks)

    def __contains__(self, name: object) -> bool:
        return name in self._hooks

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._hooks))

    def __getitem__(self, name: str) -> tuple[Callback, ...]:
        if name not in self._hooks:
            raise KeyError(name)
        return self.callbacks(name)
