"""Incremental application of variable tables to a live target."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, MutableMapping, Protocol

from PySide6.QtCore import QObject

from dashtheme.themes.models import EffectiveStyle, Palette
from dashtheme.themes.variables import build_variable_table

logger = logging.getLogger(__name__)


class VariableTarget(Protocol):
    def set_variable(self, name: str, value: str) -> None: ...

    def remove_variable(self, name: str) -> None: ...


class MappingTarget:
    """Target backed by a plain dict."""

    def __init__(self, store: MutableMapping[str, str] | None = None) -> None:
        self.store: MutableMapping[str, str] = store if store is not None else {}

    def set_variable(self, name: str, value: str) -> None:
        self.store[name] = value

    def remove_variable(self, name: str) -> None:
        self.store.pop(name, None)


class QtPropertyTarget:
    """Target writing QObject dynamic properties.

    Qt drops a dynamic property when it is set to ``None``.
    """

    def __init__(self, obj: QObject) -> None:
        self._obj = obj

    @property
    def obj(self) -> QObject:
        return self._obj

    def set_variable(self, name: str, value: str) -> None:
        self._obj.setProperty(name, value)

    def remove_variable(self, name: str) -> None:
        self._obj.setProperty(name, None)


class PreviousApplicationSnapshot:
    """Keys applied by the last synchronization pass."""

    def __init__(self) -> None:
        self._keys: frozenset[str] = frozenset()

    @property
    def keys(self) -> frozenset[str]:
        return self._keys

    def replace(self, keys: Iterable[str]) -> None:
        self._keys = frozenset(keys)

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)


def synchronize(
    snapshot: PreviousApplicationSnapshot,
    tables: Iterable[tuple[str, EffectiveStyle]],
    target: VariableTarget,
    palette: Palette | None = None,
    theme: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Apply the current table to *target* and clear keys it no longer carries.

    Every current key is written unconditionally, then stale keys from the
    previous pass are removed, then *snapshot* is replaced.
    """
    table = build_variable_table(tables, palette, theme)
    for name, value in table.items():
        target.set_variable(name, value)
    stale = sorted(key for key in snapshot.keys if key not in table)
    for name in stale:
        target.remove_variable(name)
    if stale:
        logger.debug("cleared %d stale theme variables", len(stale))
    snapshot.replace(table)
    return table


class VariableSynchronizer:
    """Bind a target to its own snapshot."""

    def __init__(self, target: VariableTarget) -> None:
        self._target = target
        self._snapshot = PreviousApplicationSnapshot()

    @property
    def target(self) -> VariableTarget:
        return self._target

    @property
    def snapshot(self) -> PreviousApplicationSnapshot:
        return self._snapshot

    def apply(
        self,
        tables: Iterable[tuple[str, EffectiveStyle]],
        palette: Palette | None = None,
        theme: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        return synchronize(self._snapshot, tables, self._target, palette, theme)

    def clear(self) -> None:
        """Remove every key applied so far."""
        self.apply(())
