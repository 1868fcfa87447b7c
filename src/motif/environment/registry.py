"""Helper and filter registries for the motif environment.

Both registries are name → callable tables owned by an ``Environment``.
Writers replace the whole dict (copy-on-write), so a render that grabbed the
table keeps a consistent view while another thread registers.
"""

from __future__ import annotations

from collections.abc import Callable, ItemsView, Iterator, KeysView, ValuesView
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from motif.environment.core import Environment

HelperFunc = Callable[..., Any]


class FunctionRegistry:
    """Dict-like view over one of the environment's function tables.

    Supports:
        - env.helpers['name'] = func
        - env.helpers.update({'name': func})
        - func = env.filters['name']
        - 'name' in env.filters

    """

    __slots__ = ("_attr", "_env")

    def __init__(self, env: Environment, attr: str):
        self._env = env
        self._attr = attr

    def _get_dict(self) -> dict[str, HelperFunc]:
        return getattr(self._env, self._attr)

    def _set_dict(self, d: dict[str, HelperFunc]) -> None:
        setattr(self._env, self._attr, d)

    def __getitem__(self, name: str) -> HelperFunc:
        return self._get_dict()[name]

    def __setitem__(self, name: str, func: HelperFunc) -> None:
        if not callable(func):
            raise TypeError(f"{name!r} must be callable, got {type(func).__name__}")
        new = self._get_dict().copy()
        new[name] = func
        self._set_dict(new)

    def __delitem__(self, name: str) -> None:
        new = self._get_dict().copy()
        del new[name]
        self._set_dict(new)

    def __contains__(self, name: object) -> bool:
        return name in self._get_dict()

    def __iter__(self) -> Iterator[str]:
        return iter(self._get_dict())

    def __len__(self) -> int:
        return len(self._get_dict())

    def get(self, name: str, default: HelperFunc | None = None) -> HelperFunc | None:
        return self._get_dict().get(name, default)

    def update(self, mapping: dict[str, HelperFunc]) -> None:
        """Register several functions in one copy."""
        for name, func in mapping.items():
            if not callable(func):
                raise TypeError(f"{name!r} must be callable, got {type(func).__name__}")
        new = self._get_dict().copy()
        new.update(mapping)
        self._set_dict(new)

    def copy(self) -> dict[str, HelperFunc]:
        return self._get_dict().copy()

    def keys(self) -> KeysView[str]:
        return self._get_dict().keys()

    def values(self) -> ValuesView[HelperFunc]:
        return self._get_dict().values()

    def items(self) -> ItemsView[str, HelperFunc]:
        return self._get_dict().items()

    def __repr__(self) -> str:
        return f"<FunctionRegistry {self._attr.strip('_')}: {len(self)} entries>"
