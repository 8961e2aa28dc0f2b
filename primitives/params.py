"""Declarative option schema for the processing primitives.

A primitive's configuration contract is a list of ParamDef objects.
ParamSchema wraps the list and gives each primitive its defaults, the
continuous ranges, and validation of a partial update passed to ``set()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

import numpy as np

log = logging.getLogger(__name__)


class ParamType(Enum):
    FLOAT = "float"
    BOOL = "bool"
    CHOICE = "choice"


@dataclass
class ParamDef:
    key: str
    type: ParamType
    default: Any
    label: str = ""
    range: tuple | None = None     # (min, max), values are clamped into it
    cast: Callable | None = None   # overrides the per-type conversion


class ParamSchema:
    """Defaults, ranges and partial-update validation from a param list."""

    def __init__(self, params: list[ParamDef]):
        self._params = params
        self._by_key: dict[str, ParamDef] = {p.key: p for p in params}

    def default_params(self) -> dict:
        return {p.key: p.default for p in self}

    def param_ranges(self) -> dict[str, tuple]:
        """Continuous params only (float with range)."""
        return {p.key: p.range for p in self
                if p.range is not None and p.type == ParamType.FLOAT}

    def keys(self) -> list[str]:
        return [p.key for p in self]

    def validate(self, raw: dict) -> dict:
        """Type-cast and clamp a partial update.

        Unknown keys raise TypeError, like an unexpected keyword argument.
        Values that cannot be converted raise ValueError. NaN survives
        clamping.
        """
        result = {}
        for key, value in raw.items():
            p = self._by_key.get(key)
            if p is None:
                raise TypeError(
                    f"unknown option {key!r}, expected one of {self.keys()}")
            result[key] = _cast(p, value)
        return result

    def get(self, key: str) -> ParamDef | None:
        return self._by_key.get(key)

    def __iter__(self):
        return iter(self._params)

    def __len__(self):
        return len(self._params)


def _cast(p: ParamDef, value):
    if p.cast is not None:
        try:
            return p.cast(value)
        except ValueError as exc:
            raise ValueError(f"{_describe(p)}: {exc}") from exc

    if p.type == ParamType.BOOL:
        return bool(value)

    if p.type == ParamType.FLOAT:
        try:
            v = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{_describe(p)} expects a number, "
                             f"got {value!r}") from exc
        if p.range is not None:
            lo, hi = p.range
            # np.clip keeps NaN, builtin min/max would not
            clamped = float(np.clip(v, lo, hi))
            if v < lo or v > hi:
                log.debug("%s=%s clamped to %s", p.key, v, clamped)
            v = clamped
        return v

    return value


def _describe(p: ParamDef) -> str:
    if p.label:
        return f"{p.label} ({p.key})"
    return p.key
