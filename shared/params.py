"""Declarative parameter schema.

An engine's parameter contract is a list of ParamDef objects. ParamSchema
wraps the list and derives the plain dicts the CLI, presets and tests work
with (default_params, param_ranges, choice_names) plus validation of raw
dicts coming from JSON presets or the command line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ParamType(Enum):
    FLOAT = "float"
    INT = "int"
    CHOICE = "choice"
    OPTIONAL_INT = "optional_int"   # int or None


@dataclass
class ParamDef:
    key: str
    type: ParamType
    default: Any
    section: str
    label: str = ""
    range: tuple | None = None          # (min, max) for FLOAT/INT
    choices: list[str] | None = None    # allowed values for CHOICE
    help: str = ""


class ParamSchema:
    """Derives defaults, ranges and validation from a declarative param list."""

    def __init__(self, params: list[ParamDef]):
        self._params = params
        self._by_key: dict[str, ParamDef] = {p.key: p for p in params}

    def default_params(self) -> dict:
        return {p.key: p.default for p in self._params}

    def param_ranges(self) -> dict[str, tuple]:
        """Continuous params only (float/int with a range)."""
        return {p.key: p.range for p in self._params
                if p.range is not None and p.type != ParamType.CHOICE}

    def param_sections(self) -> dict[str, list[str]]:
        sections: dict[str, list[str]] = {}
        for p in self._params:
            sections.setdefault(p.section, []).append(p.key)
        return sections

    def choice_names(self) -> dict[str, list[str]]:
        return {p.key: list(p.choices) for p in self._params
                if p.type == ParamType.CHOICE and p.choices}

    def validate_and_clamp(self, raw: dict) -> dict:
        """Validate and clamp a raw params dict (e.g. a JSON preset).

        Unknown keys and values that cannot be cast are dropped. Numbers are
        clamped to range; CHOICE values outside the choices are dropped.
        """
        result = {}
        for key, value in raw.items():
            p = self._by_key.get(key)
            if p is None:
                continue

            if p.type == ParamType.CHOICE:
                value = str(value)
                if p.choices and value not in p.choices:
                    continue
                result[key] = value

            elif p.type == ParamType.OPTIONAL_INT and value is None:
                result[key] = None

            else:
                try:
                    v = float(value) if p.type == ParamType.FLOAT else int(round(float(value)))
                except (TypeError, ValueError):
                    continue
                if p.range:
                    lo, hi = p.range
                    v = max(lo, min(hi, v))
                result[key] = v

        return result

    def get(self, key: str) -> ParamDef | None:
        return self._by_key.get(key)

    def __iter__(self):
        return iter(self._params)

    def __len__(self):
        return len(self._params)
