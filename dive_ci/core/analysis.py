"""AnalysisResult — the read-only summary produced by the image analysis step.

Only decoding lives here. Efficiency and wasted-byte figures are computed
upstream and taken as given.

JSON shape accepted by load_analysis():

    {
      "efficiency": 0.95,
      "wastedBytes": 5242880,
      "wastedUserPercent": 1.5
    }

snake_case keys (wasted_bytes, wasted_user_percent) are accepted too.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dive_ci.core.errors import AnalysisError

_FIELDS: dict[str, tuple[str, ...]] = {
    'efficiency': ('efficiency',),
    'wasted_bytes': ('wastedBytes', 'wasted_bytes'),
    'wasted_user_percent': ('wastedUserPercent', 'wasted_user_percent'),
}


@dataclass(frozen=True)
class AnalysisResult:
    """Image analysis figures consumed by the CI rules."""

    efficiency: float
    wasted_bytes: int
    wasted_user_percent: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AnalysisResult:
        """Build from a decoded JSON object. Raises AnalysisError on missing/bad fields."""
        if not isinstance(data, Mapping):
            raise AnalysisError(f'analysis result must be an object, got {type(data).__name__}')

        efficiency = _as_float(data, 'efficiency')
        wasted_user_percent = _as_float(data, 'wasted_user_percent')

        name, raw = _lookup(data, 'wasted_bytes')
        if isinstance(raw, bool) or not isinstance(raw, (int, float)) or not float(raw).is_integer():
            raise AnalysisError(f'{name} must be an integer byte count, got {raw!r}')
        if raw < 0:
            raise AnalysisError(f'{name} must not be negative, got {raw!r}')

        return cls(
            efficiency=efficiency,
            wasted_bytes=int(raw),
            wasted_user_percent=wasted_user_percent,
        )


def _lookup(data: Mapping[str, Any], field_name: str) -> tuple[str, Any]:
    for name in _FIELDS[field_name]:
        if name in data:
            return name, data[name]
    raise AnalysisError(f'analysis result is missing {_FIELDS[field_name][0]!r}')


def _as_float(data: Mapping[str, Any], field_name: str) -> float:
    name, raw = _lookup(data, field_name)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise AnalysisError(f'{name} must be a number, got {raw!r}')
    value = float(raw)
    if math.isnan(value):
        raise AnalysisError(f'{name} must be a number, got NaN')
    return value


def load_analysis(path: str | Path) -> AnalysisResult:
    """Read an analysis result from a JSON file."""
    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise AnalysisError(f'{path}: invalid JSON: {exc}') from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise AnalysisError(f'{path}: cannot read analysis: {exc}') from exc
    return AnalysisResult.from_dict(data)
