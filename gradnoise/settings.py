from __future__ import annotations

import operator
import os
from dataclasses import dataclass, replace
from typing import Mapping

from .gradients import MIN_VECTORS

MIN_FREQUENCY = 1

_CANONICAL_NAMES = {"none", "canonical"}


@dataclass(frozen=True)
class StripSettings:
    """Parameters of a scrolling noise strip.

    `vector_count=None` selects the fixed four-vector gradient set.
    """

    width: int = 400
    height: int = 300
    frequency: int = 18
    vector_count: int | None = 256

    def __post_init__(self) -> None:
        for name in ("width", "height", "frequency"):
            operator.index(getattr(self, name))
        if self.vector_count is not None:
            operator.index(self.vector_count)
        if self.width < 1 or self.height < 1:
            raise ValueError("width and height must be >= 1")
        if self.frequency < MIN_FREQUENCY:
            raise ValueError(f"frequency must be >= {MIN_FREQUENCY}")
        if self.vector_count is not None and self.vector_count < MIN_VECTORS:
            raise ValueError(f"vector_count must be >= {MIN_VECTORS}")

    def with_frequency_step(self, delta: int) -> StripSettings:
        return replace(self, frequency=max(MIN_FREQUENCY, self.frequency + int(delta)))

    def with_vector_count_step(self, delta: int) -> StripSettings:
        if self.vector_count is None:
            return self
        return replace(
            self, vector_count=max(MIN_VECTORS, self.vector_count + int(delta))
        )


def _get(params: Mapping[str, str], name: str, default: str) -> str:
    raw = params.get(name)
    if raw is None:
        return default
    if isinstance(raw, list):
        return str(raw[0]) if raw else default
    return str(raw)


def _int(
    params: Mapping[str, str],
    name: str,
    default: int,
    *,
    min_value: int,
    max_value: int,
) -> int:
    try:
        v = int(float(_get(params, name, str(default))))
    except (ValueError, OverflowError):
        v = default
    return max(min_value, min(max_value, v))


def settings_from_mapping(params: Mapping[str, str] | None = None) -> StripSettings:
    """Parse settings from loosely-typed string values.

    Unparseable values fall back to the default, and everything is clamped to
    a sane range, so this never raises for bad input.
    """

    params = params or {}
    defaults = StripSettings()

    vector_raw = _get(params, "vector_count", str(defaults.vector_count))
    vector_count: int | None
    if vector_raw.strip().lower() in _CANONICAL_NAMES:
        vector_count = None
    else:
        vector_count = _int(
            params,
            "vector_count",
            defaults.vector_count,
            min_value=MIN_VECTORS,
            max_value=65536,
        )

    return StripSettings(
        width=_int(params, "width", defaults.width, min_value=1, max_value=4096),
        height=_int(params, "height", defaults.height, min_value=1, max_value=4096),
        frequency=_int(
            params,
            "frequency",
            defaults.frequency,
            min_value=MIN_FREQUENCY,
            max_value=1024,
        ),
        vector_count=vector_count,
    )


def settings_from_env(
    environ: Mapping[str, str] | None = None, *, prefix: str = "GRADNOISE_"
) -> StripSettings:
    environ = os.environ if environ is None else environ
    params = {}
    for key in ("width", "height", "frequency", "vector_count"):
        value = environ.get(f"{prefix}{key.upper()}")
        if value is not None:
            params[key] = value
    return settings_from_mapping(params)
