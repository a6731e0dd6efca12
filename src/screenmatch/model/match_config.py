"""MatchConfig - options for a single template search.

A search accepts a partially specified configuration (None, a MatchConfig
or a plain mapping) and resolves it once, at the entry point, through
:func:`normalize_config`. Matching code only ever sees validated configs.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from ..config_exceptions import ValidationError

DEFAULT_SCALE_STEPS: tuple[float, ...] = (1.0, 0.9, 0.8, 0.7, 0.6, 0.5)

# camelCase spellings accepted in mappings
_KEY_ALIASES = {
    "searchMultipleScales": "search_multiple_scales",
    "useGrayscale": "use_grayscale",
    "scaleSteps": "scale_steps",
}


@dataclass(frozen=True)
class MatchConfig:
    """Configuration for image template matching.

    Attributes:
        search_multiple_scales: Search at every value of ``scale_steps``
        use_grayscale: Compare luminance only
        scale_steps: Scale factors applied to the template
        confidence: Minimum similarity for a result (0.0-1.0)
        limit: Maximum number of results
        parallel: Evaluate scales on a thread pool
    """

    search_multiple_scales: bool = True
    use_grayscale: bool = False
    scale_steps: tuple[float, ...] = DEFAULT_SCALE_STEPS
    confidence: float = 0.8
    limit: int = 100
    parallel: bool = True

    def with_multi_scale(self, enabled: bool) -> MatchConfig:
        return replace(self, search_multiple_scales=enabled)

    def with_grayscale(self, enabled: bool) -> MatchConfig:
        return replace(self, use_grayscale=enabled)

    def with_scale_steps(self, steps: Iterable[float]) -> MatchConfig:
        return replace(self, scale_steps=tuple(steps))

    def with_confidence(self, confidence: float) -> MatchConfig:
        return replace(self, confidence=confidence)

    def with_limit(self, limit: int) -> MatchConfig:
        return replace(self, limit=limit)

    def with_parallel(self, enabled: bool) -> MatchConfig:
        return replace(self, parallel=enabled)

    @property
    def effective_scales(self) -> tuple[float, ...]:
        """Scales to search, in order, without duplicates."""
        if not self.search_multiple_scales:
            return (1.0,)
        return tuple(dict.fromkeys(self.scale_steps))


_FIELD_NAMES = {f.name for f in fields(MatchConfig)}


def normalize_config(
    config: MatchConfig | Mapping[str, Any] | None = None, **overrides: Any
) -> MatchConfig:
    """Resolve a partial configuration into a validated MatchConfig.

    Args:
        config: None (all defaults), a MatchConfig, or a mapping using
            snake_case or camelCase keys
        **overrides: Field values applied on top of ``config``

    Returns:
        Fully defaulted, validated MatchConfig

    Raises:
        ValidationError: If a key is unknown or a value is out of range
    """
    if config is None:
        values: dict[str, Any] = {}
    elif isinstance(config, MatchConfig):
        values = {name: getattr(config, name) for name in _FIELD_NAMES}
    elif isinstance(config, Mapping):
        values = {_KEY_ALIASES.get(key, key): value for key, value in config.items()}
    else:
        raise ValidationError(
            "config", f"expected MatchConfig or mapping, got {type(config).__name__}"
        )

    values.update({_KEY_ALIASES.get(key, key): value for key, value in overrides.items()})
    # Explicit None means "use the default"
    values = {key: value for key, value in values.items() if value is not None}

    unknown = sorted(set(values) - _FIELD_NAMES)
    if unknown:
        raise ValidationError(unknown[0], "unknown option", unknown=unknown)

    for flag in ("search_multiple_scales", "use_grayscale", "parallel"):
        if flag in values and not isinstance(values[flag], bool):
            raise ValidationError(flag, f"expected bool, got {values[flag]!r}")

    if "confidence" in values:
        values["confidence"] = _validate_confidence(values["confidence"])
    if "limit" in values:
        values["limit"] = _validate_limit(values["limit"])
    if "scale_steps" in values:
        values["scale_steps"] = _coerce_scale_steps(values["scale_steps"])

    resolved = MatchConfig(**values)

    if resolved.search_multiple_scales:
        if not resolved.scale_steps:
            raise ValidationError("scale_steps", "must not be empty when searching multiple scales")
        for step in resolved.scale_steps:
            if not math.isfinite(step) or step <= 0:
                raise ValidationError("scale_steps", f"scale {step} must be positive")

    return resolved


def _validate_confidence(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError("confidence", f"expected a number, got {value!r}")
    confidence = float(value)
    if not 0.0 <= confidence <= 1.0:
        raise ValidationError("confidence", f"must be in [0.0, 1.0], got {confidence}")
    return confidence


def _validate_limit(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError("limit", f"expected an integer, got {value!r}")
    if value <= 0:
        raise ValidationError("limit", f"must be positive, got {value}")
    return int(value)


def _coerce_scale_steps(value: Any) -> tuple[float, ...]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise ValidationError("scale_steps", f"expected a sequence of numbers, got {value!r}")
    steps = []
    for step in value:
        if isinstance(step, bool) or not isinstance(step, numbers.Real):
            raise ValidationError("scale_steps", f"expected a number, got {step!r}")
        steps.append(float(step))
    return tuple(steps)
