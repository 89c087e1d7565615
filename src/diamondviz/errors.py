from __future__ import annotations

import math


class InvalidNumericInputError(ValueError):
    """Raised when a numeric engine input is NaN or infinite."""


def require_finite(name: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        msg = f"{name} must be a real number, got {value!r}"
        raise InvalidNumericInputError(msg) from exc
    if not math.isfinite(number):
        msg = f"{name} must be finite, got {number}"
        raise InvalidNumericInputError(msg)
    return number


__all__ = ["InvalidNumericInputError", "require_finite"]
