from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from difflib import SequenceMatcher
from numbers import Real

from diamondviz.errors import require_finite

logger = logging.getLogger(__name__)

MIN_SIMILARITY = 0.5


def normalize_grade_key(key: str) -> str:
    return "".join(ch for ch in str(key).upper() if ch.isalnum())


def _nearest_letter(normalized: str, keys: tuple[str, ...]) -> str | None:
    if len(normalized) != 1 or not normalized.isalpha():
        return None
    if not all(len(item) == 1 and item.isalpha() for item in keys):
        return None
    target = ord(normalized)
    # ties go to the later grade
    best_idx = min(
        range(len(keys)),
        key=lambda idx: (abs(ord(keys[idx]) - target), -idx),
    )
    return keys[best_idx]


def _most_similar(normalized: str, keys: tuple[str, ...]) -> str | None:
    scored = [
        (SequenceMatcher(None, normalized, normalize_grade_key(item)).ratio(), idx)
        for idx, item in enumerate(keys)
    ]
    best_ratio, best_idx = max(scored)
    if best_ratio < MIN_SIMILARITY:
        return None
    return keys[best_idx]


def grade_aliases(pairs: Iterable[tuple[str, str]]) -> dict[str, str]:
    seen: dict[str, set[str]] = {}
    for name, grade in pairs:
        normalized = normalize_grade_key(name)
        if normalized:
            seen.setdefault(normalized, set()).add(grade)
    return {name: next(iter(grades)) for name, grades in seen.items() if len(grades) == 1}


def resolve_grade_key(
    key: str | float,
    keys: tuple[str, ...],
    *,
    fallback: str,
    kind: str = "grade",
    aliases: Mapping[str, str] | None = None,
) -> str:
    """Map a grade key (name, display name or ordinal position) onto one of ``keys``.

    Unknown names never raise: they resolve to the nearest defined grade, with
    ties broken toward the later grade, and finally to ``fallback``.
    """
    if not keys:
        msg = f"{kind} scale must contain at least one grade"
        raise ValueError(msg)
    if isinstance(key, Real) and not isinstance(key, bool):
        position = require_finite(f"{kind} position", float(key))
        idx = max(0, min(len(keys) - 1, int(round(position))))
        return keys[idx]

    normalized = normalize_grade_key(key)
    for item in keys:
        if normalize_grade_key(item) == normalized:
            return item
    if aliases and aliases.get(normalized) in keys:
        return aliases[normalized]

    resolved = _nearest_letter(normalized, keys) if normalized else None
    if resolved is None and normalized:
        resolved = _most_similar(normalized, keys)
    if resolved is None:
        resolved = fallback
    logger.warning("Unknown %s %r, using %s", kind, key, resolved)
    return resolved


__all__ = ["grade_aliases", "normalize_grade_key", "resolve_grade_key"]
