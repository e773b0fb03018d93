"""Null-safe coercion of raw dump values into the catalog's field types.

Every textual field passes through :func:`normalize` before any pattern is
applied to it.  None of the helpers raise on bad input: malformed values fall
back to ``""``, ``None`` or ``[]`` so a single broken cell never aborts a run.
"""
from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Optional, Sequence

from .models import CardCost, Number
from .utils import dedupe_preserve_order


LIST_DELIMITERS = re.compile(r"[,/]")
DIGIT_GROUPS = re.compile(r"\d+")
POWER_SYMBOL = re.compile(r"\[([A-Z])\]")


def normalize(value: Any) -> str:
    """Stringify and trim ``value``; ``None`` becomes an empty string."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        # Numeric cells such as 3.0 read back as "3", not "3.0".
        return str(int(value))
    return str(value).strip()


def to_number(value: Any) -> Optional[Number]:
    """Parse ``value`` into a finite number, returning ``None`` on failure."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        parsed = value
    else:
        text = normalize(value)
        if not text:
            return None
        try:
            parsed = float(text)
        except (TypeError, ValueError):
            return None

    if not math.isfinite(parsed):
        return None
    if parsed.is_integer():
        return int(parsed)
    return parsed


def listify(value: Any) -> List[str]:
    """Coerce a list cell or a ``,``/``/`` delimited string into a list."""
    if isinstance(value, (list, tuple)):
        return [entry for entry in (normalize(item) for item in value) if entry]

    text = normalize(value)
    if not text:
        return []
    return [entry.strip() for entry in LIST_DELIMITERS.split(text) if entry.strip()]


def parse_cost(raw: Any) -> CardCost:
    """Split a cost string such as ``3[F]`` into energy and power symbols."""
    text = normalize(raw)
    if not text:
        return CardCost(energy=None, power_symbols=[], raw=None)

    digits = DIGIT_GROUPS.findall(text)
    energy = int("".join(digits)) if digits else None
    symbols = dedupe_preserve_order(POWER_SYMBOL.findall(text))
    return CardCost(energy=energy, power_symbols=symbols, raw=text)


def reshape_row(names: Sequence[str], row: Any) -> Dict[str, Any]:
    """Zip ``row`` against ``names``; missing trailing values become ``None``."""
    values = row if isinstance(row, (list, tuple)) else []
    record: Dict[str, Any] = {}
    for index, field in enumerate(names):
        record[field] = values[index] if index < len(values) else None
    return record


def optional_text(value: Any) -> Optional[str]:
    return normalize(value) or None
