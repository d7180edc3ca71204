"""
Lenient numeric parsing for raw table cells.

Spreadsheet and CSV cells reach the analysis as text or numbers.  A
cell counts as numeric when its text *starts with* a decimal literal,
so ``"12abc"`` reads as 12 and ``" 3.5 kg"`` as 3.5, while ``""``,
``"abc"`` and ``"."`` are rejected.  The same rule is used for column
eligibility and for point extraction.

Never use bare ``float()`` on cell data: ``float("12abc")`` raises and
``float("nan")`` succeeds, both of which disagree with the rule above.
"""

import math
import re
from typing import Optional

# Optional sign, then Infinity or a decimal literal with optional
# fraction and exponent.  ASCII digits only.
_DECIMAL_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)


def parse_decimal_prefix(text: str) -> float:
    """Parse the longest decimal literal at the start of *text*.

    Leading whitespace is skipped and anything after the literal is
    ignored.  An exponent marker is only consumed when digits follow
    it (``"2e"`` parses as 2.0).

    Returns the parsed value, which may be infinite for ``"Infinity"``
    or overflowing literals such as ``"1e999"``.

    Raises
    ------
    ValueError
        If *text* does not start with a decimal literal.

    Examples
    --------
    >>> parse_decimal_prefix("  42.5kg")
    42.5
    >>> parse_decimal_prefix("-.5e1x")
    -5.0
    """
    match = _DECIMAL_PREFIX.match(text.lstrip())
    if match is None:
        raise ValueError(f"no numeric prefix in {text!r}")
    return float(match.group(0))


def to_finite_float(value) -> Optional[float]:
    """Convert a raw cell value to a finite float, or ``None``.

    Numbers pass through (booleans do not count as numbers); text goes
    through :func:`parse_decimal_prefix`.  NaN and infinite results
    are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            result = float(value)
        except OverflowError:
            return None
    else:
        try:
            result = parse_decimal_prefix(str(value))
        except ValueError:
            return None
    if not math.isfinite(result):
        return None
    return result


def is_numeric_value(value) -> bool:
    """``True`` when *value* converts to a finite float."""
    return to_finite_float(value) is not None
