import math

from common.parse.regexes import RESULTS


def coerce_int(raw: str) -> int:
    """
    Leading-integer parse: '12abc' -> 12, 'abc' -> 0.
    """
    m = RESULTS.int_prefix.match(raw)
    return int(m.group("num")) if m else 0


def coerce_float(raw: str) -> float:
    """
    Leading-float parse: '12.5s' -> 12.5, '' -> 0.0.
    """
    m = RESULTS.float_prefix.match(raw)
    return float(m.group("num")) if m else 0.0


def strict_int(raw: str) -> int | None:
    try:
        return int(raw.strip())
    except ValueError:
        return None


def strict_float(raw: str) -> float | None:
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None
