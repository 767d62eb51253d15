from __future__ import annotations


def is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_non_negative_float(value: object) -> float:
    """Lenient number parsing for overtime inputs: bad or negative input becomes 0."""
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if number != number or number < 0:
        return 0.0
    return number
