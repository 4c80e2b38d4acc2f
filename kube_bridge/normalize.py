"""Shared string normalization for zone and taint value comparisons."""


def normalize(value: str | None) -> str:
    """Trim and lower-case a value, mapping None to an empty string."""
    if value is None:
        return ""
    return value.strip().lower()


def equals_ignore_case(left: str | None, right: str | None) -> bool:
    """Compare two values after normalization."""
    return normalize(left) == normalize(right)
