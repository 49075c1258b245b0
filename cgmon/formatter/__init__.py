"""Formatters."""


def _empty(value):
    """Nulls and empty collections are not worth printing."""
    return value is None or (
        isinstance(value, (dict, list, tuple)) and not value
    )


def sanitize(obj):
    """Return a copy of obj without null or empty fields.

    Lists and tuples are both returned as lists, their elements are kept
    even when empty.
    """
    if isinstance(obj, dict):
        sanitized = {}
        for key, value in obj.items():
            value = sanitize(value)
            if not _empty(value):
                sanitized[key] = value
        return sanitized

    if isinstance(obj, (list, tuple)):
        return [sanitize(elem) for elem in obj]

    return obj
