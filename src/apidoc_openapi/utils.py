"""Small helpers shared by the generator modules."""


def without_none(mapping: dict) -> dict:
    """Drop keys whose value is ``None``."""
    return {key: value for key, value in mapping.items() if value is not None}


def stringify_keys(value):
    """Recursively turn mapping keys into strings.

    YAML loads an unquoted ``200:`` as an int, while generated documents key
    status codes by string.
    """
    if isinstance(value, dict):
        return {str(key): stringify_keys(item) for key, item in value.items()}
    if isinstance(value, list):
        return [stringify_keys(item) for item in value]
    return value
