from datetime import date

from marshmallow import ValidationError


def validate_not_future(d: date) -> None:
    if d and d > date.today():
        raise ValidationError("Date cannot be in the future.")


def flatten_messages(messages, prefix: str = "") -> list:
    """
    Turn marshmallow's nested error map into dotted field paths, e.g.
    {"barcodes": {0: {"code": [...]}}} -> ["barcodes.0.code"].
    """
    if not isinstance(messages, dict):
        return [prefix] if prefix else []
    paths = []
    for key, value in messages.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            paths.extend(flatten_messages(value, path))
        else:
            paths.append(path)
    return paths


def stringify_keys(messages):
    """JSON object keys must be strings; nested list errors are keyed by index."""
    if isinstance(messages, dict):
        return {str(k): stringify_keys(v) for k, v in messages.items()}
    if isinstance(messages, list):
        return [stringify_keys(v) for v in messages]
    return messages
