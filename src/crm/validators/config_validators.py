def to_uppercase(value: str | None) -> str | None:
    """
    Converts a string to uppercase if it's not None.
    """
    if value is None:
        return None
    return value.upper()


def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase if it's not None.
    """
    if value is None:
        return None
    return value.lower()


def require_non_blank(value: str | None, name: str) -> str:
    """
    Reject None or whitespace-only configuration values.

    Used for secrets (e.g. JWT_SECRET) where an empty value would silently
    produce tokens anyone can forge.
    """
    if value is None or not str(value).strip():
        raise ValueError(f"{name} must not be empty")
    return value
