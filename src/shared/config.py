import os


def env_int(key: str, default: int) -> int:
    """Integer setting from the environment; unset or empty means `default`."""
    value = os.environ.get(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {key} must be an integer, got {value!r}") from None
