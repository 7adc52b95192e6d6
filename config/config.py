"""Environment readers shared by the settings modules."""

import os

MONGO_URI_ENV_KEYS = ("MONGO_URI", "MONGODB_URI", "ATLAS_URL", "atlas_URL")


def mongo_uri_from_env():
    for key in MONGO_URI_ENV_KEYS:
        value = os.environ.get(key)
        if value:
            return value
    return None


def env_positive_int(name: str, default: int) -> int:
    # Unset, non-numeric and non-positive values all fall back to the default
    try:
        value = int(os.environ.get(name, ""))
    except ValueError:
        return default
    return value if value > 0 else default


def env_flag(name: str, default: str) -> bool:
    return bool(int(os.environ.get(name, default)))
