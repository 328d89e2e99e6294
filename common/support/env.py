import math
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from common.model.constants import DEFAULT_QUERY_TIMEOUT
from common.model.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class EnvDefaults:
    query_timeout: float = DEFAULT_QUERY_TIMEOUT
    strict_results: bool = False
    verbose: bool = True


def _parse_bool(raw: str | None, default: bool = False) -> bool:
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_timeout(var: str, raw: str | None, default: float) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{var} must be a number of seconds. Got: {raw}")
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{var} must be a positive, finite number. Got: {raw}")
    return value


def load_env_defaults(*, env_path: Path | None) -> EnvDefaults:
    """
    Reads optional collector defaults from a .env file.
    A missing file yields the built-in defaults; an explicitly named one must exist.
    """
    if env_path is None:
        return EnvDefaults()
    if not env_path.is_file():
        raise ConfigurationError(f"env file not found: {env_path}")

    values = dotenv_values(env_path)

    return EnvDefaults(
        query_timeout=parse_timeout(
            "QUERY_TIMEOUT", values.get("QUERY_TIMEOUT"), DEFAULT_QUERY_TIMEOUT
        ),
        strict_results=_parse_bool(values.get("STRICT_RESULTS"), default=False),
        verbose=_parse_bool(values.get("VERBOSE"), default=True),
    )
