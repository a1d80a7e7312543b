"""Config manager — load JSON → apply env overrides → validate → MathBlocksConfig."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from mathblocks.core.models.config import MathBlocksConfig

_log = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "mathblocks_config.json"

# Environment variable → config field mapping.
# Keys are env-var names; values are ``(section, field, type)`` tuples.
_ENV_OVERRIDES: dict[str, tuple[str, str, type]] = {
    "MATHBLOCKS_LOG_LEVEL": ("system", "log_level", str),
    "MATHBLOCKS_DEV_MODE": ("system", "dev_mode", bool),
    "MATHBLOCKS_WEBUI_PORT": ("system", "webui_port", int),
    "MATHBLOCKS_OPERATION": ("game", "operation", str),
    "MATHBLOCKS_MAX_RESULT": ("game", "max_result", int),
    "MATHBLOCKS_SEED": ("game", "seed", int),
}


def _coerce(value: str, target_type: type) -> object:
    """Coerce a string env-var value to the expected Python type."""
    if target_type is bool:
        return value.strip().lower() in ("1", "true", "yes")
    return target_type(value)


def load_config(config_path: Path | str | None = None) -> MathBlocksConfig:
    """Load, override, and validate the MathBlocks configuration.

    Args:
        config_path: Path to ``mathblocks_config.json``.  When *None*, falls
            back to ``MATHBLOCKS_CONFIG_FILE`` env-var and then the default
            file shipped next to this module.

    Returns:
        A fully-validated :class:`MathBlocksConfig` instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
        pydantic.ValidationError: If a value is invalid or a key is unknown.
    """
    path = _resolve_config_path(config_path)
    _log.info("Loading config from %s", path)

    raw = json.loads(path.read_text(encoding="utf-8"))

    for env_key, (section, field, typ) in _ENV_OVERRIDES.items():
        env_val = os.environ.get(env_key)
        if env_val is not None:
            raw.setdefault(section, {})[field] = _coerce(env_val, typ)
            _log.debug("Env override: %s → %s.%s = %r", env_key, section, field, env_val)

    return MathBlocksConfig(**raw)


def _resolve_config_path(config_path: Path | str | None) -> Path:
    if config_path is not None:
        p = Path(config_path)
    else:
        env = os.environ.get("MATHBLOCKS_CONFIG_FILE")
        p = Path(env) if env else _DEFAULT_CONFIG_PATH
    if not p.is_file():
        raise FileNotFoundError(
            f"Config file not found: {p}\n"
            "Create mathblocks_config.json or set MATHBLOCKS_CONFIG_FILE to a valid path."
        )
    return p
