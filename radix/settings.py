from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

ROOT_DIR = Path(__file__).resolve().parent.parent


def _flag(name: str, default: str = "off") -> bool:
    value = os.getenv(name, default).strip().lower()
    return value in {"1", "true", "yes", "on"}


def _parse_int(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if value <= 0:
        return default
    return value


def shared_templates_dir(root_dir: Path = ROOT_DIR) -> Path:
    env_path = os.getenv("RADIX_SHARED_TEMPLATES")
    if env_path:
        return Path(env_path)
    return root_dir / "radix" / "templates"


def configure_templates(templates: Any) -> None:
    if _flag("RADIX_TEMPLATE_RELOAD", "on"):
        templates.env.auto_reload = True
        templates.env.cache = {}


def max_safe_integer(default: int) -> int:
    return _parse_int(os.getenv("RADIX_MAX_SAFE_INTEGER"), default)


def log_level() -> int:
    name = os.getenv("RADIX_LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=log_level(),
    )
