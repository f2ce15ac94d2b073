from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml

MODULES_PATH = Path(__file__).parent.parent / "modules"


def _normalize_module(data: Dict[str, Any], path: Path) -> Dict[str, Any] | None:
    name = data.get("name")
    if not name:
        return None

    slug = data.get("slug") or name.replace("_", "-")
    public = data.get("public")
    return {
        **data,
        "name": name,
        "slug": slug,
        "mount": data.get("mount") or f"/{slug}",
        "public": True if public is None else bool(public),
        "path": path,
    }


def load_modules(modules_path: Path = MODULES_PATH) -> Dict[str, Dict[str, Any]]:
    """Read every ``<module>/module.yaml`` under ``modules_path``, keyed by name."""
    modules: Dict[str, Dict[str, Any]] = {}
    if not modules_path.exists():
        return modules

    for module_dir in sorted(modules_path.iterdir()):
        manifest = module_dir / "module.yaml"
        if not module_dir.is_dir() or not manifest.exists():
            continue
        with open(manifest, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        normalized = _normalize_module(data, module_dir)
        if normalized:
            modules[normalized["name"]] = normalized
    return modules
