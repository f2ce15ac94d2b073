from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from radix.engine import import_attr
from radix.registry import MODULES_PATH

REQUIRED_FIELDS = ("name", "title", "version", "description", "public", "category")
PUBLIC_FIELDS = ("entrypoints", "mount")


def _module_path(meta: Dict[str, Any]) -> Path | None:
    path = meta.get("path")
    if isinstance(path, str):
        return Path(path)
    if path is None and meta.get("name"):
        return MODULES_PATH / meta["name"]
    return path


def _load_manifest(path: Path | None, issues: List[str]) -> Dict[str, Any]:
    manifest_path = path / "module.yaml" if path is not None else None
    if manifest_path is None or not manifest_path.exists():
        issues.append("missing module.yaml")
        return {}
    try:
        data = yaml.safe_load(manifest_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        issues.append(f"invalid module.yaml: {exc}")
        return {}
    if not isinstance(data, dict):
        issues.append("module.yaml must be a mapping")
        return {}
    return data


def _check_fields(manifest: Dict[str, Any], public: bool, issues: List[str]) -> None:
    fields = REQUIRED_FIELDS + (PUBLIC_FIELDS if public else ())
    for field in fields:
        value = manifest.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            issues.append(f"missing field: {field}")


def _check_mount(mount: Any, issues: List[str]) -> None:
    if mount is None:
        return
    if not isinstance(mount, str):
        issues.append("mount must be a string")
        return
    mount = mount.strip()
    if not mount:
        return
    if not mount.startswith("/"):
        issues.append("mount must start with /")
    if mount != "/" and mount.endswith("/"):
        issues.append("mount must not end with /")
    if "://" in mount or mount.startswith("//") or "\\" in mount:
        issues.append("mount must be a path")


def _check_entrypoint(manifest: Dict[str, Any], public: bool) -> Tuple[str, str]:
    entrypoints = manifest.get("entrypoints")
    entrypoint = ""
    if isinstance(entrypoints, dict):
        entrypoint = str(entrypoints.get("api") or "")
    if not entrypoint:
        return "", "missing entrypoints.api" if public else ""
    if ":" not in entrypoint:
        return entrypoint, "invalid entrypoint format"
    try:
        import_attr(entrypoint)
    except Exception as exc:
        return entrypoint, str(exc)
    return entrypoint, ""


def lint_module(meta: Dict[str, Any]) -> Dict[str, Any]:
    """Check a module directory against the layout every mounted tool follows."""
    issues: List[str] = []
    path = _module_path(meta)
    manifest = _load_manifest(path, issues)

    public = manifest.get("public")
    if public is None:
        public = meta.get("public", True)
    public = bool(public)

    _check_fields(manifest, public, issues)
    if public:
        _check_mount(manifest.get("mount"), issues)
    entrypoint, entrypoint_error = _check_entrypoint(manifest, public)

    layout = {"has_app": False, "has_template": False, "has_core": False}
    if path is not None:
        layout = {
            "has_app": (path / "tool" / "app.py").exists(),
            "has_template": (path / "tool" / "templates" / "index.html").exists(),
            "has_core": (path / "core").is_dir(),
        }
        if public:
            if not layout["has_app"]:
                issues.append("missing tool/app.py")
            if not layout["has_template"]:
                issues.append("missing tool/templates/index.html")
            if not layout["has_core"]:
                issues.append("missing core/")

    return {
        "ok": not issues and not entrypoint_error,
        "issues": issues,
        "entrypoint": entrypoint,
        "entrypoint_ok": not entrypoint_error,
        "entrypoint_error": entrypoint_error,
        "public": public,
        **layout,
    }
