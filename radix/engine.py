from __future__ import annotations

import logging
from importlib import import_module
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from radix.registry import MODULES_PATH, load_modules
from radix.settings import configure_logging, configure_templates, shared_templates_dir

logger = logging.getLogger(__name__)

CATEGORY_DESCRIPTIONS = {
    "Numbers": "Convert and inspect integers across numeral systems.",
    "Other": "Useful modules that do not fit a core category.",
}
DEFAULT_CATEGORY_DESCRIPTION = "Practical utilities for quick tasks."


def _slugify(value: str) -> str:
    return value.strip().lower().replace(" ", "-")


def build_categories(modules: dict[str, dict[str, Any]]) -> list[dict[str, Any]]:
    public = [module for module in modules.values() if module.get("public", True)]
    grouped: dict[str, list[dict[str, Any]]] = {}
    for module in public:
        category = module.get("category") or "Other"
        grouped.setdefault(str(category), []).append(module)

    categories: list[dict[str, Any]] = []
    for category, items in sorted(grouped.items(), key=lambda item: item[0].lower()):
        items.sort(key=lambda item: item.get("title") or item.get("name", ""))
        categories.append(
            {
                "name": category,
                "slug": _slugify(category),
                "description": CATEGORY_DESCRIPTIONS.get(
                    category, DEFAULT_CATEGORY_DESCRIPTION
                ),
                "modules": items,
            }
        )
    return categories


def import_attr(path: str) -> Any:
    if ":" not in path:
        raise ValueError(f"Invalid entrypoint '{path}'. Expected module:attr.")
    module_path, attr = path.split(":", 1)
    module = import_module(module_path)
    return getattr(module, attr)


def build_app(modules_path: Path = MODULES_PATH) -> FastAPI:
    configure_logging()
    app = FastAPI(title="Radix Universe")

    templates = Jinja2Templates(directory=str(shared_templates_dir()))
    configure_templates(templates)

    modules = load_modules(modules_path)
    categories = build_categories(modules)
    mounted: list[str] = []

    @app.get("/", response_class=HTMLResponse)
    def universe_index(request: Request):
        base_path = request.scope.get("root_path", "").rstrip("/")
        return templates.TemplateResponse(
            request,
            "index.html",
            {"categories": categories, "base_path": base_path},
        )

    @app.get("/health")
    def health():
        return {"status": "ok", "modules": sorted(mounted)}

    for meta in modules.values():
        entrypoints = meta.get("entrypoints") or {}
        api_entry = entrypoints.get("api")
        if not api_entry:
            continue

        try:
            subapp = import_attr(api_entry)
        except Exception:
            logger.warning(
                "Skipping module %s: cannot import %s",
                meta["name"],
                api_entry,
                exc_info=True,
            )
            continue

        mount_path = meta.get("mount") or f"/{meta.get('slug', meta['name'])}"
        app.mount(mount_path, subapp)
        mounted.append(meta["name"])
        logger.info("Mounted %s at %s", meta["name"], mount_path)

    return app
