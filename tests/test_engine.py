from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from radix.engine import build_app, build_categories, import_attr
from radix.lint import lint_module
from radix.registry import MODULES_PATH, load_modules
from radix.settings import log_level, max_safe_integer


def test_registry_finds_converter_module() -> None:
    modules = load_modules()
    meta = modules["numeral_converter"]
    assert meta["mount"] == "/numeral-converter"
    assert meta["slug"] == "numeral-converter"
    assert meta["public"] is True
    assert meta["path"] == MODULES_PATH / "numeral_converter"


def test_registry_normalizes_manifest_defaults(tmp_path: Path) -> None:
    module_dir = tmp_path / "bit_counter"
    module_dir.mkdir()
    (module_dir / "module.yaml").write_text("name: bit_counter\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

    meta = load_modules(tmp_path)["bit_counter"]
    assert meta["slug"] == "bit-counter"
    assert meta["mount"] == "/bit-counter"
    assert meta["public"] is True


def test_registry_skips_nameless_manifest(tmp_path: Path) -> None:
    module_dir = tmp_path / "draft"
    module_dir.mkdir()
    (module_dir / "module.yaml").write_text("title: Draft\n", encoding="utf-8")
    assert load_modules(tmp_path) == {}


def test_build_categories_groups_public_modules() -> None:
    categories = build_categories(
        {
            "a": {"name": "a", "title": "Zeta", "category": "Numbers"},
            "b": {"name": "b", "title": "Alpha", "category": "Numbers"},
            "c": {"name": "c", "public": False},
            "d": {"name": "d"},
        }
    )
    assert [category["name"] for category in categories] == ["Numbers", "Other"]
    assert [module["title"] for module in categories[0]["modules"]] == ["Alpha", "Zeta"]
    assert categories[0]["slug"] == "numbers"


def test_import_attr_requires_colon() -> None:
    with pytest.raises(ValueError):
        import_attr("modules.numeral_converter.tool.app")


def test_converter_module_passes_lint() -> None:
    meta = load_modules()["numeral_converter"]
    lint = lint_module(meta)
    assert lint["issues"] == []
    assert lint["ok"] is True
    assert lint["entrypoint"] == "modules.numeral_converter.tool.app:app"


def test_lint_reports_missing_layout(tmp_path: Path) -> None:
    module_dir = tmp_path / "broken"
    module_dir.mkdir()
    (module_dir / "module.yaml").write_text(
        "name: broken\nmount: broken/\n", encoding="utf-8"
    )
    lint = lint_module({"name": "broken", "path": module_dir})
    assert lint["ok"] is False
    assert "missing field: title" in lint["issues"]
    assert "mount must start with /" in lint["issues"]
    assert "mount must not end with /" in lint["issues"]
    assert "missing tool/app.py" in lint["issues"]
    assert lint["entrypoint_error"] == "missing entrypoints.api"


@pytest.fixture()
def host() -> TestClient:
    return TestClient(build_app())


def test_host_mounts_converter(host: TestClient) -> None:
    health = host.get("/health").json()
    assert "numeral_converter" in health["modules"]

    response = host.post(
        "/numeral-converter/convert", data={"value": "1010", "base": "2"}
    )
    assert response.status_code == 200
    assert response.json()["results"]["hexadecimal"] == "A"


def test_host_index_lists_module(host: TestClient) -> None:
    response = host.get("/")
    assert response.status_code == 200
    assert "Number System Converter" in response.text
    assert "/numeral-converter/" in response.text


def test_host_skips_module_that_fails_to_import(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    module_dir = tmp_path / "ghost"
    module_dir.mkdir()
    (module_dir / "module.yaml").write_text(
        "name: ghost\nentrypoints:\n  api: modules.ghost.tool.app:app\n",
        encoding="utf-8",
    )

    with caplog.at_level("WARNING", logger="radix.engine"):
        app = build_app(tmp_path)

    assert TestClient(app).get("/health").json()["modules"] == []
    assert "Skipping module ghost" in caplog.text


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RADIX_MAX_SAFE_INTEGER", "-5")
    assert max_safe_integer(100) == 100
    monkeypatch.setenv("RADIX_MAX_SAFE_INTEGER", "42")
    assert max_safe_integer(100) == 42
    monkeypatch.setenv("RADIX_LOG_LEVEL", "debug")
    assert log_level() == 10
    monkeypatch.setenv("RADIX_LOG_LEVEL", "chatty")
    assert log_level() == 20


def test_asgi_entrypoint_exposes_host() -> None:
    from radix.asgi import app

    assert TestClient(app).get("/health").json()["status"] == "ok"
