#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from radix.lint import lint_module  # noqa: E402
from radix.registry import load_modules  # noqa: E402


def main() -> int:
    failures = 0
    modules = load_modules(ROOT_DIR / "modules")
    for name, meta in sorted(modules.items()):
        lint = lint_module(meta)
        if lint["ok"]:
            continue
        failures += 1
        print(f"[ERROR] {name}")
        for issue in lint["issues"]:
            print(f"  - {issue}")
        if not lint["entrypoint_ok"]:
            print(f"  - entrypoint: {lint['entrypoint_error']}")

    if failures:
        print(f"\nFound {failures} module(s) with lint errors.")
        return 1
    print(f"All {len(modules)} module(s) passed lint.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
