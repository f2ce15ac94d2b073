from __future__ import annotations

from radix.engine import build_app

app = build_app()
