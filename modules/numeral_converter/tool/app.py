from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from modules.numeral_converter.core.convert import MAX_SAFE_INTEGER, parse_base, validate
from modules.numeral_converter.core.state import (
    ConverterState,
    convert as run_convert,
    reset as run_reset,
    select_base as run_select_base,
    selector_options,
    set_input,
)
from radix.settings import configure_templates, max_safe_integer, shared_templates_dir

app = FastAPI(title="Number System Converter")

BASE_DIR = Path(__file__).parent
SHARED_TEMPLATES = shared_templates_dir()

templates = Jinja2Templates(
    directory=[str(BASE_DIR / "templates"), str(SHARED_TEMPLATES)]
)
configure_templates(templates)


def _state_for(base: str | None) -> ConverterState:
    radix, _ = parse_base(base)
    return ConverterState() if radix is None else ConverterState(base=radix)


@app.get("/", response_class=HTMLResponse)
def index(request: Request):
    base_path = request.url.path.rstrip("/")
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "base_path": base_path,
            "options": selector_options(),
            "state": ConverterState().as_dict(),
        },
    )


@app.get("/bases")
def bases():
    return {"bases": selector_options()}


@app.post("/validate")
def validate_input(
    value: str | None = Form(None),
    base: str | None = Form(None),
):
    radix, error = parse_base(base)
    if error or radix is None:
        return {"valid": False, "error": error}
    return {"valid": validate(value, radix), "error": None}


@app.post("/convert")
def convert(
    value: str | None = Form(None),
    base: str | None = Form(None),
):
    radix, error = parse_base(base)
    if error or radix is None:
        return JSONResponse(
            run_select_base(ConverterState(), base).as_dict(), status_code=400
        )

    state = set_input(ConverterState(base=radix), value)
    state = run_convert(state, limit=max_safe_integer(MAX_SAFE_INTEGER))
    if state.error:
        return JSONResponse(state.as_dict(), status_code=400)
    return state.as_dict()


@app.post("/select-base")
def select_base(base: str | None = Form(None)):
    state = run_select_base(ConverterState(), base)
    if state.error:
        return JSONResponse(state.as_dict(), status_code=400)
    return state.as_dict()


@app.post("/reset")
def reset(base: str | None = Form(None)):
    return run_reset(_state_for(base)).as_dict()
