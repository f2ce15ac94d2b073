from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List

from modules.numeral_converter.core.convert import (
    ALPHABET_LABELS,
    MAX_SAFE_INTEGER,
    Base,
    ConversionResult,
    parse_base,
    try_convert,
)

BASE_INFO: Dict[int, Dict[str, str]] = {
    Base.BINARY: {"name": "Binary", "example": "1010"},
    Base.OCTAL: {"name": "Octal", "example": "12"},
    Base.DECIMAL: {"name": "Decimal", "example": "10"},
    Base.HEXADECIMAL: {"name": "Hexadecimal", "example": "A"},
}

# Order of the base selector buttons and their short labels.
SELECTOR_ORDER = [
    (Base.DECIMAL, "Decimal"),
    (Base.BINARY, "Binary"),
    (Base.OCTAL, "Octal"),
    (Base.HEXADECIMAL, "Hex"),
]

RESULT_ROWS = [
    (Base.DECIMAL, "decimal", ""),
    (Base.BINARY, "binary", "0b"),
    (Base.OCTAL, "octal", "0o"),
    (Base.HEXADECIMAL, "hexadecimal", "0x"),
]

EMPTY_DISPLAY = "---"


def base_info(base: object) -> Dict[str, Any]:
    radix, _ = parse_base(base)
    if radix is None:
        return {"base": base, "name": "Unknown", "example": "", "chars": ""}
    info = BASE_INFO[radix]
    return {
        "base": radix,
        "name": info["name"],
        "example": info["example"],
        "chars": ALPHABET_LABELS[radix],
    }


def selector_options() -> List[Dict[str, Any]]:
    return [
        {**base_info(base), "label": label} for base, label in SELECTOR_ORDER
    ]


def result_rows(result: ConversionResult | None) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for base, field, prefix in RESULT_ROWS:
        value = getattr(result, field) if result is not None else ""
        rows.append(
            {
                "base": int(base),
                "name": BASE_INFO[base]["name"],
                "value": value,
                "prefix": prefix,
                "display": f"{prefix}{value}" if value else EMPTY_DISPLAY,
            }
        )
    return rows


@dataclass(frozen=True)
class ConverterState:
    """Snapshot of the converter screen. Reducers below return new snapshots."""

    base: int = Base.DECIMAL
    input_text: str = ""
    result: ConversionResult | None = None
    error: str | None = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "base": int(self.base),
            "input": self.input_text,
            "results": self.result.as_dict() if self.result else None,
            "error": self.error,
            "info": base_info(self.base),
            "rows": result_rows(self.result),
        }


def select_base(state: ConverterState, base: object) -> ConverterState:
    radix, error = parse_base(base)
    if error or radix is None:
        return replace(state, error=error)
    return ConverterState(base=radix)


def set_input(state: ConverterState, text: object) -> ConverterState:
    return replace(state, input_text="" if text is None else str(text), error=None)


def convert(state: ConverterState, *, limit: int = MAX_SAFE_INTEGER) -> ConverterState:
    result, error = try_convert(state.input_text, state.base, limit=limit)
    if error or result is None:
        return replace(state, error=error)
    return replace(state, result=result, error=None)


def reset(state: ConverterState) -> ConverterState:
    return ConverterState(base=state.base)
