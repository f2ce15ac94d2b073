from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Tuple

logger = logging.getLogger(__name__)

DIGITS = "0123456789ABCDEF"

# Largest integer an IEEE 754 double holds exactly.
MAX_SAFE_INTEGER = 2**53 - 1


class Base(IntEnum):
    BINARY = 2
    OCTAL = 8
    DECIMAL = 10
    HEXADECIMAL = 16


SUPPORTED_BASES: Tuple[int, ...] = tuple(int(base) for base in Base)

BASE_NAMES: Mapping[int, str] = MappingProxyType(
    {
        Base.BINARY: "binary",
        Base.OCTAL: "octal",
        Base.DECIMAL: "decimal",
        Base.HEXADECIMAL: "hexadecimal",
    }
)

DIGIT_ALPHABETS: Mapping[int, FrozenSet[str]] = MappingProxyType(
    {
        Base.BINARY: frozenset("01"),
        Base.OCTAL: frozenset("01234567"),
        Base.DECIMAL: frozenset("0123456789"),
        Base.HEXADECIMAL: frozenset("0123456789ABCDEFabcdef"),
    }
)

ALPHABET_LABELS: Mapping[int, str] = MappingProxyType(
    {
        Base.BINARY: "0-1",
        Base.OCTAL: "0-7",
        Base.DECIMAL: "0-9",
        Base.HEXADECIMAL: "0-9, A-F",
    }
)


class ConversionError(ValueError):
    """Base class for conversion failures; carries the requested base."""

    def __init__(self, message: str, *, base: object = None) -> None:
        super().__init__(message)
        self.base = base


class InvalidFormatError(ConversionError):
    """The input holds a character outside the base's digit alphabet."""

    def __init__(self, message: str, *, base: object = None) -> None:
        super().__init__(message, base=base)
        self.alphabet = ALPHABET_LABELS.get(_coerce_base(base) or 0, "")


class EmptyInputError(InvalidFormatError):
    """The input is empty once surrounding whitespace is removed."""


class InvalidValueError(ConversionError):
    """The input is well formed but not a representable non-negative integer."""

    def __init__(self, message: str, *, base: object = None, text: str = "") -> None:
        super().__init__(message, base=base)
        self.text = text


@dataclass(frozen=True)
class ConversionResult:
    decimal: str
    binary: str
    octal: str
    hexadecimal: str

    def field_for(self, base: int) -> str:
        name = BASE_NAMES.get(_coerce_base(base) or 0)
        if name is None:
            raise KeyError(base)
        return getattr(self, name)

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)


def _coerce_base(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return int(value) if value in DIGIT_ALPHABETS else None
    return None


def _trimmed(text: object) -> str:
    if text is None:
        return ""
    return str(text).strip()


def parse_base(value: object) -> Tuple[int | None, str | None]:
    """Parse a base from a form value (``"16"``, ``16``, ``Base.HEXADECIMAL``)."""
    supported = ", ".join(str(base) for base in SUPPORTED_BASES)
    if value is None:
        return None, "Base is required."
    if isinstance(value, int) and not isinstance(value, bool):
        base = int(value)
    else:
        raw = str(value).strip()
        if not raw:
            return None, "Base is required."
        try:
            base = int(raw)
        except ValueError:
            return None, "Base must be a number."
    if base not in DIGIT_ALPHABETS:
        return None, f"Base must be one of {supported}."
    return base, None


def validate(text: object, base: object) -> bool:
    """Return True when ``text`` is a non-empty digit string in ``base``.

    Surrounding whitespace is ignored. Unsupported bases never raise; they
    simply fail validation.
    """
    radix = _coerce_base(base)
    if radix is None:
        return False
    raw = _trimmed(text)
    if not raw:
        return False
    alphabet = DIGIT_ALPHABETS[radix]
    return all(char in alphabet for char in raw)


def _to_base(value: int, base: int) -> str:
    if value == 0:
        return "0"

    digits = []
    while value > 0:
        value, remainder = divmod(value, base)
        digits.append(DIGITS[remainder])
    return "".join(reversed(digits))


def convert_to_all_bases(
    text: object, base: object, *, limit: int = MAX_SAFE_INTEGER
) -> ConversionResult:
    """Parse ``text`` in ``base`` and render it in binary, octal, decimal and hex.

    Raises ``EmptyInputError`` or ``InvalidFormatError`` when the text does not
    validate, and ``InvalidValueError`` when the parsed value is negative or
    exceeds ``limit``.
    """
    raw = _trimmed(text)
    radix = _coerce_base(base)
    if not raw:
        raise EmptyInputError("Input is empty.", base=base)
    if radix is None:
        raise InvalidFormatError(f"Unsupported base: {base!r}", base=base)
    if not validate(raw, radix):
        logger.debug("Rejected %r for base %s", raw, radix)
        raise InvalidFormatError(
            f"Expected {BASE_NAMES[radix]} digits ({ALPHABET_LABELS[radix]}).",
            base=radix,
        )

    out_of_range = InvalidValueError(
        f"Value exceeds the safe integer limit ({limit}).", base=radix, text=raw
    )
    # Bound the digit count before int() so huge inputs never reach it.
    digits = raw.lstrip("0") or "0"
    if len(digits) > len(_to_base(max(limit, 0), radix)):
        logger.debug("Too many digits for %r in base %s", raw, radix)
        raise out_of_range

    try:
        value = int(digits, radix)
    except ValueError as exc:
        raise out_of_range from exc
    if value < 0 or value > limit:
        logger.debug("Value out of range for %r in base %s", raw, radix)
        raise out_of_range

    return ConversionResult(
        decimal=_to_base(value, 10),
        binary=_to_base(value, 2),
        octal=_to_base(value, 8),
        hexadecimal=_to_base(value, 16),
    )


def try_convert(
    value: object, base: object, *, limit: int = MAX_SAFE_INTEGER
) -> Tuple[ConversionResult | None, str | None]:
    """Like ``convert_to_all_bases`` but returns a user-facing message on failure."""
    radix, error = parse_base(base)
    if error or radix is None:
        return None, error

    try:
        return convert_to_all_bases(value, radix, limit=limit), None
    except EmptyInputError:
        return None, "Please enter a number"
    except InvalidFormatError:
        return None, f"Please enter a valid {BASE_NAMES[radix]} number"
    except InvalidValueError:
        return None, "Invalid input. Please check your number."
