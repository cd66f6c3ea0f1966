import dataclasses as dt

from decimal import Decimal
from enum import Enum
from typing import Any

from . import const

Payload = None | str | int | Decimal | bool


class InvalidArgument(TypeError):
    """
    Raised when an `OptionValue` is built from an unsupported type, or from an
    integer that neither fits in 64 signed nor 64 unsigned bits.
    """

    pass


class OptionKind(Enum):
    """
    The type an option expects, and the kind of value an `OptionValue` holds.
    """

    STRING = "string"
    SIGNED = "signed"
    UNSIGNED = "unsigned"
    REAL = "real"
    BOOLEAN = "boolean"
    NULLITY = "nullity"
    """No type constraint, the option is not registered."""
    ERROR = "error"
    """Sentinel for an invalid kind name, never assigned to an option."""

    @staticmethod
    def parse(name: str) -> "OptionKind":
        try:
            return OptionKind(name.lower())
        except ValueError:
            return OptionKind.ERROR


def _checkPayload(kind: OptionKind, value: Any) -> None:
    isInt = isinstance(value, int) and not isinstance(value, bool)

    match kind:
        case OptionKind.NULLITY:
            ok = value is None
        case OptionKind.STRING:
            ok = isinstance(value, str)
        case OptionKind.SIGNED:
            ok = isInt and const.INT64_MIN <= value <= const.INT64_MAX
        case OptionKind.UNSIGNED:
            ok = isInt and 0 <= value <= const.UINT64_MAX
        case OptionKind.REAL:
            ok = isinstance(value, Decimal)
        case OptionKind.BOOLEAN:
            ok = isinstance(value, bool)
        case _:
            ok = False

    if not ok:
        raise InvalidArgument(
            f"Cannot hold {type(value).__name__} value {value!r} as {kind.value}"
        )


@dt.dataclass(frozen=True)
class OptionValue:
    """
    An immutable value holding exactly one of null, text, a signed or unsigned
    64-bit integer, an extended precision real or a boolean.

    The `get*` accessors never raise: they return the held value when the kind
    matches and the supplied default otherwise.
    """

    kind: OptionKind = OptionKind.NULLITY
    value: Payload = None

    def __post_init__(self):
        _checkPayload(self.kind, self.value)

    @staticmethod
    def of(value: Any) -> "OptionValue":
        """
        Build a value from a native Python object.

        Integers become signed when they fit in 64 signed bits and unsigned
        when they only fit in 64 unsigned bits. Floats are widened to
        `Decimal` through their shortest representation.

        Raises:
            InvalidArgument: The type is not supported or the integer is out
                of range.
        """
        if value is None:
            return OptionValue.null()
        if isinstance(value, bool):
            return OptionValue.boolean(value)
        if isinstance(value, int):
            if const.INT64_MIN <= value <= const.INT64_MAX:
                return OptionValue.signed(value)
            return OptionValue.unsigned(value)
        if isinstance(value, (float, Decimal)):
            return OptionValue.real(value)
        if isinstance(value, str):
            return OptionValue.string(value)
        raise InvalidArgument(f"Unsupported option value type {type(value).__name__}")

    @staticmethod
    def null() -> "OptionValue":
        return OptionValue()

    @staticmethod
    def string(value: str) -> "OptionValue":
        return OptionValue(OptionKind.STRING, value)

    @staticmethod
    def signed(value: int) -> "OptionValue":
        return OptionValue(OptionKind.SIGNED, value)

    @staticmethod
    def unsigned(value: int) -> "OptionValue":
        return OptionValue(OptionKind.UNSIGNED, value)

    @staticmethod
    def real(value: float | Decimal) -> "OptionValue":
        if isinstance(value, float):
            value = Decimal(repr(value))
        return OptionValue(OptionKind.REAL, value)

    @staticmethod
    def boolean(value: bool) -> "OptionValue":
        return OptionValue(OptionKind.BOOLEAN, value)

    # --- Accessors ---------------------------------------------------------- #

    def getString(self, default: str = "") -> str:
        """
        Returns the text, or a textual form of the held value.

        Booleans render as "true"/"false", integers in plain decimal and reals
        with six fractional digits. Only a null value falls back to `default`.
        """
        match self.kind:
            case OptionKind.STRING:
                assert isinstance(self.value, str)
                return self.value
            case OptionKind.BOOLEAN:
                return "true" if self.value else "false"
            case OptionKind.SIGNED | OptionKind.UNSIGNED:
                return str(self.value)
            case OptionKind.REAL:
                return format(self.value, ".6f")
            case _:
                return default

    def getSigned(self, default: int = 0) -> int:
        if self.kind == OptionKind.SIGNED:
            assert isinstance(self.value, int)
            return self.value
        return default

    def getUnsigned(self, default: int = 0) -> int:
        if self.kind == OptionKind.UNSIGNED:
            assert isinstance(self.value, int)
            return self.value
        return default

    def getReal(self, default: Decimal = Decimal(0)) -> Decimal:
        if self.kind == OptionKind.REAL:
            assert isinstance(self.value, Decimal)
            return self.value
        return default

    def getBoolean(self, default: bool = False) -> bool:
        if self.kind == OptionKind.BOOLEAN:
            assert isinstance(self.value, bool)
            return self.value
        return default

    # --- Predicates --------------------------------------------------------- #

    def isNull(self) -> bool:
        return self.kind == OptionKind.NULLITY

    def isString(self) -> bool:
        return self.kind == OptionKind.STRING

    def isSigned(self) -> bool:
        return self.kind == OptionKind.SIGNED

    def isUnsigned(self) -> bool:
        return self.kind == OptionKind.UNSIGNED

    def isReal(self) -> bool:
        return self.kind == OptionKind.REAL

    def isBoolean(self) -> bool:
        return self.kind == OptionKind.BOOLEAN
