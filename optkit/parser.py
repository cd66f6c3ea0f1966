import re
import logging
import dataclasses as dt

from enum import Enum
from typing import Callable, Iterable, NamedTuple, Optional

from . import validator
from .schema import Manifest, OptionAlias, OptionNames
from .value import OptionKind, OptionValue

_logger = logging.getLogger(__name__)

OPTION_PATTERN = re.compile(r"--[^-].*", re.DOTALL)
ALIAS_PATTERN = re.compile(r"-[^-].*", re.DOTALL)


class ConversionError(RuntimeError):
    """
    A string accepted by the validator of a kind could not be converted to
    that kind. This is a bug, never a user input error.
    """

    pass


# --- Conversions ------------------------------------------------------------ #


@dt.dataclass(frozen=True)
class Conversion:
    validate: Callable[[str], bool]
    convert: Callable[[str], OptionValue]


def _acceptAny(s: str) -> bool:
    return True


CONVERSIONS: dict[OptionKind, Conversion] = {
    OptionKind.STRING: Conversion(_acceptAny, OptionValue.string),
    OptionKind.SIGNED: Conversion(
        validator.isValidSigned,
        lambda s: OptionValue.signed(validator.parseSigned(s)),
    ),
    OptionKind.UNSIGNED: Conversion(
        validator.isValidUnsigned,
        lambda s: OptionValue.unsigned(validator.parseUnsigned(s)),
    ),
    OptionKind.REAL: Conversion(
        validator.isValidReal,
        lambda s: OptionValue.real(validator.parseReal(s)),
    ),
    OptionKind.BOOLEAN: Conversion(
        validator.isValidBoolean,
        lambda s: OptionValue.boolean(s.lower() == "true"),
    ),
}


def isValidValue(value: str, kind: OptionKind) -> bool:
    """Checks if `value` can be converted to `kind`, always False for `NULLITY` and `ERROR`."""
    conversion = CONVERSIONS.get(kind)
    return conversion is not None and conversion.validate(value)


def convertValue(value: str, kind: OptionKind) -> OptionValue:
    """
    Converts a validated string to an `OptionValue` of `kind`.

    Raises:
        ConversionError: If `kind` has no conversion or the conversion failed.
    """
    conversion = CONVERSIONS.get(kind)
    if conversion is None:
        raise ConversionError(f"No conversion to {kind.value}")

    try:
        return conversion.convert(value)
    except (ValueError, ArithmeticError) as e:
        raise ConversionError(f"Could not convert '{value}' to {kind.value}: {e}") from e


# --- Parser ----------------------------------------------------------------- #


class InvalidType(NamedTuple):
    value: str
    expected: OptionKind


class State(Enum):
    EXPECTING_TOKEN = 0
    EXPECTING_OPTION_VALUE = 1


class ArgumentParser:
    """
    Splits a sequence of tokens into positional arguments and typed options.

    `--name value` sets the option `name`, `-a value` sets the option the alias
    `a` stands for, and options declared `BOOLEAN` are flags that take no
    value. Everything else is a positional argument.

    Without `OptionNames` the parser is untyped: any option name is accepted
    and its value is kept as text.

    Malformed input never raises, it is recorded in one of three buckets:

    - invalid options: unknown option names, and second values for an option
      that is already set.
    - invalid option types: values the declared kind rejects.
    - invalid alias: values given to an alias that is not bound.

    Calling `parse` again adds to the results of the previous calls.
    """

    _args: list[str]
    _options: dict[str, OptionValue]
    _invalidOptions: dict[str, list[str]]
    _invalidOptionTypes: dict[str, list[InvalidType]]
    _invalidAlias: dict[str, list[str]]
    _names: OptionNames
    _alias: OptionAlias
    _untyped: bool

    def __init__(
        self,
        names: Optional[OptionNames] = None,
        alias: Optional[OptionAlias] = None,
    ):
        self._args = []
        self._options = {}
        self._invalidOptions = {}
        self._invalidOptionTypes = {}
        self._invalidAlias = {}
        self._untyped = names is None
        self._names = names if names is not None else OptionNames()
        self._alias = alias if alias is not None else OptionAlias()

    @staticmethod
    def fromManifest(manifest: Manifest) -> "ArgumentParser":
        return ArgumentParser(manifest.names(), manifest.aliases())

    @property
    def untyped(self) -> bool:
        return self._untyped

    def parse(self, tokens: Iterable[str]) -> "ArgumentParser":
        """
        Parses `tokens`, which must not start with the program name.

        An option or alias at the very end of `tokens` has no value and is
        dropped.
        """
        state = State.EXPECTING_TOKEN
        name = ""
        alias = ""

        for token in tokens:
            if state == State.EXPECTING_OPTION_VALUE:
                # The value is taken as is, even when it looks like an option.
                self._acceptValue(name, alias, token)
                name, alias = "", ""
                state = State.EXPECTING_TOKEN
                continue

            if OPTION_PATTERN.fullmatch(token):
                name, alias = token[2:], ""
            elif ALIAS_PATTERN.fullmatch(token):
                alias = token[1:]
                name = self._alias.getOptionName(alias)
            else:
                self._addArgument(token)
                continue

            if (
                not self._untyped
                and self._names.getOptionType(name) == OptionKind.BOOLEAN
            ):
                self._addOption(name, OptionValue.boolean(True), "true")
                name, alias = "", ""
                continue

            state = State.EXPECTING_OPTION_VALUE

        if state == State.EXPECTING_OPTION_VALUE:
            _logger.debug(f"Dropping '{name or alias}', no value follows it")

        return self

    def parseArgv(self, argv: list[str]) -> "ArgumentParser":
        """Parses a raw argument vector, skipping the program name at index 0."""
        return self.parse(argv[1:])

    def _acceptValue(self, name: str, alias: str, value: str):
        if not name:
            self._addInvalidAlias(alias, value)
            return

        if self._untyped:
            self._addOption(name, OptionValue.string(value), value)
            return

        kind = self._names.getOptionType(name)
        if kind == OptionKind.NULLITY:
            self._addInvalidOption(name, value)
        elif not isValidValue(value, kind):
            self._addInvalidOptionType(name, value, kind)
        else:
            self._addOption(name, convertValue(value, kind), value)

    def _addArgument(self, value: str):
        self._args.append(value)

    def _addOption(self, name: str, value: OptionValue, raw: str):
        if name in self._options:
            _logger.debug(f"Option '{name}' is already set")
            self._addInvalidOption(name, raw)
            return
        _logger.debug(f"Setting option '{name}' to {value.getString()!r}")
        self._options[name] = value

    def _addInvalidOption(self, name: str, value: str):
        _logger.debug(f"Invalid option '{name}' with value '{value}'")
        self._invalidOptions.setdefault(name, []).append(value)

    def _addInvalidOptionType(self, name: str, value: str, kind: OptionKind):
        _logger.debug(f"Option '{name}' expects {kind.value}, got '{value}'")
        self._invalidOptionTypes.setdefault(name, []).append(InvalidType(value, kind))

    def _addInvalidAlias(self, alias: str, value: str):
        _logger.debug(f"Unbound alias '{alias}' with value '{value}'")
        self._invalidAlias.setdefault(alias, []).append(value)

    # --- Results ------------------------------------------------------------ #

    def getArgs(self) -> list[str]:
        return list(self._args)

    def getArg(self, i: int) -> str:
        """Returns the `i`th positional argument, or "" when out of range."""
        if 0 <= i < len(self._args):
            return self._args[i]
        return ""

    def getOption(
        self, name: str, default: Optional[OptionValue] = None
    ) -> OptionValue:
        if name in self._options:
            return self._options[name]
        return default if default is not None else OptionValue()

    def hasOption(self, name: str) -> bool:
        return name in self._options

    def getOptions(self) -> dict[str, OptionValue]:
        return dict(self._options)

    def getInvalidOptions(self) -> dict[str, list[str]]:
        return {k: list(v) for k, v in self._invalidOptions.items()}

    def getInvalidOptionTypes(self) -> dict[str, list[InvalidType]]:
        return {k: list(v) for k, v in self._invalidOptionTypes.items()}

    def getInvalidAlias(self) -> dict[str, list[str]]:
        return {k: list(v) for k, v in self._invalidAlias.items()}

    def hasErrors(self) -> bool:
        return (
            len(self._invalidOptions) > 0
            or len(self._invalidOptionTypes) > 0
            or len(self._invalidAlias) > 0
        )
