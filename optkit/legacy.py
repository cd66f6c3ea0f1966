import re
import logging

from typing import Iterable, Optional

from . import validator

_logger = logging.getLogger(__name__)

FLAG_PATTERN = re.compile(r"^-[^-]$|^--[^-].+$")
INT_PATTERN = re.compile(r"-?(0|[1-9][0-9]*)")


class EqualsArgumentParser:
    """
    The untyped `key=value` parser.

    Tokens before the first `key=value` token are flags (`-f`, `--flag`),
    stored with the value "true" under the raw token, or positional
    arguments. From the first `key=value` token on, every token is a named
    argument; a token without `=` is then both key and value. An empty key or
    value stops the parse. The first value given for a key wins.
    """

    _args: list[str]
    _named: dict[str, str]

    def __init__(self):
        self._args = []
        self._named = {}

    def parse(self, tokens: Iterable[str]) -> "EqualsArgumentParser":
        named = False
        for token in tokens:
            if "=" in token:
                named = True

            if named:
                key, sep, value = token.partition("=")
                if not sep:
                    value = token
                if not key or not value:
                    _logger.debug(f"Stopping at '{token}', empty key or value")
                    break
                self._named.setdefault(key, value)
            elif FLAG_PATTERN.fullmatch(token):
                self._named.setdefault(token, "true")
            else:
                self._args.append(token)

        return self

    def parseArgv(self, argv: list[str]) -> "EqualsArgumentParser":
        """Parses a raw argument vector, skipping the program name at index 0."""
        return self.parse(argv[1:])

    def getArgs(self) -> list[str]:
        return list(self._args)

    def getArg(self, i: int) -> str:
        if 0 <= i < len(self._args):
            return self._args[i]
        return ""

    def getNamedArg(self, key: str) -> str:
        return self._named.get(key, "")

    def hasNamedArg(self, key: str) -> bool:
        return key in self._named

    def getNamedArgInt(self, key: str, default: Optional[int] = None) -> int:
        """
        Returns the named argument `key` as an integer.

        Raises:
            ValueError: If the value is missing or not a number and no
                `default` was given.
            OverflowError: If the number does not fit in 64 signed bits and
                no `default` was given.
        """
        value = self.getNamedArg(key)
        try:
            if INT_PATTERN.fullmatch(value) is None:
                raise ValueError(f"Argument '{key}' is not a number")
            return validator.parseSigned(value)
        except (ValueError, OverflowError):
            if default is not None:
                return default
            raise
