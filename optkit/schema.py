import json
import logging
import dataclasses as dt

from pathlib import Path
from typing import Any, Optional
from dataclasses_json import DataClassJsonMixin

from .value import OptionKind

_logger = logging.getLogger(__name__)

# --- Option Names ----------------------------------------------------------- #


class OptionNames:
    """
    The known options and the kind of value each one expects.
    """

    _table: dict[str, OptionKind]

    def __init__(self, table: Optional[dict[str, OptionKind]] = None):
        self._table = {}
        for name, kind in (table or {}).items():
            if not self.addOption(name, kind):
                raise ValueError(f"Invalid option '{name}' of kind {kind}")

    def getOptionType(self, name: str) -> OptionKind:
        """Returns the kind of `name`, `NULLITY` if it is not registered."""
        return self._table.get(name, OptionKind.NULLITY)

    def hasOption(self, name: str) -> bool:
        return self.getOptionType(name) != OptionKind.NULLITY

    def addOption(self, name: str, kind: OptionKind) -> bool:
        """
        Register a new option.

        Returns:
            False, leaving the table untouched, if `name` is empty, already
            registered, or `kind` is `ERROR`.
        """
        if not name or name in self._table or kind == OptionKind.ERROR:
            return False
        self._table[name] = kind
        return True

    def removeOption(self, name: str) -> bool:
        if name not in self._table:
            return False
        del self._table[name]
        return True

    def items(self) -> list[tuple[str, OptionKind]]:
        return list(self._table.items())


# --- Option Alias ----------------------------------------------------------- #


class OptionAlias:
    """
    Shorthands, conventionally one character, for option names.
    """

    _table: dict[str, str]

    def __init__(self, table: Optional[dict[str, str]] = None):
        self._table = {}
        for alias, name in (table or {}).items():
            if not self.addAlias(alias, name):
                raise ValueError(f"Invalid alias '{alias}'")

    def getOptionName(self, alias: str) -> str:
        """Returns the option `alias` stands for, or "" when it is unbound."""
        return self._table.get(alias, "")

    def hasAlias(self, alias: str) -> bool:
        return alias in self._table

    def addAlias(self, alias: str, name: str) -> bool:
        if not alias or alias in self._table:
            return False
        self._table[alias] = name
        return True

    def removeAlias(self, alias: str) -> bool:
        if alias not in self._table:
            return False
        del self._table[alias]
        return True

    def items(self) -> list[tuple[str, str]]:
        return list(self._table.items())


# --- Manifest --------------------------------------------------------------- #


def _loadToml(path: Path) -> Any:
    try:
        import tomllib

        with path.open("rb") as f:
            return tomllib.load(f)
    except ImportError:
        raise RuntimeError(
            "In order to read TOML files, you need to upgrade to Python3.11 or higher."
        )


@dt.dataclass
class Manifest(DataClassJsonMixin):
    """
    A schema stored in a JSON or TOML file.

    Example:
        {"options": {"name": "string", "help": "boolean"}, "alias": {"h": "help"}}
    """

    options: dict[str, str] = dt.field(default_factory=dict)
    """Option names mapped to lowercase kind names."""
    alias: dict[str, str] = dt.field(default_factory=dict)
    """Aliases mapped to option names."""
    path: str = dt.field(default="")
    """Path of the file the manifest was loaded from."""

    SUFFIXES = [".json", ".toml"]

    @staticmethod
    def tryLoad(path: Path) -> Optional["Manifest"]:
        """
        Try to load a manifest from `path`, or from `path` with one of the
        supported suffixes.

        Returns:
            The manifest, or None if no file was found.
        """
        candidates = [path] + [path.with_suffix(suffix) for suffix in Manifest.SUFFIXES]
        for candidate in candidates:
            if candidate.suffix not in Manifest.SUFFIXES or not candidate.is_file():
                continue

            _logger.debug(f"Loading manifest from '{candidate}'")
            if candidate.suffix == ".toml":
                data = _loadToml(candidate)
            else:
                with candidate.open("r") as f:
                    data = json.load(f)

            if not isinstance(data, dict):
                raise RuntimeError(f"Manifest '{candidate}' should be a dictionary")

            manifest = Manifest.from_dict(data)
            manifest.path = str(candidate)
            manifest.ensureValid()
            return manifest
        return None

    @staticmethod
    def load(path: Path) -> "Manifest":
        """
        Raises:
            RuntimeError: If no manifest file was found or it is invalid.
        """
        manifest = Manifest.tryLoad(path)
        if manifest is None:
            raise RuntimeError(f"Could not find manifest at '{path}'")
        return manifest

    def ensureValid(self) -> None:
        for name, kind in self.options.items():
            if OptionKind.parse(kind) == OptionKind.ERROR:
                raise RuntimeError(
                    f"Unknown kind '{kind}' for option '{name}' in {self.path or 'manifest'}"
                )

    def names(self) -> OptionNames:
        return OptionNames(
            {name: OptionKind.parse(kind) for name, kind in self.options.items()}
        )

    def aliases(self) -> OptionAlias:
        return OptionAlias(dict(self.alias))
