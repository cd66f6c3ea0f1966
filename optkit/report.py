import dataclasses as dt

from dataclasses_json import DataClassJsonMixin

from . import vt100
from .parser import ArgumentParser


@dt.dataclass
class OptionEntry(DataClassJsonMixin):
    kind: str
    value: str


@dt.dataclass
class TypeMismatch(DataClassJsonMixin):
    value: str
    expected: str


@dt.dataclass
class Report(DataClassJsonMixin):
    """
    A snapshot of the results of an `ArgumentParser`, for printing or dumping
    as JSON.
    """

    args: list[str] = dt.field(default_factory=list)
    options: dict[str, OptionEntry] = dt.field(default_factory=dict)
    invalidOptions: dict[str, list[str]] = dt.field(default_factory=dict)
    invalidOptionTypes: dict[str, list[TypeMismatch]] = dt.field(default_factory=dict)
    invalidAlias: dict[str, list[str]] = dt.field(default_factory=dict)

    @staticmethod
    def fromParser(parser: ArgumentParser) -> "Report":
        return Report(
            args=parser.getArgs(),
            options={
                name: OptionEntry(value.kind.value, value.getString())
                for name, value in parser.getOptions().items()
            },
            invalidOptions=parser.getInvalidOptions(),
            invalidOptionTypes={
                name: [TypeMismatch(t.value, t.expected.value) for t in types]
                for name, types in parser.getInvalidOptionTypes().items()
            },
            invalidAlias=parser.getInvalidAlias(),
        )

    def hasErrors(self) -> bool:
        return (
            len(self.invalidOptions) > 0
            or len(self.invalidOptionTypes) > 0
            or len(self.invalidAlias) > 0
        )

    def warnings(self) -> list[str]:
        res = []
        for name, values in self.invalidOptions.items():
            for value in values:
                res.append(f"Unknown or repeated option '--{name}' with value '{value}'")
        for name, mismatches in self.invalidOptionTypes.items():
            for m in mismatches:
                res.append(f"Option '--{name}' expects {m.expected} but got '{m.value}'")
        for alias, values in self.invalidAlias.items():
            for value in values:
                res.append(f"Unbound alias '-{alias}' with value '{value}'")
        return res

    def print(self):
        vt100.subtitle("Arguments")
        for i, arg in enumerate(self.args):
            vt100.entry(str(i), arg)
        print()

        vt100.subtitle("Options")
        for name, option in self.options.items():
            vt100.entry(name, option.value, option.kind)
        print()

        for warning in self.warnings():
            vt100.warning(warning)
