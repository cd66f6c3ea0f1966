import os
import sys
import logging

from pathlib import Path
from typing import Optional

from . import const, strutil, validator, vt100
from .legacy import EqualsArgumentParser
from .parser import (
    ArgumentParser,
    ConversionError,
    InvalidType,
    convertValue,
    isValidValue,
)
from .report import Report
from .schema import Manifest, OptionAlias, OptionNames
from .value import InvalidArgument, OptionKind, OptionValue

__all__ = [
    "ArgumentParser",
    "ConversionError",
    "EqualsArgumentParser",
    "InvalidArgument",
    "InvalidType",
    "Manifest",
    "OptionAlias",
    "OptionKind",
    "OptionNames",
    "OptionValue",
    "Report",
    "convertValue",
    "isValidValue",
    "strutil",
    "validator",
]


class logger:
    @staticmethod
    def setup(verbose: bool):
        if verbose:
            logging.basicConfig(
                level=logging.DEBUG,
                format=f"{vt100.CYAN}%(asctime)s{vt100.RESET} {vt100.YELLOW}%(levelname)s{vt100.RESET} %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        else:
            logging.basicConfig(
                level=logging.WARNING,
                format="%(levelname)s %(name)s: %(message)s",
            )


# --- Command line ----------------------------------------------------------- #

CLI_OPTIONS: dict[str, tuple[Optional[str], OptionKind, str]] = {
    "schema": ("s", OptionKind.STRING, "Schema manifest (.json or .toml) to parse against"),
    "line": ("l", OptionKind.STRING, "Space separated tokens to parse"),
    "json": ("j", OptionKind.BOOLEAN, "Print the results as JSON"),
    "verbose": ("v", OptionKind.BOOLEAN, "Enable verbose logging"),
    "help": ("h", OptionKind.BOOLEAN, "Show this help message"),
    "version": ("V", OptionKind.BOOLEAN, "Show current version"),
}


def cliNames() -> OptionNames:
    return OptionNames({name: kind for name, (_, kind, _) in CLI_OPTIONS.items()})


def cliAlias() -> OptionAlias:
    return OptionAlias(
        {short: name for name, (short, _, _) in CLI_OPTIONS.items() if short}
    )


def cliParser() -> ArgumentParser:
    return ArgumentParser(cliNames(), cliAlias())


def cliTokens(line: str, args: list[str]) -> list[str]:
    """Tokens to parse: `line` split at spaces, then `args`, without empty tokens."""
    return [token for token in strutil.split(line) + args if token]


def usage():
    flags = " ".join(
        f"[-{short}|--{name}]" for name, (short, _, _) in CLI_OPTIONS.items()
    )
    print(f"Usage: {const.ARGV0} {flags} [tokens...]", end="\n\n")


def help():
    vt100.title(const.ARGV0)
    print()

    vt100.subtitle("Description")
    print(vt100.indent(const.DESCRIPTION))
    print()

    vt100.subtitle("Options")
    shorts = {name: alias for alias, name in cliAlias().items()}
    for name, kind in cliNames().items():
        flag = f"-{shorts[name]}, --{name}" if name in shorts else f"--{name}"
        if kind != OptionKind.BOOLEAN:
            flag += f" <{kind.value}>"
        print(vt100.indent(f"{flag} {CLI_OPTIONS[name][2]}"))
    print()


def main(argv: Optional[list[str]] = None) -> int:
    extra = os.environ.get(const.EXTRA_ARGS_ENV, None)
    args = (
        [const.ARGV0]
        + (strutil.split(extra) if extra else [])
        + (sys.argv[1:] if argv is None else argv)
    )

    try:
        cli = cliParser().parseArgv(args)
        if cli.hasErrors():
            for warning in Report.fromParser(cli).warnings():
                vt100.warning(warning)
            print()
            usage()
            return 1

        logger.setup(cli.getOption("verbose").getBoolean())

        if cli.getOption("help").getBoolean():
            help()
            return 0

        if cli.getOption("version").getBoolean():
            print(f"optkit v{const.VERSION_STR}")
            return 0

        schema = cli.getOption("schema").getString()
        if schema:
            parser = ArgumentParser.fromManifest(Manifest.load(Path(schema)))
        else:
            parser = ArgumentParser()

        line = cli.getOption("line").getString()
        tokens = cliTokens(line, cli.getArgs())
        report = Report.fromParser(parser.parse(tokens))

        if cli.getOption("json").getBoolean():
            print(report.to_json(indent=2))
        else:
            report.print()

        return 1 if report.hasErrors() else 0

    except RuntimeError as e:
        logging.exception(e)
        vt100.error(str(e))
        usage()
        return 1

    except KeyboardInterrupt:
        print()
        return 1
