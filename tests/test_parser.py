import pytest

from decimal import Decimal
from optkit import (
    ArgumentParser,
    ConversionError,
    InvalidType,
    OptionAlias,
    OptionKind,
    OptionNames,
    OptionValue,
    convertValue,
    isValidValue,
    strutil,
)


def _names() -> OptionNames:
    return OptionNames(
        {
            "value": OptionKind.UNSIGNED,
            "invalid": OptionKind.UNSIGNED,
            "help": OptionKind.BOOLEAN,
            "name": OptionKind.STRING,
            "type": OptionKind.SIGNED,
            "decimal": OptionKind.REAL,
        }
    )


def _assertScenario(parser: ArgumentParser):
    assert parser.getOption("value").getUnsigned() == 4321
    assert parser.getOption("value").isUnsigned()
    assert parser.getOption("help").getBoolean() is True
    assert parser.getOption("name").getString() == "test"
    assert parser.getOption("type").getSigned() == -500
    assert parser.getOption("decimal").getReal() == Decimal("0.25")
    assert parser.getArgs() == ["help", "this", "decimal", "list"]
    assert parser.getInvalidOptions() == {"name": ["faster"], "post": ["poster"]}
    assert parser.getInvalidOptionTypes() == {
        "invalid": [InvalidType("0.03", OptionKind.UNSIGNED)]
    }
    assert parser.getInvalidAlias() == {"n": ["faster"]}


# --- Typed ------------------------------------------------------------------ #


def test_parse_typed():
    parser = ArgumentParser(_names(), OptionAlias())
    parser.parse(
        strutil.split(
            "help this --value 4321 --help --name test --invalid 0.03 --type -500 "
            "decimal --decimal 0.25 --name faster --post poster list -n faster"
        )
    )
    _assertScenario(parser)


def test_parse_typed_alias():
    parser = ArgumentParser(_names(), OptionAlias({"?": "help", "t": "type"}))
    parser.parse(
        strutil.split(
            "help this --value 4321 -? --name test --invalid 0.03 -t -500 "
            "decimal --decimal 0.25 --name faster --post poster list -n faster"
        )
    )
    _assertScenario(parser)


def test_parse_typed_invalid_type_is_a_tuple():
    parser = ArgumentParser(_names()).parse(["--type", "abc"])
    (mismatch,) = parser.getInvalidOptionTypes()["type"]
    assert mismatch == ("abc", OptionKind.SIGNED)
    assert mismatch.value == "abc"
    assert mismatch.expected == OptionKind.SIGNED
    assert not parser.hasOption("type")


def test_parse_flag_does_not_consume():
    parser = ArgumentParser(_names()).parse(["--help", "file"])
    assert parser.getOption("help").getBoolean() is True
    assert parser.getArgs() == ["file"]


def test_parse_repeated_flag():
    parser = ArgumentParser(_names()).parse(["--help", "--help"])
    assert parser.getOption("help").getBoolean() is True
    assert parser.getInvalidOptions() == {"help": ["true"]}


def test_parse_value_looks_like_option():
    parser = ArgumentParser(_names()).parse(["--name", "--value", "12"])
    assert parser.getOption("name").getString() == "--value"
    assert not parser.hasOption("value")
    assert parser.getArgs() == ["12"]


def test_parse_unbound_alias_consumes_value():
    parser = ArgumentParser(_names()).parse(["-x", "--help", "rest"])
    assert parser.getInvalidAlias() == {"x": ["--help"]}
    assert not parser.hasOption("help")
    assert parser.getArgs() == ["rest"]


def test_parse_alias_to_unknown_option():
    parser = ArgumentParser(_names(), OptionAlias({"o": "output"}))
    parser.parse(["-o", "out.txt"])
    assert parser.getInvalidOptions() == {"output": ["out.txt"]}
    assert parser.getInvalidAlias() == {}


def test_parse_triple_dash_is_positional():
    parser = ArgumentParser(_names()).parse(["---x", "--", "-", "--value", "1"])
    assert parser.getArgs() == ["---x", "--", "-"]
    assert parser.getOption("value").getUnsigned() == 1


def test_parse_dangling_option_is_dropped():
    parser = ArgumentParser(_names()).parse(["a", "--name"])
    assert parser.getArgs() == ["a"]
    assert not parser.hasOption("name")
    assert not parser.hasErrors()


def test_parse_real_exponent():
    parser = ArgumentParser(_names()).parse(["--decimal", "-1.5e3"])
    assert parser.getOption("decimal").getReal() == Decimal("-1500")
    assert parser.getOption("decimal").getString() == "-1500.000000"


def test_parse_accumulates():
    parser = ArgumentParser(_names())
    parser.parse(["one", "--name", "first"])
    parser.parse(["two", "--name", "second", "--value", "3"])
    assert parser.getArgs() == ["one", "two"]
    assert parser.getOption("name").getString() == "first"
    assert parser.getOption("value").getUnsigned() == 3
    assert parser.getInvalidOptions() == {"name": ["second"]}


def test_parse_argv_skips_program_name():
    parser = ArgumentParser(_names()).parseArgv(["prog", "file", "--help"])
    assert parser.getArgs() == ["file"]
    assert parser.hasOption("help")


def test_parse_no_errors():
    parser = ArgumentParser(_names()).parse(["--value", "7", "x"])
    assert not parser.hasErrors()


# --- Untyped ---------------------------------------------------------------- #


def test_parse_untyped():
    parser = ArgumentParser()
    parser.parse(
        strutil.split("help this --value 4321 -v just-fit -v test --as--s test as--d")
    )
    assert parser.untyped
    assert parser.getOption("value").getString() == "4321"
    assert parser.getOption("value").isString()
    assert parser.getOption("as--s").getString() == "test"
    assert parser.getArgs() == ["help", "this", "as--d"]
    assert parser.getInvalidAlias() == {"v": ["just-fit", "test"]}
    assert parser.getInvalidOptions() == {}


def test_parse_untyped_duplicate():
    parser = ArgumentParser().parse(["--k", "1", "--k", "2"])
    assert parser.getOption("k").getString() == "1"
    assert parser.getInvalidOptions() == {"k": ["2"]}


def test_parse_untyped_alias():
    parser = ArgumentParser(alias=OptionAlias({"o": "output"}))
    parser.parse(["-o", "out.txt"])
    assert parser.getOption("output").getString() == "out.txt"


# --- Results ---------------------------------------------------------------- #


def test_get_arg():
    parser = ArgumentParser().parse(["a", "b"])
    assert parser.getArg(0) == "a"
    assert parser.getArg(1) == "b"
    assert parser.getArg(2) == ""
    assert parser.getArg(-1) == ""


def test_get_option_default():
    parser = ArgumentParser()
    assert parser.getOption("missing").isNull()
    assert parser.getOption("missing", OptionValue.of(5)).getSigned() == 5


def test_results_are_copies():
    parser = ArgumentParser().parse(["a", "-x", "1"])
    parser.getArgs().append("b")
    parser.getInvalidAlias()["x"].append("2")
    assert parser.getArgs() == ["a"]
    assert parser.getInvalidAlias() == {"x": ["1"]}


# --- Conversions ------------------------------------------------------------ #


def test_is_valid_value():
    assert isValidValue("anything", OptionKind.STRING)
    assert isValidValue("-1", OptionKind.SIGNED)
    assert not isValidValue("-1", OptionKind.UNSIGNED)
    assert isValidValue("TRUE", OptionKind.BOOLEAN)
    assert not isValidValue("falſe", OptionKind.BOOLEAN)
    assert not isValidValue("x", OptionKind.NULLITY)
    assert not isValidValue("x", OptionKind.ERROR)


def test_convert_value():
    assert convertValue("-12", OptionKind.SIGNED) == OptionValue.signed(-12)
    assert convertValue("+12", OptionKind.UNSIGNED) == OptionValue.unsigned(12)
    assert convertValue("text", OptionKind.STRING) == OptionValue.string("text")
    assert convertValue("0.5", OptionKind.REAL).getReal() == Decimal("0.5")
    assert convertValue("TRUE", OptionKind.BOOLEAN).getBoolean() is True
    assert convertValue("false", OptionKind.BOOLEAN).getBoolean(True) is False


def test_convert_value_mismatch():
    with pytest.raises(ConversionError):
        convertValue("abc", OptionKind.SIGNED)

    with pytest.raises(ConversionError):
        convertValue("1e5000", OptionKind.REAL)

    with pytest.raises(ConversionError):
        convertValue("1", OptionKind.NULLITY)
