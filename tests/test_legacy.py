import pytest

from optkit import EqualsArgumentParser


def test_legacy_flags_and_args():
    parser = EqualsArgumentParser().parse(["run", "-f", "--flag", "--f", "---x", "-", "--"])
    assert parser.getArgs() == ["run", "--f", "---x", "-", "--"]
    assert parser.getNamedArg("-f") == "true"
    assert parser.getNamedArg("--flag") == "true"
    assert not parser.hasNamedArg("--f")


def test_legacy_named():
    parser = EqualsArgumentParser().parse(["a", "key=value", "eq=x=y", "key=other"])
    assert parser.getArgs() == ["a"]
    assert parser.getNamedArg("key") == "value"
    assert parser.getNamedArg("eq") == "x=y"


def test_legacy_named_is_sticky():
    parser = EqualsArgumentParser().parse(["k=v", "plain", "-f"])
    assert parser.getArgs() == []
    assert parser.getNamedArg("plain") == "plain"
    assert parser.getNamedArg("-f") == "-f"


def test_legacy_stops_on_empty():
    parser = EqualsArgumentParser().parse(["k=v", "=bad", "after=1"])
    assert parser.getNamedArg("k") == "v"
    assert not parser.hasNamedArg("after")

    parser = EqualsArgumentParser().parse(["k=", "after=1"])
    assert not parser.hasNamedArg("k")
    assert not parser.hasNamedArg("after")


def test_legacy_argv():
    parser = EqualsArgumentParser().parseArgv(["prog", "a", "n=1"])
    assert parser.getArgs() == ["a"]
    assert parser.getArg(0) == "a"
    assert parser.getArg(5) == ""
    assert parser.getNamedArg("missing") == ""


def test_legacy_int():
    parser = EqualsArgumentParser().parse(["n=-42", "s=abc", "big=9223372036854775808"])
    assert parser.getNamedArgInt("n") == -42
    assert parser.getNamedArgInt("s", 7) == 7
    assert parser.getNamedArgInt("missing", 0) == 0
    assert parser.getNamedArgInt("big", 1) == 1

    with pytest.raises(ValueError):
        parser.getNamedArgInt("s")

    with pytest.raises(OverflowError):
        parser.getNamedArgInt("big")
