from typing import Sequence, TypeVar, overload

T = TypeVar("T")


class StrUtilOutOfRange(IndexError):
    pass


def toArray(s: str) -> list[str]:
    """Split a string into its characters, `toString(toArray(s)) == s`."""
    return list(s)


def toString(chars: Sequence[str]) -> str:
    return "".join(chars)


@overload
def slice(seq: str, beg: int, end: int) -> str: ...


@overload
def slice(seq: list[T], beg: int, end: int) -> list[T]: ...


def slice(seq, beg, end):
    """
    Cut a bounded range out of a string or a list.

    Both bounds are inclusive positions inside the sequence.

    Args:
        seq: The string or list to slice.
        beg: The start position.
        end: The end position.

    Returns:
        beg < end: the elements from `beg` up to and including `end`.
        beg > end: every element from `beg` onwards.
        beg == end: every element up to and including `end`.

    Raises:
        StrUtilOutOfRange: If `beg` or `end` lies outside the sequence.
    """
    size = len(seq)
    if beg < 0 or end < 0 or beg >= size or end >= size:
        raise StrUtilOutOfRange(
            f"Slice [{beg}, {end}] is out of range for a sequence of length {size}"
        )

    if beg < end:
        return seq[beg : end + 1]
    elif beg > end:
        return seq[beg:]
    else:
        return seq[: end + 1]


def split(s: str, delim: str = " ") -> list[str]:
    """
    Split `s` at every occurrence of `delim`.

    Empty fields are kept, so `split(",a,,b,", ",")` is `["", "a", "", "b", ""]`
    and `split("")` is `[""]`. An empty delimiter splits into characters.
    """
    if delim == "":
        return toArray(s)
    return s.split(delim)


def appendAll(parts: Sequence[str], glue: str = "") -> str:
    return glue.join(parts)
