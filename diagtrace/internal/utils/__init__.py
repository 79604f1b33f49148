from typing import Any
from typing import Dict
from typing import Sequence


class ArgumentError(Exception):
    """
    This is raised when an argument lookup, either by position or by keyword, is
    not found.
    """


def get_argument_value(
    args: Sequence[Any],
    kwargs: Dict[str, Any],
    pos: int,
    kw: str,
) -> Any:
    """
    Return the value of a wrapped function argument, passed either by position or by keyword.

    Keyword arguments are prioritized, followed by the positional argument.

    :raises ArgumentError: when the argument was passed neither way.
    """
    try:
        return kwargs[kw]
    except KeyError:
        try:
            return args[pos]
        except IndexError:
            raise ArgumentError("%s (at position %d)" % (kw, pos))


def unwrap(obj: Any, attr: str) -> None:
    """Restore ``obj.attr`` to the function it wrapped, if it is wrapped."""
    f = getattr(obj, attr, None)
    if hasattr(f, "__wrapped__"):
        setattr(obj, attr, f.__wrapped__)
