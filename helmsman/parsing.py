"""
The end-to-end entry point: parse(prompt, registry) → Parsed.

    parsed = parse("do things well --force | grep ok", registry)
    parsed.resolution.definition   # the "do things well" Definition
    parsed.resolution.pipes        # ("grep ok",)
    parsed.outcome                 # Bound(...) or NeedsHelp(...)

An unmatched prompt yields outcome None; reporting "unknown command" is left
to the caller (see unknown() for a ready-made fault).
"""
from collections import namedtuple

from .binder import bind
from .faults import FaultCode, UnknownCommandError
from .resolver import resolve
from .utils import Unset


class Parsed(namedtuple("Parsed", ("resolution", "outcome"))):
    """
    Resolution plus binding outcome (None when nothing matched).
    """
    __slots__ = ()


def parse(prompt, registry, /, overrides=Unset):
    registry = tuple(registry)
    resolution = resolve(prompt, registry)
    if resolution.definition is None:
        return Parsed(resolution, None)
    return Parsed(resolution, bind(resolution.remainder, resolution.definition, overrides))


def unknown(resolution, /, **options):
    """
    Build an UnknownCommandError for an unmatched resolution.
    """
    return UnknownCommandError(
        "unknown command %r" % resolution.command,
        title="unknown command",
        code=FaultCode.UNKNOWN_COMMAND,
        hint="run 'help' to list the available commands",
        **options,
    )


__all__ = (
    "Parsed",
    "parse",
    "unknown",
)
