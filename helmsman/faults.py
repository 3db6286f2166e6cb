"""
Helmsman faults (errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue. Codes are
  grouped by domain so that logs and searches stay predictable.
- CommandException / CommandWarning: carry a message plus keyword options and
  know how to render themselves through rich.
- DefinitionError: problems in the command table itself (raised eagerly, at
  registration time, by the host or by verify()).
- trigger(): the single entry point to surface a fault, honouring the
  shell/fancy/colorful runtime options.
- getdoc(): optional per-code documentation lookup from the host application.

Resolution and binding never raise: they return NeedsHelp values (see
helmsman.outcomes). A host that wants the classic "print or raise" behaviour
converts those values with NeedsHelp.fault() and hands them to trigger().

Integration
- In shell mode faults are printed to stderr through a rich Console.
- Otherwise exceptions are raised and warnings go through warnings.warn.
- The host may define __styles__, __codes__, __docs__ and __prog__ in
  __main__ to restyle, relabel, document and brand the output.
"""
import copy
import inspect
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - routing (2110x)
      • UNKNOWN_COMMAND
    - binding (2111x)
      • MISSING_ARGUMENT, MISSING_OPTION, INVALID_OPTION
    - definitions (2112x)
      • DUPLICATE_NAME, ALIAS_COLLISION
    - warnings (2211x)
      • MULTIPLE_CATCHALL
    """
    # --- routing errors ---
    UNKNOWN_COMMAND   = 21101

    # --- binding errors ---
    MISSING_ARGUMENT  = 21111
    MISSING_OPTION    = 21112
    INVALID_OPTION    = 21113

    # --- definition errors ---
    DUPLICATE_NAME    = 21121
    ALIAS_COLLISION   = 21122

    # --- warnings ---
    MULTIPLE_CATCHALL = 22111

    def normalize(self):
        """
        return a host-normalized label for this code.

        a __codes__ mapping in __main__ may relabel codes; otherwise the
        numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _styles(defaults):
    return defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))


def _render(fault, styles, kind):
    """
    shared rich layout for exceptions and warnings: header, message and hint.
    """
    colorful = fault.options.get("colorful", False)
    fancy = fault.options.get("fancy", False)

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment if colorful else Text(fragment.plain)
        return Text(str(fragment), styler(style))

    main = __import__("__main__")
    command = fault.options.get("command")
    prog = getattr(main, "__prog__", None) or getattr(command, "name", None) or "helmsman"

    header = [Text("[ "), text(prog, "prog-name")]
    if (code := fault.options.get("code")) is not None:
        header += [Text(" — "), text(code.normalize(), "code")]
    header += [Text(" | "), text(str(fault.options.get("title", kind)).title(), kind + "-title"), Text(" ]")]
    header = Text.assemble(*header)

    message = text(fault.message if fault.message is not Unset else "", kind + "-message")
    parts = [message]
    if hint := fault.options.get("hint"):
        parts.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    if fancy:
        return Panel(Group(*parts), title=header, title_align="left")
    return Group(header, *parts)


class CommandException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, _styles({
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # cyan fault code
            "error-title": "bold #FF4DA6",  # pink title
            "error-message": "#C8C8D0",  # light gray message
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }), "error")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownCommandError(CommandException): ...
class MissingArgumentError(CommandException): ...
class MissingOptionError(CommandException): ...
class InvalidOptionError(CommandException): ...


class CommandWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, _styles({
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",
            "warning-message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        }), "warning")

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MultipleCatchAllWarning(CommandWarning): ...


class DefinitionError(Exception):
    """
    the command table is inconsistent (raised at registration, never while parsing).
    """

    def __init__(self, message, /, *, code):
        super().__init__(message)
        self.code = code


class DuplicateNameError(DefinitionError): ...
class AliasCollisionError(DefinitionError): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__ before triggering.
    - shell=True prints through the stderr console; otherwise errors raise and
      warnings are emitted with warnings.warn.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation for a fault code, read from __main__.__docs__.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "FaultCode",
    "CommandException",
    "UnknownCommandError",
    "MissingArgumentError",
    "MissingOptionError",
    "InvalidOptionError",
    "CommandWarning",
    "MultipleCatchAllWarning",
    "DefinitionError",
    "DuplicateNameError",
    "AliasCollisionError",
    "trigger",
    "getdoc",
)
