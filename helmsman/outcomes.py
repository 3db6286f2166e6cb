"""
Binding outcomes: the two-variant result of helmsman.bind().

- Bound: the command's arguments, ready for dispatch. A read-only mapping with
  an "options" entry (normalized flag name → value) and one entry per declared
  positional slot.
- NeedsHelp: binding failed; `reason` is the verbatim diagnostic for a help
  layer ("Missing required option. Showing Help:").

Neither variant is raised. Callers branch on the type:

    outcome = bind(remainder, definition)
    if isinstance(outcome, NeedsHelp):
        show_help(definition, outcome.reason)
    else:
        run(definition, outcome)

NeedsHelp.fault() turns a diagnostic into the matching CommandException so a
host can surface it with helmsman.faults.trigger().
"""
from collections.abc import Mapping
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .display import usage
from .faults import (
    FaultCode,
    MissingArgumentError,
    MissingOptionError,
    InvalidOptionError,
)

_faults = {
    FaultCode.MISSING_ARGUMENT: (MissingArgumentError, "missing argument"),
    FaultCode.MISSING_OPTION: (MissingOptionError, "missing option"),
    FaultCode.INVALID_OPTION: (InvalidOptionError, "invalid option"),
}


class Bound(Mapping):
    """
    Successfully bound arguments.
    """

    def __init__(self, values, /):
        values = dict(values)
        values.setdefault("options", {})
        self._values = MappingProxyType(values)

    @property
    def options(self):
        return self._values["options"]

    def __getitem__(self, key):
        return self._values[key]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def __repr__(self):
        return "bound(%s)" % ", ".join("%s=%r" % item for item in self._values.items())

    def __rich_repr__(self):
        yield from self._values.items()


class NeedsHelp:
    """
    A binding failure that should be answered with the command's help.
    """
    __slots__ = ("reason", "code", "definition", "flag")

    def __init__(self, reason, /, *, code, definition=None, flag=None):
        if not isinstance(reason, str):
            raise TypeError("NeedsHelp reason must be a string")
        if not isinstance(code, FaultCode):
            raise TypeError("NeedsHelp code must be a fault code")
        self.reason = reason
        self.code = code
        self.definition = definition
        self.flag = flag

    def fault(self, **options):
        """
        Build the CommandException matching this diagnostic.
        """
        exception, title = _faults.get(self.code, (MissingArgumentError, "needs help"))
        hint = "usage: %s" % usage(self.definition) if self.definition is not None else None
        return exception(
            self.reason,
            title=title,
            code=self.code,
            command=self.definition,
            flag=self.flag,
            hint=hint,
            **options,
        )

    def __eq__(self, other):
        if not isinstance(other, NeedsHelp):
            return NotImplemented
        return (self.reason, self.code) == (other.reason, other.code)

    def __hash__(self):
        return hash((NeedsHelp, self.reason, self.code))

    def __str__(self):
        return self.reason

    def __repr__(self):
        return "needs-help(%r, code=%s)" % (self.reason, self.code.name)

    def __rich__(self):
        if self.definition is None:
            return Text(self.reason)
        return Group(Text(self.reason), Text("  " + usage(self.definition), style="dim"))


__all__ = (
    "Bound",
    "NeedsHelp",
)
