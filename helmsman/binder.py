"""
Helmsman binder: turn a command's argument text into bound arguments.

bind(remainder, definition, overrides=Unset) returns either
- Bound: {"options": {...}, <slot>: value, ...}, or
- NeedsHelp: one of
  • "Missing required argument. Showing Help:"
  • "Missing required option. Showing Help:"
  • "Invalid option: '<flag>'. Showing Help:"

Steps
1. tokenize + parseflags with the definition's type hints.
2. positional slots, in declaration order. An empty required slot stops
   binding right there. A variadic slot takes every leftover token that is
   still unclaimed. An empty optional slot binds to None ([] when variadic).
3. options, looked up by short key then long key; stored under the long key
   when the option has one, else under the short key.
4. any other parsed flag (besides "_" and "help") must belong to a declared
   option, or binding fails naming it.
5. overrides (from programmatic callers) are merged over the result, key by
   key, and win on collisions.
6. a "--help" flag or a literal "/?" token marks options["help"] = True.
"""
from collections.abc import Mapping

from .faults import FaultCode
from .lexer import LEFTOVER, HELP, tokenize, parseflags
from .outcomes import Bound, NeedsHelp
from .utils import Unset

MISSING_ARGUMENT = "Missing required argument. Showing Help:"
MISSING_OPTION = "Missing required option. Showing Help:"
INVALID_OPTION = "Invalid option: '%s'. Showing Help:"


def bind(remainder, definition, /, overrides=Unset):
    """
    Bind argument text to the definition's slots and options.

    Parameters
    - remainder: str | None, the argument text left after the command words.
    - definition: Definition, the matched command.
    - overrides: Mapping | None, structured values from a programmatic call.

    Returns
    - Bound | NeedsHelp (never raises for any text).

    Raises
    - TypeError: overrides is not a mapping, or its "options" entry is
      neither a mapping nor None.
    """
    if overrides is not Unset and overrides is not None and not isinstance(overrides, Mapping):
        raise TypeError("bind() overrides must be a mapping")
    if overrides and not isinstance(overrides.get("options"), Mapping | None):
        raise TypeError("bind() 'options' override must be a mapping")

    parsed = parseflags(tokenize(remainder or ""), definition.types)
    leftovers = parsed[LEFTOVER]
    values = {"options": {}}

    pending = list(leftovers)
    for argument in definition.arguments:
        if not pending:
            if argument.required:
                return NeedsHelp(MISSING_ARGUMENT, code=FaultCode.MISSING_ARGUMENT, definition=definition)
            values[argument.name] = [] if argument.variadic else None
        elif argument.variadic:
            values[argument.name], pending = pending, []
        else:
            values[argument.name] = pending.pop(0)

    for option in definition.options:
        value = parsed.get(option.shortkey, Unset) if option.shortkey else Unset
        if value is Unset and option.longkey:
            value = parsed.get(option.longkey, Unset)
        if value is Unset:
            if option.required:
                return NeedsHelp(MISSING_OPTION, code=FaultCode.MISSING_OPTION, definition=definition)
            continue
        values["options"][option.key] = value

    for flag in parsed:
        if flag in (LEFTOVER, HELP):
            continue
        if not any(option.accepts(flag) for option in definition.options):
            return NeedsHelp(
                INVALID_OPTION % flag,
                code=FaultCode.INVALID_OPTION,
                definition=definition,
                flag=flag,
            )

    if overrides:
        values.update(overrides)

    if parsed.get(HELP) or "/?" in leftovers:
        values["options"] = {**(values.get("options") or {}), "help": True}

    return Bound(values)


__all__ = (
    "MISSING_ARGUMENT",
    "MISSING_OPTION",
    "INVALID_OPTION",
    "bind",
)
