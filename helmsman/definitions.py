r"""
Helmsman command definitions.

Overview
- Argument: one declared positional slot (name, required, variadic).
- Option: one declared switch with a short and/or long spelling (-f/--force),
  optionally required.
- Definition: a registered command. Holds the (possibly multi-word) name,
  aliases, positional slots, options, type hints for the flag parser, the
  catch-all marker and an optional rewrite hook.
- verify(registry): registry-wide checks (unique names, no alias collisions,
  at most one catch-all).

Definitions are immutable once built; every container is exposed through a
read-only property that hands out a copy. The registry itself is not owned
here: hosts keep their own sequence of definitions and pass it explicitly to
helmsman.resolve()/helmsman.parse().

Usage strings
- Definition.parse("copy <source> [targets...]") reads the name from the
  leading plain words and the slots from the bracketed ones:
  • <name>      required slot
  • [name]      optional slot
  • <name...>   variadic slot (required), [name...] variadic (optional)

Validation highlights
- Names are whitespace-normalized ("do   things" → "do things"); an empty name
  is only accepted for a catch-all.
- Only the last positional slot may be variadic; slot names are unique.
- Option spellings must match r"--?[^\W\d_](-?[^\W_]+)*" with at most one
  short (single dash) and one long (double dash) form.
- Type hints must be one of str, bool, int, float, list.
"""
import re
from collections.abc import Iterable, Mapping, Set

from .faults import (
    FaultCode,
    MultipleCatchAllWarning,
    DuplicateNameError,
    AliasCollisionError,
    trigger,
)
from .utils import *

_HINTS = (str, bool, int, float, list)


class Argument:
    """
    A declared positional slot.
    """
    name = mirror("name")
    required = mirror("required")
    variadic = mirror("variadic")

    def __init__(self, name, /, *, required=False, variadic=False):
        if not isinstance(name, str):
            raise TypeError("argument 'name' must be a string")
        elif not (name := name.strip()) or re.search(r"\s", name):
            raise ValueError("argument 'name' must be a single non-empty word")
        if not isinstance(required, bool):
            raise TypeError("argument 'required' must be a boolean")
        if not isinstance(variadic, bool):
            raise TypeError("argument 'variadic' must be a boolean")
        self._name = name
        self._required = required
        self._variadic = variadic

    def __eq__(self, other):
        if not isinstance(other, Argument):
            return NotImplemented
        return (self._name, self._required, self._variadic) == (other._name, other._required, other._variadic)

    def __hash__(self):
        return hash((Argument, self._name, self._required, self._variadic))

    def __repr__(self):
        return "argument(name=%r, required=%r, variadic=%r)" % (self._name, self._required, self._variadic)


class Option:
    """
    A declared switch.

    The binder looks options up by normalized keys:
    - shortkey: the short spelling without dashes ("-f" → "f").
    - longkey: the long spelling without a leading "--no-" and without leading
      dashes ("--no-color" → "color", "--force" → "force").
    - key: where a supplied value is stored (longkey, else shortkey).
    """
    short = mirror("short")
    long = mirror("long")
    required = mirror("required")

    def __init__(self, *names, required=False):
        if not names:
            raise TypeError("option requires at least one name")
        short = long = None
        for name in names:
            if not isinstance(name, str):
                raise TypeError("option names must be strings")
            elif not re.fullmatch(r"-[^\W\d_]|--[^\W\d_](-?[^\W_]+)*", name := name.strip()):
                raise ValueError("option name %r is not a valid spelling (e.g., -f or --force)" % name)
            if name.startswith("--"):
                if long is not None:
                    raise ValueError("option accepts a single long name, got %r and %r" % (long, name))
                long = name
            else:
                if short is not None:
                    raise ValueError("option accepts a single short name, got %r and %r" % (short, name))
                short = name
        if not isinstance(required, bool):
            raise TypeError("option 'required' must be a boolean")
        self._short = short
        self._long = long
        self._required = required

    @property
    def shortkey(self):
        return (self._short or "").replace("-", "")

    @property
    def longkey(self):
        return re.sub(r"^-*", "", (self._long or "").replace("--no-", ""))

    @property
    def key(self):
        return self.longkey or self.shortkey

    def accepts(self, flag, /):
        """
        True when a parsed flag key was produced by one of this option's spellings.
        """
        return (
            "--" + flag == self._long or
            "--no-" + flag == self._long or
            "-" + flag == self._short
        )

    def __eq__(self, other):
        if not isinstance(other, Option):
            return NotImplemented
        return (self._short, self._long, self._required) == (other._short, other._long, other._required)

    def __hash__(self):
        return hash((Option, self._short, self._long, self._required))

    def __repr__(self):
        names = ", ".join(filter(None, (self._short, self._long)))
        return "option(%s, required=%r)" % (names, self._required)


class Definition:
    """
    A registered command.

    Parameters
    - name: str, one or more words ("do things well"); may be empty for a catch-all.
    - aliases: Iterable[str], alternative full names ("ls" for "list").
    - arguments: Iterable[Argument], declared positional slots in order.
    - options: Iterable[Option], declared switches.
    - types: Mapping[str, type], flag-parser hints (see helmsman.lexer).
    - catchall: bool, receive any input no other command claims.
    - rewrite: Callable[[str, str], str], called once with the matched command
      text and its argument text; returns replacement command text that is
      resolved a second (and last) time.
    """
    name = mirror("name")
    aliases = mirror("aliases")
    arguments = mirror("arguments")
    options = mirror("options")
    types = mirror("types")
    catchall = mirror("catchall")
    rewrite = mirror("rewrite")

    def __init__(
            self,
            name,
            /,
            *,
            aliases=(),
            arguments=(),
            options=(),
            types=Unset,
            catchall=False,
            rewrite=Unset,
    ):
        if not isinstance(catchall, bool):
            raise TypeError("definition 'catchall' must be a boolean")
        if not isinstance(name, str):
            raise TypeError("definition 'name' must be a string")
        elif not (name := " ".join(words(name))) and not catchall:
            raise ValueError("definition 'name' cannot be empty")

        if isinstance(aliases, str) or not isinstance(aliases, Iterable):
            raise TypeError("definition 'aliases' must be an iterable of strings")
        normalized = []
        for alias in aliases:
            if not isinstance(alias, str):
                raise TypeError("definition aliases must be strings")
            elif not (alias := " ".join(words(alias))):
                raise ValueError("definition aliases cannot be empty")
            elif alias == name:
                raise ValueError("alias %r repeats the command name" % alias)
            elif alias in normalized and not isinstance(aliases, Set):
                raise ValueError("duplicated alias %r" % alias)
            normalized.append(alias)

        arguments = list(arguments)
        seen = set()
        for index, argument in enumerate(arguments):
            if not isinstance(argument, Argument):
                raise TypeError("definition 'arguments' must contain Argument instances")
            if argument.name in seen:
                raise ValueError("duplicated argument name %r" % argument.name)
            if argument.variadic and index != len(arguments) - 1:
                raise ValueError("only the last argument can be variadic, not %r" % argument.name)
            seen.add(argument.name)

        options = list(options)
        spellings, keys = set(), set()
        for option in options:
            if not isinstance(option, Option):
                raise TypeError("definition 'options' must contain Option instances")
            for spelling in filter(None, (option.short, option.long)):
                if spelling in spellings:
                    raise ValueError("duplicated option name %r" % spelling)
                spellings.add(spelling)
            if option.key in keys:
                raise ValueError("option %r reuses the storage key %r" % (option, option.key))
            keys.add(option.key)

        types = coalesce(types, {})
        if not isinstance(types, Mapping):
            raise TypeError("definition 'types' must be a mapping")
        for key, hint in types.items():
            if not isinstance(key, str) or hint not in _HINTS:
                raise TypeError("type hint for %r must be one of str, bool, int, float or list" % key)

        if rewrite is not Unset and not callable(rewrite):
            raise TypeError("definition 'rewrite' must be callable")

        self._name = name
        self._aliases = list(dict.fromkeys(normalized))
        self._arguments = arguments
        self._options = options
        self._types = dict(types)
        self._catchall = catchall
        self._rewrite = rewrite

    @classmethod
    def parse(cls, usage, /, **options):
        """
        Build a definition from a usage string such as "copy <source> [targets...]".

        Plain words up to the first bracketed token form the name; bracketed
        tokens become positional slots. Keyword options are forwarded to the
        constructor.
        """
        if not isinstance(usage, str):
            raise TypeError("Definition.parse() argument must be a string")
        name = []
        arguments = []
        for word in words(usage):
            if match := re.fullmatch(r"<([^<>\[\]]+?)(\.\.\.)?>", word):
                arguments.append(Argument(match[1], required=True, variadic=bool(match[2])))
            elif match := re.fullmatch(r"\[([^<>\[\]]+?)(\.\.\.)?\]", word):
                arguments.append(Argument(match[1], variadic=bool(match[2])))
            elif arguments:
                raise ValueError("command words must precede arguments in %r" % usage)
            else:
                name.append(word)
        return cls(" ".join(name), arguments=arguments, **options)

    @property
    def words(self):
        return tuple(words(self._name))

    def __repr__(self):
        fields = ["name=%r" % self._name]
        if self._aliases:
            fields.append("aliases=%r" % (self._aliases,))
        if self._catchall:
            fields.append("catchall=True")
        if self._rewrite is not Unset:
            fields.append("rewrite=%r" % (self._rewrite,))
        return "definition(%s)" % ", ".join(fields)

    def __rich_repr__(self):
        yield "name", self._name
        yield "aliases", self.aliases
        yield "arguments", self.arguments
        yield "options", self.options
        yield "catchall", self._catchall


def verify(registry, /):
    """
    Check a registry for consistency and return it as a tuple.

    Raises
    - DuplicateNameError: two definitions share a name.
    - AliasCollisionError: an alias equals a name or another alias.

    Warns
    - MultipleCatchAllWarning: more than one catch-all; the first one wins.
    """
    registry = tuple(registry)
    names = {}
    for definition in registry:
        if not isinstance(definition, Definition):
            raise TypeError("verify() registry must contain Definition instances")
        if definition.catchall and not definition.name:
            continue
        if definition.name in names:
            raise DuplicateNameError(
                "command name %r is registered twice" % definition.name,
                code=FaultCode.DUPLICATE_NAME,
            )
        names[definition.name] = definition

    owners = {}
    for definition in registry:
        for alias in definition.aliases:
            if alias in names:
                raise AliasCollisionError(
                    "alias %r of %r collides with a command name" % (alias, definition.name),
                    code=FaultCode.ALIAS_COLLISION,
                )
            if alias in owners and owners[alias] is not definition:
                raise AliasCollisionError(
                    "alias %r is shared by %r and %r" % (alias, owners[alias].name, definition.name),
                    code=FaultCode.ALIAS_COLLISION,
                )
            owners[alias] = definition

    catchalls = [definition for definition in registry if definition.catchall]
    if len(catchalls) > 1:
        trigger(MultipleCatchAllWarning(
            "%d catch-all commands are registered" % len(catchalls),
            title="multiple catch-all commands",
            code=FaultCode.MULTIPLE_CATCHALL,
            hint="only %r will receive unmatched input" % catchalls[0].name,
        ))
    return registry


__all__ = (
    "Argument",
    "Option",
    "Definition",
    "verify",
)
