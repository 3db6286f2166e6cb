"""
Helmsman resolver: from raw command text to a registered command.

Pipeline
1. split()    cut the text into a head stage and trailing pipe stages.
2. match()    find the most specific definition for the head stage.
3. rewrite    when the match carries a rewrite hook, call it once and run
              split() + match() again on the text it returns.

resolve() runs the three steps and returns a Resolution.

Matching rules
- Candidates are word prefixes of the head stage, longest first:
  "do things well extra" tries "do things well extra", "do things well",
  "do things", "do". The first candidate that equals a definition name wins;
  when no name matches a candidate, aliases are tried for that same
  candidate. A longer alias therefore beats a shorter name.
- When nothing matches, the first catch-all definition receives the whole
  head stage, unless the input words are a prefix of some other registered
  name ("do things" while "do things well" exists). The input then names a
  command group, and no match is reported so the shell can list that group.

Limits
- "|" splits stages even inside quotes.
- Rewriting happens at most once per resolve() call. The second resolution
  is final even if its match carries a rewrite hook as well.
- The registry is read, never mutated; pass it explicitly on every call.
"""
import re
from collections import namedtuple

from .utils import Unset, words


class Match(namedtuple("Match", ("definition", "remainder"))):
    """
    Result of match(): the definition (or None) and its argument text (or None).
    """
    __slots__ = ()


class Resolution(namedtuple("Resolution", ("command", "definition", "remainder", "pipes"))):
    """
    Result of resolve().

    Fields
    - command: the final head-stage text (after any rewrite).
    - definition: the matched Definition, or None.
    - remainder: the argument text left after the command words, or None.
    - pipes: tuple of pipe stages following the head, across both passes.
    """
    __slots__ = ()

    @property
    def matched(self):
        return self.definition is not None


def split(command, /):
    """
    Split command text on "|" and trim every stage.

    Returns
    - tuple[str, list[str]]: (head, stages).

    Example
    - split("foo | bar | baz") → ("foo", ["bar", "baz"])
    """
    stages = [stage.strip() for stage in str(command).strip().split("|")]
    return stages[0], stages[1:]


def _suppressed(parts, catchall, registry):
    """
    True when the input words open some other registered name.
    """
    parts = tuple(parts)
    for definition in registry:
        if definition is catchall:
            continue
        if definition.words[:len(parts)] == parts:
            return True
    return False


def _after(head, count):
    """
    the text of head following its first `count` words, exactly as typed.
    """
    found = re.match(r"\s*(?:\S+\s+){%d}" % count, head + " ")
    return head[found.end():].strip()


def match(command, registry, /):
    """
    Match a head stage against the registry (see module docs for the rules).

    Only the text before the first "|" is considered.

    Returns
    - Match(definition, remainder); Match(None, None) when nothing applies.
    """
    registry = tuple(registry)
    head = str(command).split("|")[0].strip()
    parts = words(head)

    for index in range(len(parts)):
        cut = len(parts) - index
        candidate = " ".join(parts[:cut])
        found = next((definition for definition in registry if definition.name == candidate), None)
        if found is None:
            found = next((definition for definition in registry if candidate in definition.aliases), None)
        if found is not None:
            return Match(found, _after(head, cut))

    catchall = next((definition for definition in registry if definition.catchall), None)
    if catchall is None or _suppressed(parts, catchall, registry):
        return Match(None, None)
    return Match(catchall, head)


def resolve(command, registry, /):
    """
    Split, match, and apply the rewrite hook (at most once).

    Parameters
    - command: str, raw command text (may contain pipe stages).
    - registry: Iterable[Definition], read-only for the duration of the call.

    Returns
    - Resolution(command, definition, remainder, pipes)
    """
    registry = tuple(registry)
    command, pipes = split(command)
    found = match(command, registry)

    if found.definition is not None and found.definition.rewrite is not Unset:
        command, extra = split(found.definition.rewrite(command, found.remainder))
        pipes = pipes + extra
        found = match(command, registry)

    return Resolution(command, found.definition, found.remainder, tuple(pipes))


__all__ = (
    "Match",
    "Resolution",
    "split",
    "match",
    "resolve",
)
