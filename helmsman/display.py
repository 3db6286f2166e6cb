"""
Display helpers for help layers built on top of helmsman.

- humanize(argument): "<name>" for required slots, "[name]" for optional ones,
  with a "..." suffix for variadic slots.
- usage(definition): one-line usage ("copy <source> [targets...] [options]").
- pad(text, width, delimiter=" "): right-pad to a display width, ignoring ANSI
  escape sequences when measuring.
- prettify(items, width=Unset): lay out strings in columns that fit the
  terminal width (a single line when everything fits).

Widths are measured in terminal cells through rich, so colored or wide
characters line up.
"""
from rich.console import Console
from rich.text import Text

from .utils import Unset


def _cells(text):
    return Text.from_ansi(str(text)).cell_len


def humanize(argument, /):
    name = argument.name + ("..." if argument.variadic else "")
    return "<%s>" % name if argument.required else "[%s]" % name


def usage(definition, /):
    parts = [definition.name] if definition.name else []
    parts.extend(map(humanize, definition.arguments))
    if definition.options:
        parts.append("[options]")
    return " ".join(parts)


def pad(text, width, delimiter=" ", /):
    """
    Append `delimiter` until `text` spans `width` cells (never truncates).
    """
    width = int(width)
    delimiter = delimiter or " "
    return str(text) + delimiter * max(0, width - _cells(text))


def prettify(items, width=Unset, /):
    """
    Arrange items in as many equally wide columns as the width allows.

    Parameters
    - items: Iterable[str], may contain ANSI styling.
    - width: int, defaults to the current terminal width.

    Returns
    - str: items joined by two spaces when they fit on one line, otherwise
      newline-separated rows of padded cells.
    """
    items = [str(item) for item in (items or ())]
    if width is Unset:
        width = Console().width
    longest = max(map(_cells, items), default=0) + 2
    if _cells("".join(items)) + len(items) * 2 <= width:
        return "  ".join(items)

    columns = max(1, width // longest)
    lines = []
    for start in range(0, len(items), columns):
        lines.append("".join(pad(item, longest) for item in items[start:start + columns]))
    return "\n".join(lines)


__all__ = (
    "humanize",
    "usage",
    "pad",
    "prettify",
)
