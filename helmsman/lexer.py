r"""
Helmsman lexer: quote-aware tokenizing and flag parsing.

Overview
- tokenize(text)
  • Splits argument text into tokens. A segment delimited by double quotes,
    single quotes or backticks is one atomic token (delimiters dropped, inner
    whitespace kept). Any other run of non-whitespace is a token.

- parseflags(tokens, types=None)
  • Separates flags from positionals the way minimist-style parsers do and
    returns a plain dict: one key per flag, plus the reserved LEFTOVER key ("_")
    holding the ordered positional tokens.

Flag grammar
- "--"              ends flag parsing; every later token is positional, kept
                    as raw text.
- "--key=value"     key is set to value.
- "--no-key"        key is set to False.
- "--key [value]"   key takes the next token when it does not look like a flag
                    and key is not hinted bool. A bool-hinted key takes a
                    following "true"/"false" as a boolean. Otherwise key is True.
- "-abc"            a and b are True; c behaves like "--c" above. A numeric
                    remainder ("-n5") or "=value" ("-n=5") is the current
                    letter's value.
- repeated keys accumulate into a list.

Type hints (the `types` mapping, keyed by flag name)
- str   keep raw text (no numeric coercion).
- bool  presence-only: consumes the next token only when it is "true" or
        "false"; "=value" reads as value != "false".
- int / float  numeric-looking values convert to that type.
- list  the value is always a list, even for a single occurrence.
- "_": str  keeps positionals raw as well.
Without a hint, numeric-looking values and positionals become int or float.

parseflags never raises for any sequence of strings.

Quick example
    >>> parseflags(tokenize('copy "a b.txt" --force -n 3'))
    {'_': ['copy', 'a b.txt'], 'force': True, 'n': 3}
"""
import re

LEFTOVER = "_"
HELP = "help"

_token = re.compile(r'"(.*?)"|\'(.*?)\'|`(.*?)`|([^\s"]+)')
_number = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")
_hexadecimal = re.compile(r"0x[0-9a-fA-F]+")


def tokenize(text, /):
    """
    Split argument text into tokens, keeping quoted segments atomic.

    Empty quotes ("") produce an empty-string token.
    """
    tokens = []
    for match in _token.finditer(str(text or "")):
        tokens.append(next(group for group in match.groups() if group is not None))
    return tokens


def isnumber(value, /):
    """
    True when value is an int/float or a string that reads as a number.
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, int | float):
        return True
    return bool(_hexadecimal.fullmatch(value) or _number.fullmatch(value))


def _numeric(value):
    if _hexadecimal.fullmatch(value):
        return int(value, 16)
    try:
        return int(value)
    except ValueError:
        return float(value)


def _coerce(value, hint):
    """
    convert one raw flag value according to its hint.
    """
    if not isinstance(value, str):
        return value
    if hint is str:
        return value
    if hint is bool:
        return value != "false"
    if hint is int and isnumber(value):
        return int(_numeric(value))
    if hint is float and isnumber(value):
        return float(_numeric(value))
    return _numeric(value) if isnumber(value) else value


def _looks_like_flag(token):
    return re.match(r"--?[^-]", token) is not None


class _Flags:
    """
    accumulator behind parseflags(); one instance per call.
    """

    def __init__(self, types):
        self.types = dict(types or {})
        self.result = {LEFTOVER: []}

    def wants_value(self, key):
        return self.types.get(key) is not bool

    def set(self, key, value):
        hint = self.types.get(key)
        value = _coerce(value, hint)
        if key not in self.result:
            self.result[key] = [value] if hint is list else value
        elif isinstance(self.result[key], list):
            self.result[key].append(value)
        else:
            self.result[key] = [self.result[key], value]

    def positional(self, token):
        if self.types.get(LEFTOVER) is str or not isnumber(token):
            self.result[LEFTOVER].append(token)
        else:
            self.result[LEFTOVER].append(_numeric(token))

    def trailing(self, key, tokens, index):
        """
        give `key` the token at `index` when it can serve as a value; return
        how many tokens were consumed (0 or 1).
        """
        following = tokens[index] if index < len(tokens) else None
        if following is not None and self.wants_value(key) and not _looks_like_flag(following):
            self.set(key, following)
            return 1
        if following in ("true", "false"):
            self.set(key, following == "true")
            return 1
        self.set(key, True)
        return 0


def parseflags(tokens, types=None, /):
    """
    Parse a token sequence into flags and leftover positionals.

    Parameters
    - tokens: Iterable[str], as produced by tokenize().
    - types: Mapping[str, type] | None, per-flag hints (see module docs).

    Returns
    - dict: flag name → value, plus LEFTOVER → list of positional tokens.
    """
    tokens = [str(token) for token in tokens]
    flags = _Flags(types)
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1

        if token == "--":
            flags.result[LEFTOVER].extend(tokens[index:])
            break

        if match := re.fullmatch(r"--([^=]+)=(.*)", token, re.DOTALL):
            key, value = match.groups()
            flags.set(key, value if flags.wants_value(key) else value != "false")
        elif match := re.fullmatch(r"--no-(.+)", token):
            flags.set(match[1], False)
        elif match := re.fullmatch(r"--(.+)", token):
            index += flags.trailing(match[1], tokens, index)
        elif re.match(r"-[^-]+", token):
            letters = token[1:]
            for position, letter in enumerate(letters[:-1]):
                rest = letters[position + 1:]
                if rest.startswith("="):
                    flags.set(letter, rest[1:])
                    break
                if isnumber(rest):
                    flags.set(letter, rest)
                    break
                flags.set(letter, True)
            else:
                index += flags.trailing(letters[-1], tokens, index)
        else:
            flags.positional(token)
    return flags.result


__all__ = (
    "LEFTOVER",
    "HELP",
    "tokenize",
    "isnumber",
    "parseflags",
)
