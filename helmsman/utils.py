"""
Helmsman utilities (small helpers shared by every layer)

Overview
- UnsetType / Unset
  • Singleton sentinel meaning "not provided", distinct from None.
  • Falsey, prints as "Unset", cannot be subclassed.

- coalesce(value, default=None)
  • Swap Unset for a concrete default; every other value (None, 0, "") passes through.

- mirror("attr")
  • Read-only property over a private backing field (self._attr). Containers are
    handed out as fresh copies so callers cannot mutate a definition in place.

- words(text)
  • Whitespace word split used by the resolver and the usage builder.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> words("  do   things well ")
    ['do', 'things', 'well']
"""
import functools
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Sentinel type for values that were never provided.

    Definitions use Unset for optional fields (such as the rewrite hook) where
    None could be a meaningful value supplied by a host application.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return `default` when `object` is Unset; otherwise `object` unchanged.

    Falsey values are preserved: coalesce(None, 1) is None, coalesce(0, 1) is 0.
    """
    return object if object is not Unset else default


def _detach(object):
    """
    Copy container values recursively (lists, dicts and sets), leaving
    everything else untouched.
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_detach, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_detach, object.values())))
    elif isinstance(object, Set):
        return set(map(_detach, object))
    return object


def mirror(name, /):
    """
    Define a read-only property that reads the backing attribute "_{name}".

    Container values are returned as detached copies.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        return _detach(getattr(self, "_" + name))

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


def words(text, /):
    """
    Split text into whitespace-separated words (runs of blanks collapse).
    """
    return str(text).split()


Unset = UnsetType()
"""
Process-wide "not provided" sentinel. Falsey, but never equal to None.
"""


__all__ = (
    # Functions
    "coalesce",
    "mirror",
    "words",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
