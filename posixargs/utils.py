"""
posixargs utilities shared by the value layers (identifiers, definitions, usages, results).

Contents
- Unset / UnsetType
  • the "argument omitted" marker for parameters where None is itself a
    meaningful value (e.g. OptionDefinition's argument).
- coalesce(object, default=None)
  • Unset → default, anything else (None included) passes through.
- rename("name")
  • decorator giving generated methods a readable __name__/__qualname__.
- mirror("field")
  • read-only property over self._field; containers come back frozen.
- ValueType
  • metaclass for the immutable value objects of this package.
- pluralize(word), quote(text), duplicates(iterable)
  • diagnostics and invariant-check helpers.

    >>> coalesce(Unset, "tab")
    'tab'
    >>> list(duplicates(["-h", "-v", "-h"]))
    [(0, 2, '-h')]
"""
import functools
import itertools
import operator
import re
from abc import ABCMeta
from collections.abc import Mapping, Sequence, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    type of the Unset marker.

    - one instance per process: UnsetType() is Unset.
    - falsy, repr "Unset", cannot be subclassed.
    - usable in unions (`str | Unset`), which resolve to `str | UnsetType`.
    """

    def __or__(self, other, /):
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


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    return `default` when `object` is Unset, `object` otherwise.

    unlike `object or default`, falsy values such as None, "" or () are kept.
    """
    return default if object is Unset else object


def rename(name, /):
    """
    decorator setting __name__ and __qualname__ of a function to `name`.

        @rename("__repr__")
        def __repr__(self): ...
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(function):
        if not callable(function):
            raise TypeError("@rename() must decorate a callable")
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def _freeze(object):
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    if isinstance(object, Mapping):
        return object if isinstance(object, MappingProxyType) else MappingProxyType(dict(object))
    if isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    read-only property returning self._<name>.

    lists and other sequences come back as tuples, mappings as MappingProxyType
    and sets as frozenset, so a value object cannot be mutated from outside.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


def _hashable(object):
    if isinstance(object, Mapping):
        return frozenset(object.items())
    return object


class ValueType(ABCMeta):
    """
    Metaclass that turns plain classes into immutable, comparable value objects.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by "_{name}" (see mirror()).
    - Derive __match_args__ from __introspectable__ so instances work with `match`.
    - Provide structural __eq__/__hash__ over the introspectable fields
      (exact type match required), unless the class defines its own.
    - Provide stable __repr__/__rich_repr__ for diagnostics and rich.pretty.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in construction-time error messages.
    - __displayable__ (if set) narrows which fields __rich_repr__ shows;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        fields = tuple(namespace.get("__introspectable__", ()))

        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                field: mirror(field) for field in fields
            },
            **options,
        )

        if "__match_args__" not in namespace and fields:
            self.__match_args__ = fields

        if "__repr__" not in namespace:
            @rename("__repr__")
            def __repr__(self):
                return f"{type(self).__name__}({
                    ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
                })"
            self.__repr__ = __repr__

        if "__rich_repr__" not in namespace:
            @rename("__rich_repr__")
            def __rich_repr__(self):
                for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                    yield name, getattr(self, name)
            self.__rich_repr__ = __rich_repr__

        if "__eq__" not in namespace:
            @rename("__eq__")
            def __eq__(self, other):
                if type(other) is not type(self):
                    return NotImplemented
                return all(
                    getattr(self, name) == getattr(other, name)
                    for name in type(self).__introspectable__
                )
            self.__eq__ = __eq__

        if "__hash__" not in namespace:
            @rename("__hash__")
            def __hash__(self):
                return hash((type(self), *(_hashable(getattr(self, name)) for name in type(self).__introspectable__)))
            self.__hash__ = __hash__

        return self


@functools.cache
def pluralize(word, /):
    """
    english plural of a single lowercase diagnostic word ("argument" → "arguments").

    only the endings the diagnostics need are handled: -s/-x/-z/-ch/-sh take
    "es", consonant + y becomes "ies", everything else takes "s". A phrase is
    pluralized on its last word.
    """
    if not isinstance(word, str):
        raise TypeError("pluralize() argument must be a string")

    head, _, last = word.rpartition(" ")
    if not last:
        return word

    if re.search(r"(s|x|z|ch|sh)$", last):
        last += "es"
    elif re.search(r"[^aeiou]y$", last):
        last = last[:-1] + "ies"
    else:
        last += "s"

    return f"{head} {last}" if head else last


def quote(text, /):
    """
    Double-quote a string, escaping backslashes and double quotes.

    >>> quote('say "hi"')
    '"say \\\\"hi\\\\""'
    """
    if not isinstance(text, str):
        raise TypeError("quote() argument must be a string")
    return '"' + re.sub(r'([\\"])', r"\\\1", text) + '"'


def duplicates(iterable, /, key=operator.eq):
    """
    Yield (index_a, index_b, item_a) for every pair of items considered equal.

    Pairs are compared with `key(item_a, item_b)` (equality by default) in
    index order, so the first yielded pair is the earliest duplicate.
    """
    items = list(iterable)
    for (index_a, item_a), (index_b, item_b) in itertools.combinations(enumerate(items), 2):
        if key(item_a, item_b):
            yield index_a, index_b, item_a


__all__ = (
    "coalesce",
    "rename",
    "mirror",
    "pluralize",
    "quote",
    "duplicates",
    "UnsetType",
    "ValueType",
    "Unset",
)
