r"""
cmdline declaration records.

Overview
- Option: a named switch identified by a short (one character) and/or long
  (two or more characters) name. An Option with an empty value placeholder is
  a flag: its presence alone is the signal.
- Argument: a positional slot bound by position; the optional trailing one
  collects every remaining token.
- Command: a named sub-mode that takes over the rest of the token vector.

Records are immutable. SpecType exposes the fields listed in
__introspectable__ as read-only properties and provides stable __repr__ and
__rich_repr__ implementations. A modified copy is made with copy.replace().

Validation highlights
- Short names are exactly one character, long names at least two.
- At least one of the two names must be given.
- Defaults are only accepted by options that carry a value.
"""
import functools
import operator
import re

from .faults import InvalidSpecificationError
from .utils import *


class SpecType(type):
    """
    Metaclass for declaration records.

    Responsibilities
    - Derive __typename__ from the class name for messages ("option",
      "argument", "command").
    - Expose every name in __introspectable__ through mirror().
    - Provide stable __repr__/__rich_repr__ implementations.
    - Seal concrete records against subclassing.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__init_subclass__")
        def __init_subclass__(cls, **options):  # NOQA: F-841
            raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
        self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _check_string(cls, field, value, /):
    if not isinstance(value, str):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    return value


class Option(metaclass=SpecType):
    """
    A named switch, optionally carrying a value.

    Fields
    - short: one-character name, or "" when absent.
    - long: name of at least two characters, or "" when absent.
    - value: placeholder shown in help (e.g. "path"); "" makes this a flag.
    - descr: short description.
    - default: Unset, or the string used when the option does not appear.
    """
    __introspectable__ = ("short", "long", "value", "descr", "default")
    __slots__ = ("_short", "_long", "_value", "_descr", "_default")

    def __init__(self, short="", long="", value="", descr="", *, default=Unset):
        short = _check_string(type(self), "short", short)
        long = _check_string(type(self), "long", long)
        value = _check_string(type(self), "value", value)
        descr = _check_string(type(self), "descr", descr)

        if not short and not long:
            raise InvalidSpecificationError("option must have a short or a long name")
        if short and len(short) != 1:
            raise InvalidSpecificationError(f"option short name {short!r} must be one character long")
        if long and len(long) < 2:
            raise InvalidSpecificationError(f"option long name {long!r} must be at least two characters long")

        if default is not Unset:
            _check_string(type(self), "default", default)
            if not value:
                raise InvalidSpecificationError(f"flag {short or long!r} cannot have a default value")

        self._short = short
        self._long = long
        self._value = value
        self._descr = descr
        self._default = default

    @property
    def flag(self):
        """True when the option takes no value."""
        return not self._value

    @property
    def names(self):
        """The declared names, short first."""
        return tuple(name for name in (self._short, self._long) if name)

    @property
    def sortkey(self):
        return self._short or self._long

    @property
    def signature(self):
        """
        Left-column text used by the usage formatter.

        Forms: "-S", "--Long", "-S, --Long", each followed by " <value>" when
        the option carries a value.
        """
        names = []
        if self._short:
            names.append("-" + self._short)
        if self._long:
            names.append("--" + self._long)
        signature = ", ".join(names)
        if self._value:
            signature += f" <{self._value}>"
        return signature

    def __eq__(self, other):
        if not isinstance(other, Option):
            return NotImplemented
        return (self._short, self._long) == (other._short, other._long)

    def __hash__(self):
        return hash((self._short, self._long))

    def __replace__(self, /, **changes):
        # Re-run construction so the replacement is validated too.
        return type(self)(**({name: getattr(self, name) for name in type(self).__introspectable__} | changes))


class Argument(metaclass=SpecType):
    """
    A positional slot.

    The trailing argument, if any, must be the last one declared; it collects
    every token left once the other slots are filled.
    """
    __introspectable__ = ("name", "descr", "trailing")
    __slots__ = ("_name", "_descr", "_trailing")

    def __init__(self, name, descr="", *, trailing=False):
        name = _check_string(type(self), "name", name)
        descr = _check_string(type(self), "descr", descr)
        if not name:
            raise InvalidSpecificationError("argument name cannot be empty")

        self._name = name
        self._descr = descr
        self._trailing = bool(trailing)


class Command(metaclass=SpecType):
    """A named sub-mode; its own arguments are parsed by a nested command line."""
    __introspectable__ = ("name", "descr")
    __slots__ = ("_name", "_descr")

    def __init__(self, name, descr=""):
        name = _check_string(type(self), "name", name)
        descr = _check_string(type(self), "descr", descr)
        if not name:
            raise InvalidSpecificationError("command name cannot be empty")

        self._name = name
        self._descr = descr


__all__ = (
    "Option",
    "Argument",
    "Command",
)

# Keep the metaclass out of star-imports and docs; it is not part of the public API.
del SpecType
