"""Fake objects derived from a template's shape.

A fake is an instance of a class derived from the template's class, so
isinstance() checks against the template's class keep passing. Every member
the template exposes is replaced:

- methods by functions raising UnexpectedMethodCall
- stored values and accessors by GuardedAttribute, which raises
  UnexpectedPropertyUse until a value is assigned
- members that cannot be described statically by the inert ABSENT value

Tests arrange the interactions they expect by assigning to the fake. Methods
can also be replaced through unittest.mock.patch.object().
"""

import logging
import types
from collections import Counter
from collections.abc import Callable
from typing import Any, NoReturn, TypeVar, overload

from leche.errors import UnexpectedMethodCall, UnexpectedPropertyUse
from leche.members import MemberDescriptor, describe_members

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Absent:
    """Type of the ABSENT placeholder."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


# Value of members whose kind could not be determined
ABSENT = _Absent()


class GuardedAttribute:
    """Attribute that refuses to be read until a value has been assigned.

    The assigned value lives in the owning fake's __dict__ under the attribute
    name, so every fake instance and every attribute has its own state.
    Deleting the attribute makes it unassigned again. mock.patch.object()
    reads the current value first, so it only works once a value is assigned.
    """

    def __init__(self, name: str) -> None:
        self.name = name

    def __get__(self, instance: object, owner: type | None = None) -> Any:
        if instance is None:
            return self
        values = object.__getattribute__(instance, "__dict__")
        if self.name not in values:
            raise UnexpectedPropertyUse(self.name)
        return values[self.name]

    def __set__(self, instance: object, value: object) -> None:
        object.__getattribute__(instance, "__dict__")[self.name] = value

    def __delete__(self, instance: object) -> None:
        object.__getattribute__(instance, "__dict__").pop(self.name, None)

    def __repr__(self) -> str:
        return f"GuardedAttribute({self.name!r})"


def guarded_method(name: str) -> Callable[..., NoReturn]:
    """Create a method that raises UnexpectedMethodCall on every call."""

    def guarded(*args: object, **kwargs: object) -> NoReturn:
        raise UnexpectedMethodCall(name)

    guarded.__name__ = name
    guarded.__qualname__ = name
    guarded.__doc__ = f"Guarded stand-in for {name}()."
    return guarded


class Fake:
    """Base class of every fake.

    Listed before the template's class in a fake's bases, so the template's
    attribute hooks and repr never run against a fake.
    """

    __slots__ = ()

    __fake_template__: object

    __getattribute__ = object.__getattribute__
    __setattr__ = object.__setattr__
    __delattr__ = object.__delattr__

    def __getattr__(self, name: str) -> NoReturn:
        msg = f"{type(self).__name__!r} object has no attribute {name!r}"
        raise AttributeError(msg)

    def __repr__(self) -> str:
        return f"<fake {_template_label(type(self).__fake_template__)}>"


def _template_label(template: object) -> str:
    if isinstance(template, type):
        return template.__qualname__
    return f"{type(template).__qualname__} instance"


def _replacement_for(member: MemberDescriptor) -> object:
    if member.replacement == "guarded-method":
        return guarded_method(member.name)
    if member.replacement == "guarded-slot":
        return GuardedAttribute(member.name)
    return ABSENT


def is_fake_of(obj: object, template: object) -> bool:
    """Whether template is in the ancestry of obj.

    Ancestry is transitive: a fake built from another fake is also a fake of
    that fake's template.
    """
    current = getattr(type(obj), "__fake_template__", None) if isinstance(obj, Fake) else None
    while current is not None:
        if current is template:
            return True
        if not isinstance(current, Fake):
            return False
        current = type(current).__fake_template__
    return False


class FakeBuilder:
    """Builds fakes from templates.

    Args:
        use_descriptors: Classify members from their static descriptors. When
            False, members are classified from their live values only, and
            anything that is not callable becomes ABSENT instead of guarded.
    """

    def __init__(self, *, use_descriptors: bool = True) -> None:
        self._use_descriptors = use_descriptors

    @overload
    def build(self, template: type[T]) -> T: ...

    @overload
    def build(self, template: T) -> T: ...

    def build(self, template: Any) -> Any:
        """Create a fake of template.

        Args:
            template: A class, or any object whose class shape should be faked.
                Never modified.

        Returns:
            New fake whose every discovered member is guarded
        """
        members = describe_members(template, use_descriptors=self._use_descriptors)
        namespace: dict[str, object] = {
            "__module__": __name__,
            "__fake_template__": template,
        }
        for member in members:
            namespace[member.name] = _replacement_for(member)

        base = template if isinstance(template, type) else type(template)
        instance = _instantiate(base, namespace)

        counts = Counter(member.replacement for member in members)
        logger.debug(
            "Built fake of %s: %d guarded methods, %d guarded attributes, %d inert",
            _template_label(template),
            counts["guarded-method"],
            counts["guarded-slot"],
            counts["inert"],
        )
        return instance


def _derive(name: str, bases: tuple[type, ...], namespace: dict[str, object]) -> type:
    return types.new_class(name, bases, exec_body=lambda ns: ns.update(namespace))


def _allocate(fake_class: type) -> Fake:
    """Allocate an instance with the nearest built-in __new__ in the MRO.

    Python-level __new__ and __init__ methods are skipped, so no template code
    runs. Built-in bases such as dict, int or str get their own allocator,
    which keeps the instance layout they expect.
    """
    for klass in fake_class.__mro__:
        allocate = vars(klass).get("__new__")
        if isinstance(allocate, types.BuiltinFunctionType):
            return allocate(fake_class)
    return object.__new__(fake_class)


def _instantiate(base: type, namespace: dict[str, object]) -> Fake:
    """Create the fake instance without running any constructor of base.

    Falls back to a class derived from Fake alone when base refuses to be
    subclassed (bool, enums with members) or its built-in allocator needs
    arguments (datetime.date).
    """
    name = f"Fake{base.__name__}"
    bases = (base,) if issubclass(base, Fake) else (Fake, base)
    try:
        return _allocate(_derive(name, bases, namespace))
    except TypeError as error:
        logger.debug("Cannot derive fake from %s (%s); using Fake as its only base", base, error)
    return _allocate(_derive(name, (Fake,), namespace))


_default_builder = FakeBuilder()


@overload
def fake(template: type[T]) -> T: ...


@overload
def fake(template: T) -> T: ...


def fake(template: Any) -> Any:
    """Create a fake of template with the default builder.

    Example:
        >>> github = fake(RealGitHub)
        >>> github.get_pr(12)
        Traceback (most recent call last):
        ...
        leche.errors.UnexpectedMethodCall: Unexpected call to method "get_pr".
    """
    return _default_builder.build(template)
