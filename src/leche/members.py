"""Member discovery and classification for fake objects.

A template's members are whatever dir() reports for it, minus dunder names,
plus names that classes in its MRO declare only through annotations
(dataclass fields without defaults, protocol attributes). Each member is
classified by looking at the template's own descriptor for that name, found
statically so that no accessor on the template ever runs.
"""

import functools
import inspect
import logging
from dataclasses import dataclass
from typing import Literal

MemberKind = Literal["method", "accessor", "plain-data", "indeterminate"]
Replacement = Literal["guarded-method", "guarded-slot", "inert"]

# Bookkeeping attributes of the runtime that dir() exposes without dunders
_RUNTIME_NAMES = frozenset({"_abc_impl", "_is_protocol", "_is_runtime_protocol"})

_REPLACEMENTS: dict[MemberKind, Replacement] = {
    "method": "guarded-method",
    "accessor": "guarded-slot",
    "plain-data": "guarded-slot",
    "indeterminate": "inert",
}

_MISSING = object()

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemberDescriptor:
    """Classification of a single template member.

    Attributes:
        name: Attribute name on the template
        kind: How the template defines the member
        has_getter: Accessor members only: whether the accessor can be read
        has_setter: Accessor members only: whether the accessor can be written
    """

    name: str
    kind: MemberKind
    has_getter: bool = False
    has_setter: bool = False

    @property
    def replacement(self) -> Replacement:
        """Kind of member a fake carries in place of this one."""
        return _REPLACEMENTS[self.kind]

    def to_dict(self) -> dict[str, str | bool]:
        return {
            "name": self.name,
            "kind": self.kind,
            "replacement": self.replacement,
            "has_getter": self.has_getter,
            "has_setter": self.has_setter,
        }


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _mro(template: object) -> tuple[type, ...]:
    if isinstance(template, type):
        return template.__mro__
    return type(template).__mro__


def _annotated_names(klass: type) -> list[str]:
    try:
        return list(inspect.get_annotations(klass))
    except NameError:
        # Annotations referring to names that no longer resolve
        return list(getattr(klass, "__dict__", {}).get("__annotations__", {}))


def _is_annotated(template: object, name: str) -> bool:
    return any(name in _annotated_names(klass) for klass in _mro(template))


def discover_member_names(template: object) -> list[str]:
    """Return every member name a fake of template must replace, sorted."""
    names = {name for name in dir(template) if not _is_dunder(name)}
    for klass in _mro(template):
        names.update(name for name in _annotated_names(klass) if not _is_dunder(name))
    return sorted(names - _RUNTIME_NAMES)


def is_accessor(value: object) -> bool:
    """Whether value computes reads instead of storing a plain value."""
    if isinstance(value, functools.cached_property):
        return True
    kind = type(value)
    return hasattr(kind, "__get__") and (hasattr(kind, "__set__") or hasattr(kind, "__delete__"))


def _unwrap_method(value: object) -> object:
    if isinstance(value, (staticmethod, classmethod)):
        return value.__func__
    return value


def _describe_accessor(name: str, value: object) -> MemberDescriptor:
    if isinstance(value, property):
        has_getter = value.fget is not None
        has_setter = value.fset is not None
    else:
        has_getter = True
        has_setter = hasattr(type(value), "__set__")
    return MemberDescriptor(
        name=name,
        kind="accessor",
        has_getter=has_getter,
        has_setter=has_setter,
    )


def _describe_live(template: object, name: str) -> MemberDescriptor:
    """Classify a member by reading its live value.

    Used when no static descriptor exists for the name, which is the case for
    names served by __getattr__, or for every name when descriptor
    introspection is turned off. Reading may run template code, and whatever
    that code raises leaves the member indeterminate.
    """
    logger.debug("Classifying %r from its live value", name)
    try:
        value = getattr(template, name)
    except Exception as error:
        logger.debug("Cannot read %r (%s: %s); leaving it inert", name, type(error).__name__, error)
        return MemberDescriptor(name=name, kind="indeterminate")
    if callable(value):
        return MemberDescriptor(name=name, kind="method")
    return MemberDescriptor(name=name, kind="indeterminate")


def classify_member(
    template: object, name: str, *, use_descriptors: bool = True
) -> MemberDescriptor:
    """Classify one member of template.

    Args:
        template: Object being faked
        name: Member name, as returned by discover_member_names()
        use_descriptors: When False, skip static descriptor lookup and
            classify every member from its live value

    Returns:
        Descriptor saying how the member is defined and what replaces it
    """
    if not use_descriptors:
        return _describe_live(template, name)

    value = inspect.getattr_static(template, name, _MISSING)
    if value is _MISSING:
        if _is_annotated(template, name):
            return MemberDescriptor(name=name, kind="plain-data")
        return _describe_live(template, name)

    if is_accessor(value):
        return _describe_accessor(name, value)
    if callable(_unwrap_method(value)):
        return MemberDescriptor(name=name, kind="method")
    return MemberDescriptor(name=name, kind="plain-data")


def describe_members(template: object, *, use_descriptors: bool = True) -> list[MemberDescriptor]:
    """Classify every member of template, sorted by name."""
    return [
        classify_member(template, name, use_descriptors=use_descriptors)
        for name in discover_member_names(template)
    ]
