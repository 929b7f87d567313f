"""Testing helpers: no-op stubs, guarded fakes and data-driven tests."""

from leche.builder import ABSENT, Fake, FakeBuilder, GuardedAttribute, fake, is_fake_of
from leche.dataset import DataCase, iter_cases, named_dataset, stringify_label
from leche.errors import (
    InvalidDatasetArgument,
    LecheError,
    UnexpectedMethodCall,
    UnexpectedPropertyUse,
)
from leche.members import MemberDescriptor, classify_member, describe_members
from leche.parametrize import with_data
from leche.stubs import create

__all__ = [
    "ABSENT",
    "DataCase",
    "Fake",
    "FakeBuilder",
    "GuardedAttribute",
    "InvalidDatasetArgument",
    "LecheError",
    "MemberDescriptor",
    "UnexpectedMethodCall",
    "UnexpectedPropertyUse",
    "classify_member",
    "create",
    "describe_members",
    "fake",
    "is_fake_of",
    "iter_cases",
    "named_dataset",
    "stringify_label",
    "with_data",
]
