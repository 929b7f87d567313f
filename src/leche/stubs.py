"""Stub objects whose methods do nothing."""

from collections.abc import Iterable
from types import SimpleNamespace


def _noop(*args: object, **kwargs: object) -> None:
    pass


def create(names: Iterable[str]) -> SimpleNamespace:
    """Create an object with a no-op method for each name.

    Every method accepts any arguments and returns None. They all share one
    implementation since it does nothing.
    """
    return SimpleNamespace(**{name: _noop for name in names})
