"""Errors raised by leche fakes and data-driven test helpers.

None of these are caught inside the library. They are signals to the test
author that an interaction was not arranged before it happened.
"""


class LecheError(Exception):
    """Base exception for leche errors."""


class UnexpectedMethodCall(LecheError):
    """Raised when a guarded method on a fake is called before being replaced."""

    def __init__(self, name: str) -> None:
        super().__init__(f'Unexpected call to method "{name}".')
        self.name = name


class UnexpectedPropertyUse(LecheError):
    """Raised when a guarded attribute on a fake is read before being assigned.

    Not an AttributeError subclass: getattr() defaults and __getattr__
    fallbacks would otherwise hide it.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f'Unexpected use of property "{name}".')
        self.name = name


class InvalidDatasetArgument(LecheError, ValueError):
    """Raised when a dataset is not a mapping or a non-empty sequence, or its labels collide."""

    def __init__(
        self, message: str = "First argument must be an object or non-empty array."
    ) -> None:
        super().__init__(message)
