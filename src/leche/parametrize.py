"""pytest integration for data-driven tests.

with_data() turns a test body into a parametrized pytest test with one case
per dataset entry. The entry's arguments fill the body's leading positional
parameters; the parameters after them are still requested as fixtures.

    @with_data({"zero": (0, 0), "negative": (-1, 1)})
    def test_abs(value, expected):
        assert abs(value) == expected

The cases are reported as test_abs[with zero] and test_abs[with negative].
"""

import inspect
from collections.abc import Callable
from inspect import Parameter
from typing import cast, overload

import pytest

from leche.dataset import DataCase, iter_cases

# Name of the parameter that carries each case into the generated test
CASE_ARGNAME = "leche_case"

TestBody = Callable[..., object]

_POSITIONAL_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)


def _fixture_parameters(parameters: list[Parameter], width: int) -> list[Parameter]:
    """Parameters left for pytest to fill once width data arguments are taken."""
    fixtures: list[Parameter] = []
    consumed = 0
    for parameter in parameters:
        if parameter.kind in _POSITIONAL_KINDS and consumed < width:
            consumed += 1
            continue
        if parameter.kind is Parameter.VAR_POSITIONAL:
            consumed = width
            continue
        if parameter.kind is Parameter.VAR_KEYWORD or parameter.default is not Parameter.empty:
            continue
        fixtures.append(parameter.replace(kind=Parameter.KEYWORD_ONLY))
    return fixtures


def _parametrize(test_body: TestBody, cases: list[DataCase]) -> TestBody:
    parameters = list(inspect.signature(test_body).parameters.values())
    leading = parameters[:1] if parameters and parameters[0].name == "self" else []
    width = max((len(case.args) for case in cases), default=0)
    fixtures = _fixture_parameters(parameters[len(leading) :], width)

    def run_case(*args: object, **kwargs: object) -> object:
        case = cast(DataCase, kwargs.pop(CASE_ARGNAME))
        return test_body(*args, *case.args, **kwargs)

    run_case.__name__ = test_body.__name__
    run_case.__qualname__ = test_body.__qualname__
    run_case.__doc__ = test_body.__doc__
    run_case.__module__ = test_body.__module__
    run_case.__signature__ = inspect.Signature(  # type: ignore[attr-defined]
        [*leading, Parameter(CASE_ARGNAME, Parameter.POSITIONAL_OR_KEYWORD), *fixtures]
    )
    # Keep marks already applied to the body, such as skip or xfail
    run_case.pytestmark = list(getattr(test_body, "pytestmark", []))  # type: ignore[attr-defined]

    if not cases:
        # Nothing to run: keep pytest from collecting an empty parameter set
        run_case.__test__ = False  # type: ignore[attr-defined]
        return run_case

    params = [pytest.param(case, id=case.test_id) for case in cases]
    return pytest.mark.parametrize(CASE_ARGNAME, params)(run_case)


@overload
def with_data(dataset: object) -> Callable[[TestBody], TestBody]: ...


@overload
def with_data(dataset: object, test_body: TestBody) -> TestBody: ...


def with_data(
    dataset: object, test_body: TestBody | None = None
) -> TestBody | Callable[[TestBody], TestBody]:
    """Run test_body once per dataset entry.

    Args:
        dataset: Mapping of label to arguments, or non-empty list of entries
        test_body: Test function receiving each entry's arguments positionally.
            When omitted, a decorator is returned.

    Returns:
        Parametrized pytest test function, or a decorator producing one

    Raises:
        InvalidDatasetArgument: If dataset is not a mapping or non-empty list,
            raised immediately rather than at collection time
    """
    cases = list(iter_cases(dataset))
    if test_body is None:
        return lambda body: _parametrize(body, cases)
    return _parametrize(test_body, cases)
