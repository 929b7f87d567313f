"""Tests for dataset normalization and case labels."""

import pytest

from leche import DataCase, InvalidDatasetArgument, iter_cases, named_dataset, stringify_label


class Plain:
    def __init__(self) -> None:
        self.size = 3
        self.name = "a rather long name for a label"


class Described:
    def __str__(self) -> str:
        return "described"


def _run(dataset: object) -> list[tuple[object, ...]]:
    calls: list[tuple[object, ...]] = []
    for case in iter_cases(dataset):
        calls.append(case.args)
    return calls


def test_mapping_with_list_values_spreads_arguments() -> None:
    assert _run({"name1": [1, 2], "name2": [3, 4]}) == [(1, 2), (3, 4)]


def test_mapping_with_single_values_passes_one_argument() -> None:
    assert _run({"name1": 1, "name2": 2}) == [(1,), (2,)]


def test_list_of_lists_spreads_arguments() -> None:
    assert _run([[1, 2], [3, 4]]) == [(1, 2), (3, 4)]


def test_list_of_single_values_passes_one_argument() -> None:
    assert _run([1, 2]) == [(1,), (2,)]


def test_tuples_are_spread_like_lists() -> None:
    assert _run({"pair": (1, 2)}) == [(1, 2)]


def test_empty_mapping_has_no_cases() -> None:
    assert _run({}) == []


@pytest.mark.parametrize("dataset", [None, [], (), "text", b"bytes", 42, {1, 2}])
def test_invalid_dataset_raises(dataset: object) -> None:
    with pytest.raises(InvalidDatasetArgument, match="First argument must be"):
        named_dataset(dataset)


def test_invalid_dataset_raises_before_any_case() -> None:
    with pytest.raises(InvalidDatasetArgument):
        iter_cases(None)


def test_invalid_dataset_argument_is_value_error() -> None:
    with pytest.raises(ValueError):
        named_dataset([])


def test_mapping_labels_are_keys() -> None:
    labels = [case.label for case in iter_cases({"testName": 1, "wonderful test name": 2})]

    assert labels == ["testName", "wonderful test name"]


def test_list_labels_join_nested_items() -> None:
    labels = [case.label for case in iter_cases([[1, 2], [3, 4]])]

    assert labels == ["1,2", "3,4"]


def test_list_labels_for_primitives() -> None:
    labels = [case.label for case in iter_cases(["testName", 123])]

    assert labels == ["testName", "123"]


def test_mapping_keys_colliding_as_labels_raise() -> None:
    """1 and "1" would both be reported as "with 1", so the dataset is rejected."""
    with pytest.raises(InvalidDatasetArgument, match="Dataset keys '1' collide"):
        named_dataset({1: "int key", "1": "str key"})


def test_duplicate_list_labels_keep_last_entry() -> None:
    named = named_dataset([[1, 2], ["1", "2"]])

    assert named == {"1,2": ("1", "2")}


def test_case_test_id_is_prefixed() -> None:
    assert DataCase(label="empty", args=()).test_id == "with empty"


def test_stringify_dict_is_truncated_json() -> None:
    label = stringify_label({"key": "value", "other": "a long value that is cut"}, 1)

    assert label == '{"key": "value", "other": "a l'
    assert len(label) == 30


def test_stringify_plain_object_uses_its_fields() -> None:
    assert stringify_label(Plain(), 1) == '{"size": 3, "name": "a rather '


def test_stringify_object_with_str_uses_it() -> None:
    assert stringify_label(Described(), 1) == "described"


def test_stringify_nested_lists_stops_at_depth() -> None:
    assert stringify_label([1, [2, [3]]], 1) == "1,[2, [3]]"
    assert stringify_label([1, [2, [3]]], 2) == "1,2,[3]"


def test_stringify_list_inside_list_entry_renders_items() -> None:
    assert stringify_label([Described(), None, True], 1) == "described,None,True"
