"""Normalization of labeled datasets for data-driven tests.

A dataset is either a mapping from label to arguments, or a non-empty list
(or tuple) of entries labeled by their string rendering. In both cases a
list or tuple value is spread as positional arguments and anything else is
passed as the only argument.
"""

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from leche.errors import InvalidDatasetArgument

# Prefix of every case label, as shown in test ids
LABEL_PREFIX = "with "

# Maximum length of labels rendered as JSON
JSON_LABEL_LENGTH = 30

# How deep nested lists are rendered item by item when labeling list entries
LIST_LABEL_DEPTH = 1


@dataclass(frozen=True)
class DataCase:
    """One entry of a dataset, ready to be applied to a test body."""

    label: str
    args: tuple[object, ...]

    @property
    def test_id(self) -> str:
        return f"{LABEL_PREFIX}{self.label}"


def _truncated_json(value: object) -> str:
    return json.dumps(value, default=str)[:JSON_LABEL_LENGTH]


def _has_default_str(value: object) -> bool:
    kind = type(value)
    return kind.__str__ is object.__str__ and kind.__repr__ is object.__repr__


def stringify_label(value: object, max_depth: int) -> str:
    """Render value as a human-readable label.

    Lists and tuples are rendered item by item, joined with commas, up to
    max_depth levels deep. Dicts and objects without their own str() are
    rendered as truncated JSON. Everything else uses str().
    """
    if isinstance(value, (list, tuple)) and max_depth > 0:
        return ",".join(stringify_label(item, max_depth - 1) for item in value)
    if isinstance(value, dict):
        return _truncated_json(value)
    if _has_default_str(value) and hasattr(value, "__dict__"):
        return _truncated_json(vars(value))
    return str(value)


def _as_args(value: object) -> tuple[object, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def named_dataset(dataset: object) -> dict[str, tuple[object, ...]]:
    """Normalize dataset into a mapping of label to positional arguments.

    Entries of a list dataset that render to the same label collapse, the
    last one winning. Mapping keys must stay distinct once converted to str.

    Raises:
        InvalidDatasetArgument: If dataset is neither a mapping nor a
            non-empty list or tuple, or two mapping keys share a label
    """
    if isinstance(dataset, Mapping):
        named: dict[str, tuple[object, ...]] = {}
        for key, value in dataset.items():
            label = str(key)
            if label in named:
                msg = f"Dataset keys {label!r} collide once converted to labels."
                raise InvalidDatasetArgument(msg)
            named[label] = _as_args(value)
        return named
    if isinstance(dataset, (list, tuple)) and dataset:
        return {stringify_label(entry, LIST_LABEL_DEPTH): _as_args(entry) for entry in dataset}
    raise InvalidDatasetArgument()


def iter_cases(dataset: object) -> Iterator[DataCase]:
    """Yield one DataCase per dataset entry, in dataset order.

    The dataset is validated before the first case is produced.
    """
    named = named_dataset(dataset)
    return (DataCase(label=label, args=args) for label, args in named.items())
