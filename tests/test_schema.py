from __future__ import annotations

import pytest

from tfutil.core.infra.schema import RequiresReplaceIf, values_equal


@pytest.mark.parametrize(
    "a,b",
    [
        (1, True),
        (0, False),
        (1, 1.0),
        ({"x": 0}, {"x": False}),
        ([0], [False]),
        ({"a": 1}, {"a": 1, "b": None}),
        ([1, 2], [1, 2, 3]),
        (None, False),
    ],
)
def test_values_equal_distinguishes_types(a, b):
    assert not values_equal(a, b)
    assert not values_equal(b, a)


@pytest.mark.parametrize(
    "value",
    [None, True, 0, "v", {"k": [1, {"n": False}]}, [True, "x"]],
)
def test_values_equal_same_value(value):
    assert values_equal(value, value)


def test_key_order_does_not_matter():
    assert values_equal({"a": 1, "b": [True]}, {"b": [True], "a": 1})


def test_requires_replace_if_sees_bool_number_change():
    modifier = RequiresReplaceIf(lambda state, plan: state is not None)
    assert modifier.requires_replace(1, True)
    assert not modifier.requires_replace(True, True)
    assert not modifier.requires_replace(None, 1)
