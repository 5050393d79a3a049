from __future__ import annotations

import json

import pytest

from counter_bridge.counters.contracts import (
    CounterKind,
    CounterMetadata,
    CounterOrigin,
    CounterStructuredName,
    CounterStructuredNameAndMetadata,
    CounterUpdate,
    DistributionUpdate,
)
from counter_bridge.counters.wire import counter_update_to_wire, join_split_int64, split_int64
from counter_bridge.monitoring.coders import INT64_MAX, INT64_MIN


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, {"highBits": 0, "lowBits": 0}),
        (1, {"highBits": 0, "lowBits": 1}),
        (0xFFFFFFFF, {"highBits": 0, "lowBits": 0xFFFFFFFF}),
        (1 << 32, {"highBits": 1, "lowBits": 0}),
        (-1, {"highBits": -1, "lowBits": 0xFFFFFFFF}),
        (INT64_MAX, {"highBits": 0x7FFFFFFF, "lowBits": 0xFFFFFFFF}),
        (INT64_MIN, {"highBits": -0x80000000, "lowBits": 0}),
    ],
)
def test_split_int64(value: int, expected: dict) -> None:
    assert split_int64(value) == expected
    assert join_split_int64(expected) == value


def test_join_split_int64_rejects_out_of_range_halves() -> None:
    with pytest.raises(ValueError):
        join_split_int64({"highBits": 1 << 31, "lowBits": 0})
    with pytest.raises(ValueError):
        join_split_int64({"highBits": 0, "lowBits": -1})


def _name(*, original_step_name: str | None = "s1") -> CounterStructuredNameAndMetadata:
    return CounterStructuredNameAndMetadata(
        name=CounterStructuredName(
            name="n",
            origin=CounterOrigin.USER,
            origin_namespace="ns",
            original_step_name=original_step_name,
        ),
        metadata=CounterMetadata(kind=CounterKind.SUM),
    )


def test_wire_omits_unset_fields() -> None:
    update = CounterUpdate(cumulative=True, integer=5, structured_name_and_metadata=_name(original_step_name=None))
    wire = counter_update_to_wire(update)
    assert "distribution" not in wire
    assert wire["integer"] == {"highBits": 0, "lowBits": 5}
    assert "originalStepName" not in wire["structuredNameAndMetadata"]["name"]
    assert wire["structuredNameAndMetadata"]["metadata"] == {"kind": "SUM"}


def test_to_json_is_stable_and_camel_case() -> None:
    update = CounterUpdate(
        cumulative=False,
        distribution=DistributionUpdate(count=1, sum=2, min=3, max=4),
        structured_name_and_metadata=_name(),
    )
    raw = update.to_json()
    assert raw == update.to_json()
    obj = json.loads(raw)
    assert obj["cumulative"] is False
    assert obj["distribution"]["max"] == {"highBits": 0, "lowBits": 4}
    assert obj["structuredNameAndMetadata"]["name"]["originNamespace"] == "ns"


def test_counter_update_rejects_out_of_range_values() -> None:
    with pytest.raises(ValueError):
        DistributionUpdate(count=INT64_MAX + 1)
    with pytest.raises(ValueError):
        CounterUpdate(integer=INT64_MIN - 1, structured_name_and_metadata=_name())


@pytest.mark.parametrize("field", ["count", "sum", "min", "max"])
def test_distribution_range_error_names_the_field(field: str) -> None:
    with pytest.raises(ValueError, match=rf"distribution\.{field} out of int64 range"):
        DistributionUpdate(**{field: INT64_MAX + 1})


def test_counter_update_forbids_unknown_fields() -> None:
    with pytest.raises(ValueError):
        CounterUpdate(structured_name_and_metadata=_name(), delta=True)  # type: ignore[call-arg]
