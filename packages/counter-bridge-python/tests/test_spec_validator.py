from __future__ import annotations

from counter_bridge.monitoring.coders import DistributionData, encode_int64_distribution
from counter_bridge.monitoring.contracts import Labels, MonitoringInfo, Urns
from counter_bridge.monitoring.validator import ShapeValidator, SpecMonitoringInfoValidator, UrnShape

_LABELS = {Labels.NAME: "n", Labels.NAMESPACE: "ns", Labels.PTRANSFORM: "step"}


def test_validator_satisfies_protocol() -> None:
    assert isinstance(SpecMonitoringInfoValidator(), ShapeValidator)


def test_valid_user_distribution_passes() -> None:
    payload = encode_int64_distribution(DistributionData(count=1, sum=1, min=1, max=1))
    record = MonitoringInfo(urn=Urns.USER_DISTRIBUTION_INT64, labels=_LABELS, payload=payload)
    assert SpecMonitoringInfoValidator().validate(record) is None


def test_empty_urn_is_rejected() -> None:
    err = SpecMonitoringInfoValidator().validate(MonitoringInfo(urn="  "))
    assert err is not None
    assert "urn" in err


def test_missing_required_label_is_reported() -> None:
    labels = dict(_LABELS)
    labels.pop(Labels.PTRANSFORM)
    err = SpecMonitoringInfoValidator().validate(MonitoringInfo(urn=Urns.USER_DISTRIBUTION_INT64, labels=labels))
    assert err is not None
    assert Labels.PTRANSFORM in err


def test_empty_label_value_depends_on_config() -> None:
    labels = dict(_LABELS)
    labels[Labels.NAME] = ""
    record = MonitoringInfo(urn=Urns.USER_SUM_INT64, labels=labels)
    assert SpecMonitoringInfoValidator().validate(record) is not None
    assert SpecMonitoringInfoValidator(require_non_empty_labels=False).validate(record) is None


def test_invalid_payload_depends_on_config() -> None:
    record = MonitoringInfo(urn=Urns.USER_DISTRIBUTION_INT64, labels=_LABELS, payload=b"\x80")
    err = SpecMonitoringInfoValidator().validate(record)
    assert err is not None
    assert "payload" in err
    assert SpecMonitoringInfoValidator(check_payload=False).validate(record) is None


def test_unknown_urn_passes_label_checks() -> None:
    assert SpecMonitoringInfoValidator().validate(MonitoringInfo(urn="beam:metric:custom:v1")) is None


def test_element_count_requires_pcollection() -> None:
    validator = SpecMonitoringInfoValidator()
    assert validator.validate(MonitoringInfo(urn="beam:metric:element_count:v1")) is not None
    ok = MonitoringInfo(urn="beam:metric:element_count:v1", labels={Labels.PCOLLECTION: "pc"})
    assert validator.validate(ok) is None


def test_custom_shapes_use_longest_prefix() -> None:
    validator = SpecMonitoringInfoValidator(
        shapes={
            "x:metric": UrnShape(required_labels=("A",)),
            "x:metric:special": UrnShape(required_labels=("B",)),
        }
    )
    assert validator.shape_for("x:metric:special:v1") == UrnShape(required_labels=("B",))
    assert validator.validate(MonitoringInfo(urn="x:metric:special:v1", labels={"B": "1"})) is None
    assert validator.validate(MonitoringInfo(urn="x:metric:other", labels={"B": "1"})) is not None


def test_shape_lookup_uses_raw_urn() -> None:
    # 带前导空白的 urn 不属于任何 family
    record = MonitoringInfo(urn=" " + Urns.USER_DISTRIBUTION_INT64, labels={})
    assert SpecMonitoringInfoValidator().validate(record) is None
    assert SpecMonitoringInfoValidator().validate(MonitoringInfo(urn=Urns.USER_DISTRIBUTION_INT64)) is not None
