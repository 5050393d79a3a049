from __future__ import annotations

import logging
from typing import List, Optional

import pytest

from counter_bridge.core.errors import MonitoringInfoRoutingError, UserError
from counter_bridge.counters.contracts import CounterKind, CounterUpdate
from counter_bridge.monitoring.contracts import Labels, MonitoringInfo, Urns
from counter_bridge.monitoring.validator import SpecMonitoringInfoValidator
from counter_bridge.steps.naming import NameContext
from counter_bridge.translators.dispatcher import MonitoringInfoDispatcher
from counter_bridge.translators.user_counter import UserCounterTranslator
from counter_bridge.translators.user_distribution import UserDistributionTranslator

_NC = NameContext(stage_name="s", original_name="orig", system_name="sys", user_name="user")
_LABELS = {Labels.NAME: "n", Labels.NAMESPACE: "ns", Labels.PTRANSFORM: "step"}


class _RecordingTranslator:
    """记录收到的 record；用于验证路由。"""

    def __init__(self, prefix: str) -> None:
        self.URN_PREFIX = prefix
        self.seen: List[str] = []

    def translate(self, record: Optional[MonitoringInfo]) -> Optional[CounterUpdate]:
        assert record is not None
        self.seen.append(record.urn)
        return None


def _dispatcher(**kwargs: object) -> MonitoringInfoDispatcher:
    validator = SpecMonitoringInfoValidator()
    steps = {"step": _NC}
    return MonitoringInfoDispatcher(
        [UserDistributionTranslator(validator, steps), UserCounterTranslator(validator, steps)],
        **kwargs,  # type: ignore[arg-type]
    )


def test_dispatcher_routes_by_family() -> None:
    d = _dispatcher()
    dist = d.translate(MonitoringInfo(urn=Urns.USER_DISTRIBUTION_INT64, labels=_LABELS))
    counter = d.translate(MonitoringInfo(urn=Urns.USER_SUM_INT64 + ":v1", labels=_LABELS))
    assert dist is not None and dist.structured_name_and_metadata.metadata.kind == CounterKind.DISTRIBUTION
    assert counter is not None and counter.structured_name_and_metadata.metadata.kind == CounterKind.SUM


def test_dispatcher_drops_none_and_unknown_urns() -> None:
    d = _dispatcher()
    assert d.translate(None) is None
    assert d.translate(MonitoringInfo(urn="beam:metric:element_count:v1", labels={Labels.PCOLLECTION: "pc"})) is None


def test_dispatcher_logs_unknown_urn_at_drop_level(caplog: pytest.LogCaptureFixture) -> None:
    d = _dispatcher(drop_log_level="info")
    with caplog.at_level(logging.DEBUG, logger="counter_bridge"):
        d.translate(MonitoringInfo(urn="beam:metric:custom:v1"))
    records = [r for r in caplog.records if "no translator" in r.getMessage()]
    assert len(records) == 1
    assert records[0].levelno == logging.INFO


def test_dispatcher_drop_level_off_is_silent(caplog: pytest.LogCaptureFixture) -> None:
    d = _dispatcher(drop_log_level="off")
    with caplog.at_level(logging.DEBUG, logger="counter_bridge"):
        d.translate(MonitoringInfo(urn="beam:metric:custom:v1"))
    assert caplog.records == []


def test_dispatcher_uses_longest_prefix() -> None:
    short = _RecordingTranslator("x:metric")
    long = _RecordingTranslator("x:metric:special")
    d = MonitoringInfoDispatcher([short, long])
    d.translate(MonitoringInfo(urn="x:metric:special:v1"))
    d.translate(MonitoringInfo(urn="x:metric:plain:v1"))
    assert long.seen == ["x:metric:special:v1"]
    assert short.seen == ["x:metric:plain:v1"]
    assert d.supported_prefixes() == ["x:metric", "x:metric:special"]


def test_dispatcher_rejects_duplicate_and_missing_prefix() -> None:
    d = MonitoringInfoDispatcher([_RecordingTranslator("a")])
    with pytest.raises(UserError) as ei:
        d.register(_RecordingTranslator("a"))
    assert ei.value.code == "TRANSLATOR_PREFIX_DUPLICATE"
    with pytest.raises(UserError) as ei2:
        d.register(_RecordingTranslator(""))
    assert ei2.value.code == "TRANSLATOR_PREFIX_MISSING"


def test_dispatcher_does_not_swallow_translator_routing_error() -> None:
    class _Misrouted(_RecordingTranslator):
        def translate(self, record: Optional[MonitoringInfo]) -> Optional[CounterUpdate]:
            assert record is not None
            raise MonitoringInfoRoutingError(urn=record.urn, expected_prefix="other", translator="_Misrouted")

    d = MonitoringInfoDispatcher([_Misrouted("a")])
    with pytest.raises(MonitoringInfoRoutingError):
        d.translate(MonitoringInfo(urn="a:b"))
