"""用户计数 metric（user sum_int64）-> SUM CounterUpdate。"""

from __future__ import annotations

from counter_bridge.counters.contracts import (
    CounterKind,
    CounterMetadata,
    CounterOrigin,
    CounterStructuredName,
    CounterStructuredNameAndMetadata,
    CounterUpdate,
)
from counter_bridge.monitoring.coders import decode_int64_counter
from counter_bridge.monitoring.contracts import Labels, MonitoringInfo, Urns
from counter_bridge.steps.naming import NameContext
from counter_bridge.translators.protocol import BaseMonitoringInfoTranslator


class UserCounterTranslator(BaseMonitoringInfoTranslator):
    """把 user counter MonitoringInfo 翻译为累计的 SUM counter（`integer` 字段）。"""

    URN_PREFIX = Urns.USER_SUM_INT64

    def _build(self, record: MonitoringInfo, name_context: NameContext) -> CounterUpdate:
        """构造 SUM CounterUpdate。"""

        return CounterUpdate(
            cumulative=True,
            integer=decode_int64_counter(record.payload),
            structured_name_and_metadata=CounterStructuredNameAndMetadata(
                name=CounterStructuredName(
                    name=record.labels[Labels.NAME],
                    origin=CounterOrigin.USER,
                    origin_namespace=record.labels[Labels.NAMESPACE],
                    original_step_name=name_context.original_name,
                ),
                metadata=CounterMetadata(kind=CounterKind.SUM),
            ),
        )
