"""
用户分布 metric（user distribution）-> DISTRIBUTION CounterUpdate。
"""

from __future__ import annotations

from counter_bridge.counters.contracts import (
    CounterKind,
    CounterMetadata,
    CounterOrigin,
    CounterStructuredName,
    CounterStructuredNameAndMetadata,
    CounterUpdate,
    DistributionUpdate,
)
from counter_bridge.monitoring.coders import decode_int64_distribution
from counter_bridge.monitoring.contracts import Labels, MonitoringInfo, Urns
from counter_bridge.steps.naming import NameContext
from counter_bridge.translators.protocol import BaseMonitoringInfoTranslator


class UserDistributionTranslator(BaseMonitoringInfoTranslator):
    """
    把 user distribution MonitoringInfo 翻译为累计的 DISTRIBUTION counter。

    输出：
    - cumulative=True（自 step 开始以来的累计值）
    - distribution：payload 解码出的 count/sum/min/max
    - name：NAME label / origin=USER / NAMESPACE label / NameContext.original_name
    """

    URN_PREFIX = Urns.USER_DISTRIBUTION_INT64

    def _build(self, record: MonitoringInfo, name_context: NameContext) -> CounterUpdate:
        """构造 DISTRIBUTION CounterUpdate。"""

        # NAME/NAMESPACE 的存在性由 validator 负责
        data = decode_int64_distribution(record.payload)
        return CounterUpdate(
            cumulative=True,
            distribution=DistributionUpdate(count=data.count, sum=data.sum, min=data.min, max=data.max),
            structured_name_and_metadata=CounterStructuredNameAndMetadata(
                name=CounterStructuredName(
                    name=record.labels[Labels.NAME],
                    origin=CounterOrigin.USER,
                    origin_namespace=record.labels[Labels.NAMESPACE],
                    original_step_name=name_context.original_name,
                ),
                metadata=CounterMetadata(kind=CounterKind.DISTRIBUTION),
            ),
        )
