"""
MonitoringInfo（输入侧）：契约、payload 编解码与 shape 校验。
"""

from __future__ import annotations

from counter_bridge.monitoring.coders import DistributionData
from counter_bridge.monitoring.contracts import Labels, MonitoringInfo, Urns
from counter_bridge.monitoring.validator import ShapeValidator, SpecMonitoringInfoValidator

__all__ = [
    "DistributionData",
    "Labels",
    "MonitoringInfo",
    "ShapeValidator",
    "SpecMonitoringInfoValidator",
    "Urns",
]
