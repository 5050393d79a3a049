"""
Translators：MonitoringInfo -> CounterUpdate（每个 metric family 一个变体）+ 按 urn 前缀路由。
"""

from __future__ import annotations

from counter_bridge.translators.dispatcher import MonitoringInfoDispatcher
from counter_bridge.translators.protocol import BaseMonitoringInfoTranslator, MonitoringInfoTranslator
from counter_bridge.translators.user_counter import UserCounterTranslator
from counter_bridge.translators.user_distribution import UserDistributionTranslator

__all__ = [
    "BaseMonitoringInfoTranslator",
    "MonitoringInfoDispatcher",
    "MonitoringInfoTranslator",
    "UserCounterTranslator",
    "UserDistributionTranslator",
]
