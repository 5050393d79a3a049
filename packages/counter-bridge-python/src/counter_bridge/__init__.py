"""
counter-bridge（Python）。

说明：
- 把通用、按 urn 标注的 MonitoringInfo 翻译为执行引擎 counter 上报子系统使用的 CounterUpdate；
- 当前已包含：
  - 输入/输出契约（MonitoringInfo / CounterUpdate / NameContext）
  - payload 编解码（int64 varint / distribution / counter）
  - translators（user distribution / user counter）与按 urn 前缀路由的 dispatcher
  - 默认 ShapeValidator 与配置加载器（YAML overlay + pydantic 校验）
"""

from __future__ import annotations

from counter_bridge.core.errors import MonitoringInfoRoutingError
from counter_bridge.counters.contracts import CounterUpdate
from counter_bridge.monitoring.contracts import Labels, MonitoringInfo, Urns
from counter_bridge.steps.naming import NameContext, StepNameTable
from counter_bridge.translators.dispatcher import MonitoringInfoDispatcher
from counter_bridge.translators.user_counter import UserCounterTranslator
from counter_bridge.translators.user_distribution import UserDistributionTranslator

__all__ = [
    "CounterUpdate",
    "Labels",
    "MonitoringInfo",
    "MonitoringInfoDispatcher",
    "MonitoringInfoRoutingError",
    "NameContext",
    "StepNameTable",
    "Urns",
    "UserCounterTranslator",
    "UserDistributionTranslator",
    "__version__",
]

__version__ = "0.1.0"
