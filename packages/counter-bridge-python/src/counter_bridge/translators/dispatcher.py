"""
MonitoringInfoDispatcher：按 urn 前缀把记录路由到对应 family 的 translator。

说明：
- 路由采用最长前缀匹配；
- 没有 translator 认领的 urn 属于“本 backend 不上报的 metric”，按丢弃处理（返回 None）；
- translator 内部仍会做 family 检查，因此 dispatcher 的路由缺陷会以 MonitoringInfoRoutingError 暴露。
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from counter_bridge.core.errors import UserError
from counter_bridge.counters.contracts import CounterUpdate
from counter_bridge.monitoring.contracts import MonitoringInfo
from counter_bridge.translators.protocol import MonitoringInfoTranslator, resolve_drop_log_level

logger = logging.getLogger(__name__)


class MonitoringInfoDispatcher:
    """按 urn 前缀派发 MonitoringInfo。"""

    def __init__(
        self,
        translators: Iterable[MonitoringInfoTranslator] = (),
        *,
        drop_log_level: Any = logging.DEBUG,
    ) -> None:
        """创建 dispatcher 并注册 translators。

        参数：
        - `translators`：待注册的 translator（`URN_PREFIX` 不得重复）
        - `drop_log_level`：未知 urn 被丢弃时的日志级别（`off` 表示不记录）
        """

        self._by_prefix: Dict[str, MonitoringInfoTranslator] = {}
        self._prefixes: List[str] = []
        self._drop_log_level = resolve_drop_log_level(drop_log_level)
        for translator in translators:
            self.register(translator)

    def register(self, translator: MonitoringInfoTranslator) -> None:
        """
        注册一个 translator。

        异常：
        - UserError：URN_PREFIX 为空或已被注册
        """

        prefix = str(getattr(translator, "URN_PREFIX", "") or "")
        if not prefix:
            raise UserError(
                "translator must define a non-empty URN_PREFIX",
                code="TRANSLATOR_PREFIX_MISSING",
                details={"translator": type(translator).__name__},
            )
        if prefix in self._by_prefix:
            raise UserError(
                f"urn prefix already registered: {prefix}",
                code="TRANSLATOR_PREFIX_DUPLICATE",
                details={
                    "urn_prefix": prefix,
                    "existing": type(self._by_prefix[prefix]).__name__,
                    "translator": type(translator).__name__,
                },
            )
        self._by_prefix[prefix] = translator
        self._prefixes = sorted(self._by_prefix, key=len, reverse=True)

    def supported_prefixes(self) -> List[str]:
        """返回已注册的 urn 前缀（按字典序）。"""

        return sorted(self._by_prefix)

    def translator_for(self, urn: str) -> Optional[MonitoringInfoTranslator]:
        """返回负责该 urn 的 translator（最长前缀匹配）；没有则返回 None。"""

        for prefix in self._prefixes:
            if urn.startswith(prefix):
                return self._by_prefix[prefix]
        return None

    def translate(self, record: Optional[MonitoringInfo]) -> Optional[CounterUpdate]:
        """
        路由并翻译一条记录。

        返回：
        - CounterUpdate 或 None（空输入 / 未知 urn / translator 返回 None）

        异常：
        - MonitoringInfoRoutingError：translator 的 family 检查失败（不吞掉）
        """

        if record is None:
            return None
        translator = self.translator_for(record.urn)
        if translator is None:
            if self._drop_log_level is not None:
                logger.log(self._drop_log_level, "no translator for MonitoringInfo urn=%s", record.urn)
            return None
        return translator.translate(record)
