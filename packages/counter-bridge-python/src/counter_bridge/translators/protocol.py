"""
MonitoringInfo -> CounterUpdate translator 协议与公共流程。

流程（线性决策链）：
- record 为 None          -> None
- shape 校验失败          -> None
- urn 不属于本 family     -> 抛 MonitoringInfoRoutingError（接线缺陷，必须向上传播）
- PTRANSFORM 无法解析     -> None（step 可能已被上游裁剪/融合）
- payload 无法解码        -> None（validator 关闭了 payload 校验时才会走到这里）
- 其余                    -> CounterUpdate

各 family 的子类只需提供 `URN_PREFIX` 与 `_build(...)`。
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol, runtime_checkable

from counter_bridge.core.errors import MonitoringInfoRoutingError, PayloadDecodeError
from counter_bridge.counters.contracts import CounterUpdate
from counter_bridge.monitoring.contracts import Labels, MonitoringInfo
from counter_bridge.monitoring.validator import ShapeValidator
from counter_bridge.steps.naming import NameContext, StepNameResolver, as_step_name_resolver

logger = logging.getLogger(__name__)

DROP_LOG_LEVELS = {
    "off": None,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
}


def resolve_drop_log_level(level: Any) -> Optional[int]:
    """
    把配置中的 drop 日志级别转换为 logging 级别。

    参数：
    - level：`off|debug|info|warning`、logging 整数级别或 None（等价于 off）

    异常：
    - ValueError：未知级别
    """

    if level is None:
        return None
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    key = str(level).strip().lower()
    if key not in DROP_LOG_LEVELS:
        raise ValueError(f"drop log level must be one of: {sorted(DROP_LOG_LEVELS)}; got: {level!r}")
    return DROP_LOG_LEVELS[key]


@runtime_checkable
class MonitoringInfoTranslator(Protocol):
    """“翻译一条记录”的能力（dispatcher 按 `URN_PREFIX` 路由）。"""

    URN_PREFIX: str

    def translate(self, record: Optional[MonitoringInfo]) -> Optional[CounterUpdate]:
        """翻译一条记录；无可上报内容时返回 None。"""

        ...


class BaseMonitoringInfoTranslator(ABC):
    """
    translator 公共流程（validate -> check family -> resolve step -> build）。

    说明：
    - 不持有跨调用状态，可并发调用（前提是 resolver 自身支持并发读）；
    - validator/resolver 只读使用，不会被修改。
    """

    URN_PREFIX: str = ""

    def __init__(
        self,
        validator: ShapeValidator,
        step_names: Any,
        *,
        drop_log_level: Any = logging.DEBUG,
    ) -> None:
        """创建 translator。

        参数：
        - `validator`：ShapeValidator
        - `step_names`：StepNameResolver，或 `Mapping[str, NameContext]` / 查找函数（自动适配）
        - `drop_log_level`：记录被丢弃时的日志级别（`off` 表示不记录）
        """

        if not self.URN_PREFIX:
            raise TypeError(f"{type(self).__name__} must define URN_PREFIX")
        self._validator = validator
        self._step_names: StepNameResolver = as_step_name_resolver(step_names)
        self._drop_log_level = resolve_drop_log_level(drop_log_level)

    def _log_drop(self, reason: str, record: MonitoringInfo, detail: str) -> None:
        """按配置级别记录一次丢弃（off 时不记录）。"""

        if self._drop_log_level is None:
            return
        logger.log(
            self._drop_log_level,
            "%s dropped MonitoringInfo urn=%s reason=%s: %s",
            type(self).__name__,
            record.urn,
            reason,
            detail,
        )

    def translate(self, record: Optional[MonitoringInfo]) -> Optional[CounterUpdate]:
        """
        翻译一条 MonitoringInfo。

        返回：
        - CounterUpdate：成功
        - None：输入为空 / shape 非法 / step 无法解析 / payload 无法解码

        异常：
        - MonitoringInfoRoutingError：urn 不属于本 translator 的 family
        """

        if record is None:
            return None

        error = self._validator.validate(record)
        if error is not None:
            self._log_drop("invalid_shape", record, error)
            return None

        if not record.urn.startswith(self.URN_PREFIX):
            raise MonitoringInfoRoutingError(
                urn=record.urn,
                expected_prefix=self.URN_PREFIX,
                translator=type(self).__name__,
            )

        step_ref = record.labels.get(Labels.PTRANSFORM, "")
        name_context = self._step_names.lookup(step_ref)
        if name_context is None:
            self._log_drop("unresolved_step", record, f"unknown {Labels.PTRANSFORM} {step_ref!r}")
            return None

        try:
            return self._build(record, name_context)
        except PayloadDecodeError as exc:
            self._log_drop("invalid_payload", record, str(exc))
            return None

    @abstractmethod
    def _build(self, record: MonitoringInfo, name_context: NameContext) -> CounterUpdate:
        """
        由子类构造 CounterUpdate（此时 record 已通过 shape/family/step 检查）。

        异常：
        - PayloadDecodeError：payload 无法解码（由基类转为丢弃）
        """
