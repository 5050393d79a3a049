"""
ShapeValidator：校验 MonitoringInfo 是否符合其 urn family 的 label/payload 约定。

说明：
- translator 只依赖 `ShapeValidator` 协议（`validate(record) -> Optional[str]`）；
- `SpecMonitoringInfoValidator` 是默认实现：按 urn 前缀查表，返回第一个问题的描述；
- 校验失败属于“数据质量”问题，返回错误描述而不是抛异常。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Protocol, Tuple, runtime_checkable

from counter_bridge.monitoring.coders import decode_int64_counter, decode_int64_distribution
from counter_bridge.monitoring.contracts import Labels, MonitoringInfo, Urns


@runtime_checkable
class ShapeValidator(Protocol):
    """MonitoringInfo shape 校验协议。"""

    def validate(self, record: MonitoringInfo) -> Optional[str]:
        """
        校验一条记录。

        返回：
        - None：通过
        - str：问题描述（调用方据此丢弃该记录）
        """

        ...


@dataclass(frozen=True)
class UrnShape:
    """
    某个 urn family 的 shape 约定。

    字段：
    - required_labels：必须存在的 label key
    - decode_payload：payload 解码函数（用于校验可解码性）
    """

    required_labels: Tuple[str, ...]
    decode_payload: Optional[Callable[[bytes], Any]] = None


DEFAULT_SHAPES: Dict[str, UrnShape] = {
    Urns.USER_DISTRIBUTION_INT64: UrnShape(
        required_labels=(Labels.PTRANSFORM, Labels.NAMESPACE, Labels.NAME),
        decode_payload=decode_int64_distribution,
    ),
    Urns.USER_SUM_INT64: UrnShape(
        required_labels=(Labels.PTRANSFORM, Labels.NAMESPACE, Labels.NAME),
        decode_payload=decode_int64_counter,
    ),
    Urns.ELEMENT_COUNT: UrnShape(
        required_labels=(Labels.PCOLLECTION,),
        decode_payload=decode_int64_counter,
    ),
}


class SpecMonitoringInfoValidator:
    """
    基于 urn 前缀表的默认 ShapeValidator。

    规则：
    - urn 不得为空；
    - 命中 shape 表（最长前缀优先）时，必需 label 必须存在（可选：非空）；
    - `check_payload=True` 时 payload 必须可按 family 解码；
    - 未知 urn 只做 urn 非空检查（由 dispatcher 决定是否处理）。
    """

    def __init__(
        self,
        *,
        shapes: Optional[Dict[str, UrnShape]] = None,
        require_non_empty_labels: bool = True,
        check_payload: bool = True,
    ) -> None:
        """创建 validator。

        参数：
        - `shapes`：urn 前缀 -> UrnShape；缺省使用 `DEFAULT_SHAPES`
        - `require_non_empty_labels`：必需 label 的值是否必须非空
        - `check_payload`：是否校验 payload 可解码
        """

        table = dict(DEFAULT_SHAPES if shapes is None else shapes)
        self._prefixes = sorted(table, key=len, reverse=True)
        self._shapes = table
        self._require_non_empty_labels = bool(require_non_empty_labels)
        self._check_payload = bool(check_payload)

    def shape_for(self, urn: str) -> Optional[UrnShape]:
        """返回 urn 对应的 shape（最长前缀匹配）；未知 urn 返回 None。"""

        for prefix in self._prefixes:
            if urn.startswith(prefix):
                return self._shapes[prefix]
        return None

    def validate(self, record: MonitoringInfo) -> Optional[str]:
        """校验一条记录；返回第一个问题描述或 None。"""

        # 按原始 urn 匹配前缀（与 translator/dispatcher 相同）；strip 只用于判空
        urn = record.urn or ""
        if not urn.strip():
            return "MonitoringInfo urn must be non-empty"

        shape = self.shape_for(urn)
        if shape is None:
            return None

        for key in shape.required_labels:
            if key not in record.labels:
                return f"MonitoringInfo with urn {urn!r} is missing required label {key}"
            if self._require_non_empty_labels and not record.labels[key]:
                return f"MonitoringInfo with urn {urn!r} has empty required label {key}"

        if self._check_payload and shape.decode_payload is not None:
            try:
                shape.decode_payload(record.payload)
            except ValueError as exc:
                return f"MonitoringInfo with urn {urn!r} has invalid payload: {exc}"
        return None
