"""
CounterUpdate 的 backend wire 形态。

说明：
- backend 的整数编码无法安全承载 64 位整数，因此每个 int64 被拆成
  `{"highBits": 有符号高 32 位, "lowBits": 无符号低 32 位}`；
- 只有本模块知道这种拆分；领域模型保持原生 int。
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from counter_bridge.counters.contracts import CounterUpdate
from counter_bridge.monitoring.coders import check_int64

_LOW_MASK = 0xFFFFFFFF


def split_int64(value: int) -> Dict[str, int]:
    """
    把 int64 拆分为高/低 32 位。

    返回：
    - dict：`highBits` 为有符号 int32（`value >> 32`），`lowBits` 为无符号 uint32
    """

    check_int64(value, field="value")
    return {"highBits": value >> 32, "lowBits": value & _LOW_MASK}


def join_split_int64(split: Mapping[str, Any]) -> int:
    """把 `{highBits, lowBits}` 还原为 int64。"""

    high = int(split.get("highBits") or 0)
    low = int(split.get("lowBits") or 0)
    if not -(1 << 31) <= high < (1 << 31):
        raise ValueError(f"highBits out of int32 range: {high}")
    if not 0 <= low <= _LOW_MASK:
        raise ValueError(f"lowBits out of uint32 range: {low}")
    return (high << 32) | low


def counter_update_to_wire(update: CounterUpdate) -> Dict[str, Any]:
    """
    把 CounterUpdate 转为 backend 期望的 camelCase dict。

    约束：
    - 未设置的可选字段不输出（与 backend 的 JSON 表示一致）；
    - distribution 字段按 count/max/min/sum 输出。
    """

    snm = update.structured_name_and_metadata
    name: Dict[str, Any] = {"name": snm.name.name, "origin": snm.name.origin.value}
    if snm.name.origin_namespace is not None:
        name["originNamespace"] = snm.name.origin_namespace
    if snm.name.original_step_name is not None:
        name["originalStepName"] = snm.name.original_step_name

    out: Dict[str, Any] = {"cumulative": bool(update.cumulative)}
    if update.distribution is not None:
        dist = update.distribution
        out["distribution"] = {
            "count": split_int64(dist.count),
            "max": split_int64(dist.max),
            "min": split_int64(dist.min),
            "sum": split_int64(dist.sum),
        }
    if update.integer is not None:
        out["integer"] = split_int64(update.integer)
    out["structuredNameAndMetadata"] = {
        "metadata": {"kind": snm.metadata.kind.value},
        "name": name,
    }
    return out
