"""
CounterUpdate：执行引擎 counter 上报子系统消费的结构化记录（输出侧契约）。

说明：
- 领域模型内部使用原生 int64；高/低 32 位拆分只在 wire 边界发生（见 `counter_bridge.counters.wire`）；
- 每次 translate 都构造新的对象，模型不可变（frozen）。
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from counter_bridge.monitoring.coders import check_int64


class CounterKind(str, Enum):
    """counter 聚合种类（backend 侧 metadata.kind）。"""

    SUM = "SUM"
    MAX = "MAX"
    MIN = "MIN"
    MEAN = "MEAN"
    OR = "OR"
    AND = "AND"
    DISTRIBUTION = "DISTRIBUTION"


class CounterOrigin(str, Enum):
    """counter 来源。"""

    USER = "USER"
    SYSTEM = "SYSTEM"


class CounterStructuredName(BaseModel):
    """
    counter 的结构化名称。

    字段：
    - name：metric 名（来自 NAME label）
    - origin：来源（用户定义 metric 固定为 USER）
    - origin_namespace：metric namespace（来自 NAMESPACE label）
    - original_step_name：执行 step 的 original name（来自 NameContext）
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    origin: CounterOrigin
    origin_namespace: Optional[str] = None
    original_step_name: Optional[str] = None


class CounterMetadata(BaseModel):
    """counter 元数据。"""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: CounterKind


class CounterStructuredNameAndMetadata(BaseModel):
    """结构化名称 + 元数据。"""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: CounterStructuredName
    metadata: CounterMetadata


class DistributionUpdate(BaseModel):
    """分布摘要（原生 int64，count/sum/min/max）。"""

    model_config = ConfigDict(extra="forbid", frozen=True)

    count: int = 0
    sum: int = 0
    min: int = 0
    max: int = 0

    @field_validator("count", "sum", "min", "max")
    @classmethod
    def _validate_int64(cls, value: int, info: ValidationInfo) -> int:
        """拒绝超出 int64 范围的值（wire 侧只能表达 64 位）。"""

        return check_int64(value, field=f"distribution.{info.field_name}")


class CounterUpdate(BaseModel):
    """
    单个 step 的一次 counter 上报。

    字段：
    - cumulative：是否为“自 step 开始以来的累计值”（而非增量）
    - structured_name_and_metadata：名称与种类
    - distribution：DISTRIBUTION 种类的数值
    - integer：SUM 等整数种类的数值
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    cumulative: bool = True
    structured_name_and_metadata: CounterStructuredNameAndMetadata
    distribution: Optional[DistributionUpdate] = None
    integer: Optional[int] = Field(default=None)

    @field_validator("integer")
    @classmethod
    def _validate_integer(cls, value: Optional[int]) -> Optional[int]:
        """integer 必须落在 int64 范围。"""

        if value is None:
            return None
        return check_int64(value, field="integer")

    def to_wire(self) -> Dict[str, Any]:
        """返回 backend wire 形态（camelCase，int64 拆分为 highBits/lowBits）。"""

        from counter_bridge.counters.wire import counter_update_to_wire

        return counter_update_to_wire(self)

    def to_json(self) -> str:
        """序列化为 wire JSON 字符串（key 顺序稳定）。"""

        return json.dumps(self.to_wire(), ensure_ascii=False, sort_keys=True, separators=(",", ":"))
