"""
MonitoringInfo：通用、按 urn 标注的监控记录（输入侧契约）。

说明：
- 所有 metric 种类共用同一种结构：`urn + labels + payload`；
- payload 对本模块是 opaque bytes，解码由 `counter_bridge.monitoring.coders` 负责；
- 模型不可变（frozen），由外部 metrics pipeline 产出后逐条交给 translator。
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Labels:
    """MonitoringInfo 常用 label key。"""

    PTRANSFORM = "PTRANSFORM"
    PCOLLECTION = "PCOLLECTION"
    NAMESPACE = "NAMESPACE"
    NAME = "NAME"


class Urns:
    """已知 metric family 的 urn 前缀。"""

    USER_DISTRIBUTION_INT64 = "beam:metric:user_distribution"
    USER_SUM_INT64 = "beam:metric:user:sum_int64"
    ELEMENT_COUNT = "beam:metric:element_count"


class MonitoringInfo(BaseModel):
    """
    单条监控记录。

    字段：
    - urn：metric family 标识（按前缀区分 family 与 payload 形态）
    - labels：label key -> 字符串值（key 唯一、无序）
    - payload：编码后的数值摘要（空 bytes 表示“未设置”，按全零处理）
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    urn: str
    labels: Dict[str, str] = Field(default_factory=dict)
    payload: bytes = b""

    def label(self, key: str) -> Optional[str]:
        """返回指定 label 的值；缺失返回 None。"""

        return self.labels.get(key)
