"""CounterUpdate（输出侧）：领域模型与 backend wire 形态。"""

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

__all__ = [
    "contracts",
    "wire",
    "CounterKind",
    "CounterMetadata",
    "CounterOrigin",
    "CounterStructuredName",
    "CounterStructuredNameAndMetadata",
    "CounterUpdate",
    "DistributionUpdate",
]
