"""
Step 命名上下文（NameContext）与 step 引用解析（StepNameResolver）。

设计目标：
- translator 只依赖“查找能力”（`lookup(step_ref) -> Optional[NameContext]`），不依赖具体的可变表类型；
- 表的所有权与变更规则完全属于外部 owner；
- `StepNameTable` 提供一个线程安全的参考实现：整表替换 + 快照点查。
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class NameContext:
    """
    一个执行 step 的多种名称。

    字段：
    - stage_name：所属 stage 名
    - original_name：step 的 original name（counter 上报使用）
    - system_name：系统侧名称
    - user_name：面向用户的名称
    """

    stage_name: str
    original_name: str
    system_name: str
    user_name: str


@runtime_checkable
class StepNameResolver(Protocol):
    """step 引用（PTRANSFORM label 值）到 NameContext 的只读查找能力。"""

    def lookup(self, step_ref: str) -> Optional[NameContext]:
        """返回 step 对应的 NameContext；未知 step 返回 None。"""

        ...


class StepNameTable:
    """
    线程安全的 step 命名表。

    约束：
    - `replace_all` 为整表替换（copy-on-write），并发 lookup 总是看到某一个完整快照；
    - lookup 不修改表。
    """

    def __init__(self, mapping: Optional[Mapping[str, NameContext]] = None) -> None:
        """创建命名表；复制初始 mapping，避免与调用方共享可变 dict。"""

        self._lock = threading.RLock()
        self._table: Mapping[str, NameContext] = MappingProxyType(dict(mapping or {}))

    def lookup(self, step_ref: str) -> Optional[NameContext]:
        """按 step 引用点查 NameContext。"""

        with self._lock:
            snap = self._table
        return snap.get(step_ref)

    def replace_all(self, mapping: Mapping[str, NameContext]) -> None:
        """用新的完整映射替换整张表。"""

        new_table = MappingProxyType(dict(mapping))
        with self._lock:
            self._table = new_table

    def snapshot(self) -> Dict[str, NameContext]:
        """返回当前表的拷贝。"""

        with self._lock:
            snap = self._table
        return dict(snap)

    def __len__(self) -> int:
        """返回当前表中的 step 数量。"""

        with self._lock:
            return len(self._table)


class _MappingResolver:
    """把外部拥有的 Mapping 适配为 StepNameResolver（只读、实时视图）。"""

    def __init__(self, mapping: Mapping[str, NameContext]) -> None:
        """绑定外部 mapping（不复制，读到的是 owner 的最新内容）。"""

        self._mapping = mapping

    def lookup(self, step_ref: str) -> Optional[NameContext]:
        """从外部 mapping 点查。"""

        return self._mapping.get(step_ref)


class _CallableResolver:
    """把查找函数适配为 StepNameResolver。"""

    def __init__(self, fn: Callable[[str], Optional[NameContext]]) -> None:
        """绑定查找函数。"""

        self._fn = fn

    def lookup(self, step_ref: str) -> Optional[NameContext]:
        """调用查找函数。"""

        return self._fn(step_ref)


def as_step_name_resolver(obj: Any) -> StepNameResolver:
    """
    把 resolver / Mapping / callable 统一为 StepNameResolver。

    参数：
    - obj：已实现 `lookup` 的对象、`Mapping[str, NameContext]` 或 `Callable[[str], Optional[NameContext]]`

    异常：
    - TypeError：无法识别的类型
    """

    if isinstance(obj, StepNameResolver):
        return obj
    if isinstance(obj, Mapping):
        return _MappingResolver(obj)
    if callable(obj):
        return _CallableResolver(obj)
    raise TypeError(f"cannot use {type(obj).__name__} as a StepNameResolver")
