"""Step 命名上下文与解析。"""

from __future__ import annotations

from counter_bridge.steps.naming import NameContext, StepNameResolver, StepNameTable, as_step_name_resolver

__all__ = ["NameContext", "StepNameResolver", "StepNameTable", "as_step_name_resolver"]
