"""
Bootstrap：由配置装配 validator / translators / dispatcher。

设计目标：
- 保持 translator 核心无隐式 I/O：配置读取只发生在这里，且只读取调用方显式给出的 overlay 路径；
- 所有启用的 translator 共享同一个 validator 与同一个 step resolver。
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from counter_bridge.config.defaults import load_default_config_dict
from counter_bridge.config.loader import CounterBridgeConfig, load_yaml_file, load_config_dicts
from counter_bridge.monitoring.validator import ShapeValidator, SpecMonitoringInfoValidator
from counter_bridge.steps.naming import as_step_name_resolver
from counter_bridge.translators.dispatcher import MonitoringInfoDispatcher
from counter_bridge.translators.protocol import MonitoringInfoTranslator
from counter_bridge.translators.user_counter import UserCounterTranslator
from counter_bridge.translators.user_distribution import UserDistributionTranslator


def load_bridge_config(overlay_paths: Sequence[Path] = ()) -> CounterBridgeConfig:
    """
    加载内置默认配置并叠加 overlays。

    参数：
    - overlay_paths：YAML overlay 路径（按顺序合并，后者覆盖前者）

    异常：
    - FileNotFoundError：overlay 不存在
    - ValueError：YAML 根节点不是 mapping，或 schema 校验失败
    """

    overlays: List[Dict[str, Any]] = [load_default_config_dict()]
    for path in overlay_paths:
        overlays.append(load_yaml_file(Path(path)))
    return load_config_dicts(overlays)


def build_validator(config: CounterBridgeConfig) -> SpecMonitoringInfoValidator:
    """按配置构造默认 ShapeValidator。"""

    return SpecMonitoringInfoValidator(
        require_non_empty_labels=config.validation.require_non_empty_labels,
        check_payload=config.validation.check_payload,
    )


def build_dispatcher(
    config: CounterBridgeConfig,
    *,
    step_names: Any,
    validator: Optional[ShapeValidator] = None,
) -> MonitoringInfoDispatcher:
    """
    按配置构造 dispatcher（只注册启用的 translator）。

    参数：
    - config：CounterBridgeConfig
    - step_names：StepNameResolver / Mapping / 查找函数（由调用方拥有）
    - validator：可选；缺省按 `config.validation` 构造 `SpecMonitoringInfoValidator`
    """

    shared_validator = validator if validator is not None else build_validator(config)
    resolver = as_step_name_resolver(step_names)
    drop_level = config.logging.drop_level

    translators: List[MonitoringInfoTranslator] = []
    if config.translators.user_distribution.enabled:
        translators.append(UserDistributionTranslator(shared_validator, resolver, drop_log_level=drop_level))
    if config.translators.user_counter.enabled:
        translators.append(UserCounterTranslator(shared_validator, resolver, drop_log_level=drop_level))
    return MonitoringInfoDispatcher(translators, drop_log_level=drop_level)
