"""
counter-bridge 配置（translators 开关 / validator 参数 / drop 日志级别）。

- 内置默认值见 `assets/default.yaml`，overlay YAML 按顺序叠加；
- 各 section 均为 `extra="forbid"` 的 pydantic 模型，写错的 key 会在加载时报错。
"""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, MutableMapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator


def _deep_merge(base: MutableMapping[str, Any], overlay: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """
    把 overlay 就地合并进 base 并返回 base。

    例：默认配置 `{"translators": {"user_counter": {"enabled": true}}}` 叠加
    `{"translators": {"user_counter": {"enabled": false}}}` 只改动该开关，
    `translators.user_distribution` 与其它 section 保持默认值。
    非 mapping 的值（标量、list）按整体替换处理。
    """

    for key, value in overlay.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _deep_merge(current, value)
        else:
            base[key] = deepcopy(value)
    return base


class CounterBridgeTranslatorsConfig(BaseModel):
    """各 family translator 的启用开关。"""

    model_config = ConfigDict(extra="forbid")

    class Toggle(BaseModel):
        """单个 translator 的开关。"""

        model_config = ConfigDict(extra="forbid")

        enabled: StrictBool = True

    user_distribution: Toggle = Field(default_factory=Toggle)
    user_counter: Toggle = Field(default_factory=Toggle)


class CounterBridgeValidationConfig(BaseModel):
    """默认 ShapeValidator 的参数。"""

    model_config = ConfigDict(extra="forbid")

    require_non_empty_labels: StrictBool = True
    check_payload: StrictBool = True


class CounterBridgeLoggingConfig(BaseModel):
    """
    日志配置。

    说明：
    - `drop_level` 只影响“记录被丢弃”的日志；接线错误（MonitoringInfoRoutingError）总是抛出。
    """

    model_config = ConfigDict(extra="forbid")

    drop_level: Literal["off", "debug", "info", "warning"] = Field(default="debug")

    @field_validator("drop_level", mode="before")
    @classmethod
    def _normalize_drop_level(cls, value: Any) -> Any:
        """YAML 1.1 会把未加引号的 `off` 解析为 False，这里还原为 `off`。"""

        if value is False:
            return "off"
        if isinstance(value, str):
            return value.strip().lower()
        return value


class CounterBridgeConfig(BaseModel):
    """配置根对象。"""

    model_config = ConfigDict(extra="forbid")

    config_version: int = Field(default=1, ge=1)
    translators: CounterBridgeTranslatorsConfig = Field(default_factory=CounterBridgeTranslatorsConfig)
    validation: CounterBridgeValidationConfig = Field(default_factory=CounterBridgeValidationConfig)
    logging: CounterBridgeLoggingConfig = Field(default_factory=CounterBridgeLoggingConfig)


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """读取 YAML 文件为 dict；空文件返回空 dict。"""

    if not path.exists():
        raise FileNotFoundError(f"config file not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"config root must be a mapping(dict): {path}")
    return data


def load_config_dicts(config_dicts: list[Dict[str, Any]]) -> CounterBridgeConfig:
    """
    加载并合并多个 dict 配置，返回校验后的 `CounterBridgeConfig`。

    参数：
    - config_dicts：按顺序做深度合并（后者覆盖前者）
    """

    merged: Dict[str, Any] = {}
    for overlay in config_dicts:
        if not overlay:
            continue
        _deep_merge(merged, overlay)
    return CounterBridgeConfig.model_validate(merged)


def load_config(config_paths: list[Path]) -> CounterBridgeConfig:
    """
    加载并合并多个配置文件，返回校验后的 `CounterBridgeConfig`。

    参数：
    - config_paths：YAML 路径列表；按顺序合并（后者覆盖前者）
    """

    overlays: list[Dict[str, Any]] = []
    for path in config_paths:
        overlays.append(load_yaml_file(Path(path)))
    return load_config_dicts(overlays)
