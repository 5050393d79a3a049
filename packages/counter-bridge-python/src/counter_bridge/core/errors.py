"""
counter-bridge 错误分类（异常类型）。

说明：
- “数据质量”类问题（shape 校验失败、step 未解析）不抛异常，由 translator 返回 None；
- 只有“接线错误”（错误 family 的 record 被路由到 translator）以异常形式离开 translator；
- `PayloadDecodeError` 由 coders 抛出，translator 内部把它转为丢弃；
- 对外异常均携带稳定的 `code/message/details`，便于日志与断言。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


class CounterBridgeError(Exception):
    """counter-bridge 所有异常的公共祖先；调用方可用它一次性捕获本包抛出的错误。"""


@dataclass(frozen=True)
class FrameworkIssue:
    """异常的纯数据快照（code/message/details），可直接写入日志或上报给监控侧。"""

    code: str
    message: str
    details: Dict[str, Any]


class FrameworkError(CounterBridgeError):
    """带稳定错误码的异常；翻译链路中的 routing/decode 错误都由它派生。"""

    def __init__(self, *, code: str, message: str, details: Dict[str, Any] | None = None) -> None:
        """
        参数：
        - `code`：错误码，例如 `MONITORING_INFO_WRONG_FAMILY`
        - `message`：英文描述，会出现在 `str(exc)` 中
        - `details`：urn、前缀、偏移量等上下文（缺省为空 dict）
        """

        super().__init__(message)
        self.code = code
        self.message = message
        self.details: Dict[str, Any] = details or {}

    def __str__(self) -> str:
        """格式为 `CODE: message`。"""

        return f"{self.code}: {self.message}"

    def to_issue(self) -> FrameworkIssue:
        """复制出 FrameworkIssue（details 为浅拷贝，不与异常共享）。"""

        return FrameworkIssue(code=self.code, message=self.message, details=dict(self.details))


class UserError(FrameworkError):
    """调用方配置/装配导致的错误（例如重复注册同一 urn 前缀）。"""

    def __init__(self, message: str, *, code: str = "USER_ERROR", details: Dict[str, Any] | None = None) -> None:
        """dispatcher 注册时使用 `TRANSLATOR_PREFIX_MISSING` / `TRANSLATOR_PREFIX_DUPLICATE` 等错误码。"""

        super().__init__(code=code, message=message, details=details or {})


class MonitoringInfoRoutingError(FrameworkError, RuntimeError):
    """
    错误 family 的 MonitoringInfo 被路由到了 translator（程序/接线缺陷）。

    约束：
    - 调用方不得吞掉该异常：它表示 pipeline 装配错误，而不是数据质量问题；
    - 继承 `RuntimeError`，与“unchecked failure”的语义保持一致。
    """

    def __init__(self, *, urn: str, expected_prefix: str, translator: str) -> None:
        """创建路由错误。

        参数：
        - `urn`：实际收到的 urn
        - `expected_prefix`：translator 负责的 urn 前缀
        - `translator`：translator 名称（类名）
        """

        super().__init__(
            code="MONITORING_INFO_WRONG_FAMILY",
            message=f"{translator} received MonitoringInfo with urn {urn!r}; expected prefix {expected_prefix!r}",
            details={"urn": urn, "expected_prefix": expected_prefix, "translator": translator},
        )


class PayloadDecodeError(FrameworkError, ValueError):
    """MonitoringInfo payload 无法按 family 约定的编码解析（截断/超长/多余字节/越界）。"""

    def __init__(self, message: str, *, details: Dict[str, Any] | None = None) -> None:
        """创建 payload 解码错误。

        参数：
        - `message`：英文错误消息
        - `details`：结构化上下文（offset/length 等）
        """

        super().__init__(code="MONITORING_INFO_PAYLOAD_INVALID", message=message, details=details or {})
