"""
MonitoringInfo payload 编解码（int64 varint / distribution / counter）。

编码约定：
- int64：按 64 位补码的无符号值做 base-128 varint（低位在前；负数固定 10 字节）；
- distribution：依次为 count、sum、min、max 四个 int64 varint；
- counter：单个 int64 varint；
- 空 payload 视为“未设置”，解码为全零。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from counter_bridge.core.errors import PayloadDecodeError

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_UINT64_MASK = (1 << 64) - 1
_MAX_VARINT_BYTES = 10


def check_int64(value: int, *, field: str) -> int:
    """
    校验 value 落在 int64 范围内并原样返回。

    异常：
    - ValueError：不是 int 或越界
    """

    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field} must be an int, got {type(value).__name__}")
    if value < INT64_MIN or value > INT64_MAX:
        raise ValueError(f"{field} out of int64 range: {value}")
    return value


@dataclass(frozen=True)
class DistributionData:
    """
    int64 分布摘要（上游已聚合完成，这里只承载）。

    字段：
    - count/sum/min/max：均为 int64
    """

    count: int = 0
    sum: int = 0
    min: int = 0
    max: int = 0

    def __post_init__(self) -> None:
        """构造期校验四个字段的 int64 范围。"""

        for name in ("count", "sum", "min", "max"):
            check_int64(getattr(self, name), field=name)


def encode_varint_int64(value: int) -> bytes:
    """把 int64 编码为 varint bytes。"""

    check_int64(value, field="value")
    u = value & _UINT64_MASK
    out = bytearray()
    while True:
        bits = u & 0x7F
        u >>= 7
        if u:
            out.append(bits | 0x80)
        else:
            out.append(bits)
            return bytes(out)


def decode_varint_int64(buf: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    从 `buf[offset:]` 解码一个 int64 varint。

    返回：
    - (value, next_offset)

    异常：
    - PayloadDecodeError：数据截断、超过 10 字节或超出 64 位
    """

    u = 0
    shift = 0
    pos = offset
    while True:
        if pos >= len(buf):
            raise PayloadDecodeError(
                "truncated varint in payload",
                details={"offset": offset, "length": len(buf)},
            )
        if pos - offset >= _MAX_VARINT_BYTES:
            raise PayloadDecodeError("varint longer than 10 bytes", details={"offset": offset})
        b = buf[pos]
        pos += 1
        u |= (b & 0x7F) << shift
        if not b & 0x80:
            break
        shift += 7
    if u > _UINT64_MASK:
        raise PayloadDecodeError("varint exceeds 64 bits", details={"offset": offset})
    if u > INT64_MAX:
        u -= 1 << 64
    return u, pos


def _decode_fixed_count(payload: bytes, count: int) -> Tuple[int, ...]:
    """按顺序解码 `count` 个 int64，并拒绝多余的尾部字节。"""

    values = []
    pos = 0
    for _ in range(count):
        value, pos = decode_varint_int64(payload, pos)
        values.append(value)
    if pos != len(payload):
        raise PayloadDecodeError(
            "unexpected trailing bytes in payload",
            details={"consumed": pos, "length": len(payload)},
        )
    return tuple(values)


def encode_int64_distribution(data: DistributionData) -> bytes:
    """把 DistributionData 编码为 payload（count、sum、min、max）。"""

    return b"".join(encode_varint_int64(v) for v in (data.count, data.sum, data.min, data.max))


def decode_int64_distribution(payload: bytes) -> DistributionData:
    """
    解码 distribution payload。

    说明：
    - 空 payload 解码为全零（与“未设置分布数据”一致）。

    异常：
    - PayloadDecodeError：payload 格式非法
    """

    if not payload:
        return DistributionData()
    count, total, lo, hi = _decode_fixed_count(bytes(payload), 4)
    return DistributionData(count=count, sum=total, min=lo, max=hi)


def encode_int64_counter(value: int) -> bytes:
    """把单个 int64 计数编码为 payload。"""

    return encode_varint_int64(value)


def decode_int64_counter(payload: bytes) -> int:
    """解码 counter payload；空 payload 返回 0。"""

    if not payload:
        return 0
    (value,) = _decode_fixed_count(bytes(payload), 1)
    return value
