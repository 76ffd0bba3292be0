"""
Hex / Wei helpers

wei 整数与 0x 十六进制字符串之间的转换，以及 URL 路径段编码。
"""

from typing import Optional
from urllib.parse import quote


def to_hex_wei(amount: int) -> str:
    """
    将 wei 整数转换为 0x 前缀的小写十六进制（无前导零，0 -> "0x0"）

    Args:
        amount: 非负整数 wei 数量

    Returns:
        十六进制字符串，例如 1 ETH -> "0xde0b6b3a7640000"
    """
    if amount < 0:
        raise ValueError(f"wei 数量不能为负数: {amount}")
    return hex(amount)


def from_hex(value: str) -> int:
    """解析 0x 前缀的十六进制字符串"""
    return int(value, 16)


def from_optional_hex(value: Optional[str]) -> Optional[int]:
    """解析可选的十六进制字符串，None 原样返回"""
    if value is None:
        return None
    return from_hex(value)


def encode_path_segment(segment: str) -> str:
    """对单个 URL 路径段做百分号编码（/、?、空格及非 ASCII 字符都会被转义）"""
    return quote(segment, safe="")
