"""
ABI类型模块

- AbiType模型: 基础类型、动态数组、定长数组
- 基础类型名解析 (基于eth_abi.grammar)
"""

from .types import ADDRESS, AbiType, DynamicArrayType, ElementaryType, FixedArrayType
from .type_name_parser import ELEMENTARY_BASES, TypeNameParser, parse_abi_type, parse_type_name

__all__ = [
    "ADDRESS",
    "AbiType",
    "DynamicArrayType",
    "ElementaryType",
    "FixedArrayType",
    "ELEMENTARY_BASES",
    "TypeNameParser",
    "parse_abi_type",
    "parse_type_name",
]
