"""
基础类型名解析器

基于 eth_abi.grammar 解析solc AST中的基础类型名 (如 "uint256", "bytes32"),
并限制在存储布局支持的基础类型目录内。
"""

import logging
import re
from typing import Callable

from eth_abi import grammar
from eth_abi.exceptions import ParseError

from ..errors import UnparseableType
from .types import AbiType, DynamicArrayType, ElementaryType, FixedArrayType

logger = logging.getLogger(__name__)

# 基础类型目录
ELEMENTARY_BASES = frozenset({
    "uint", "int", "address", "bool", "bytes", "string", "fixed", "ufixed",
})

# 不允许带数字后缀的基础类型
UNSIZED_BASES = frozenset({"address", "bool", "string"})

# 交给 eth_abi 规范化的别名 (uint -> uint256, byte -> bytes1 等)
ALIAS_BASES = frozenset({"byte"})

BASE_PREFIX_RE = re.compile(r"[A-Za-z]+")

ARRAY_SUFFIX_RE = re.compile(r"\[(\d*)\]$")

TypeNameParser = Callable[[str], AbiType]


def parse_type_name(text: str) -> AbiType:
    """
    解析基础类型名

    Args:
        text: 类型名 (已去掉 storage/memory 等修饰)

    Returns:
        AbiType; 若类型名带数组后缀,返回对应的数组类型

    Raises:
        UnparseableType: 语法错误或不在基础类型目录内
    """
    # 规范化之前检查, function -> bytes24 这类别名不属于基础类型
    prefix = BASE_PREFIX_RE.match(text)
    if prefix and prefix.group(0) not in ELEMENTARY_BASES | ALIAS_BASES:
        raise UnparseableType(text, f"unknown base type {prefix.group(0)!r}")

    try:
        parsed = grammar.parse(grammar.normalize(text))
        parsed.validate()
    except (ParseError, ValueError) as e:
        raise UnparseableType(text, str(e)) from e

    if not isinstance(parsed, grammar.BasicType):
        raise UnparseableType(text, "tuple types are not elementary")
    if parsed.base not in ELEMENTARY_BASES:
        raise UnparseableType(text, f"unknown base type {parsed.base!r}")
    if parsed.base in UNSIZED_BASES and parsed.sub is not None:
        raise UnparseableType(text, f"{parsed.base} cannot have suffix")

    result: AbiType = ElementaryType(grammar.BasicType(parsed.base, parsed.sub).to_type_str())
    # arrlist 从内到外: uint256[3][] 是 uint256[3] 的动态数组
    for dimension in parsed.arrlist or ():
        if dimension:
            result = FixedArrayType(dimension[0], result)
        else:
            result = DynamicArrayType(result)
    return result


def parse_abi_type(text: str, type_name_parser: TypeNameParser = parse_type_name) -> AbiType:
    """
    解析渲染后的值类型字符串 (如 "address[2][]")

    数组后缀在这里逐层剥离,允许 [0] 这类 eth_abi 语法不接受的长度。
    """
    text = text.strip()
    match = ARRAY_SUFFIX_RE.search(text)
    if match is None:
        return type_name_parser(text)

    element = parse_abi_type(text[:match.start()], type_name_parser)
    if match.group(1):
        return FixedArrayType(int(match.group(1)), element)
    return DynamicArrayType(element)
