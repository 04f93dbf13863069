"""
存储变量类型分类器

把 VariableDeclaration 的类型子节点递归地分类为 SlotType:
- Mapping 节点 -> StorageMapping (嵌套 mapping 的 key 从外到内收集)
- 其他类型节点 -> StorageValue(AbiType)

用户自定义类型 (struct / enum / contract) 统一视为 address,不再展开。
"""

import logging
from typing import List, Optional

from ..abi_types import (
    ADDRESS,
    AbiType,
    DynamicArrayType,
    FixedArrayType,
    TypeNameParser,
    parse_type_name,
)
from ..ast_access.node import (
    ARRAY_TYPE_NAME,
    ELEMENTARY_TYPE_NAME,
    LITERAL,
    MAPPING,
    USER_DEFINED_TYPE_NAME,
    AstNode,
)
from ..errors import InvalidMappingKey, MalformedAst, UnknownValueTypeNode
from .slot_types import SlotType, StorageMapping, StorageValue

logger = logging.getLogger(__name__)


class SlotTypeClassifier:
    """
    声明类型分类器

    Args:
        type_name_parser: 基础类型名解析器,默认基于 eth_abi.grammar
    """

    def __init__(self, type_name_parser: Optional[TypeNameParser] = None):
        self.type_name_parser = type_name_parser or parse_type_name
        self.logger = logging.getLogger(__name__ + '.SlotTypeClassifier')

    def classify_declaration(self, node: AstNode) -> SlotType:
        """分类变量声明: 第一个子节点是它的类型节点"""
        children = node.children()
        if not children:
            raise MalformedAst(f"variable declaration without type node: {node!r}")
        return self.classify_type_node(children[0])

    def classify_type_node(self, node: AstNode) -> SlotType:
        tag = node.tag()
        if tag is None:
            raise MalformedAst(f"type node without name: {node!r}")
        if tag == MAPPING:
            return self.classify_mapping(node.children())
        return StorageValue(self.classify_value_type(node))

    def classify_mapping(self, children: List[AstNode]) -> StorageMapping:
        """mapping 节点恰好有两个子节点: [key类型, value类型]"""
        if len(children) != 2:
            raise MalformedAst(f"unexpected AST child count for mapping: {len(children)}")

        key_node, value_node = children
        key = self.classify_type_node(key_node)
        value = self.classify_type_node(value_node)

        if isinstance(key, StorageMapping):
            raise InvalidMappingKey()
        return StorageMapping.nest(key.abi_type, value)

    def classify_value_type(self, node: AstNode) -> AbiType:
        tag = node.tag()
        children = node.children()

        if tag == ELEMENTARY_TYPE_NAME:
            type_name = node.string_attribute("type")
            if type_name is not None and type_name.split():
                # 去掉 "storage ref" / "payable" 等后缀
                return self.type_name_parser(type_name.split()[0])

        elif tag == USER_DEFINED_TYPE_NAME:
            return ADDRESS

        elif tag == ARRAY_TYPE_NAME and len(children) == 1:
            return DynamicArrayType(self.classify_value_type(children[0]))

        elif tag == ARRAY_TYPE_NAME and len(children) == 2:
            element_node, size_node = children
            size = parse_array_length(size_node)
            return FixedArrayType(size, self.classify_value_type(element_node))

        self.logger.debug(f"无法识别的类型节点: {node!r}")
        raise UnknownValueTypeNode(tag)


def parse_array_length(size_node: AstNode) -> int:
    """定长数组的长度节点必须是数值 Literal"""
    if not size_node.is_tagged(LITERAL):
        raise MalformedAst(f"array length is not a literal: {size_node!r}")

    value = size_node.attribute("value")
    if value is None:
        raise MalformedAst(f"array length literal without value: {size_node!r}")
    if isinstance(value, int) and not isinstance(value, bool):
        size = value
    elif isinstance(value, str) and value.isascii():
        text = value.strip()
        try:
            size = int(text, 16) if text.lower().startswith("0x") else int(text, 10)
        except ValueError:
            raise MalformedAst(f"array length is not numeric: {value!r}") from None
    else:
        # 浮点数, 非ASCII数字 (如 "٣") 等
        raise MalformedAst(f"array length is not numeric: {value!r}")

    if size < 0:
        raise MalformedAst(f"negative array length: {size}")
    return size
