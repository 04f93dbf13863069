"""
状态变量提取

对继承链中的每个合约,按源码声明顺序取出占用存储的状态变量声明:
- 节点类型为 VariableDeclaration
- 带有 src 位置信息
- 不是 constant
"""

import logging
from typing import List, Mapping, Tuple

from ..ast_access import AstNode
from ..ast_access.node import VARIABLE_DECLARATION
from ..errors import MalformedAst, MissingIndexEntry

logger = logging.getLogger(__name__)


def is_storage_variable_declaration(node: AstNode) -> bool:
    return (
        node.is_tagged(VARIABLE_DECLARATION)
        and node.has_source_location()
        and node.attribute("constant") is not True
    )


def extract_storage_variables(contract_id: int,
                              id_index: Mapping[int, AstNode]) -> List[Tuple[str, AstNode]]:
    """
    Returns:
        [(合约名, 变量声明节点), ...] 按声明顺序

    Raises:
        MissingIndexEntry: id索引中没有该合约
        MalformedAst: 合约节点缺少 name 属性
    """
    contract_node = id_index.get(contract_id)
    if contract_node is None:
        raise MissingIndexEntry(contract_id)

    owner = contract_node.string_attribute("name")
    if owner is None:
        raise MalformedAst(f"contract {contract_id} has no name attribute")

    declarations = [
        (owner, child)
        for child in contract_node.children()
        if is_storage_variable_declaration(child)
    ]
    logger.debug(f"{owner}: {len(declarations)} 个状态变量")
    return declarations
