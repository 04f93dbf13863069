"""
合约定义定位

合约creation code的第一个source map条目对应合约定义本身的源码范围,
用它在源码位置索引中查找 ContractDefinition 节点。
"""

import logging
from typing import Any, Mapping, Sequence

from ..ast_access import AstNode
from ..errors import MissingContractDefinition

logger = logging.getLogger(__name__)


def locate_contract_definition(creation_srcmap: Sequence[Any],
                               src_index: Mapping[Any, AstNode]) -> AstNode:
    """
    Args:
        creation_srcmap: 解码后的creation source map (SourceMapEntry 或 SourceLocation 序列)
        src_index: 源码位置 -> AST节点

    Raises:
        MissingContractDefinition: source map为空或查找失败
    """
    if not creation_srcmap:
        raise MissingContractDefinition("empty creation source map")

    first = creation_srcmap[0]
    # SourceMapEntry 按 offset/length/file 查找,忽略跳转标记
    key = getattr(first, "location", first)
    node = src_index.get(key)
    if node is None:
        raise MissingContractDefinition(f"no AST node at source location {key}")

    logger.debug(f"合约定义: {node!r}")
    return node
