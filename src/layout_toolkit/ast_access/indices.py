"""
AST索引构建

- id索引: 节点id -> AstNode
- 源码位置索引: SourceLocation -> AstNode (用于 source map 首条目查找合约定义)

存储布局核心逻辑只依赖 Mapping 接口 (只读 .get),
测试中可以直接传入普通dict。
"""

import logging
from typing import Dict, Iterable, Iterator, Union

from .node import AstNode, SourceLocation

logger = logging.getLogger(__name__)

AstRoot = Union[AstNode, dict]


def iter_nodes(roots: Iterable[AstRoot]) -> Iterator[AstNode]:
    """先序遍历所有节点"""
    for root in roots:
        stack = [root if isinstance(root, AstNode) else AstNode(root)]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children()))


def build_id_index(roots: Iterable[AstRoot]) -> Dict[int, AstNode]:
    """为所有带整数id的节点建立索引"""
    index: Dict[int, AstNode] = {}
    for node in iter_nodes(roots):
        node_id = node.node_id()
        if node_id is None:
            continue
        if node_id in index:
            logger.debug(f"重复的AST id {node_id}, 保留先出现的节点")
            continue
        index[node_id] = node
    logger.debug(f"id索引: {len(index)} 个节点")
    return index


def build_source_index(roots: Iterable[AstRoot]) -> Dict[SourceLocation, AstNode]:
    """
    为所有带合法src的节点建立索引

    位置相同时后访问的节点覆盖先访问的 (即更内层的节点),
    这样单合约文件中 ContractDefinition 优先于 SourceUnit。
    """
    index: Dict[SourceLocation, AstNode] = {}
    for node in iter_nodes(roots):
        location = node.source_location()
        if location is not None:
            index[location] = node
    logger.debug(f"源码位置索引: {len(index)} 个位置")
    return index
