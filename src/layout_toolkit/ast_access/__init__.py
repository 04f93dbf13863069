"""
AST访问模块

提供solc legacy JSON AST的只读访问能力:
- 节点属性、子节点、类型名访问
- id索引和源码位置索引构建
"""

from .node import AstNode, SourceLocation
from .indices import build_id_index, build_source_index, iter_nodes

__all__ = [
    "AstNode",
    "SourceLocation",
    "build_id_index",
    "build_source_index",
    "iter_nodes",
]
