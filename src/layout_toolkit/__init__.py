"""
Solidity存储布局工具包

从solc编译产物中静态分析合约的存储变量:
- ast_access: legacy JSON AST只读访问和索引
- abi_types: ABI类型模型和基础类型名解析
- storage_layout: 存储变量提取、类型分类和渲染
- loader: combined-json 和 source map 读取
"""

from .errors import (
    ArtifactError,
    InvalidMappingKey,
    MalformedAst,
    MissingContractDefinition,
    MissingIndexEntry,
    StorageLayoutError,
    UnknownValueTypeNode,
    UnparseableType,
)
from .storage_layout import (
    StorageLayoutInspector,
    StorageMapping,
    StorageValue,
    StorageVariableRecord,
    parse_slot_type,
    render_slot_type,
    storage_layout,
)
from .loader import CompilationArtifacts, load_combined_json

__version__ = "1.0.0"

__all__ = [
    "ArtifactError",
    "InvalidMappingKey",
    "MalformedAst",
    "MissingContractDefinition",
    "MissingIndexEntry",
    "StorageLayoutError",
    "UnknownValueTypeNode",
    "UnparseableType",
    "StorageLayoutInspector",
    "StorageMapping",
    "StorageValue",
    "StorageVariableRecord",
    "parse_slot_type",
    "render_slot_type",
    "storage_layout",
    "CompilationArtifacts",
    "load_combined_json",
]
