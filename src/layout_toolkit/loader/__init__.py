"""
编译产物加载模块

- solc source map 解码
- combined-json 读取和AST索引构建
"""

from .source_map import SourceMapEntry, decode_source_map
from .combined_json import (
    CombinedJsonLoader,
    CompilationArtifacts,
    CompiledContract,
    load_combined_json,
)

__all__ = [
    "SourceMapEntry",
    "decode_source_map",
    "CombinedJsonLoader",
    "CompilationArtifacts",
    "CompiledContract",
    "load_combined_json",
]
