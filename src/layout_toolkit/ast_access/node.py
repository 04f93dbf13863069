"""
AST节点访问器

对solc legacy JSON AST提供只读、全函数式的访问:
- attribute(key): 读取 attributes.<key>
- children(): 有序子节点
- tag(): 节点类型名 (如 "VariableDeclaration")
- has_source_location(): 是否带有 src 位置信息

任何JSON形状不符的情况都返回 None / 空列表,不抛异常。
错误判断由调用方 (classifier/extractor) 负责。
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class SourceLocation:
    """源码位置 (对应 src 字段 "offset:length:file")"""
    offset: int
    length: int
    file_index: int

    @classmethod
    def parse(cls, src: Any) -> Optional["SourceLocation"]:
        """解析 "o:l:f" 字符串,格式不对返回 None"""
        if not isinstance(src, str):
            return None
        parts = src.split(":")
        if len(parts) != 3:
            return None
        try:
            offset, length, file_index = (int(p) for p in parts)
        except ValueError:
            return None
        return cls(offset, length, file_index)

    def __str__(self) -> str:
        return f"{self.offset}:{self.length}:{self.file_index}"


class AstNode:
    """legacy AST节点的只读包装"""

    __slots__ = ("_raw",)

    def __init__(self, raw: Any):
        self._raw = raw if isinstance(raw, dict) else {}

    def tag(self) -> Optional[str]:
        tag = self._raw.get("name")
        return tag if isinstance(tag, str) else None

    def attributes(self) -> Dict[str, Any]:
        attributes = self._raw.get("attributes")
        return attributes if isinstance(attributes, dict) else {}

    def attribute(self, key: str) -> Optional[Any]:
        return self.attributes().get(key)

    def string_attribute(self, key: str) -> Optional[str]:
        value = self.attribute(key)
        return value if isinstance(value, str) else None

    def children(self) -> List["AstNode"]:
        children = self._raw.get("children")
        if not isinstance(children, list):
            return []
        return [AstNode(child) for child in children]

    def has_source_location(self) -> bool:
        return "src" in self._raw

    def source_location(self) -> Optional[SourceLocation]:
        return SourceLocation.parse(self._raw.get("src"))

    def node_id(self) -> Optional[int]:
        node_id = self._raw.get("id")
        if isinstance(node_id, bool) or not isinstance(node_id, int):
            return None
        return node_id

    def is_tagged(self, tag: str) -> bool:
        return self.tag() == tag

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AstNode) and self._raw is other._raw

    def __hash__(self) -> int:
        return id(self._raw)

    def __repr__(self) -> str:
        return f"AstNode(tag={self.tag()!r}, id={self.node_id()!r}, src={self._raw.get('src')!r})"


# legacy AST 节点类型名
VARIABLE_DECLARATION = "VariableDeclaration"
MAPPING = "Mapping"
ELEMENTARY_TYPE_NAME = "ElementaryTypeName"
USER_DEFINED_TYPE_NAME = "UserDefinedTypeName"
ARRAY_TYPE_NAME = "ArrayTypeName"
LITERAL = "Literal"
