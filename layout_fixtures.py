"""
测试用 legacy AST 构造工具

用普通dict构造与 solc legacy JSON AST 同形的节点,
不需要安装 solc 即可测试存储布局分析。
"""

import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

# 添加src到路径
sys.path.insert(0, str(Path(__file__).parent / "src"))

from layout_toolkit.ast_access import SourceLocation, build_id_index, build_source_index


class LegacyAstBuilder:
    """按顺序分配 id 和 src 的节点构造器"""

    def __init__(self, file_index: int = 0):
        self.file_index = file_index
        self._next_id = 1
        self._next_offset = 0

    def node(self, name: str, attributes: Optional[Dict] = None,
             children: Optional[List[Dict]] = None, src: bool = True) -> Dict:
        raw = {"id": self._next_id, "name": name}
        self._next_id += 1
        if src:
            raw["src"] = f"{self._next_offset}:10:{self.file_index}"
            self._next_offset += 11
        if attributes is not None:
            raw["attributes"] = attributes
        raw["children"] = children if children is not None else []
        return raw

    def elementary(self, type_name: str) -> Dict:
        return self.node("ElementaryTypeName", {"name": type_name.split()[0], "type": type_name})

    def user_defined(self, name: str) -> Dict:
        return self.node("UserDefinedTypeName", {"name": name, "type": f"struct {name} storage pointer"})

    def mapping(self, key: Dict, value: Dict) -> Dict:
        return self.node("Mapping", {"type": "mapping"}, [key, value])

    def literal(self, value) -> Dict:
        return self.node("Literal", {"value": value, "token": "number"})

    def array(self, element: Dict, length=None) -> Dict:
        children = [element] if length is None else [element, self.literal(length)]
        return self.node("ArrayTypeName", {"type": "array"}, children)

    def variable(self, name: Optional[str], type_node: Optional[Dict], constant: bool = False,
                 src: bool = True) -> Dict:
        attributes = {"constant": constant, "stateVariable": True, "visibility": "internal"}
        if name is not None:
            attributes["name"] = name
        children = [type_node] if type_node is not None else []
        return self.node("VariableDeclaration", attributes, children, src=src)

    def function(self, name: str) -> Dict:
        return self.node("FunctionDefinition", {"name": name, "constant": False})

    def contract(self, name: Optional[str], members: List[Dict],
                 bases: Sequence[Dict] = (), linearized: bool = True) -> Dict:
        """
        bases: 祖先合约,按solc线性化顺序 (最近的基类在前)
        """
        contract = self.node("ContractDefinition", {}, members)
        attributes = contract["attributes"]
        if name is not None:
            attributes["name"] = name
        if linearized:
            attributes["linearizedBaseContracts"] = [contract["id"]] + [b["id"] for b in bases]
        return contract

    def source_unit(self, contracts: List[Dict], src: Optional[str] = None) -> Dict:
        unit = self.node("SourceUnit", {"absolutePath": "src/Test.sol"}, contracts)
        if src is not None:
            unit["src"] = src
        return unit


def indices_for(*roots: Dict):
    """返回 (id_index, src_index)"""
    return build_id_index(roots), build_source_index(roots)


def srcmap_for(contract: Dict) -> List[SourceLocation]:
    return [SourceLocation.parse(contract["src"])]


def inheritance_fixture():
    """
    contract Base { uint256 a; uint256 constant C = 1; function f() {} }
    contract Derived is Base { mapping(address => mapping(uint256 => bool)) b; }
    """
    builder = LegacyAstBuilder()
    base = builder.contract("Base", [
        builder.variable("a", builder.elementary("uint256")),
        builder.variable("C", builder.elementary("uint256"), constant=True),
        builder.function("f"),
    ])
    derived = builder.contract("Derived", [
        builder.variable("b", builder.mapping(
            builder.elementary("address"),
            builder.mapping(builder.elementary("uint256"), builder.elementary("bool")),
        )),
    ], bases=[base])
    unit = builder.source_unit([base, derived])
    return builder, unit, base, derived
