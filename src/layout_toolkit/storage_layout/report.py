"""
存储布局报告

组合定位、线性化、提取、分类、渲染各步骤,生成按槽位分配顺序排列的
状态变量记录:

    <变量名> (<声明合约>)
      Type: <类型>

任何一步失败都会中止整个合约的计算,不返回部分结果。
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence

from ..abi_types import TypeNameParser
from ..ast_access import AstNode
from ..errors import MalformedAst
from .classifier import SlotTypeClassifier
from .extractor import extract_storage_variables
from .linearization import resolve_linearization
from .locator import locate_contract_definition
from .slot_types import SlotType, render_slot_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageVariableRecord:
    """单个存储变量"""
    name: str
    owning_contract: str
    slot_type: SlotType

    @property
    def rendered_type(self) -> str:
        return render_slot_type(self.slot_type)

    def describe(self) -> str:
        return f"{self.name} ({self.owning_contract})\n  Type: {self.rendered_type}"


class StorageLayoutInspector:
    """
    存储布局分析器

    id_index 和 src_index 是外部构建的只读索引,只使用 .get() 查找,
    因此可以是 CompilationArtifacts 构建的索引,也可以是测试中的普通dict。

    Args:
        id_index: AST节点id -> AstNode
        src_index: 源码位置 -> AstNode
        type_name_parser: 基础类型名解析器
    """

    def __init__(self,
                 id_index: Mapping[int, AstNode],
                 src_index: Mapping[Any, AstNode],
                 type_name_parser: Optional[TypeNameParser] = None):
        self.id_index = id_index
        self.src_index = src_index
        self.classifier = SlotTypeClassifier(type_name_parser)
        self.logger = logging.getLogger(__name__ + '.StorageLayoutInspector')

    def storage_variables(self, creation_srcmap: Sequence[Any]) -> List[StorageVariableRecord]:
        """按槽位分配顺序 (基类在前,合约内按声明顺序) 返回存储变量"""
        contract_node = locate_contract_definition(creation_srcmap, self.src_index)
        contract_ids = resolve_linearization(contract_node)
        if not contract_ids:
            return []

        records = []
        for contract_id in contract_ids:
            for owner, declaration in extract_storage_variables(contract_id, self.id_index):
                name = declaration.string_attribute("name")
                if name is None:
                    raise MalformedAst(f"malformed variable declaration in {owner}: {declaration!r}")
                slot_type = self.classifier.classify_declaration(declaration)
                records.append(StorageVariableRecord(name, owner, slot_type))

        contract_name = contract_node.string_attribute("name") or "?"
        self.logger.info(f"{contract_name}: 继承链 {len(contract_ids)} 个合约, {len(records)} 个存储变量")
        return records

    def storage_layout(self, creation_srcmap: Sequence[Any]) -> List[str]:
        return [record.describe() for record in self.storage_variables(creation_srcmap)]


def storage_layout(creation_srcmap: Sequence[Any],
                   src_index: Mapping[Any, AstNode],
                   id_index: Mapping[int, AstNode]) -> List[str]:
    """计算一个合约的存储布局文本记录"""
    return StorageLayoutInspector(id_index, src_index).storage_layout(creation_srcmap)
