"""
存储布局分析模块

从solc legacy AST计算合约的存储变量声明顺序:
- 定位合约定义节点
- 解析继承线性化顺序
- 提取非constant状态变量
- 分类并渲染槽位类型
"""

from .slot_types import (
    SlotType,
    StorageMapping,
    StorageValue,
    parse_slot_type,
    render_abi_type,
    render_slot_type,
)
from .classifier import SlotTypeClassifier
from .locator import locate_contract_definition
from .linearization import resolve_linearization
from .extractor import extract_storage_variables, is_storage_variable_declaration
from .report import StorageLayoutInspector, StorageVariableRecord, storage_layout

__all__ = [
    "SlotType",
    "StorageMapping",
    "StorageValue",
    "parse_slot_type",
    "render_abi_type",
    "render_slot_type",
    "SlotTypeClassifier",
    "locate_contract_definition",
    "resolve_linearization",
    "extract_storage_variables",
    "is_storage_variable_declaration",
    "StorageLayoutInspector",
    "StorageVariableRecord",
    "storage_layout",
]
