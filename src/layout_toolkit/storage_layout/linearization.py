"""
继承线性化顺序解析

solc在 attributes.linearizedBaseContracts 中按"最派生在前"输出继承链,
存储槽位分配顺序与之相反: 基类变量占据低位槽位。
"""

import logging
import math
from typing import List

from ..ast_access import AstNode
from ..errors import MalformedAst

logger = logging.getLogger(__name__)


def resolve_linearization(contract_node: AstNode) -> List[int]:
    """
    返回基类到派生类顺序的合约id列表

    没有 linearizedBaseContracts 属性时返回空列表 (视为没有可报告的变量)。
    """
    linearized = contract_node.attribute("linearizedBaseContracts")
    if linearized is None:
        logger.debug(f"{contract_node!r} 没有 linearizedBaseContracts")
        return []
    if not isinstance(linearized, list):
        raise MalformedAst(f"linearizedBaseContracts is not an array: {linearized!r}")

    contract_ids = []
    for entry in linearized:
        if isinstance(entry, bool) or not isinstance(entry, (int, float)) or not math.isfinite(entry):
            raise MalformedAst(f"non-numeric linearizedBaseContracts entry: {entry!r}")
        contract_ids.append(math.floor(entry))

    contract_ids.reverse()
    return contract_ids
