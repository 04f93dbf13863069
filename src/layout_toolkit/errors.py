"""
存储布局分析错误类型

所有错误都会中止当前合约的布局计算,不返回部分结果。
调用方(CLI或上层报告)决定是整体失败还是跳过该合约。
"""

from typing import Optional


class StorageLayoutError(Exception):
    """存储布局分析错误基类"""


class MissingContractDefinition(StorageLayoutError):
    """creation source map为空,或首个条目在AST索引中找不到"""

    def __init__(self, detail: str = "no contract definition AST"):
        super().__init__(detail)
        self.detail = detail


class MissingIndexEntry(StorageLayoutError):
    """线性化继承链引用了id索引中不存在的合约"""

    def __init__(self, contract_id: int):
        super().__init__(f"AST id {contract_id} not found in id index")
        self.contract_id = contract_id


class MalformedAst(StorageLayoutError):
    """AST结构不符合预期 (子节点数量、缺失属性、非法的数组长度等)"""

    def __init__(self, context: str):
        super().__init__(f"malformed AST: {context}")
        self.context = context


class UnparseableType(StorageLayoutError):
    """基础类型名无法被类型解析器识别"""

    def __init__(self, text: str, reason: Optional[str] = None):
        message = f"unparseable type name: {text!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.text = text
        self.reason = reason


class InvalidMappingKey(StorageLayoutError):
    """mapping的key本身是mapping"""

    def __init__(self, detail: str = "unexpected mapping as mapping key"):
        super().__init__(detail)
        self.detail = detail


class UnknownValueTypeNode(StorageLayoutError):
    """类型节点的tag不属于任何已知类别"""

    def __init__(self, tag: Optional[str]):
        super().__init__(f"unknown value type node: {tag!r}")
        self.tag = tag


class ArtifactError(StorageLayoutError):
    """编译产物 (combined-json / source map) 格式错误"""
