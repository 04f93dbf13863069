"""
ABI类型模型

存储布局只需要三类ABI类型:
- 基础类型 (uintN / intN / address / bool / bytesN / bytes / string / fixed)
- 动态数组 T[]
- 定长数组 T[N]

用户自定义类型 (struct / enum / contract) 在这一层统一视为 address。
"""

from dataclasses import dataclass


class AbiType:
    """ABI类型基类"""

    def to_type_str(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_type_str()


@dataclass(frozen=True)
class ElementaryType(AbiType):
    """基础类型,name为规范名 (如 uint256, bytes32)"""
    name: str

    def to_type_str(self) -> str:
        return self.name


@dataclass(frozen=True)
class DynamicArrayType(AbiType):
    """动态数组"""
    element: AbiType

    def to_type_str(self) -> str:
        return f"{self.element.to_type_str()}[]"


@dataclass(frozen=True)
class FixedArrayType(AbiType):
    """定长数组"""
    size: int
    element: AbiType

    def __post_init__(self):
        if isinstance(self.size, bool) or not isinstance(self.size, int) or self.size < 0:
            raise ValueError(f"fixed array size must be a non-negative integer, got {self.size!r}")

    def to_type_str(self) -> str:
        return f"{self.element.to_type_str()}[{self.size}]"


# 用户自定义类型的占位类型
ADDRESS = ElementaryType("address")
