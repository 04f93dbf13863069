"""
存储槽位类型

SlotType 是二选一的类型:
- StorageValue: 标量/数组/用户自定义类型
- StorageMapping: (可嵌套的) mapping, keys 从外到内排列

mapping 的 key 只能是基础类型,这一约束在构造时检查。
同时提供渲染 (SlotType -> Solidity类型字符串) 和反向解析。
"""

import re
from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from ..abi_types import AbiType, TypeNameParser, parse_abi_type, parse_type_name
from ..errors import InvalidMappingKey, UnparseableType

MAPPING_PREFIX_RE = re.compile(r"mapping\s*\(")


@dataclass(frozen=True)
class StorageValue:
    """非mapping的存储变量类型"""
    abi_type: AbiType

    def __post_init__(self):
        if not isinstance(self.abi_type, AbiType):
            raise TypeError(f"StorageValue expects an AbiType, got {self.abi_type!r}")


@dataclass(frozen=True)
class StorageMapping:
    """mapping(k1 => mapping(k2 => ... => value))"""
    keys: Tuple[AbiType, ...]
    value: AbiType

    def __post_init__(self):
        keys = tuple(self.keys)
        if not keys:
            raise ValueError("StorageMapping requires at least one key type")
        for key in keys:
            if isinstance(key, (StorageValue, StorageMapping)):
                raise InvalidMappingKey(f"mapping key must be an elementary type, got {key!r}")
            if not isinstance(key, AbiType):
                raise TypeError(f"mapping key must be an AbiType, got {key!r}")
        if not isinstance(self.value, AbiType):
            raise TypeError(f"mapping value must be an AbiType, got {self.value!r}")
        object.__setattr__(self, "keys", keys)

    @classmethod
    def of(cls, keys: Iterable[AbiType], value: AbiType) -> "StorageMapping":
        return cls(tuple(keys), value)

    @classmethod
    def nest(cls, key: Union[AbiType, "StorageValue", "StorageMapping"],
             inner: "SlotType") -> "StorageMapping":
        """在 inner 外层再包一层 mapping(key => inner)"""
        if isinstance(key, StorageMapping):
            raise InvalidMappingKey()
        if isinstance(key, StorageValue):
            key = key.abi_type
        if isinstance(inner, StorageMapping):
            return cls((key,) + inner.keys, inner.value)
        return cls((key,), inner.abi_type)


SlotType = Union[StorageValue, StorageMapping]


def render_abi_type(abi_type: AbiType) -> str:
    return abi_type.to_type_str()


def render_slot_type(slot_type: SlotType) -> str:
    """渲染为Solidity类型字符串,mapping向右嵌套"""
    if isinstance(slot_type, StorageValue):
        return render_abi_type(slot_type.abi_type)

    rendered = render_abi_type(slot_type.value)
    for key in reversed(slot_type.keys):
        rendered = f"mapping({render_abi_type(key)} => {rendered})"
    return rendered


def _find_top_level_arrow(body: str) -> int:
    depth = 0
    for i, char in enumerate(body):
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif depth == 0 and body.startswith("=>", i):
            return i
    return -1


def parse_slot_type(text: str, type_name_parser: TypeNameParser = parse_type_name) -> SlotType:
    """
    解析渲染后的类型字符串 (render_slot_type 的逆操作)

    Raises:
        InvalidMappingKey: mapping 出现在 key 位置
        UnparseableType: 其他语法错误
    """
    text = text.strip()
    match = MAPPING_PREFIX_RE.match(text)
    if match is None:
        return StorageValue(parse_abi_type(text, type_name_parser))

    if not text.endswith(")"):
        raise UnparseableType(text, "unterminated mapping")
    body = text[match.end():-1]
    arrow = _find_top_level_arrow(body)
    if arrow < 0:
        raise UnparseableType(text, "mapping without '=>'")

    key = parse_slot_type(body[:arrow], type_name_parser)
    if isinstance(key, StorageMapping):
        raise InvalidMappingKey()
    value = parse_slot_type(body[arrow + 2:], type_name_parser)
    return StorageMapping.nest(key, value)
