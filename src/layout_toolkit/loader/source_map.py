"""
solc source map解码

压缩格式: 条目以 ";" 分隔,字段 s:l:f:j:m 以 ":" 分隔,
空字段或缺失字段沿用上一个条目的值。
"""

from dataclasses import dataclass
from typing import List

from ..ast_access import SourceLocation
from ..errors import ArtifactError


@dataclass(frozen=True)
class SourceMapEntry:
    """source map 条目"""
    offset: int
    length: int
    file_index: int
    jump: str = "-"
    modifier_depth: int = 0

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(self.offset, self.length, self.file_index)


def _int_field(fields: List[str], position: int, previous: int, text: str) -> int:
    if position >= len(fields) or fields[position] == "":
        return previous
    try:
        return int(fields[position])
    except ValueError:
        raise ArtifactError(f"malformed source map entry {text!r}") from None


def decode_source_map(text: str) -> List[SourceMapEntry]:
    if not text:
        return []

    entries = []
    previous = SourceMapEntry(0, 0, -1, "-", 0)
    for raw in text.split(";"):
        fields = raw.split(":")
        jump = fields[3] if len(fields) > 3 and fields[3] else previous.jump
        entry = SourceMapEntry(
            offset=_int_field(fields, 0, previous.offset, raw),
            length=_int_field(fields, 1, previous.length, raw),
            file_index=_int_field(fields, 2, previous.file_index, raw),
            jump=jump,
            modifier_depth=_int_field(fields, 4, previous.modifier_depth, raw),
        )
        entries.append(entry)
        previous = entry
    return entries
