"""
solc combined-json 产物加载器

读取 `solc --combined-json ast,bin,srcmap,srcmap-runtime` 的输出:
- sources.<file>.AST / legacyAST: legacy JSON AST
- contracts.<file>:<Name>: bin / srcmap / srcmap-runtime

构建存储布局分析需要的两个索引 (id索引和源码位置索引)。
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from ..ast_access import AstNode, SourceLocation, build_id_index, build_source_index
from ..errors import ArtifactError
from ..storage_layout import StorageLayoutInspector, StorageVariableRecord
from .source_map import SourceMapEntry, decode_source_map

logger = logging.getLogger(__name__)


@dataclass
class CompiledContract:
    """单个合约的编译产物"""
    name: str
    source_path: str
    creation_srcmap: List[SourceMapEntry] = field(default_factory=list)
    runtime_srcmap: List[SourceMapEntry] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        return f"{self.source_path}:{self.name}" if self.source_path else self.name


@dataclass
class CompilationArtifacts:
    """一次编译的全部产物和AST索引"""
    contracts: Dict[str, CompiledContract]
    source_list: List[str]
    id_index: Dict[int, AstNode]
    src_index: Dict[SourceLocation, AstNode]

    def find_contract(self, name: str) -> CompiledContract:
        """按完整名 (file:Name) 或短名查找合约"""
        if name in self.contracts:
            return self.contracts[name]

        matches = [c for c in self.contracts.values() if c.name == name]
        if not matches:
            raise ArtifactError(f"contract {name!r} not found in compilation output")
        if len(matches) > 1:
            candidates = ", ".join(sorted(c.full_name for c in matches))
            raise ArtifactError(f"contract name {name!r} is ambiguous: {candidates}")
        return matches[0]

    def deployable_contracts(self) -> List[CompiledContract]:
        """带有creation source map的合约 (接口和抽象合约没有)"""
        return [c for c in self.contracts.values() if c.creation_srcmap]

    def inspector(self) -> StorageLayoutInspector:
        return StorageLayoutInspector(self.id_index, self.src_index)

    def storage_variables(self, name: str) -> List[StorageVariableRecord]:
        contract = self.find_contract(name)
        return self.inspector().storage_variables(contract.creation_srcmap)

    def storage_layout(self, name: str) -> List[str]:
        return [record.describe() for record in self.storage_variables(name)]


class CombinedJsonLoader:
    """combined-json 加载器"""

    def __init__(self):
        self.logger = logging.getLogger(__name__ + '.CombinedJsonLoader')

    def load_file(self, path: Union[str, Path]) -> CompilationArtifacts:
        path = Path(path)
        self.logger.debug(f"读取编译产物: {path}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ArtifactError(f"{path} is not valid JSON: {e}") from e
        except UnicodeDecodeError as e:
            raise ArtifactError(f"{path} is not UTF-8 text: {e}") from e
        except OSError as e:
            raise ArtifactError(f"cannot read {path}: {e}") from e
        return self.load(data)

    def load(self, data: Any) -> CompilationArtifacts:
        if not isinstance(data, dict):
            raise ArtifactError("combined-json output must be a JSON object")

        sources = data.get("sources")
        if not isinstance(sources, dict):
            raise ArtifactError("combined-json output has no 'sources' (compile with --combined-json ast,...)")
        contracts = data.get("contracts")
        if not isinstance(contracts, dict):
            raise ArtifactError("combined-json output has no 'contracts'")

        roots = [self._legacy_ast(path, source) for path, source in sources.items()]
        id_index = build_id_index(roots)
        src_index = build_source_index(roots)

        compiled = {}
        for full_name, output in contracts.items():
            contract = self._compiled_contract(full_name, output)
            compiled[contract.full_name] = contract

        source_list = data.get("sourceList")
        if not isinstance(source_list, list):
            source_list = list(sources.keys())

        self.logger.info(f"  ✓ 加载 {len(compiled)} 个合约, {len(sources)} 个源文件")
        return CompilationArtifacts(
            contracts=compiled,
            source_list=[str(s) for s in source_list],
            id_index=id_index,
            src_index=src_index,
        )

    def _legacy_ast(self, path: str, source: Any) -> AstNode:
        if not isinstance(source, dict):
            raise ArtifactError(f"source entry for {path} is not an object")

        ast = source.get("legacyAST", source.get("AST"))
        if not isinstance(ast, dict):
            raise ArtifactError(f"no AST for {path} (compile with --combined-json ast,...)")
        if "nodeType" in ast:
            raise ArtifactError(f"AST for {path} is in compact format; legacy JSON AST is required")
        return AstNode(ast)

    def _compiled_contract(self, full_name: str, output: Any) -> CompiledContract:
        if not isinstance(output, dict):
            raise ArtifactError(f"contract entry for {full_name} is not an object")

        source_path, _, name = full_name.rpartition(":")
        return CompiledContract(
            name=name,
            source_path=source_path,
            creation_srcmap=decode_source_map(output.get("srcmap") or ""),
            runtime_srcmap=decode_source_map(output.get("srcmap-runtime") or ""),
        )


def load_combined_json(path: Union[str, Path]) -> CompilationArtifacts:
    return CombinedJsonLoader().load_file(path)
