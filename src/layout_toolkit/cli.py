#!/usr/bin/env python3
"""
存储布局查看工具 (命令行)

功能:
1. 读取 solc --combined-json 编译产物 (legacy AST + source map)
2. 按继承线性化顺序列出合约的存储变量
3. 渲染每个变量的Solidity类型 (mapping / 数组 / 基础类型)

使用示例:
    solc --combined-json ast,bin,srcmap,srcmap-runtime src/Token.sol > out/combined.json
    layout-toolkit out/combined.json --contract Token
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_config
from .errors import ArtifactError, StorageLayoutError
from .loader import CompiledContract, load_combined_json

# ============================================================================
# 配置
# ============================================================================

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
logger = logging.getLogger(__name__)

# ============================================================================
# 命令行接口
# ============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='layout-toolkit',
        description='列出Solidity合约的存储变量布局 (按槽位分配顺序)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  # 列出所有可部署合约
  layout-toolkit out/combined.json

  # 只看指定合约 (短名或 file:Name)
  layout-toolkit out/combined.json --contract Token --contract src/Vault.sol:Vault

  # 使用配置文件中的默认参数
  layout-toolkit --config layout_toolkit.toml

输出格式:
  <变量名> (<声明合约>)
    Type: <类型>
        """
    )

    parser.add_argument(
        'combined_json',
        nargs='?',
        type=Path,
        help='solc --combined-json ast,bin,srcmap 的输出文件'
    )

    parser.add_argument(
        '--contract',
        action='append',
        default=[],
        help='要分析的合约 (可重复; 默认分析所有可部署合约)'
    )

    parser.add_argument(
        '--config',
        type=Path,
        help='toml配置文件 (默认读取当前目录下的 layout_toolkit.toml)'
    )

    parser.add_argument(
        '--keep-going',
        action='store_true',
        help='某个合约分析失败时记录警告并继续'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='启用调试日志'
    )

    return parser


def print_layout(contract: CompiledContract, records: List[str]) -> None:
    print(f"=== {contract.full_name} ===")
    for record in records:
        print(record)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"配置加载失败: {e}")
        return 1

    # 设置日志级别
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(config.log_level_value)

    combined_json = args.combined_json or config.combined_json
    if combined_json is None:
        logger.error("未指定 combined-json 文件")
        return 1
    if not combined_json.exists():
        logger.error(f"编译产物不存在: {combined_json}")
        return 1

    try:
        artifacts = load_combined_json(combined_json)
        names = args.contract or config.contracts
        if names:
            contracts = [artifacts.find_contract(name) for name in names]
        else:
            contracts = artifacts.deployable_contracts()
    except ArtifactError as e:
        logger.error(f"编译产物读取失败: {e}")
        return 1

    keep_going = args.keep_going or config.keep_going
    inspector = artifacts.inspector()
    failed = []

    for contract in contracts:
        try:
            records = inspector.storage_layout(contract.creation_srcmap)
        except StorageLayoutError as e:
            if not keep_going:
                logger.error(f"{contract.full_name}: {e}")
                return 1
            logger.warning(f"  跳过 {contract.full_name}: {e}")
            failed.append(contract.full_name)
            continue
        print_layout(contract, records)

    if failed:
        logger.warning(f"{len(failed)} 个合约分析失败: {', '.join(failed)}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
