"""
配置读取

从 toml 文件的 [storage_layout] 表读取默认参数:

    [storage_layout]
    combined_json = "out/combined.json"   # 相对于配置文件所在目录
    contracts = ["Token", "Vault"]
    keep_going = false
    log_level = "INFO"

命令行参数优先于配置文件。
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import toml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "layout_toolkit.toml"
CONFIG_SECTION = "storage_layout"


@dataclass
class LayoutToolkitConfig:
    """存储布局工具配置"""
    combined_json: Optional[Path] = None
    contracts: List[str] = field(default_factory=list)
    keep_going: bool = False
    log_level: str = "INFO"

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def _read_section(data: Dict[str, Any], config_path: Path) -> LayoutToolkitConfig:
    section = data.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ValueError(f"{config_path} 中 [{CONFIG_SECTION}] 不是表")

    config = LayoutToolkitConfig()

    combined_json = section.get("combined_json")
    if combined_json is not None:
        if not isinstance(combined_json, str):
            raise ValueError(f"{config_path}: combined_json 必须是字符串")
        config.combined_json = (config_path.parent / combined_json).resolve()

    contracts = section.get("contracts", [])
    if not isinstance(contracts, list) or not all(isinstance(c, str) for c in contracts):
        raise ValueError(f"{config_path}: contracts 必须是字符串列表")
    config.contracts = list(contracts)

    keep_going = section.get("keep_going", False)
    if not isinstance(keep_going, bool):
        raise ValueError(f"{config_path}: keep_going 必须是布尔值")
    config.keep_going = keep_going

    log_level = section.get("log_level", "INFO")
    if not isinstance(log_level, str) or not isinstance(logging.getLevelName(log_level.upper()), int):
        raise ValueError(f"{config_path}: 无效的 log_level {log_level!r}")
    config.log_level = log_level.upper()

    return config


def load_config(path: Optional[Union[str, Path]] = None) -> LayoutToolkitConfig:
    """
    加载配置

    Args:
        path: 配置文件路径; 为 None 时尝试当前目录下的 layout_toolkit.toml

    Raises:
        FileNotFoundError: 显式指定的配置文件不存在
        ValueError: toml语法错误或字段类型错误
    """
    explicit = path is not None
    config_path = Path(path) if explicit else Path.cwd() / DEFAULT_CONFIG_FILE

    if not config_path.exists():
        if explicit:
            raise FileNotFoundError(f"未找到配置文件 ({config_path})")
        return LayoutToolkitConfig()

    with config_path.open("r", encoding="utf-8") as fh:
        data = toml.load(fh)

    config = _read_section(data, config_path)
    logger.debug(f"从 {config_path} 加载配置: {config}")
    return config
