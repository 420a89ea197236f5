"""
应用配置

从 YAML 文件读取配置，文件不存在时使用默认值。未知键忽略。

示例 settings.yaml:

    log_level: DEBUG
    max_file_size_mb: 50
    cache_ttl_seconds: 600
    compare:
      values: true
      formulas: false
    highlight:
      value: "FFFFC107"
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from workbook_compare.utils.exceptions import ConfigError

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# 高亮颜色（ARGB）
DEFAULT_HIGHLIGHT_COLORS = {
    "value": "FFFFC107",     # 黄色：值变化
    "formula": "FF64B5F6",   # 蓝色：公式变化
    "merged": "FFFF9800",    # 橙色：合并区域变化
}


@dataclass
class AppSettings:
    """应用配置"""
    log_level: str = "INFO"
    log_dir: str = ""
    max_file_size_mb: int = 100
    cache_ttl_seconds: int = 1800
    compare_values: bool = True
    compare_formulas: bool = True
    compare_formatting: bool = False
    highlight_colors: Dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_HIGHLIGHT_COLORS)
    )

    @property
    def max_file_size(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


def _load_yaml(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"配置文件解析失败: {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"配置文件顶层必须是映射: {path}")
    return data


def _positive_int(data: Dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{key} 必须是正整数，实际为 {value!r}")
    return value


def _flag(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"compare.{key} 必须是布尔值，实际为 {value!r}")
    return value


def load_settings(path: Optional[str] = None) -> AppSettings:
    """
    读取配置文件

    Args:
        path: YAML 文件路径，为空或文件不存在时返回默认配置

    Raises:
        ConfigError: 配置内容无效
    """
    data = _load_yaml(path) if path else {}
    defaults = AppSettings()

    log_level = str(data.get("log_level", defaults.log_level)).upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigError(f"未知的日志级别: {log_level}")

    compare = data.get("compare") or {}
    if not isinstance(compare, dict):
        raise ConfigError("compare 必须是映射")

    highlight = data.get("highlight") or {}
    if not isinstance(highlight, dict):
        raise ConfigError("highlight 必须是映射")
    colors = dict(DEFAULT_HIGHLIGHT_COLORS)
    for key, value in highlight.items():
        if key in colors:
            colors[key] = str(value).upper()

    settings = AppSettings(
        log_level=log_level,
        log_dir=str(data.get("log_dir", defaults.log_dir) or ""),
        max_file_size_mb=_positive_int(data, "max_file_size_mb", defaults.max_file_size_mb),
        cache_ttl_seconds=_positive_int(data, "cache_ttl_seconds", defaults.cache_ttl_seconds),
        compare_values=_flag(compare, "values", defaults.compare_values),
        compare_formulas=_flag(compare, "formulas", defaults.compare_formulas),
        compare_formatting=_flag(compare, "formatting", defaults.compare_formatting),
        highlight_colors=colors,
    )
    logging.getLogger(__name__).debug("已加载配置: %s", path or "<默认>")
    return settings
