"""
进程初始化

读取配置并配置日志。只在程序入口调用一次，比较流程中不会触发。
"""
import logging
import threading
from typing import Optional

from workbook_compare.utils.configs import AppSettings, load_settings
from workbook_compare.utils.log import init_logger

_lock = threading.Lock()
_settings: Optional[AppSettings] = None


def initialize(settings_path: Optional[str] = None) -> AppSettings:
    """初始化进程级配置，重复调用直接返回首次的结果"""
    global _settings
    with _lock:
        if _settings is None:
            settings = load_settings(settings_path)
            init_logger(settings.log_dir or None, settings.log_level)
            logging.getLogger(__name__).info(
                "初始化完成，日志级别 %s", settings.log_level
            )
            _settings = settings
        return _settings


def get_settings() -> AppSettings:
    """获取已初始化的配置，未初始化时抛出 RuntimeError"""
    if _settings is None:
        raise RuntimeError("尚未调用 initialize()")
    return _settings


def reset():
    """清除初始化状态（测试用）"""
    global _settings
    with _lock:
        _settings = None
