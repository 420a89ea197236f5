"""
日志初始化

所有模块通过 logging.getLogger(__name__) 取日志器，统一挂在
"workbook_compare" 之下，由这里配置输出。
"""
import logging
import os
from typing import Optional, Union

LOGGER_NAME = "workbook_compare"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def init_logger(log_dir: Optional[str] = None, level: Union[str, int] = logging.INFO) -> logging.Logger:
    """
    配置包级日志器

    Args:
        log_dir: 日志目录，为空时只输出到控制台
        level: 日志级别（名称或数值）

    Returns:
        包级 Logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level if isinstance(level, int) else level.upper())

    if not logger.handlers:
        fmt = logging.Formatter(LOG_FORMAT)

        sh = logging.StreamHandler()
        sh.setFormatter(fmt)
        logger.addHandler(sh)

        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            fh = logging.FileHandler(os.path.join(log_dir, "app.log"), encoding="utf-8")
            fh.setFormatter(fmt)
            logger.addHandler(fh)

    return logger
