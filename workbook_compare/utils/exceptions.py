"""
异常定义

比较工具内部使用的异常层次。
"""


class WorkbookCompareError(Exception):
    """所有比较工具异常的基类"""


class AddressParseError(WorkbookCompareError, ValueError):
    """单元格地址或区域文本格式错误"""

    def __init__(self, text: str, reason: str = ""):
        self.text = text
        message = f"无效的单元格地址: {text!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class WorkbookLoadError(WorkbookCompareError):
    """工作簿文件无法读取"""


class CompareCancelledError(WorkbookCompareError):
    """比较被外部中断"""


class ConfigError(WorkbookCompareError):
    """配置文件内容无效"""
