"""
比较工作线程

在后台执行 Excel 文件加载和比较，避免阻塞 UI。
"""
import logging
from typing import Optional

from PyQt6.QtCore import QThread, pyqtSignal

from workbook_compare.models.excel_model import WorkbookData
from workbook_compare.services.cache_service import ResultCache
from workbook_compare.services.compare_service import CompareService, ComparisonConfig
from workbook_compare.services.excel_service import ExcelService
from workbook_compare.utils.exceptions import (
    AddressParseError, CompareCancelledError, WorkbookLoadError
)

logger = logging.getLogger(__name__)


class CompareWorker(QThread):
    """比较工作线程"""

    # 信号定义
    progress_updated = pyqtSignal(int, str)         # 进度更新 (百分比, 消息)
    file_loaded = pyqtSignal(str, object)           # 文件加载完成 ("a"/"b", WorkbookData)
    compare_finished = pyqtSignal(object, str)      # 比较完成 (DiffResult, 比较编号)
    compare_cancelled = pyqtSignal()                # 比较被取消
    error_occurred = pyqtSignal(str)                # 发生错误 (错误消息)

    def __init__(self, cache: ResultCache, max_file_size: Optional[int] = None, parent=None):
        super().__init__(parent)
        self.cache = cache
        self.max_file_size = max_file_size
        self.file_a_path: Optional[str] = None
        self.file_b_path: Optional[str] = None
        self.config: ComparisonConfig = ComparisonConfig()

        self._workbook_a: Optional[WorkbookData] = None
        self._workbook_b: Optional[WorkbookData] = None

    def set_files(self, file_a: str, file_b: str):
        """设置要比较的文件"""
        self.file_a_path = file_a
        self.file_b_path = file_b

    def set_config(self, config: ComparisonConfig):
        """设置比较选项"""
        self.config = config

    def run(self):
        """执行比较任务"""
        try:
            # 1. 加载文件 A
            self.progress_updated.emit(10, "正在加载文件 A...")
            self._workbook_a = ExcelService.load_file(self.file_a_path, self.max_file_size)
            self.file_loaded.emit("a", self._workbook_a)

            # 2. 加载文件 B
            self.progress_updated.emit(30, "正在加载文件 B...")
            self._workbook_b = ExcelService.load_file(self.file_b_path, self.max_file_size)
            self.file_loaded.emit("b", self._workbook_b)

            # 3. 执行比较
            self.progress_updated.emit(50, "正在比较文件...")
            result = CompareService.compare(
                self._workbook_a,
                self._workbook_b,
                self.config,
                should_stop=self.isInterruptionRequested
            )
            comparison_id = self.cache.put(result)

            # 4. 完成
            self.progress_updated.emit(100, "比较完成")
            self.compare_finished.emit(result, comparison_id)

        except CompareCancelledError:
            logger.info("比较已取消")
            self.compare_cancelled.emit()
        except FileNotFoundError as e:
            logger.warning("文件不存在: %s", e)
            self.error_occurred.emit(f"文件不存在: {e}")
        except WorkbookLoadError as e:
            logger.warning("文件读取失败: %s", e)
            self.error_occurred.emit(f"文件错误: {e}")
        except AddressParseError as e:
            logger.exception("工作簿中存在无效的单元格地址")
            self.error_occurred.emit(f"工作簿数据异常: {e}")
        except Exception as e:
            logger.exception("比较过程中发生错误")
            self.error_occurred.emit(f"发生错误: {e}")

    @property
    def workbook_a(self) -> Optional[WorkbookData]:
        return self._workbook_a

    @property
    def workbook_b(self) -> Optional[WorkbookData]:
        return self._workbook_b
