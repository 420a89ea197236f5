"""
主窗口

应用程序的主界面，包含菜单栏、工具栏、文件面板、差异列表、统计面板。
"""
import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QSplitter,
    QStatusBar, QToolBar, QFileDialog, QMessageBox, QProgressBar
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence

from workbook_compare.models.diff_model import DiffResult
from workbook_compare.models.excel_model import WorkbookData
from workbook_compare.services.cache_service import ResultCache
from workbook_compare.services.compare_service import ComparisonConfig
from workbook_compare.services.highlight_service import HighlightService
from workbook_compare.services.report_service import ReportService
from workbook_compare.utils.configs import AppSettings
from workbook_compare.views.config_panel import ConfigPanel
from workbook_compare.views.diff_list import DiffListPanel
from workbook_compare.views.file_panel import FilePanel
from workbook_compare.views.stats_panel import StatsPanel
from workbook_compare.workers.compare_worker import CompareWorker

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """主窗口"""

    def __init__(self, settings: AppSettings):
        super().__init__()
        self.settings = settings

        self.setWindowTitle("Excel 文件比较工具")
        self.setMinimumSize(1024, 640)
        self.resize(1400, 860)

        # 数据
        self._cache = ResultCache(ttl_seconds=settings.cache_ttl_seconds)
        self._comparison_id: Optional[str] = None
        self._workbook_a: Optional[WorkbookData] = None
        self._workbook_b: Optional[WorkbookData] = None
        self._worker: Optional[CompareWorker] = None

        self._setup_ui()
        self._setup_menu()
        self._setup_toolbar()
        self._setup_statusbar()
        self._connect_signals()

    def _setup_ui(self):
        """设置 UI 布局"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QHBoxLayout(central_widget)
        main_layout.setContentsMargins(8, 8, 8, 8)
        main_layout.setSpacing(8)

        # 左侧面板（配置 + 统计）
        left_panel = QWidget()
        left_layout = QVBoxLayout(left_panel)
        left_layout.setContentsMargins(0, 0, 0, 0)
        left_layout.setSpacing(8)

        self.config_panel = ConfigPanel(ComparisonConfig(
            compare_values=self.settings.compare_values,
            compare_formulas=self.settings.compare_formulas,
            compare_formatting=self.settings.compare_formatting,
        ))
        left_layout.addWidget(self.config_panel, 1)

        self.stats_panel = StatsPanel()
        left_layout.addWidget(self.stats_panel)

        left_panel.setMaximumWidth(280)
        left_panel.setMinimumWidth(220)

        # 右侧：文件面板 + 差异列表
        right_splitter = QSplitter(Qt.Orientation.Vertical)

        file_panel_widget = QWidget()
        file_panel_layout = QHBoxLayout(file_panel_widget)
        file_panel_layout.setContentsMargins(0, 0, 0, 0)
        self.file_panel_a = FilePanel("文件 A（原）")
        self.file_panel_b = FilePanel("文件 B（新）")
        file_panel_layout.addWidget(self.file_panel_a)
        file_panel_layout.addWidget(self.file_panel_b)
        right_splitter.addWidget(file_panel_widget)

        self.diff_list_panel = DiffListPanel()
        right_splitter.addWidget(self.diff_list_panel)
        right_splitter.setSizes([200, 600])

        main_layout.addWidget(left_panel)
        main_layout.addWidget(right_splitter, 1)

    def _setup_menu(self):
        """设置菜单栏"""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("文件(&F)")

        export_action = QAction("导出报告...", self)
        export_action.setShortcut(QKeySequence("Ctrl+E"))
        export_action.triggered.connect(self._export_report)
        file_menu.addAction(export_action)

        highlight_action = QAction("导出高亮文件...", self)
        highlight_action.setShortcut(QKeySequence("Ctrl+H"))
        highlight_action.triggered.connect(self._export_highlight)
        file_menu.addAction(highlight_action)

        file_menu.addSeparator()

        exit_action = QAction("退出(&X)", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = menubar.addMenu("编辑(&E)")

        compare_action = QAction("开始比较", self)
        compare_action.setShortcut(QKeySequence("F5"))
        compare_action.triggered.connect(self._start_compare)
        edit_menu.addAction(compare_action)

        cancel_action = QAction("取消比较", self)
        cancel_action.setShortcut(QKeySequence("Esc"))
        cancel_action.triggered.connect(self._cancel_compare)
        edit_menu.addAction(cancel_action)

    def _setup_toolbar(self):
        """设置工具栏"""
        toolbar = QToolBar("主工具栏")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        self.compare_action = QAction("开始比较", self)
        self.compare_action.setToolTip("开始比较 (F5)")
        self.compare_action.triggered.connect(self._start_compare)
        toolbar.addAction(self.compare_action)

        self.cancel_action = QAction("取消", self)
        self.cancel_action.setEnabled(False)
        self.cancel_action.triggered.connect(self._cancel_compare)
        toolbar.addAction(self.cancel_action)

        toolbar.addSeparator()

        export_action = QAction("导出报告", self)
        export_action.triggered.connect(self._export_report)
        toolbar.addAction(export_action)

        highlight_action = QAction("导出高亮文件", self)
        highlight_action.triggered.connect(self._export_highlight)
        toolbar.addAction(highlight_action)

    def _setup_statusbar(self):
        """设置状态栏"""
        self.statusbar = QStatusBar()
        self.setStatusBar(self.statusbar)
        self.progress_bar = QProgressBar()
        self.progress_bar.setMaximumWidth(200)
        self.progress_bar.hide()
        self.statusbar.addPermanentWidget(self.progress_bar)
        self.statusbar.showMessage("就绪")

    def _connect_signals(self):
        """连接信号"""
        self.config_panel.compare_clicked.connect(self._start_compare)
        self.file_panel_a.file_selected.connect(lambda _: self._clear_result())
        self.file_panel_b.file_selected.connect(lambda _: self._clear_result())

    def _clear_result(self):
        self._comparison_id = None
        self.diff_list_panel.clear()

    def _current_result(self) -> Optional[DiffResult]:
        """从缓存中取当前结果，过期时提示重新比较"""
        if self._comparison_id is None:
            QMessageBox.warning(self, "提示", "请先完成比较")
            return None
        result = self._cache.get(self._comparison_id)
        if result is None:
            QMessageBox.warning(self, "提示", "比较结果已过期，请重新比较")
            self._comparison_id = None
        return result

    def _start_compare(self):
        """开始比较"""
        file_a = self.file_panel_a.file_path
        file_b = self.file_panel_b.file_path
        if not file_a or not file_b:
            QMessageBox.warning(self, "提示", "请先选择两个要比较的 Excel 文件")
            return
        if self._worker is not None and self._worker.isRunning():
            return

        self._cache.evict_expired()

        self._worker = CompareWorker(self._cache, self.settings.max_file_size, self)
        self._worker.set_files(file_a, file_b)
        self._worker.set_config(self.config_panel.get_config())
        self._worker.progress_updated.connect(self._on_progress)
        self._worker.file_loaded.connect(self._on_file_loaded)
        self._worker.compare_finished.connect(self._on_compare_finished)
        self._worker.compare_cancelled.connect(self._on_compare_cancelled)
        self._worker.error_occurred.connect(self._on_error)
        self._worker.finished.connect(lambda: self._set_busy(False))

        self._set_busy(True)
        self._worker.start()

    def _cancel_compare(self):
        if self._worker is not None and self._worker.isRunning():
            self._worker.requestInterruption()
            self.statusbar.showMessage("正在取消...")

    def _set_busy(self, busy: bool):
        self.config_panel.set_busy(busy)
        self.compare_action.setEnabled(not busy)
        self.cancel_action.setEnabled(busy)
        self.progress_bar.setVisible(busy)

    def _on_progress(self, percent: int, message: str):
        self.progress_bar.setValue(percent)
        self.statusbar.showMessage(message)

    def _on_file_loaded(self, side: str, workbook: WorkbookData):
        if side == "a":
            self._workbook_a = workbook
            self.file_panel_a.set_file_info(workbook)
        else:
            self._workbook_b = workbook
            self.file_panel_b.set_file_info(workbook)

    def _on_compare_finished(self, result: DiffResult, comparison_id: str):
        self._comparison_id = comparison_id
        self.stats_panel.set_summary(result.summary)
        self.diff_list_panel.set_result(result)
        self.statusbar.showMessage(f"比较完成，共发现 {result.summary.total} 处差异")

    def _on_compare_cancelled(self):
        self.statusbar.showMessage("比较已取消")

    def _on_error(self, message: str):
        self.statusbar.showMessage("比较失败")
        QMessageBox.critical(self, "错误", message)

    def _export_report(self):
        """导出报告"""
        result = self._current_result()
        if result is None:
            return

        file_path, selected_filter = QFileDialog.getSaveFileName(
            self,
            "导出报告",
            "比较报告.xlsx",
            "Excel 文件 (*.xlsx);;HTML 文件 (*.html)"
        )
        if not file_path:
            return

        try:
            if Path(file_path).suffix.lower() == ".html":
                ReportService.export_html(result, self._workbook_a, self._workbook_b, file_path)
            else:
                ReportService.export_excel(result, self._workbook_a, self._workbook_b, file_path)
            self.statusbar.showMessage(f"报告已导出: {file_path}")
        except OSError as e:
            logger.exception("导出报告失败")
            QMessageBox.critical(self, "错误", f"导出报告失败:\n{e}")

    def _export_highlight(self):
        """导出高亮后的文件 B"""
        result = self._current_result()
        if result is None:
            return

        source = self.file_panel_b.file_path
        default_name = f"{Path(source).stem}_diff{Path(source).suffix}"
        file_path, _ = QFileDialog.getSaveFileName(
            self, "导出高亮文件", default_name, "Excel 文件 (*.xlsx *.xlsm)"
        )
        if not file_path:
            return

        try:
            HighlightService.render(result, source, file_path, self.settings.highlight_colors)
            self.statusbar.showMessage(f"高亮文件已导出: {file_path}")
        except Exception as e:
            logger.exception("导出高亮文件失败")
            QMessageBox.critical(self, "错误", f"导出高亮文件失败:\n{e}")

    def closeEvent(self, event):
        if self._worker is not None and self._worker.isRunning():
            self._worker.requestInterruption()
            self._worker.wait()
        super().closeEvent(event)
