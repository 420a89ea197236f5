"""
文件面板

选择待比较的工作簿（拖入或对话框），加载后显示工作表和合并区域概况。
"""
from pathlib import Path

from PyQt6.QtWidgets import (
    QVBoxLayout, QHBoxLayout, QFormLayout, QLabel, QPushButton, QFrame,
    QFileDialog, QListWidget
)
from PyQt6.QtCore import Qt, pyqtSignal

from workbook_compare.models.excel_model import WorkbookData
from workbook_compare.services.excel_service import ExcelService
from workbook_compare.views.styles import card_style

PLACEHOLDER = "拖入 .xlsx / .xlsm / .xls 文件"
FILE_FILTER = "Excel 文件 (*.xlsx *.xlsm *.xls);;所有文件 (*.*)"


class FilePanel(QFrame):
    """单侧工作簿面板"""

    file_selected = pyqtSignal(str)

    def __init__(self, title: str = "文件", parent=None):
        super().__init__(parent)
        self._file_path = ""
        self.setAcceptDrops(True)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(6)

        header = QHBoxLayout()
        title_label = QLabel(title)
        title_label.setObjectName("panelTitle")
        header.addWidget(title_label)
        header.addStretch()

        self.browse_btn = QPushButton("浏览...")
        self.browse_btn.clicked.connect(self._browse)
        header.addWidget(self.browse_btn)

        self.clear_btn = QPushButton("清除")
        self.clear_btn.clicked.connect(self.clear)
        self.clear_btn.setEnabled(False)
        header.addWidget(self.clear_btn)
        layout.addLayout(header)

        self.path_label = QLabel(PLACEHOLDER)
        self.path_label.setObjectName("pathLabel")
        self.path_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.path_label.setMinimumHeight(48)
        self.path_label.setWordWrap(True)
        layout.addWidget(self.path_label)

        form = QFormLayout()
        self.size_value = QLabel("-")
        self.modified_value = QLabel("-")
        self.merged_value = QLabel("-")
        form.addRow("大小:", self.size_value)
        form.addRow("修改时间:", self.modified_value)
        form.addRow("合并区域:", self.merged_value)
        layout.addLayout(form)

        self.sheet_list = QListWidget()
        self.sheet_list.setMaximumHeight(90)
        layout.addWidget(self.sheet_list)

        self.setStyleSheet(card_style("FilePanel", """
            #pathLabel { border: 2px dashed #cccccc; border-radius: 6px; color: #777777; padding: 8px; }
        """))

    @staticmethod
    def _accepts(path: str) -> bool:
        return Path(path).suffix.lower() in ExcelService.SUPPORTED_EXTENSIONS

    def _first_local_file(self, mime) -> str:
        if not mime.hasUrls():
            return ""
        path = mime.urls()[0].toLocalFile()
        return path if self._accepts(path) else ""

    def dragEnterEvent(self, event):
        if self._first_local_file(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event):
        path = self._first_local_file(event.mimeData())
        if path:
            self._set_path(path)

    def _browse(self):
        path, _ = QFileDialog.getOpenFileName(self, "选择 Excel 文件", "", FILE_FILTER)
        if path:
            self._set_path(path)

    def _set_path(self, file_path: str):
        self._file_path = file_path
        self.path_label.setText(Path(file_path).name)
        self.path_label.setToolTip(file_path)
        self.clear_btn.setEnabled(True)
        self._reset_info()
        self.file_selected.emit(file_path)

    def _reset_info(self):
        for label in (self.size_value, self.modified_value, self.merged_value):
            label.setText("-")
        self.sheet_list.clear()

    def clear(self):
        """清除已选文件"""
        self._file_path = ""
        self.path_label.setText(PLACEHOLDER)
        self.path_label.setToolTip("")
        self.clear_btn.setEnabled(False)
        self._reset_info()

    def set_file_info(self, workbook: WorkbookData):
        """显示加载结果：大小、修改时间、合并区域数和工作表列表"""
        metadata = workbook.metadata
        self.size_value.setText(ExcelService.format_file_size(metadata.get('file_size', 0)))
        self.modified_value.setText(metadata.get('modified_time', "-"))
        self.merged_value.setText(str(sum(len(s.merged_ranges) for s in workbook.sheets)))

        self.sheet_list.clear()
        for sheet in workbook.sheets:
            self.sheet_list.addItem(f"{sheet.name}  ({sheet.row_count} x {sheet.col_count})")

    @property
    def file_path(self) -> str:
        return self._file_path
