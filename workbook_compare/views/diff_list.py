"""
差异列表面板

以表格形式展示所有差异，结构差异排在最前。
"""
from typing import List

from PyQt6.QtWidgets import (
    QVBoxLayout, QLabel, QTableWidget, QTableWidgetItem,
    QHeaderView, QFrame, QAbstractItemView
)
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QBrush

from workbook_compare.models.diff_model import CellDiffKind, DiffResult
from workbook_compare.views.styles import card_style


class DiffListPanel(QFrame):
    """差异列表面板"""

    # 差异类型背景色
    TYPE_COLORS = {
        CellDiffKind.VALUE: QColor("#fff9c4"),
        CellDiffKind.FORMULA: QColor("#bbdefb"),
        CellDiffKind.MERGED: QColor("#ffe0b2"),
    }
    STRUCTURE_COLOR = QColor("#ffcdd2")

    HEADERS = ["序号", "工作表", "位置", "类型", "原值", "新值", "原公式", "新公式"]

    def __init__(self, parent=None):
        super().__init__(parent)
        self._setup_ui()
        self._apply_styles()

    def _setup_ui(self):
        """设置 UI"""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(4)

        title = QLabel("差异列表")
        title.setObjectName("panelTitle")
        layout.addWidget(title)

        self.table = QTableWidget()
        self.table.setColumnCount(len(self.HEADERS))
        self.table.setHorizontalHeaderLabels(self.HEADERS)

        header = self.table.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.Fixed)
        header.setSectionResizeMode(1, QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(2, QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(3, QHeaderView.ResizeMode.ResizeToContents)
        for col in range(4, len(self.HEADERS)):
            header.setSectionResizeMode(col, QHeaderView.ResizeMode.Stretch)
        self.table.setColumnWidth(0, 50)

        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.setAlternatingRowColors(True)

        layout.addWidget(self.table)

    def _apply_styles(self):
        self.setStyleSheet(card_style("DiffListPanel", """
            QHeaderView::section { background-color: #f5f5f5; padding: 6px; border: 1px solid #e0e0e0; font-weight: bold; }
        """))

    def _set_row(self, row: int, texts: List[str], color: QColor):
        for col, text in enumerate(texts):
            item = QTableWidgetItem(text[:100])  # 截断过长内容
            if col in (0, 2, 3):
                item.setTextAlignment(Qt.AlignmentFlag.AlignCenter)
            if col == 3:
                item.setBackground(QBrush(color))
            self.table.setItem(row, col, item)

    def set_result(self, result: DiffResult):
        """设置差异列表"""
        total = len(result.structural_diffs) + len(result.cell_diffs)
        self.table.setRowCount(total)

        row = 0
        for diff in result.structural_diffs:
            self._set_row(row, [
                str(row + 1), diff.detail, "", diff.type_display, "", "", "", ""
            ], self.STRUCTURE_COLOR)
            row += 1

        for diff in result.cell_diffs:
            position = diff.merged_range or diff.position
            self._set_row(row, [
                str(row + 1), diff.sheet, position, diff.type_display,
                diff.old_value, diff.new_value, diff.old_formula, diff.new_formula
            ], self.TYPE_COLORS.get(diff.kind, QColor("#ffffff")))
            row += 1

    def clear(self):
        self.table.setRowCount(0)
