"""
统计面板

显示差异统计信息。
"""
from PyQt6.QtWidgets import QVBoxLayout, QLabel, QFrame, QGridLayout

from workbook_compare.models.diff_model import DiffSummary
from workbook_compare.views.styles import card_style


class StatsPanel(QFrame):
    """统计面板"""

    # (标签, 对象名, 摘要字段)
    ROWS = [
        ("值变化:", "valueStat", "total_cell_changes"),
        ("公式变化:", "formulaStat", "total_formula_changes"),
        ("合并单元格:", "mergedStat", "total_merged_cell_changes"),
        ("结构变化:", "structureStat", "total_structural_changes"),
    ]

    def __init__(self, parent=None):
        super().__init__(parent)
        self._value_labels = {}
        self._setup_ui()
        self._apply_styles()

    def _setup_ui(self):
        """设置 UI"""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(8)

        title = QLabel("差异统计")
        title.setObjectName("panelTitle")
        layout.addWidget(title)

        stats_grid = QGridLayout()
        stats_grid.setSpacing(8)

        self.total_label = QLabel("0")
        self.total_label.setObjectName("totalStat")
        stats_grid.addWidget(QLabel("总计:"), 0, 0)
        stats_grid.addWidget(self.total_label, 0, 1)

        for row, (text, object_name, field_name) in enumerate(self.ROWS, 1):
            value_label = QLabel("0")
            value_label.setObjectName(object_name)
            stats_grid.addWidget(QLabel(text), row, 0)
            stats_grid.addWidget(value_label, row, 1)
            self._value_labels[field_name] = value_label

        layout.addLayout(stats_grid)

    def _apply_styles(self):
        self.setStyleSheet(card_style("StatsPanel", """
            #totalStat { font-size: 18px; font-weight: bold; color: #2196f3; }
            #valueStat { font-size: 16px; font-weight: bold; color: #ffc107; }
            #formulaStat { font-size: 16px; font-weight: bold; color: #1e88e5; }
            #mergedStat { font-size: 16px; font-weight: bold; color: #ff9800; }
            #structureStat { font-size: 16px; font-weight: bold; color: #f44336; }
        """))

    def set_summary(self, summary: DiffSummary):
        """设置统计摘要"""
        self.total_label.setText(str(summary.total))
        for field_name, label in self._value_labels.items():
            label.setText(str(getattr(summary, field_name)))
