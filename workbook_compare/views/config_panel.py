"""
比较配置面板

选择比较的维度。
"""
from PyQt6.QtWidgets import (
    QVBoxLayout, QLabel, QPushButton, QCheckBox, QFrame, QGroupBox
)
from PyQt6.QtCore import pyqtSignal

from workbook_compare.services.compare_service import ComparisonConfig
from workbook_compare.views.styles import card_style


class ConfigPanel(QFrame):
    """配置面板"""

    compare_clicked = pyqtSignal()

    def __init__(self, config: ComparisonConfig = None, parent=None):
        super().__init__(parent)
        self._setup_ui()
        self._apply_styles()
        self.set_config(config or ComparisonConfig())

    def _setup_ui(self):
        """设置 UI"""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)
        layout.setSpacing(10)

        title = QLabel("比较配置")
        title.setObjectName("panelTitle")
        layout.addWidget(title)

        scope_group = QGroupBox("比较内容")
        scope_layout = QVBoxLayout(scope_group)

        self.values_check = QCheckBox("单元格值")
        scope_layout.addWidget(self.values_check)

        self.formulas_check = QCheckBox("公式")
        scope_layout.addWidget(self.formulas_check)

        self.formatting_check = QCheckBox("格式（暂不支持）")
        self.formatting_check.setEnabled(False)
        scope_layout.addWidget(self.formatting_check)

        layout.addWidget(scope_group)

        self.compare_btn = QPushButton("开始比较")
        self.compare_btn.setObjectName("compareBtn")
        self.compare_btn.clicked.connect(self.compare_clicked.emit)
        layout.addWidget(self.compare_btn)

        layout.addStretch()

    def _apply_styles(self):
        self.setStyleSheet(card_style("ConfigPanel", """
            #compareBtn { background-color: #4caf50; color: white; border: none; border-radius: 4px; padding: 10px; font-weight: bold; }
            #compareBtn:disabled { background-color: #bdbdbd; }
        """))

    def set_config(self, config: ComparisonConfig):
        self.values_check.setChecked(config.compare_values)
        self.formulas_check.setChecked(config.compare_formulas)
        self.formatting_check.setChecked(config.compare_formatting)

    def get_config(self) -> ComparisonConfig:
        """获取比较选项"""
        return ComparisonConfig(
            compare_values=self.values_check.isChecked(),
            compare_formulas=self.formulas_check.isChecked(),
            compare_formatting=self.formatting_check.isChecked(),
        )

    def set_busy(self, busy: bool):
        self.compare_btn.setEnabled(not busy)
