"""
Excel 文件比较工具 - 程序入口

功能：比较两个 Excel 工作簿的单元格、公式、合并单元格及工作表差异。
"""
import os
import sys

from PyQt6.QtWidgets import QApplication
from PyQt6.QtCore import Qt

from workbook_compare import bootstrap
from workbook_compare.views.main_window import MainWindow


def main():
    settings = bootstrap.initialize(os.environ.get("WORKBOOK_COMPARE_SETTINGS", "settings.yaml"))

    # 启用高DPI缩放
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Excel Compare")
    app.setApplicationDisplayName("Excel 文件比较工具")

    window = MainWindow(settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
