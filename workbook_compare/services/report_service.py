"""
报告生成服务

支持导出 Excel 和 HTML 格式的比较报告。
"""
import html
import logging
from datetime import datetime
from typing import List

import openpyxl
from openpyxl.styles import Font, PatternFill

from workbook_compare.models.excel_model import WorkbookData
from workbook_compare.models.diff_model import (
    CellDiff, CellDiffKind, DiffResult, StructuralDiff
)

logger = logging.getLogger(__name__)


class ReportService:
    """报告生成服务"""

    # 差异类型对应的颜色
    DIFF_COLORS = {
        CellDiffKind.VALUE: "FFFFC107",    # 黄色
        CellDiffKind.FORMULA: "FF64B5F6",  # 蓝色
        CellDiffKind.MERGED: "FFFF9800",   # 橙色
    }

    # 单元格内容截断长度
    MAX_TEXT = 1000

    @classmethod
    def export_excel(
        cls,
        result: DiffResult,
        workbook_a: WorkbookData,
        workbook_b: WorkbookData,
        output_path: str
    ):
        """
        导出 Excel 格式报告

        Args:
            result: 比较结果
            workbook_a: 工作簿 A
            workbook_b: 工作簿 B
            output_path: 输出路径
        """
        wb = openpyxl.Workbook()

        # 1. 摘要页
        ws_summary = wb.active
        ws_summary.title = "比较摘要"
        cls._write_summary_sheet(ws_summary, result, workbook_a, workbook_b)

        # 2. 差异详情页
        ws_details = wb.create_sheet("差异详情")
        cls._write_details_sheet(ws_details, result.cell_diffs)

        # 3. 结构差异页
        ws_structure = wb.create_sheet("结构差异")
        cls._write_structural_sheet(ws_structure, result.structural_diffs)

        wb.save(output_path)
        logger.info("已导出 Excel 报告 %s", output_path)

    @classmethod
    def summary_rows(cls, result: DiffResult) -> List[tuple]:
        """摘要表格行（类型, 数量）"""
        summary = result.summary
        return [
            ("总计", summary.total),
            ("值变化", summary.total_cell_changes),
            ("公式变化", summary.total_formula_changes),
            ("合并单元格变化", summary.total_merged_cell_changes),
            ("结构变化", summary.total_structural_changes),
        ]

    @classmethod
    def config_rows(cls, result: DiffResult) -> List[tuple]:
        config = result.compare_config or {}
        labels = [
            ("compare_values", "比较值"),
            ("compare_formulas", "比较公式"),
            ("compare_formatting", "比较格式"),
        ]
        return [
            (label, "是" if config.get(key) else "否")
            for key, label in labels if key in config
        ]

    @classmethod
    def _write_summary_sheet(
        cls,
        ws,
        result: DiffResult,
        workbook_a: WorkbookData,
        workbook_b: WorkbookData
    ):
        """写入摘要页"""
        title_font = Font(size=16, bold=True)
        header_font = Font(bold=True)
        header_fill = PatternFill("solid", fgColor="E0E0E0")

        ws['A1'] = "Excel 文件比较报告"
        ws['A1'].font = title_font
        ws.merge_cells('A1:D1')

        ws['A3'] = "比较时间"
        ws['B3'] = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        ws['A4'] = "文件 A"
        ws['B4'] = workbook_a.file_name
        ws['A5'] = "文件 B"
        ws['B5'] = workbook_b.file_name

        ws['A7'] = "差异统计"
        ws['A7'].font = header_font
        ws.merge_cells('A7:D7')

        for col, header in enumerate(["类型", "数量"], 1):
            cell = ws.cell(row=8, column=col)
            cell.value = header
            cell.font = header_font
            cell.fill = header_fill

        row = 9
        for type_name, count in cls.summary_rows(result):
            ws.cell(row=row, column=1).value = type_name
            ws.cell(row=row, column=2).value = count
            row += 1

        config_rows = cls.config_rows(result)
        if config_rows:
            row += 1
            ws.cell(row=row, column=1).value = "比较配置"
            ws.cell(row=row, column=1).font = header_font
            for label, flag in config_rows:
                row += 1
                ws.cell(row=row, column=1).value = label
                ws.cell(row=row, column=2).value = flag

        ws.column_dimensions['A'].width = 18
        ws.column_dimensions['B'].width = 40

    @classmethod
    def _write_details_sheet(cls, ws, diffs: List[CellDiff]):
        """写入差异详情页"""
        header_font = Font(bold=True)
        header_fill = PatternFill("solid", fgColor="E0E0E0")

        headers = ["序号", "工作表", "位置", "类型", "原值", "新值", "原公式", "新公式", "合并区域"]
        for col, header in enumerate(headers, 1):
            cell = ws.cell(row=1, column=col)
            cell.value = header
            cell.font = header_font
            cell.fill = header_fill

        for row, diff in enumerate(diffs, 2):
            ws.cell(row=row, column=1).value = row - 1
            ws.cell(row=row, column=2).value = diff.sheet
            ws.cell(row=row, column=3).value = diff.position

            type_cell = ws.cell(row=row, column=4)
            type_cell.value = diff.type_display
            type_cell.fill = PatternFill("solid", fgColor=cls.DIFF_COLORS.get(diff.kind, "FFFFFFFF"))

            # 以文本写入，避免公式被重新计算
            for col, text in enumerate(
                (diff.old_value, diff.new_value, diff.old_formula, diff.new_formula), 5
            ):
                cell = ws.cell(row=row, column=col)
                cell.value = text[:cls.MAX_TEXT]
                cell.data_type = 's'
            ws.cell(row=row, column=9).value = diff.merged_range or ""

        for letter, width in zip("ABCDEFGHI", (8, 20, 10, 14, 30, 30, 30, 30, 12)):
            ws.column_dimensions[letter].width = width

    @classmethod
    def _write_structural_sheet(cls, ws, diffs: List[StructuralDiff]):
        """写入结构差异页"""
        header_font = Font(bold=True)
        for col, header in enumerate(["序号", "类型", "说明"], 1):
            ws.cell(row=1, column=col).value = header
            ws.cell(row=1, column=col).font = header_font

        for row, diff in enumerate(diffs, 2):
            ws.cell(row=row, column=1).value = row - 1
            ws.cell(row=row, column=2).value = diff.type_display
            ws.cell(row=row, column=3).value = diff.detail

    @classmethod
    def export_html(
        cls,
        result: DiffResult,
        workbook_a: WorkbookData,
        workbook_b: WorkbookData,
        output_path: str
    ):
        """导出 HTML 格式报告"""
        html_content = cls.generate_html(result, workbook_a, workbook_b)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(html_content)
        logger.info("已导出 HTML 报告 %s", output_path)

    @classmethod
    def generate_html(
        cls,
        result: DiffResult,
        workbook_a: WorkbookData,
        workbook_b: WorkbookData
    ) -> str:
        """生成 HTML 内容"""
        esc = html.escape

        diff_rows = "".join(
            f"""
            <tr class="{diff.kind.value if diff.kind else ''}">
                <td>{i}</td>
                <td>{esc(diff.sheet)}</td>
                <td>{diff.position}</td>
                <td>{diff.type_display}</td>
                <td>{esc(diff.old_value[:200])}</td>
                <td>{esc(diff.new_value[:200])}</td>
                <td>{esc(diff.old_formula[:200])}</td>
                <td>{esc(diff.new_formula[:200])}</td>
                <td>{esc(diff.merged_range or '')}</td>
            </tr>"""
            for i, diff in enumerate(result.cell_diffs, 1)
        )

        structural_rows = "".join(
            f"""
            <tr><td>{diff.type_display}</td><td>{esc(diff.detail)}</td></tr>"""
            for diff in result.structural_diffs
        )

        stat_items = "".join(
            f"""
                <div class="stat-item">
                    <div class="stat-value">{count}</div>
                    <div class="stat-label">{label}</div>
                </div>"""
            for label, count in cls.summary_rows(result)
        )

        config_items = "".join(
            f"<li>{label}: {flag}</li>" for label, flag in cls.config_rows(result)
        )

        return f"""<!DOCTYPE html>
<html lang="zh-CN">
<head>
    <meta charset="UTF-8">
    <title>Excel 比较报告</title>
    <style>
        body {{ font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; background: #f5f5f5; padding: 20px; }}
        .card {{ background: white; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); margin-bottom: 20px; padding: 20px; }}
        .stats {{ display: flex; gap: 15px; flex-wrap: wrap; }}
        .stat-item {{ padding: 15px 20px; border-radius: 6px; text-align: center; min-width: 100px; background: #e3f2fd; }}
        .stat-value {{ font-size: 24px; font-weight: bold; }}
        .stat-label {{ font-size: 12px; color: #666; }}
        table {{ width: 100%; border-collapse: collapse; }}
        th, td {{ padding: 8px; text-align: left; border-bottom: 1px solid #eee; }}
        tr.value td:nth-child(4) {{ background: #fff9c4; }}
        tr.formula td:nth-child(4) {{ background: #bbdefb; }}
        tr.merged td:nth-child(4) {{ background: #ffe0b2; }}
    </style>
</head>
<body>
    <div class="card">
        <h1>Excel 文件比较报告</h1>
        <p>比较时间: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}</p>
        <p>文件 A: {esc(workbook_a.file_name)}</p>
        <p>文件 B: {esc(workbook_b.file_name)}</p>
        <ul>{config_items}</ul>
    </div>
    <div class="card">
        <h2>差异统计</h2>
        <div class="stats">{stat_items}
        </div>
    </div>
    <div class="card">
        <h2>结构差异</h2>
        <table>
            <thead><tr><th>类型</th><th>说明</th></tr></thead>
            <tbody>{structural_rows}
            </tbody>
        </table>
    </div>
    <div class="card">
        <h2>差异详情</h2>
        <table>
            <thead>
                <tr>
                    <th>序号</th><th>工作表</th><th>位置</th><th>类型</th>
                    <th>原值</th><th>新值</th><th>原公式</th><th>新公式</th><th>合并区域</th>
                </tr>
            </thead>
            <tbody>{diff_rows}
            </tbody>
        </table>
    </div>
</body>
</html>"""
