import openpyxl

from conftest import make_sheet, make_workbook
from workbook_compare.services.compare_service import CompareService
from workbook_compare.services.report_service import ReportService


def _compare(full_config):
    wb_a = make_workbook("old", make_sheet("Sheet1", [["1", "<b>x</b>"]], [["", ""]]),
                         make_sheet("Removed", [["a"]]))
    wb_b = make_workbook("new", make_sheet("Sheet1", [["2", "plain"]]))
    return wb_a, wb_b, CompareService.compare(wb_a, wb_b, full_config)


def test_summary_rows(full_config):
    _, _, result = _compare(full_config)

    assert ReportService.summary_rows(result) == [
        ("总计", 3),
        ("值变化", 2),
        ("公式变化", 0),
        ("合并单元格变化", 0),
        ("结构变化", 1),
    ]


def test_config_rows(full_config):
    _, _, result = _compare(full_config)

    assert ReportService.config_rows(result) == [
        ("比较值", "是"),
        ("比较公式", "是"),
        ("比较格式", "否"),
    ]


def test_export_excel(full_config, tmp_path):
    wb_a, wb_b, result = _compare(full_config)
    output = tmp_path / "report.xlsx"

    ReportService.export_excel(result, wb_a, wb_b, str(output))

    wb = openpyxl.load_workbook(output)
    assert wb.sheetnames == ["比较摘要", "差异详情", "结构差异"]
    assert wb["比较摘要"]["B4"].value == "old.xlsx"
    assert wb["比较摘要"]["B5"].value == "new.xlsx"

    details = wb["差异详情"]
    assert details.max_row == 3
    assert [details.cell(row=2, column=c).value for c in (2, 3, 4, 5, 6)] == [
        "Sheet1", "A1", "值", "1", "2"
    ]

    structure = wb["结构差异"]
    assert structure["B2"].value == "工作表缺失"
    assert structure["C2"].value == "Removed"
    wb.close()


def test_generate_html_escapes_cell_text(full_config):
    wb_a, wb_b, result = _compare(full_config)

    content = ReportService.generate_html(result, wb_a, wb_b)

    assert "&lt;b&gt;x&lt;/b&gt;" in content
    assert "<b>x</b>" not in content
    assert "Removed" in content
    assert "old.xlsx" in content


def test_export_html(full_config, tmp_path):
    wb_a, wb_b, result = _compare(full_config)
    output = tmp_path / "report.html"

    ReportService.export_html(result, wb_a, wb_b, str(output))

    assert output.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")
