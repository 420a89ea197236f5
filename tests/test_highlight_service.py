import openpyxl
import pytest

from conftest import write_xlsx
from workbook_compare.models.diff_model import CellDiff, DiffResult
from workbook_compare.services.highlight_service import HighlightService
from workbook_compare.utils.exceptions import WorkbookLoadError


@pytest.fixture
def source(tmp_path):
    return write_xlsx(
        tmp_path / "new.xlsx",
        {"Sheet1": [["Head", None, "x"], ["1", "2", "=1+2"]]},
        merges={"Sheet1": ["A1:B1"]},
    )


def _fill(path, sheet, ref):
    wb = openpyxl.load_workbook(path)
    try:
        return wb[sheet][ref].fill.fgColor.rgb
    finally:
        wb.close()


def test_render_paints_by_kind(source, tmp_path):
    result = DiffResult()
    result.add_cell_diff(CellDiff("Sheet1", 1, 3, "y", "x"))
    result.add_cell_diff(CellDiff("Sheet1", 2, 3, old_formula="=2+1", new_formula="=1+2"))
    result.add_cell_diff(CellDiff("Sheet1", 1, 1, "Old", "Head", merged_range="A1:B1"))
    output = tmp_path / "out.xlsx"

    assert HighlightService.render(result, str(source), str(output)) == str(output)

    assert _fill(output, "Sheet1", "C1") == "FFFFC107"
    assert _fill(output, "Sheet1", "C2") == "FF64B5F6"
    assert _fill(output, "Sheet1", "A1") == "FFFF9800"
    assert _fill(output, "Sheet1", "A2") == "00000000"


def test_render_leaves_source_untouched(source, tmp_path):
    result = DiffResult()
    result.add_cell_diff(CellDiff("Sheet1", 1, 3, "y", "x"))

    HighlightService.render(result, str(source), str(tmp_path / "out.xlsx"))

    assert _fill(source, "Sheet1", "C1") == "00000000"


def test_custom_colors(source, tmp_path):
    result = DiffResult()
    result.add_cell_diff(CellDiff("Sheet1", 2, 1, "0", "1"))
    output = tmp_path / "out.xlsx"

    HighlightService.render(result, str(source), str(output), {"value": "FF00FF00"})

    assert _fill(output, "Sheet1", "A2") == "FF00FF00"


def test_missing_sheet_is_skipped(source, tmp_path):
    result = DiffResult()
    result.add_cell_diff(CellDiff("Gone", 1, 1, "a", "b"))
    output = tmp_path / "out.xlsx"

    HighlightService.render(result, str(source), str(output))

    assert output.exists()


def test_xls_source_rejected(tmp_path):
    with pytest.raises(WorkbookLoadError):
        HighlightService.render(DiffResult(), str(tmp_path / "old.xls"), str(tmp_path / "out.xls"))
