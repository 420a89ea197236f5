"""测试公用工具和夹具"""
from pathlib import Path
from typing import Dict, List, Sequence

import openpyxl
import pytest

from workbook_compare.models.excel_model import MergedRange, SheetData, WorkbookData
from workbook_compare.services.compare_service import ComparisonConfig


def make_workbook(name: str, *sheets: SheetData) -> WorkbookData:
    """由若干工作表构建内存工作簿"""
    return WorkbookData(name=name, sheets=sheets, metadata={'file_name': f"{name}.xlsx"})


def make_sheet(name: str, values, formulas=None, merged: Sequence[MergedRange] = ()) -> SheetData:
    return SheetData.from_rows(name, values, formulas, merged)


def write_xlsx(path: Path, sheets: Dict[str, List[list]], merges: Dict[str, List[str]] = None) -> Path:
    """
    用 openpyxl 生成简单的 xlsx

    sheets = {"SheetName": [[row1], [row2], ...]}
    merges = {"SheetName": ["A1:B2", ...]}
    """
    merges = merges or {}
    wb = openpyxl.Workbook()
    default = wb.active
    first = True
    for name, rows in sheets.items():
        ws = default if first else wb.create_sheet(title=name)
        ws.title = name
        for r in rows:
            ws.append(r)
        for ref in merges.get(name, []):
            ws.merge_cells(ref)
        first = False
    wb.save(path)
    return path


@pytest.fixture
def values_only() -> ComparisonConfig:
    return ComparisonConfig(compare_values=True, compare_formulas=False)


@pytest.fixture
def full_config() -> ComparisonConfig:
    return ComparisonConfig(compare_values=True, compare_formulas=True)


@pytest.fixture
def sample_workbook() -> WorkbookData:
    """两张表，含公式和合并区域"""
    summary = make_sheet(
        "Summary",
        [["Title", "", "Total"], ["", "", "30"], ["a", "10", "20"]],
        [["", "", ""], ["", "", "=SUM(B3:C3)"], ["", "", ""]],
        [MergedRange.from_string("A1:B2", "Title")],
    )
    data = make_sheet("Data", [["id", "name"], ["1", "Alice"], ["2", "Bob"]])
    return make_workbook("sample", summary, data)
