"""
Excel 文件解析服务

支持 .xlsx/.xlsm 和 .xls 格式的文件读取，解析结果为只读的 WorkbookData。
"""
import io
import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, BinaryIO, List, Optional, Tuple

import openpyxl
from openpyxl.worksheet.worksheet import Worksheet

from workbook_compare.models.excel_model import (
    CellData, MergedRange, SheetData, WorkbookData
)
from workbook_compare.utils.address import format_address, from_index
from workbook_compare.utils.exceptions import WorkbookLoadError

logger = logging.getLogger(__name__)


class ExcelService:
    """Excel 文件解析服务"""

    # 支持的文件扩展名
    XLSX_EXTENSIONS = {'.xlsx', '.xlsm'}
    XLS_EXTENSIONS = {'.xls'}
    SUPPORTED_EXTENSIONS = XLSX_EXTENSIONS | XLS_EXTENSIONS
    # 默认最大文件大小 (100MB)
    MAX_FILE_SIZE = 100 * 1024 * 1024

    @classmethod
    def load_file(cls, file_path: str, max_file_size: Optional[int] = None) -> WorkbookData:
        """
        加载 Excel 文件

        Args:
            file_path: 文件路径
            max_file_size: 文件大小上限（字节），为空时使用 MAX_FILE_SIZE

        Returns:
            WorkbookData 对象

        Raises:
            FileNotFoundError: 文件不存在
            WorkbookLoadError: 文件格式不支持、过大或无法解析
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"文件不存在: {file_path}")

        stat = path.stat()
        with open(path, 'rb') as f:
            workbook = cls.load_stream(f, path.name, max_file_size=max_file_size)

        metadata = dict(workbook.metadata)
        metadata['file_path'] = str(path)
        metadata['modified_time'] = datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M:%S")
        return WorkbookData(name=workbook.name, sheets=workbook.sheets, metadata=metadata)

    @classmethod
    def load_stream(
        cls,
        stream: BinaryIO,
        file_name: str,
        max_file_size: Optional[int] = None
    ) -> WorkbookData:
        """
        从字节流加载工作簿

        Args:
            stream: 二进制流
            file_name: 文件名，用于判断格式
            max_file_size: 文件大小上限（字节）
        """
        ext = Path(file_name).suffix.lower()
        if ext not in cls.SUPPORTED_EXTENSIONS:
            raise WorkbookLoadError(f"不支持的文件格式: {ext}，仅支持 .xlsx、.xlsm 和 .xls")

        content = stream.read()
        limit = max_file_size or cls.MAX_FILE_SIZE
        if len(content) > limit:
            raise WorkbookLoadError(
                f"文件大小超过限制 (最大 {cls.format_file_size(limit)})"
            )

        if ext in cls.XLSX_EXTENSIONS:
            sheets = cls._load_xlsx(content)
        else:
            sheets = cls._load_xls(content)

        logger.info("已加载 %s，共 %d 个工作表", file_name, len(sheets))
        return WorkbookData(
            name=Path(file_name).stem,
            sheets=tuple(sheets),
            metadata={
                'file_name': file_name,
                'file_size': len(content),
                'sheet_count': len(sheets),
            }
        )

    @classmethod
    def _load_xlsx(cls, content: bytes) -> List[SheetData]:
        """加载 .xlsx 文件：公式和缓存值需分两次读取"""
        try:
            wb_formula = openpyxl.load_workbook(io.BytesIO(content), data_only=False)
            wb_value = openpyxl.load_workbook(io.BytesIO(content), data_only=True)
        except Exception as e:
            raise WorkbookLoadError(f"无法读取 Excel 文件: {e}") from e

        try:
            return [
                cls._parse_xlsx_sheet(wb_formula[name], wb_value[name])
                for name in wb_formula.sheetnames
            ]
        finally:
            wb_formula.close()
            wb_value.close()

    @classmethod
    def _parse_xlsx_sheet(cls, ws_formula: Worksheet, ws_value: Worksheet) -> SheetData:
        """解析单个 openpyxl 工作表"""
        # 空表的 max_row/max_column 为 1，但没有任何单元格
        if ws_formula.max_row == 1 and ws_formula.max_column == 1 and ws_formula['A1'].value is None:
            max_row, max_col = 0, 0
        else:
            max_row = ws_formula.max_row or 0
            max_col = ws_formula.max_column or 0

        cells = []
        for row_idx in range(max_row):
            for col_idx in range(max_col):
                row, col = from_index(row_idx, col_idx)
                value, formula = cls._parse_cell(
                    ws_formula.cell(row=row, column=col).value,
                    ws_value.cell(row=row, column=col).value
                )
                cells.append(CellData(row=row, col=col, value=value, formula=formula))

        merged_ranges = []
        for cell_range in sorted(ws_formula.merged_cells.ranges, key=lambda r: (r.min_row, r.min_col)):
            value, formula = cls._parse_cell(
                ws_formula.cell(row=cell_range.min_row, column=cell_range.min_col).value,
                ws_value.cell(row=cell_range.min_row, column=cell_range.min_col).value
            )
            merged_ranges.append(MergedRange.from_string(cell_range.coord, value, formula))

        return SheetData(
            name=ws_formula.title,
            row_count=max_row,
            col_count=max_col,
            cells=tuple(cells),
            merged_ranges=tuple(merged_ranges)
        )

    @classmethod
    def _parse_cell(cls, raw: Any, cached: Any) -> Tuple[str, str]:
        """
        解析 openpyxl 单元格

        Returns:
            (值文本, 公式文本)。公式单元格的值取缓存结果。
        """
        if isinstance(raw, str) and raw.startswith('='):
            return cls.to_text(cached), raw
        # 数组公式等对象
        text = getattr(raw, 'text', None)
        if isinstance(text, str) and text.startswith('='):
            return cls.to_text(cached), text
        return cls.to_text(raw), ""

    @classmethod
    def _load_xls(cls, content: bytes) -> List[SheetData]:
        """加载 .xls 文件（使用 xlrd，不包含公式）"""
        import xlrd

        try:
            wb = xlrd.open_workbook(file_contents=content, formatting_info=True)
        except Exception as e:
            raise WorkbookLoadError(f"无法读取 Excel 文件: {e}") from e

        sheets = []
        for sheet_idx in range(wb.nsheets):
            ws = wb.sheet_by_index(sheet_idx)
            cells = []
            for row_idx in range(ws.nrows):
                for col_idx in range(ws.ncols):
                    row, col = from_index(row_idx, col_idx)
                    value = cls._parse_xls_cell(ws.cell(row_idx, col_idx), wb)
                    cells.append(CellData(row=row, col=col, value=value))

            merged_ranges = []
            # xlrd 的合并区域为半开区间 (rlo, rhi, clo, chi)
            for rlo, rhi, clo, chi in sorted(ws.merged_cells):
                value = cls._parse_xls_cell(ws.cell(rlo, clo), wb)
                start_row, start_col = from_index(rlo, clo)
                end_row, end_col = from_index(rhi - 1, chi - 1)
                merged_ranges.append(MergedRange.from_string(
                    f"{format_address(start_row, start_col)}:{format_address(end_row, end_col)}",
                    value
                ))

            sheets.append(SheetData(
                name=ws.name,
                row_count=ws.nrows,
                col_count=ws.ncols,
                cells=tuple(cells),
                merged_ranges=tuple(merged_ranges)
            ))

        return sheets

    @classmethod
    def _parse_xls_cell(cls, cell, workbook) -> str:
        """解析 xlrd 单元格"""
        import xlrd

        if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
            return ""
        if cell.ctype == xlrd.XL_CELL_DATE:
            return cls.to_text(xlrd.xldate_as_datetime(cell.value, workbook.datemode))
        if cell.ctype == xlrd.XL_CELL_BOOLEAN:
            return cls.to_text(bool(cell.value))
        if cell.ctype == xlrd.XL_CELL_ERROR:
            return xlrd.error_text_from_code.get(cell.value, "#ERR")
        return cls.to_text(cell.value)

    @staticmethod
    def to_text(value: Any) -> str:
        """将单元格值统一转换为文本"""
        if value is None:
            return ""
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (datetime, date, time)):
            return value.isoformat()
        return str(value)

    @classmethod
    def format_file_size(cls, size_bytes: int) -> str:
        """格式化文件大小显示"""
        if size_bytes < 1024:
            return f"{size_bytes} B"
        elif size_bytes < 1024 * 1024:
            return f"{size_bytes / 1024:.1f} KB"
        else:
            return f"{size_bytes / (1024 * 1024):.1f} MB"
