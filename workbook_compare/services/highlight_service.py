"""
差异高亮服务

将比较结果以背景色标注到新工作簿（文件 B）的副本中。
"""
import logging
import shutil
from pathlib import Path
from typing import Dict, Optional

import openpyxl
from openpyxl.styles import PatternFill

from workbook_compare.models.diff_model import CellDiff, CellDiffKind, DiffResult
from workbook_compare.utils.address import CellRange
from workbook_compare.utils.configs import DEFAULT_HIGHLIGHT_COLORS
from workbook_compare.utils.exceptions import WorkbookLoadError

logger = logging.getLogger(__name__)


class HighlightService:
    """差异高亮服务"""

    SUPPORTED_EXTENSIONS = {'.xlsx', '.xlsm'}

    @classmethod
    def render(
        cls,
        result: DiffResult,
        source_path: str,
        output_path: str,
        colors: Optional[Dict[str, str]] = None
    ) -> str:
        """
        生成高亮工作簿

        Args:
            result: 比较结果
            source_path: 新工作簿路径（文件 B）
            output_path: 输出路径
            colors: 各差异类别的 ARGB 颜色，缺省使用默认配色

        Returns:
            输出文件路径

        Raises:
            WorkbookLoadError: 源文件格式不支持或无法读取
        """
        ext = Path(source_path).suffix.lower()
        if ext not in cls.SUPPORTED_EXTENSIONS:
            raise WorkbookLoadError(f"高亮输出仅支持 .xlsx/.xlsm，当前为 {ext}")

        palette = dict(DEFAULT_HIGHLIGHT_COLORS)
        if colors:
            palette.update(colors)
        fills = {
            CellDiffKind.VALUE: PatternFill("solid", fgColor=palette["value"]),
            CellDiffKind.FORMULA: PatternFill("solid", fgColor=palette["formula"]),
            CellDiffKind.MERGED: PatternFill("solid", fgColor=palette["merged"]),
        }

        if Path(source_path).resolve() != Path(output_path).resolve():
            shutil.copyfile(source_path, output_path)

        try:
            wb = openpyxl.load_workbook(output_path, keep_vba=(ext == '.xlsm'))
        except Exception as e:
            raise WorkbookLoadError(f"无法读取 Excel 文件: {e}") from e

        painted = 0
        for diff in result.cell_diffs:
            if diff.sheet not in wb.sheetnames:
                continue
            fill = fills.get(diff.kind)
            if fill is None:
                continue
            painted += cls._paint(wb[diff.sheet], diff, fill)

        wb.save(output_path)
        wb.close()
        logger.info("已生成高亮文件 %s，标注 %d 个单元格", output_path, painted)
        return output_path

    @classmethod
    def _paint(cls, ws, diff: CellDiff, fill: PatternFill) -> int:
        """为单个差异着色，合并区域整体着色"""
        if diff.merged_range:
            cell_range = CellRange.from_string(diff.merged_range)
            count = 0
            for row in range(cell_range.start_row, cell_range.end_row + 1):
                for col in range(cell_range.start_col, cell_range.end_col + 1):
                    ws.cell(row=row, column=col).fill = fill
                    count += 1
            return count

        ws.cell(row=diff.row, column=diff.col).fill = fill
        return 1
