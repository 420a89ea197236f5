"""
Excel 比较服务

按工作表配对、合并区域匹配、逐单元格遍历三个步骤比较两个工作簿。
服务本身不保存任何状态，可在多个线程中同时调用。
"""
import logging
from dataclasses import dataclass, asdict
from typing import Callable, List, Optional

from workbook_compare.models.excel_model import SheetData, WorkbookData
from workbook_compare.models.diff_model import (
    CellDiff, DiffResult, StructuralDiff, StructuralDiffType
)
from workbook_compare.utils.address import CellRange, parse_address, range_contains
from workbook_compare.utils.exceptions import CompareCancelledError

logger = logging.getLogger(__name__)


@dataclass
class ComparisonConfig:
    """比较选项"""
    compare_values: bool = True         # 比较值
    compare_formulas: bool = True       # 比较公式
    compare_formatting: bool = False    # 比较格式（保留，暂未使用）

    def to_dict(self) -> dict:
        return asdict(self)


class CompareService:
    """比较服务"""

    @classmethod
    def compare(
        cls,
        workbook_a: WorkbookData,
        workbook_b: WorkbookData,
        config: Optional[ComparisonConfig] = None,
        should_stop: Optional[Callable[[], bool]] = None
    ) -> DiffResult:
        """
        比较两个工作簿

        只遍历工作簿 A 的工作表；仅存在于 B 中的工作表不会被报告。

        Args:
            workbook_a: 原工作簿
            workbook_b: 新工作簿
            config: 比较选项
            should_stop: 中断检查函数，每个工作表开始前调用，返回 True 时终止

        Returns:
            DiffResult 对象

        Raises:
            CompareCancelledError: should_stop 返回 True
            AddressParseError: 模型中存在无效的合并区域文本
        """
        if config is None:
            config = ComparisonConfig()

        result = DiffResult(compare_config=config.to_dict())

        for sheet_a in workbook_a.sheets:
            if should_stop is not None and should_stop():
                logger.info("比较在工作表 '%s' 之前被中断", sheet_a.name)
                raise CompareCancelledError(f"比较已取消（工作表 {sheet_a.name}）")

            sheet_b = workbook_b.get_sheet(sheet_a.name)
            if sheet_b is None:
                logger.debug("工作表 '%s' 在 B 中不存在", sheet_a.name)
                result.add_structural_diff(StructuralDiff(
                    kind=StructuralDiffType.SHEET_MISSING,
                    detail=sheet_a.name
                ))
                continue

            before = len(result.cell_diffs)
            for diff in cls._compare_merged_ranges(sheet_a, sheet_b, config):
                result.add_cell_diff(diff)
            for diff in cls._compare_cells(sheet_a, sheet_b, config):
                result.add_cell_diff(diff)
            logger.debug(
                "工作表 '%s' 比较完成，差异 %d 处",
                sheet_a.name, len(result.cell_diffs) - before
            )

        logger.info(
            "比较完成: %s vs %s，单元格差异 %d，结构差异 %d",
            workbook_a.file_name, workbook_b.file_name,
            len(result.cell_diffs), len(result.structural_diffs)
        )
        return result

    @classmethod
    def _compare_merged_ranges(
        cls,
        sheet_a: SheetData,
        sheet_b: SheetData,
        config: ComparisonConfig
    ) -> List[CellDiff]:
        """按区域文本精确匹配合并区域"""
        diffs = []

        for merged_a in sheet_a.merged_ranges:
            row, col = parse_address(merged_a.anchor)
            merged_b = sheet_b.get_merged_range(merged_a.range_ref)

            if merged_b is None:
                # 合并区域在 B 中消失
                diffs.append(CellDiff(
                    sheet=sheet_a.name,
                    row=row,
                    col=col,
                    old_value=merged_a.value,
                    new_value="",
                    merged_range=merged_a.range_ref
                ))
                continue

            if config.compare_values and merged_a.value != merged_b.value:
                diffs.append(CellDiff(
                    sheet=sheet_a.name,
                    row=row,
                    col=col,
                    old_value=merged_a.value,
                    new_value=merged_b.value,
                    merged_range=merged_a.range_ref
                ))

            if config.compare_formulas and merged_a.formula != merged_b.formula:
                diffs.append(CellDiff(
                    sheet=sheet_a.name,
                    row=row,
                    col=col,
                    old_formula=merged_a.formula,
                    new_formula=merged_b.formula,
                    merged_range=merged_a.range_ref
                ))

        return diffs

    @classmethod
    def _compare_cells(
        cls,
        sheet_a: SheetData,
        sheet_b: SheetData,
        config: ComparisonConfig
    ) -> List[CellDiff]:
        """逐单元格比较，跳过任一侧合并区域覆盖的坐标"""
        diffs = []

        merged = [
            CellRange.from_string(m.range_ref)
            for m in sheet_a.merged_ranges + sheet_b.merged_ranges
        ]

        max_rows = max(sheet_a.row_count, sheet_b.row_count)
        max_cols = max(sheet_a.col_count, sheet_b.col_count)

        for row in range(1, max_rows + 1):
            for col in range(1, max_cols + 1):
                if any(range_contains(r, row, col) for r in merged):
                    continue

                cell_a = sheet_a.get_cell(row, col)
                cell_b = sheet_b.get_cell(row, col)

                if config.compare_values and cell_a.value != cell_b.value:
                    diffs.append(CellDiff(
                        sheet=sheet_a.name,
                        row=row,
                        col=col,
                        old_value=cell_a.value,
                        new_value=cell_b.value
                    ))

                if config.compare_formulas and cell_a.formula != cell_b.formula:
                    diffs.append(CellDiff(
                        sheet=sheet_a.name,
                        row=row,
                        col=col,
                        old_formula=cell_a.formula,
                        new_formula=cell_b.formula
                    ))

        return diffs
