"""
差异数据模型定义

定义比较结果的数据结构。差异记录在添加时即归类计数，
摘要始终与差异列表保持一致，无需二次统计。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from workbook_compare.utils.address import format_address


class StructuralDiffType(Enum):
    """结构差异类型"""
    SHEET_MISSING = "sheet_missing"     # 工作表在 B 中缺失


class CellDiffKind(Enum):
    """单元格差异归类（与摘要计数项一一对应）"""
    MERGED = "merged"
    VALUE = "value"
    FORMULA = "formula"


@dataclass(frozen=True)
class CellDiff:
    """单个单元格差异（row/col 从 1 开始）"""
    sheet: str
    row: int
    col: int
    old_value: str = ""
    new_value: str = ""
    old_formula: str = ""
    new_formula: str = ""
    merged_range: Optional[str] = None

    @property
    def position(self) -> str:
        """获取单元格位置字符串（如 A1, B2）"""
        return format_address(self.row, self.col)

    @property
    def kind(self) -> Optional[CellDiffKind]:
        """
        按优先级归类：合并区域 > 值 > 公式

        值和公式都为空的记录不属于任何类别，返回 None。
        """
        if self.merged_range:
            return CellDiffKind.MERGED
        if self.old_value or self.new_value:
            return CellDiffKind.VALUE
        if self.old_formula or self.new_formula:
            return CellDiffKind.FORMULA
        return None

    @property
    def type_display(self) -> str:
        """差异类型的中文显示"""
        type_map = {
            CellDiffKind.MERGED: "合并单元格",
            CellDiffKind.VALUE: "值",
            CellDiffKind.FORMULA: "公式",
        }
        return type_map.get(self.kind, "未知")

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "sheet": self.sheet,
            "row": self.row,
            "column": self.col,
            "oldValue": self.old_value,
            "newValue": self.new_value,
            "oldFormula": self.old_formula,
            "newFormula": self.new_formula,
        }
        if self.merged_range:
            data["mergedRange"] = self.merged_range
        return data


@dataclass(frozen=True)
class StructuralDiff:
    """工作表级结构差异"""
    kind: StructuralDiffType
    detail: str

    @property
    def type_display(self) -> str:
        type_map = {
            StructuralDiffType.SHEET_MISSING: "工作表缺失",
        }
        return type_map.get(self.kind, "未知")

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind.value, "detail": self.detail}


@dataclass
class DiffSummary:
    """差异统计摘要"""
    total_cell_changes: int = 0
    total_formula_changes: int = 0
    total_structural_changes: int = 0
    total_merged_cell_changes: int = 0

    @property
    def total(self) -> int:
        return (self.total_cell_changes
                + self.total_formula_changes
                + self.total_structural_changes
                + self.total_merged_cell_changes)

    def add_cell_diff(self, diff: CellDiff):
        """添加一个单元格差异计数"""
        kind = diff.kind
        if kind == CellDiffKind.MERGED:
            self.total_merged_cell_changes += 1
        elif kind == CellDiffKind.VALUE:
            self.total_cell_changes += 1
        elif kind == CellDiffKind.FORMULA:
            self.total_formula_changes += 1

    def add_structural_diff(self, diff: StructuralDiff):
        """添加一个结构差异计数"""
        self.total_structural_changes += 1

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalCellChanges": self.total_cell_changes,
            "totalFormulaChanges": self.total_formula_changes,
            "totalStructuralChanges": self.total_structural_changes,
            "totalMergedCellChanges": self.total_merged_cell_changes,
        }


@dataclass
class DiffResult:
    """完整比较结果"""
    cell_diffs: List[CellDiff] = field(default_factory=list)
    structural_diffs: List[StructuralDiff] = field(default_factory=list)
    summary: DiffSummary = field(default_factory=DiffSummary)

    # 比较配置（用于报告记录）
    compare_config: Dict[str, Any] = field(default_factory=dict)

    def add_cell_diff(self, diff: CellDiff):
        self.cell_diffs.append(diff)
        self.summary.add_cell_diff(diff)

    def add_structural_diff(self, diff: StructuralDiff):
        self.structural_diffs.append(diff)
        self.summary.add_structural_diff(diff)

    @property
    def is_empty(self) -> bool:
        return not self.cell_diffs and not self.structural_diffs

    def diffs_by_sheet(self) -> Dict[str, List[CellDiff]]:
        """按工作表分组的差异，保持出现顺序"""
        grouped: Dict[str, List[CellDiff]] = {}
        for diff in self.cell_diffs:
            grouped.setdefault(diff.sheet, []).append(diff)
        return grouped

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cellDiffs": [d.to_dict() for d in self.cell_diffs],
            "structuralDiffs": [d.to_dict() for d in self.structural_diffs],
            "summary": self.summary.to_dict(),
        }
