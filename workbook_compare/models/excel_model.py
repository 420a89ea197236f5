"""
Excel 数据模型定义

定义工作簿解析后的统一数据结构。模型在加载时一次性构建，之后只读，
可以在多个比较任务之间安全共享。
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from workbook_compare.utils.address import CellRange, format_address, to_index


@dataclass(frozen=True)
class CellData:
    """单元格数据（row/col 从 1 开始）"""
    row: int = 0
    col: int = 0
    value: str = ""
    formula: str = ""

    def is_empty(self) -> bool:
        """判断是否为空单元格"""
        return self.value == "" and self.formula == ""


# 越界访问时返回的空单元格
EMPTY_CELL = CellData()


@dataclass(frozen=True)
class MergedRange:
    """合并单元格区域，整个区域共享锚点单元格的值和公式"""
    anchor: str
    end: str
    value: str = ""
    formula: str = ""

    @classmethod
    def from_string(cls, range_ref: str, value: str = "", formula: str = "") -> 'MergedRange':
        cell_range = CellRange.from_string(range_ref)
        return cls(
            anchor=format_address(cell_range.start_row, cell_range.start_col),
            end=format_address(cell_range.end_row, cell_range.end_col),
            value=value,
            formula=formula,
        )

    @property
    def range_ref(self) -> str:
        """区域文本，如 "A1:B2" """
        return f"{self.anchor}:{self.end}"

    @property
    def cell_range(self) -> CellRange:
        return CellRange.from_string(self.range_ref)

    def contains(self, row: int, col: int) -> bool:
        return self.cell_range.contains(row, col)


@dataclass(frozen=True)
class SheetData:
    """工作表数据：row_count x col_count 的稠密网格加合并区域列表"""
    name: str
    row_count: int = 0
    col_count: int = 0
    cells: Tuple[CellData, ...] = ()
    merged_ranges: Tuple[MergedRange, ...] = ()

    def __post_init__(self):
        expected = self.row_count * self.col_count
        if len(self.cells) != expected:
            raise ValueError(
                f"工作表 '{self.name}' 单元格数量 {len(self.cells)} "
                f"与尺寸 {self.row_count}x{self.col_count} 不符"
            )
        object.__setattr__(self, 'cells', tuple(self.cells))
        object.__setattr__(self, 'merged_ranges', tuple(self.merged_ranges))

    @classmethod
    def from_rows(
        cls,
        name: str,
        values: Sequence[Sequence[Any]],
        formulas: Optional[Sequence[Sequence[Any]]] = None,
        merged_ranges: Sequence[MergedRange] = (),
    ) -> 'SheetData':
        """
        由二维列表构建工作表

        Args:
            name: 工作表名称
            values: 按行排列的值，行长度不齐时按最长行补空
            formulas: 与 values 同形的公式列表，可省略
            merged_ranges: 合并区域
        """
        formulas = formulas or []
        row_count = max(len(values), len(formulas))
        col_count = max(
            max((len(r) for r in values), default=0),
            max((len(r) for r in formulas), default=0),
        )

        def _text(grid, r, c) -> str:
            if r < len(grid) and c < len(grid[r]) and grid[r][c] is not None:
                return str(grid[r][c])
            return ""

        cells = []
        for r in range(row_count):
            for c in range(col_count):
                cells.append(CellData(
                    row=r + 1,
                    col=c + 1,
                    value=_text(values, r, c),
                    formula=_text(formulas, r, c),
                ))

        return cls(
            name=name,
            row_count=row_count,
            col_count=col_count,
            cells=tuple(cells),
            merged_ranges=tuple(merged_ranges),
        )

    def get_cell(self, row: int, col: int) -> CellData:
        """获取指定位置（1-based）的单元格，越界时返回 EMPTY_CELL"""
        row_idx, col_idx = to_index(row, col)
        if 0 <= row_idx < self.row_count and 0 <= col_idx < self.col_count:
            return self.cells[row_idx * self.col_count + col_idx]
        return EMPTY_CELL

    def get_merged_range(self, range_ref: str) -> Optional[MergedRange]:
        """按区域文本精确查找合并区域"""
        for merged in self.merged_ranges:
            if merged.range_ref == range_ref:
                return merged
        return None

    def is_merged(self, row: int, col: int) -> bool:
        return any(m.contains(row, col) for m in self.merged_ranges)



@dataclass(frozen=True)
class WorkbookData:
    """工作簿数据"""
    name: str
    sheets: Tuple[SheetData, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        names = [s.name for s in self.sheets]
        if len(names) != len(set(names)):
            raise ValueError(f"工作簿 '{self.name}' 存在重名工作表")
        object.__setattr__(self, 'sheets', tuple(self.sheets))
        object.__setattr__(self, 'metadata', MappingProxyType(dict(self.metadata)))

    @property
    def sheet_names(self) -> List[str]:
        return [s.name for s in self.sheets]

    @property
    def file_name(self) -> str:
        return self.metadata.get('file_name', self.name)

    def get_sheet(self, name: str) -> Optional[SheetData]:
        """根据名称获取工作表（精确匹配）"""
        for sheet in self.sheets:
            if sheet.name == name:
                return sheet
        return None
