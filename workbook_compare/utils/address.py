"""
单元格地址工具

在地址文本（A1, AA27）与行列坐标之间转换，并解析区域文本（A1:B2）。
外部坐标一律从 1 开始，内部存储下标从 0 开始，两者之间只通过
to_index / from_index 转换。
"""
import re
from dataclasses import dataclass
from typing import Tuple

from workbook_compare.utils.exceptions import AddressParseError

_ADDRESS_RE = re.compile(r'([A-Z]+)([0-9]+)')


def to_index(row: int, col: int) -> Tuple[int, int]:
    """1-based 行列 -> 0-based 下标"""
    return row - 1, col - 1


def from_index(row_idx: int, col_idx: int) -> Tuple[int, int]:
    """0-based 下标 -> 1-based 行列"""
    return row_idx + 1, col_idx + 1


def column_to_number(letters: str) -> int:
    """列字母转列号（A=1, Z=26, AA=27）"""
    result = 0
    for char in letters:
        result = result * 26 + (ord(char) - ord('A') + 1)
    return result


def number_to_column(col: int) -> str:
    """列号转列字母"""
    if col < 1:
        raise AddressParseError(str(col), "列号必须大于 0")
    result = ""
    while col > 0:
        col, rem = divmod(col - 1, 26)
        result = chr(rem + ord('A')) + result
    return result


def parse_address(text: str) -> Tuple[int, int]:
    """
    解析单元格地址

    Args:
        text: 地址文本，如 "A1"、"AB100"

    Returns:
        (row, col)，均从 1 开始

    Raises:
        AddressParseError: 文本不是 [A-Z]+[0-9]+ 格式
    """
    if not isinstance(text, str):
        raise AddressParseError(repr(text), "地址必须是字符串")

    match = _ADDRESS_RE.fullmatch(text)
    if not match:
        raise AddressParseError(text, "应为列字母加行号，如 A1")

    digits = match.group(2)
    if digits.startswith('0'):
        # 拒绝 A0、A01 这类行号
        raise AddressParseError(text, "行号必须大于 0 且不能有前导 0")

    return int(digits), column_to_number(match.group(1))


def format_address(row: int, col: int) -> str:
    """将行列坐标格式化为地址文本"""
    if row < 1:
        raise AddressParseError(f"{row},{col}", "行号必须大于 0")
    return f"{number_to_column(col)}{row}"


def parse_range(text: str) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """
    解析区域文本

    "A1:B2" -> ((1, 1), (2, 2))。不含冒号时视为单元格区域，起止相同。
    """
    if not isinstance(text, str) or not text:
        raise AddressParseError(repr(text), "区域不能为空")

    parts = text.split(':')
    if len(parts) == 1:
        anchor = parse_address(parts[0])
        return anchor, anchor
    if len(parts) != 2:
        raise AddressParseError(text, "区域只能包含一个冒号")

    return parse_address(parts[0]), parse_address(parts[1])


@dataclass(frozen=True)
class CellRange:
    """单元格矩形区域（坐标从 1 开始，包含边界）"""
    start_row: int
    start_col: int
    end_row: int
    end_col: int

    @classmethod
    def from_string(cls, range_str: str) -> 'CellRange':
        """从 "A1:D10" 格式解析区域，起止颠倒时自动规整"""
        (row1, col1), (row2, col2) = parse_range(range_str)
        return cls(
            start_row=min(row1, row2),
            start_col=min(col1, col2),
            end_row=max(row1, row2),
            end_col=max(col1, col2),
        )

    def contains(self, row: int, col: int) -> bool:
        return (self.start_row <= row <= self.end_row
                and self.start_col <= col <= self.end_col)

    @property
    def row_count(self) -> int:
        return self.end_row - self.start_row + 1

    @property
    def col_count(self) -> int:
        return self.end_col - self.start_col + 1

    @property
    def anchor(self) -> Tuple[int, int]:
        return self.start_row, self.start_col

    def __str__(self) -> str:
        start = format_address(self.start_row, self.start_col)
        end = format_address(self.end_row, self.end_col)
        return f"{start}:{end}"


def range_contains(cell_range, row: int, col: int) -> bool:
    """判断坐标是否落在区域内；cell_range 可以是 CellRange 或区域文本"""
    if not isinstance(cell_range, CellRange):
        cell_range = CellRange.from_string(cell_range)
    return cell_range.contains(row, col)
