"""
hosts 文件文档模型：按原始顺序保存已分类的行
"""

from typing import Callable, Iterable, Iterator, List, Optional

from hostile.models import Entry, Line, OpaqueLine


class Document:
    """
    有序的行容器，代表整个 hosts 文件

    行的顺序与源文件一致，写回时保持不变；插入位置取决于最后一行。
    """

    def __init__(self, lines: Optional[Iterable[Line]] = None):
        self.lines: List[Line] = list(lines or [])

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index: int) -> Line:
        return self.lines[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self.lines == other.lines

    def __repr__(self) -> str:
        return f"Document({self.lines!r})"

    def entries(self) -> List[Entry]:
        """返回所有地址映射行（按原顺序）"""
        return [line for line in self.lines if isinstance(line, Entry)]

    def insert_before_trailing_blank(self, line: Line) -> int:
        """
        插入新行，保持文件末尾空行的约定

        如果最后一行是空白的 OpaqueLine，新行插在它之前；否则追加到末尾。

        返回:
            新行所在的下标
        """
        if self.lines:
            last = self.lines[-1]
            if isinstance(last, OpaqueLine) and last.is_blank:
                index = len(self.lines) - 1
                self.lines.insert(index, line)
                return index
        self.lines.append(line)
        return len(self.lines) - 1

    def remove_where(self, predicate: Callable[[Line], bool]) -> int:
        """删除所有满足条件的行，返回删除数量；无匹配时不改变文档"""
        kept = [line for line in self.lines if not predicate(line)]
        removed = len(self.lines) - len(kept)
        if removed:
            self.lines = kept
        return removed
