"""只读文档接口及内存实现."""

from abc import ABC, abstractmethod
from bisect import bisect_right
from typing import List, Optional

from completion_context.data.models import Position


class TextDocument(ABC):
    """只读文档快照接口.

    上下文构建过程只通过这里的方法访问文档，不会修改文档内容。
    """

    language_id: Optional[str] = None

    @property
    @abstractmethod
    def line_count(self) -> int:
        """文档总行数."""

    @abstractmethod
    def line_text(self, index: int) -> str:
        """获取指定行的文本（不含换行符）."""

    @abstractmethod
    def text_in_range(self, start: Position, end: Position) -> str:
        """获取 [start, end) 区间内的文本."""

    @abstractmethod
    def offset_at(self, position: Position) -> int:
        """位置转换为字符偏移量."""

    @abstractmethod
    def position_at(self, offset: int) -> Position:
        """字符偏移量转换为位置."""

    def end_position(self) -> Position:
        """文档末尾的位置."""
        if self.line_count == 0:
            return Position(0, 0)
        last_line = self.line_count - 1
        return Position(last_line, len(self.line_text(last_line)))


class InMemoryDocument(TextDocument):
    """基于字符串的文档实现.

    按 ``\\n`` 分行，行尾的 ``\\r`` 不计入行文本。越界的位置和偏移量
    会被截断到文档范围内。空文本视为只有一个空行。
    """

    def __init__(self, text: str, language_id: Optional[str] = None) -> None:
        """初始化内存文档.

        Args:
            text: 文档全文
            language_id: 语言标识，如 python、typescript
        """
        self._text = text
        self.language_id = language_id
        # 每一行在全文中的起始偏移量
        self._line_starts: List[int] = [0]
        for index, char in enumerate(text):
            if char == "\n":
                self._line_starts.append(index + 1)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def get_text(self) -> str:
        return self._text

    def _line_end(self, index: int) -> int:
        """行内容结束的偏移量（不含换行符）."""
        if index + 1 < len(self._line_starts):
            end = self._line_starts[index + 1] - 1
        else:
            end = len(self._text)
        if end > self._line_starts[index] and self._text[end - 1] == "\r":
            end -= 1
        return end

    def line_text(self, index: int) -> str:
        if index < 0 or index >= self.line_count:
            raise IndexError(f"行号越界: {index}，文档共 {self.line_count} 行")
        return self._text[self._line_starts[index]:self._line_end(index)]

    def text_in_range(self, start: Position, end: Position) -> str:
        start_offset = self.offset_at(start)
        end_offset = self.offset_at(end)
        if end_offset < start_offset:
            start_offset, end_offset = end_offset, start_offset
        return self._text[start_offset:end_offset]

    def offset_at(self, position: Position) -> int:
        if position.line < 0:
            return 0
        if position.line >= self.line_count:
            return len(self._text)
        line_start = self._line_starts[position.line]
        character = min(max(position.character, 0), self._line_end(position.line) - line_start)
        return line_start + character

    def position_at(self, offset: int) -> Position:
        offset = min(max(offset, 0), len(self._text))
        line = bisect_right(self._line_starts, offset) - 1
        line_start = self._line_starts[line]
        character = min(offset, self._line_end(line)) - line_start
        return Position(line, character)

    def __repr__(self) -> str:
        return f"InMemoryDocument(lines={self.line_count}, language_id={self.language_id!r})"
