"""数据模型定义."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True, order=True)
class Position:
    """文档中的位置（行号, 列号），均从0开始."""

    line: int
    character: int

    def __repr__(self) -> str:
        return f"Position({self.line}:{self.character})"


@dataclass(frozen=True)
class Range:
    """文档中的区间 [start, end)."""

    start: Position
    end: Position

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class SelectedCompletionInfo:
    """补全弹窗中当前选中的条目.

    range 为该条目要替换的文档区间，text 为替换后的文本。
    """

    range: Range
    text: str


@dataclass(frozen=True)
class SemanticContext:
    """滑动窗口搜索结果：最相似的代码块及其累计相似度."""

    semantic_context: Tuple[str, ...] = ()
    similarity_score: float = 0.0

    @property
    def text(self) -> str:
        return "\n".join(self.semantic_context)


@dataclass(frozen=True)
class DocumentContext:
    """光标附近的文档上下文.

    Attributes:
        prefix: 光标前的截断文本
        suffix: 光标后的截断文本
        context_range: prefix 与 suffix 覆盖的文档区间
        current_line_prefix: 光标所在行中光标前的文本
        current_line_suffix: 光标所在行中光标后的文本
        prev_non_empty_line: prefix 中当前行之前最近的非空行
        next_non_empty_line: suffix 中当前行之后最近的非空行
        injected_prefix: 补全弹窗选中项注入到 prefix 的文本，没有时为 None（不会是空字符串）
        semantic_context: 文档中与当前行最相似的代码块，按行拼接
        multiline_trigger: 多行触发分类器的结果，没有时为 None
    """

    prefix: str
    suffix: str
    context_range: Range
    current_line_prefix: str
    current_line_suffix: str
    prev_non_empty_line: str
    next_non_empty_line: str
    injected_prefix: Optional[str] = None
    semantic_context: str = ""
    multiline_trigger: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """转换为可JSON序列化的字典."""
        return asdict(self)
