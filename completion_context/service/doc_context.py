"""光标上下文构建服务."""

from dataclasses import replace
from typing import List, Optional, Tuple

from loguru import logger

from completion_context.config.settings import settings
from completion_context.data.document import TextDocument
from completion_context.data.models import DocumentContext, Position, Range, SelectedCompletionInfo
from completion_context.data.text_processing import get_next_non_empty_line, get_prev_non_empty_line, lines
from completion_context.service.multiline import BracketMultilineDetector, MultilineTriggerDetector
from completion_context.service.semantic_search import get_semantic_context_within_document
from completion_context.service.similarity import SimilarityScorer


class DocumentContextBuilder:
    """文档上下文构建器.

    根据光标位置截取前后文、查找相似代码块，并交给多行触发检测器判断。
    不保存任何请求间的状态，可以在多个线程中共用。
    """

    def __init__(
        self,
        trigger_detector: Optional[MultilineTriggerDetector] = None,
        scorer: Optional[SimilarityScorer] = None,
        semantic_window_size: Optional[int] = None,
    ) -> None:
        """初始化文档上下文构建器.

        Args:
            trigger_detector: 多行触发检测器，默认使用括号规则
            scorer: 行相似度评分器，默认使用编辑距离
            semantic_window_size: 相似代码块行数，默认读取配置
        """
        self.trigger_detector = trigger_detector or BracketMultilineDetector()
        self.scorer = scorer
        self.semantic_window_size = (
            settings.context.semantic_window_size if semantic_window_size is None else semantic_window_size
        )

    def build(
        self,
        document: TextDocument,
        position: Position,
        max_prefix_length: int,
        max_suffix_length: int,
        enable_extended_triggers: bool = False,
        syntactic_triggers: Optional[bool] = None,
        selected_completion_info: Optional[SelectedCompletionInfo] = None,
    ) -> DocumentContext:
        """构建光标处的文档上下文.

        Args:
            document: 文档
            position: 光标位置
            max_prefix_length: 前缀最大字符数
            max_suffix_length: 后缀最大字符数
            enable_extended_triggers: 是否启用扩展多行触发
            syntactic_triggers: 是否启用语法触发（透传给检测器）
            selected_completion_info: 补全弹窗中选中的条目

        Returns:
            文档上下文

        Raises:
            ValueError: 长度上限不是正数，或光标不在文档范围内
        """
        self._validate(document, position, max_prefix_length, max_suffix_length)
        offset = document.offset_at(position)

        complete_prefix = document.text_in_range(Position(0, 0), position)
        complete_suffix = document.text_in_range(position, document.end_position())

        # 把补全弹窗中选中的条目预先拼接到前缀中
        complete_prefix_with_context_completion = complete_prefix
        injected_prefix = None
        if selected_completion_info is not None:
            replace_start = selected_completion_info.range.start.character - position.character
            complete_prefix_with_context_completion = (
                complete_prefix[:replace_start] + selected_completion_info.text
            )
            injected_prefix = complete_prefix_with_context_completion[len(complete_prefix):] or None

        prefix_lines = lines(complete_prefix_with_context_completion)
        suffix_lines = lines(complete_suffix)

        current_line_prefix = prefix_lines[-1]
        current_line_suffix = suffix_lines[0]

        if offset > max_prefix_length:
            prefix = "\n".join(truncate_prefix_lines(prefix_lines, max_prefix_length))
        else:
            prefix = "\n".join(prefix_lines)

        semantic_context_within_doc = get_semantic_context_within_document(
            document, position, self.semantic_window_size, scorer=self.scorer
        )

        suffix = "\n".join(truncate_suffix_lines(suffix_lines, max_suffix_length))

        doc_context = DocumentContext(
            prefix=prefix,
            suffix=suffix,
            context_range=Range(
                document.position_at(offset - len(prefix)),
                document.position_at(offset + len(suffix)),
            ),
            current_line_prefix=current_line_prefix,
            current_line_suffix=current_line_suffix,
            prev_non_empty_line=get_prev_non_empty_line(prefix),
            next_non_empty_line=get_next_non_empty_line(suffix),
            injected_prefix=injected_prefix,
            semantic_context=semantic_context_within_doc.text,
        )
        logger.debug(
            f"上下文构建完成: 光标 {position}，前缀 {len(prefix)} 字符，后缀 {len(suffix)} 字符，"
            f"相似代码块得分 {semantic_context_within_doc.similarity_score:.3f}"
        )

        multiline_trigger = self.trigger_detector.detect(
            doc_context, document, enable_extended_triggers, syntactic_triggers
        )
        return replace(doc_context, multiline_trigger=multiline_trigger)

    @staticmethod
    def _validate(
        document: TextDocument, position: Position, max_prefix_length: int, max_suffix_length: int
    ) -> None:
        if max_prefix_length <= 0 or max_suffix_length <= 0:
            message = f"长度上限必须为正数: max_prefix_length={max_prefix_length}, max_suffix_length={max_suffix_length}"
            logger.error(message)
            raise ValueError(message)

        line_count = document.line_count
        if line_count == 0:
            valid = position == Position(0, 0)
        else:
            valid = (
                0 <= position.line < line_count
                and 0 <= position.character <= len(document.line_text(position.line))
            )
        if not valid:
            message = f"光标位置超出文档范围: {position}，文档共 {line_count} 行"
            logger.error(message)
            raise ValueError(message)


def truncate_prefix_lines(prefix_lines: List[str], max_prefix_length: int) -> List[str]:
    """从最后一行向前保留行，直到累计长度超过上限.

    累计长度只统计每行的字符数，不计换行符，
    因此拼接后的结果可能略长于上限。
    """
    total = 0
    start_line = len(prefix_lines)
    for i in range(len(prefix_lines) - 1, -1, -1):
        if total + len(prefix_lines[i]) > max_prefix_length:
            break
        start_line = i
        total += len(prefix_lines[i])
    return prefix_lines[start_line:]


def truncate_suffix_lines(suffix_lines: List[str], max_suffix_length: int) -> List[str]:
    """从第一行向后保留行，遇到会使累计长度超过上限的行时停止."""
    total = 0
    end_line = 0
    for i, line in enumerate(suffix_lines):
        if total + len(line) > max_suffix_length:
            break
        end_line = i + 1
        total += len(line)
    return suffix_lines[:end_line]


def get_current_doc_context(
    document: TextDocument,
    position: Position,
    max_prefix_length: Optional[int] = None,
    max_suffix_length: Optional[int] = None,
    enable_extended_triggers: Optional[bool] = None,
    syntactic_triggers: Optional[bool] = None,
    selected_completion_info: Optional[SelectedCompletionInfo] = None,
) -> DocumentContext:
    """获取光标处的文档上下文.

    未传入的参数使用配置中的默认值。

    Args:
        document: 文档
        position: 光标位置
        max_prefix_length: 前缀最大字符数
        max_suffix_length: 后缀最大字符数
        enable_extended_triggers: 是否启用扩展多行触发
        syntactic_triggers: 是否启用语法触发
        selected_completion_info: 补全弹窗中选中的条目

    Returns:
        文档上下文
    """
    max_prefix_length, max_suffix_length = _resolve_lengths(max_prefix_length, max_suffix_length)
    if enable_extended_triggers is None:
        enable_extended_triggers = settings.context.enable_extended_triggers
    if syntactic_triggers is None:
        syntactic_triggers = settings.context.syntactic_triggers

    return DocumentContextBuilder().build(
        document,
        position,
        max_prefix_length,
        max_suffix_length,
        enable_extended_triggers=enable_extended_triggers,
        syntactic_triggers=syntactic_triggers,
        selected_completion_info=selected_completion_info,
    )


def _resolve_lengths(max_prefix_length: Optional[int], max_suffix_length: Optional[int]) -> Tuple[int, int]:
    if max_prefix_length is None:
        max_prefix_length = settings.context.max_prefix_length
    if max_suffix_length is None:
        max_suffix_length = settings.context.max_suffix_length
    return max_prefix_length, max_suffix_length
