"""文档内相似代码块搜索."""

from typing import Callable, Optional

from loguru import logger

from completion_context.data.document import TextDocument
from completion_context.data.models import Position, SemanticContext
from completion_context.service.similarity import EditDistanceScorer, SimilarityScorer


class SearchCancelledError(Exception):
    """相似代码块搜索被调用方取消."""


def get_semantic_context_within_document(
    document: TextDocument,
    position: Position,
    k: int = 5,
    scorer: Optional[SimilarityScorer] = None,
    is_cancelled: Optional[Callable[[], bool]] = None,
) -> SemanticContext:
    """在整个文档中查找与光标所在行最相似的连续 k 行.

    每个候选块的得分为块内各行与当前行相似度之和。只有得分严格大于
    当前最高分时才替换，因此得分相同时保留起始行号最小的块。
    当前行为空字符串，或没有任何块得分大于0时，返回空结果。
    只含缩进的行照常参与比较。

    Args:
        document: 文档
        position: 光标位置
        k: 代码块行数
        scorer: 行相似度评分器，默认使用编辑距离
        is_cancelled: 可选的取消检查函数，每个候选块之前调用一次

    Returns:
        最相似的代码块及其得分

    Raises:
        ValueError: k 不是正整数
        SearchCancelledError: is_cancelled 返回 True
    """
    if k <= 0:
        raise ValueError(f"代码块行数必须为正整数: {k}")

    most_similar_context = SemanticContext()
    line_count = document.line_count
    # 行数不足 k 行时没有候选块
    if line_count < k:
        return most_similar_context

    current_line = document.line_text(position.line)
    # 空行与其他行没有可比性，直接返回空结果
    if not current_line:
        return most_similar_context

    scorer = scorer or EditDistanceScorer()
    highest_score = 0.0

    for i in range(line_count - k + 1):
        if is_cancelled is not None and is_cancelled():
            logger.debug(f"相似代码块搜索在第 {i} 行被取消")
            raise SearchCancelledError(f"搜索在第 {i} 行被取消")

        block_of_lines = tuple(document.line_text(i + idx) for idx in range(k))
        aggregate_similarity_score = sum(scorer.score(current_line, line) for line in block_of_lines)

        if aggregate_similarity_score > highest_score:
            most_similar_context = SemanticContext(
                semantic_context=block_of_lines,
                similarity_score=aggregate_similarity_score,
            )
            highest_score = aggregate_similarity_score

    logger.debug(f"相似代码块得分: {most_similar_context.similarity_score:.3f}，共比较 {line_count - k + 1} 个候选块")
    return most_similar_context
