"""相似代码块搜索测试."""

from unittest.mock import MagicMock

import pytest

from completion_context.data.document import InMemoryDocument, TextDocument
from completion_context.data.models import Position, SemanticContext
from completion_context.service.semantic_search import (
    SearchCancelledError,
    get_semantic_context_within_document,
)
from completion_context.service.similarity import SimilarityScorer


class ExactMatchScorer(SimilarityScorer):
    """完全相同时得1分，否则0分."""

    def score(self, text1, text2):
        return 1.0 if text1 == text2 else 0.0


def test_first_block_wins_on_tie():
    """测试示例文档：得分相同的块中选择起始行最小的."""
    document = InMemoryDocument("foo\nbar\n\nfoo\nqux")

    result = get_semantic_context_within_document(document, Position(0, 3), k=2)

    assert result.semantic_context == ("foo", "bar")
    assert result.similarity_score == 1.0


def test_later_block_with_higher_score_wins():
    """测试严格更高的得分会替换之前的结果."""
    document = InMemoryDocument("foo\nbar\nfoo\nfoo")

    result = get_semantic_context_within_document(document, Position(0, 0), k=2)

    assert result.semantic_context == ("foo", "foo")
    assert result.similarity_score == 2.0


def test_empty_document():
    """测试没有任何行的文档."""
    document = MagicMock(spec=TextDocument)
    document.line_count = 0

    result = get_semantic_context_within_document(document, Position(0, 0))

    assert result == SemanticContext((), 0.0)
    document.line_text.assert_not_called()


def test_fewer_lines_than_window():
    """测试行数少于窗口大小."""
    document = InMemoryDocument("a\nb\nc")

    result = get_semantic_context_within_document(document, Position(0, 1), k=5)

    assert result.semantic_context == ()
    assert result.similarity_score == 0
    assert result.text == ""


def test_blank_current_line():
    """测试当前行为空行时返回空结果."""
    document = InMemoryDocument("abc\n\ndef\n\nghi\n")

    result = get_semantic_context_within_document(document, Position(1, 0), k=2)

    assert result == SemanticContext()


def test_indentation_only_current_line():
    """测试只含缩进的当前行照常参与比较."""
    document = InMemoryDocument("    \n    x\nfoo\nbar\n    ")

    result = get_semantic_context_within_document(document, Position(0, 4), k=2)

    assert result.semantic_context == ("    ", "    x")
    assert result.similarity_score == pytest.approx(1.8)


def test_no_block_scores_above_zero():
    """测试所有块得分为0时返回空结果."""
    document = InMemoryDocument("aaa\nbbb\nccc\nddd")
    never = MagicMock(spec=SimilarityScorer)
    never.score.return_value = 0.0
    result = get_semantic_context_within_document(document, Position(1, 0), k=2, scorer=never)

    assert result == SemanticContext()
    assert never.score.call_count == 6


def test_custom_scorer():
    """测试使用自定义评分器."""
    document = InMemoryDocument("x = 1\ny = 2\nx = 1\nx = 1\nz = 3")

    result = get_semantic_context_within_document(document, Position(0, 0), k=2, scorer=ExactMatchScorer())

    assert result.semantic_context == ("x = 1", "x = 1")
    assert result.similarity_score == 2.0


def test_cancelled_search():
    """测试取消搜索."""
    document = InMemoryDocument("a\nb\nc\nd\ne\nf")

    with pytest.raises(SearchCancelledError):
        get_semantic_context_within_document(document, Position(0, 0), k=2, is_cancelled=lambda: True)


def test_invalid_window_size():
    """测试非法的窗口大小."""
    document = InMemoryDocument("a\nb")

    with pytest.raises(ValueError):
        get_semantic_context_within_document(document, Position(0, 0), k=0)
