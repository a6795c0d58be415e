"""多行触发检测测试."""

import pytest

from completion_context.data.document import InMemoryDocument
from completion_context.data.models import Position
from completion_context.service.doc_context import DocumentContextBuilder
from completion_context.service.multiline import BracketMultilineDetector, detect_multiline


def _trigger(text, position, language_id=None, enable_extended_triggers=False):
    document = InMemoryDocument(text, language_id=language_id)
    context = DocumentContextBuilder().build(
        document, position, 1000, 1000, enable_extended_triggers=enable_extended_triggers
    )
    return context.multiline_trigger


def test_same_line_opening_bracket():
    """测试行尾左括号触发."""
    assert _trigger("const a = {", Position(0, 11), language_id="typescript") == "{"


def test_new_line_after_opening_bracket():
    """测试左括号下一行缩进更深时触发."""
    assert _trigger("items = [\n    ", Position(1, 4)) == "["


def test_python_block_start():
    """测试python代码块起始行下方的空行触发."""
    assert _trigger("def f():\n    ", Position(1, 4), language_id="python") == ":"


def test_python_block_start_requires_deeper_indentation():
    """测试缩进未加深时不触发."""
    assert _trigger("def f():\n", Position(1, 0), language_id="python") is None


def test_function_invocation_is_skipped():
    """测试函数调用参数内不触发."""
    assert _trigger("foo()", Position(0, 4)) is None


def test_function_invocation_with_extended_triggers():
    """测试启用扩展触发后函数调用也会触发."""
    assert _trigger("foo()", Position(0, 4), enable_extended_triggers=True) == "("


def test_function_definition_is_not_invocation():
    """测试函数定义不视为函数调用."""
    assert _trigger("def foo()", Position(0, 8), language_id="python") == "("


def test_plain_statement():
    """测试普通语句不触发."""
    assert _trigger("x = 1", Position(0, 5)) is None


@pytest.mark.parametrize("syntactic_triggers", [None, False, True])
def test_syntactic_triggers_fall_back_to_brackets(syntactic_triggers):
    """测试语法触发参数不影响括号规则."""
    document = InMemoryDocument("const a = {", language_id="typescript")
    context = DocumentContextBuilder(trigger_detector=BracketMultilineDetector()).build(
        document, Position(0, 11), 1000, 1000
    )

    assert detect_multiline(context, document, False, syntactic_triggers) == "{"
