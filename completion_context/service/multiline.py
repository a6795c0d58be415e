"""多行补全触发检测."""

import re
from abc import ABC, abstractmethod
from typing import Dict, Optional

from loguru import logger

from completion_context.data.document import TextDocument
from completion_context.data.models import DocumentContext
from completion_context.data.text_processing import get_last_line, indentation

OPENING_BRACKET_REGEX = re.compile(r"([(\[{])$")
FUNCTION_OR_METHOD_INVOCATION_REGEX = re.compile(r"\b[^()]+\((.*)\)$")
FUNCTION_KEYWORDS = re.compile(r"^(function|def|fn)\b")

# 各语言代码块的起始符号，未列出的语言使用 "{"
BLOCK_START: Dict[str, str] = {
    "python": ":",
    "yaml": ":",
}


class MultilineTriggerDetector(ABC):
    """多行触发检测器基类."""

    @abstractmethod
    def detect(
        self,
        doc_context: DocumentContext,
        document: TextDocument,
        enable_extended_triggers: bool,
        syntactic_triggers: Optional[bool] = None,
    ) -> Optional[str]:
        """判断当前位置是否应触发多行补全.

        Args:
            doc_context: 尚未包含触发结果的文档上下文
            document: 文档
            enable_extended_triggers: 是否启用扩展触发
            syntactic_triggers: 是否启用语法触发

        Returns:
            触发符号，不触发时返回 None
        """
        pass


class BracketMultilineDetector(MultilineTriggerDetector):
    """基于括号和缩进的多行触发检测器.

    触发条件：
    1. 光标前以左括号结尾，且下一非空行的缩进不深于当前行
    2. 光标位于代码块起始行（如 python 的 ``:``）下方缩进更深的空行上
    不启用扩展触发时，函数或方法调用的参数内不触发。
    """

    def detect(
        self,
        doc_context: DocumentContext,
        document: TextDocument,
        enable_extended_triggers: bool,
        syntactic_triggers: Optional[bool] = None,
    ) -> Optional[str]:
        if syntactic_triggers:
            # 不做语言解析，退回到括号规则
            logger.debug("不支持语法触发，使用括号规则检测多行触发")

        current_line_prefix = doc_context.current_line_prefix
        current_line_suffix = doc_context.current_line_suffix
        prev_non_empty_line = doc_context.prev_non_empty_line
        next_non_empty_line = doc_context.next_non_empty_line

        check_invocation = (
            current_line_prefix + current_line_suffix
            if current_line_suffix.strip()
            else current_line_prefix
        )
        is_method_or_function_invocation = (
            not FUNCTION_KEYWORDS.match(current_line_prefix.strip())
            and FUNCTION_OR_METHOD_INVOCATION_REGEX.search(check_invocation) is not None
        )
        if not enable_extended_triggers and is_method_or_function_invocation:
            return None

        is_blank_line = not current_line_prefix.strip() and not current_line_suffix.strip()
        opening_bracket_match = OPENING_BRACKET_REGEX.search(get_last_line(doc_context.prefix.rstrip()))
        if opening_bracket_match:
            is_same_line_match = (
                bool(current_line_prefix.strip())
                and indentation(current_line_prefix) >= indentation(next_non_empty_line)
            )
            is_new_line_match = (
                is_blank_line
                and indentation(prev_non_empty_line) < indentation(current_line_prefix)
                and indentation(prev_non_empty_line) >= indentation(next_non_empty_line)
            )
            if is_same_line_match or is_new_line_match:
                return opening_bracket_match.group(1)

        block_start = BLOCK_START.get(document.language_id or "", "{")
        if (
            is_blank_line
            and prev_non_empty_line.rstrip().endswith(block_start)
            and indentation(prev_non_empty_line) < indentation(current_line_prefix)
            and indentation(prev_non_empty_line) >= indentation(next_non_empty_line)
        ):
            return block_start

        return None


def detect_multiline(
    doc_context: DocumentContext,
    document: TextDocument,
    enable_extended_triggers: bool,
    syntactic_triggers: Optional[bool] = None,
) -> Optional[str]:
    """使用默认检测器判断是否触发多行补全."""
    return BracketMultilineDetector().detect(
        doc_context, document, enable_extended_triggers, syntactic_triggers
    )
