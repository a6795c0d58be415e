"""文本分行及非空行查找工具."""

import re
from typing import List

_LINE_BREAK = re.compile(r"\r?\n")


def lines(text: str) -> List[str]:
    """按换行符切分文本，保留末尾的空行.

    Args:
        text: 文本

    Returns:
        行列表，至少包含一个元素
    """
    return _LINE_BREAK.split(text)


def get_prev_non_empty_line(prefix: str) -> str:
    """查找 prefix 最后一行之前最近的非空行.

    Args:
        prefix: 光标前的文本

    Returns:
        非空行文本，找不到时返回空字符串
    """
    prev_lines = lines(prefix)[:-1]
    for line in reversed(prev_lines):
        if line.strip():
            return line
    return ""


def get_next_non_empty_line(suffix: str) -> str:
    """查找 suffix 第一行之后最近的非空行.

    Args:
        suffix: 光标后的文本

    Returns:
        非空行文本，找不到时返回空字符串
    """
    for line in lines(suffix)[1:]:
        if line.strip():
            return line
    return ""


def indentation(line: str) -> int:
    """行首空白字符数（tab 按一个字符计）."""
    return len(line) - len(line.lstrip(" \t"))


def get_last_line(text: str) -> str:
    return lines(text)[-1]
