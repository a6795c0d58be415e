"""行相似度计算.

目前使用编辑距离作为占位实现，只反映字面上的接近程度；
后续可替换为基于向量的相似度，只需实现 SimilarityScorer 接口。
"""

from abc import ABC, abstractmethod
from typing import List


def levenshtein_distance(text1: str, text2: str) -> int:
    """计算两个字符串之间的编辑距离.

    插入、删除、替换的代价均为1。只保留上一行和当前行，
    内存占用为 O(len(text1))。

    Args:
        text1: 字符串a
        text2: 字符串b

    Returns:
        将 text1 变为 text2 所需的最少编辑次数
    """
    if len(text1) == 0:
        return len(text2)
    if len(text2) == 0:
        return len(text1)

    # 第0行：空串变为 text1[:j] 需要 j 次插入
    previous: List[int] = list(range(len(text1) + 1))
    for i in range(1, len(text2) + 1):
        current = [i] + [0] * len(text1)
        for j in range(1, len(text1) + 1):
            indicator = 0 if text1[j - 1] == text2[i - 1] else 1
            current[j] = min(
                previous[j] + 1,  # 删除
                current[j - 1] + 1,  # 插入
                previous[j - 1] + indicator,  # 替换
            )
        previous = current

    return previous[len(text1)]


def semantic_similarity(text1: str, text2: str) -> float:
    """计算两行文本的相似度，取值范围 [0, 1].

    两行都为空时视为完全相同，返回1。

    Args:
        text1: 第一行
        text2: 第二行

    Returns:
        1 - 编辑距离 / 较长行的长度
    """
    longest = max(len(text1), len(text2))
    if longest == 0:
        return 1.0
    distance = levenshtein_distance(text1, text2)
    return 1 - distance / longest


class SimilarityScorer(ABC):
    """行相似度评分器基类."""

    @abstractmethod
    def score(self, text1: str, text2: str) -> float:
        """计算两行文本的相似度.

        Args:
            text1: 第一行
            text2: 第二行

        Returns:
            [0, 1] 之间的相似度，越大越相似
        """
        pass


class EditDistanceScorer(SimilarityScorer):
    """基于编辑距离的评分器."""

    def score(self, text1: str, text2: str) -> float:
        return semantic_similarity(text1, text2)
