"""
Classification Module

分类编排: 按策略顺序 (AI提示、双语、词性、译文、普通、首词) 确定文件的分类。
"""

from .ai_classifier import AIClassifier, parse_classification_response
from .classifier import SmartClassifier

__all__ = [
    "AIClassifier",
    "SmartClassifier",
    "parse_classification_response",
]
