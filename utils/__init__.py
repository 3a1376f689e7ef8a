"""Utility modules for Nexo Translate.

This package provides the namespaced logger factory and string helpers.
"""

from utils.logger_utils import LoggerUtils
from utils.string_utils import StringUtils, TextStats

__all__: list[str] = ["LoggerUtils", "StringUtils", "TextStats"]
