"""Directive locate/rewrite over raw manifest bytes."""

from tools_version.directive.locator import DirectiveLocation, locate
from tools_version.directive.patterns import DEFAULT_PATTERNS, DirectivePattern
from tools_version.directive.writer import detect_line_ending, rewrite

__all__ = [
    "DEFAULT_PATTERNS",
    "DirectiveLocation",
    "DirectivePattern",
    "detect_line_ending",
    "locate",
    "rewrite",
]
