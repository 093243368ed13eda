"""
mpx2vue: конвертер шаблонов мини-программ (MPX / WeChat) в Vue-шаблоны.
"""

from .template import annotate, annotate_to_text, convert, parse_template, traverse, tree_to_text

__all__ = ["parse_template", "convert", "traverse", "annotate", "annotate_to_text", "tree_to_text"]
