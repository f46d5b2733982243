"""
Pattern definitions for terminal rendering benchmarks.
"""

from .definitions import (
    Alphabet,
    ColorMode,
    PatternVariant,
    PatternSource,
    PATTERN_BUILDERS,
    build_pattern,
    gradient_levels,
    resolve_variant,
    list_variants,
    get_variant_description,
)

__all__ = [
    "Alphabet",
    "ColorMode",
    "PatternVariant",
    "PatternSource",
    "PATTERN_BUILDERS",
    "build_pattern",
    "gradient_levels",
    "resolve_variant",
    "list_variants",
    "get_variant_description",
]
