"""
Benchmark pattern definitions for terminal rendering throughput.

Twelve variants cross three alphabets with four color regimes:
1. ASCII / CJK / mixed text with no color
2. 16-color SGR pairs
3. 256-color indexed cells after a palette definition preamble
4. 24-bit RGB gradient bands

Every builder is pure: calling it twice yields identical bytes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from .alphabets import ascii_pattern, cjk_pattern, mixed_pattern
from .escapes import (
    BG_BRIGHT_MAGENTA,
    BG_BRIGHT_WHITE,
    BG_BRIGHT_YELLOW,
    FG_BRIGHT_MAGENTA,
    FG_BRIGHT_WHITE,
    FG_BRIGHT_YELLOW,
    color16,
    indexed_background,
    indexed_foreground,
    palette256,
    rgb_background,
    rgb_foreground,
    sgr,
)


class Alphabet(Enum):
    """Character set a pattern draws its glyphs from."""

    ASCII = "ascii"
    CJK = "cjk"
    MIXED = "mixed"


class ColorMode(Enum):
    """Color regime layered over the alphabet."""

    NONE = "none"
    COLOR16 = "color16"
    COLOR256 = "color256"
    COLOR24 = "color24"


class PatternVariant(Enum):
    """The twelve benchmark configurations."""

    ASCII = "ascii"
    CJK = "cjk"
    MIXED = "mixed"
    ASCII_COLOR16 = "ascii_color16"
    CJK_COLOR16 = "cjk_color16"
    MIXED_COLOR16 = "mixed_color16"
    ASCII_COLOR256 = "ascii_color256"
    CJK_COLOR256 = "cjk_color256"
    MIXED_COLOR256 = "mixed_color256"
    ASCII_COLOR24 = "ascii_color24"
    CJK_COLOR24 = "cjk_color24"
    MIXED_COLOR24 = "mixed_color24"

    @property
    def alphabet(self) -> Alphabet:
        return Alphabet(self.value.split("_")[0])

    @property
    def color_mode(self) -> ColorMode:
        _, _, mode = self.value.partition("_")
        return ColorMode(mode or "none")


@dataclass(frozen=True)
class PatternSource:
    """Bytes for one run: a one-shot preamble and the repeating body."""

    variant: PatternVariant
    body: bytes
    preamble: bytes = b""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "variant": self.variant.value,
            "body_bytes": len(self.body),
            "preamble_bytes": len(self.preamble),
        }


ALPHABETS: dict[Alphabet, Callable[[], str]] = {
    Alphabet.ASCII: ascii_pattern,
    Alphabet.CJK: cjk_pattern,
    Alphabet.MIXED: mixed_pattern,
}

GRADIENT_STEP = 16

# Bands of the 24-bit pattern: (channel index ramped, fixed SGR code, ramp is background)
COLOR24_BANDS = (
    (0, FG_BRIGHT_WHITE, True),
    (1, FG_BRIGHT_MAGENTA, True),
    (2, FG_BRIGHT_YELLOW, True),
    (0, BG_BRIGHT_WHITE, False),
    (1, BG_BRIGHT_MAGENTA, False),
    (2, BG_BRIGHT_YELLOW, False),
)


def gradient_levels() -> list[int]:
    """Channel values 0, 16, ..., 240, 255 (ceil(257 / 16) = 17 steps)."""
    return [min(i, 255) for i in range(0, 257, GRADIENT_STEP)]


def plain_text(chars: str) -> str:
    return chars


def color16_text(chars: str) -> str:
    return "".join(color16(i) + ch for i, ch in enumerate(chars))


def color256_text(chars: str) -> str:
    """Cells for slots 16..255, background slot i over foreground 271 - i."""
    return "".join(
        indexed_background(i) + indexed_foreground(255 + 16 - i) + chars[i % len(chars)]
        for i in range(16, 256)
    )


def color24_text(chars: str) -> str:
    """Six gradient bands, one character per step, sequential across bands."""
    parts = []
    letter = 0
    for channel, fixed_code, ramp_background in COLOR24_BANDS:
        for level in gradient_levels():
            rgb = [0, 0, 0]
            rgb[channel] = level
            if ramp_background:
                parts.append(rgb_background(*rgb) + sgr(fixed_code))
            else:
                parts.append(sgr(fixed_code) + rgb_foreground(*rgb))
            parts.append(chars[letter % len(chars)])
            letter += 1
    return "".join(parts)


COLOR_LAYERS: dict[ColorMode, Callable[[str], str]] = {
    ColorMode.NONE: plain_text,
    ColorMode.COLOR16: color16_text,
    ColorMode.COLOR256: color256_text,
    ColorMode.COLOR24: color24_text,
}


def _builder(variant: PatternVariant) -> Callable[[], PatternSource]:
    def build() -> PatternSource:
        chars = ALPHABETS[variant.alphabet]()
        body = COLOR_LAYERS[variant.color_mode](chars)
        preamble = palette256() if variant.color_mode is ColorMode.COLOR256 else ""
        return PatternSource(
            variant=variant,
            body=body.encode("utf-8"),
            preamble=preamble.encode("utf-8"),
        )

    build.__name__ = f"build_{variant.value}"
    return build


PATTERN_BUILDERS: dict[PatternVariant, Callable[[], PatternSource]] = {
    variant: _builder(variant) for variant in PatternVariant
}


DESCRIPTIONS = {
    Alphabet.ASCII: "ASCII letters, digits and symbols",
    Alphabet.CJK: "CJK ideographs (UTF-8)",
    Alphabet.MIXED: "ASCII and CJK alternately",
    ColorMode.NONE: "no color",
    ColorMode.COLOR16: "16 colors",
    ColorMode.COLOR256: "256 colors",
    ColorMode.COLOR24: "24-bit colors",
}


def build_pattern(variant: Any) -> Optional[PatternSource]:
    """Build the source for a variant.

    Anything outside the dispatch table returns None; the runner treats that
    as an empty, zero-duration measurement rather than an error.
    """
    builder = PATTERN_BUILDERS.get(variant) if isinstance(variant, PatternVariant) else None
    if builder is None:
        return None
    return builder()


def resolve_variant(name: str) -> Optional[PatternVariant]:
    """Look up a variant by value or member name, case-insensitively."""
    key = name.strip().lower().replace("-", "_")
    for variant in PatternVariant:
        if key in (variant.value, variant.name.lower()):
            return variant
    return None


def list_variants() -> list[str]:
    """List variant names in declaration order."""
    return [v.value for v in PatternVariant]


def get_variant_description(variant: PatternVariant) -> str:
    return f"{DESCRIPTIONS[variant.alphabet]}, {DESCRIPTIONS[variant.color_mode]}"
