import re

import pytest

from patterns import (
    PATTERN_BUILDERS,
    Alphabet,
    ColorMode,
    PatternVariant,
    build_pattern,
    gradient_levels,
    get_variant_description,
    list_variants,
    resolve_variant,
)
from patterns.alphabets import ascii_pattern, cjk_pattern, mixed_pattern

ESCAPES = re.compile(r"\x1b\[[0-9;]*m|\x1b\]4;[^\x1b]*\x1b\\")
RGB_SGR = re.compile(r"\x1b\[(48|38);2;(\d+);(\d+);(\d+)m")


def visible(text: str) -> str:
    return ESCAPES.sub("", text)


def test_every_variant_has_a_builder():
    assert set(PATTERN_BUILDERS) == set(PatternVariant)
    assert len(PatternVariant) == 12


@pytest.mark.parametrize("variant", list(PatternVariant))
def test_source_is_non_empty_utf8(variant):
    source = build_pattern(variant)
    assert source.variant is variant
    assert len(source.body) >= 1
    assert source.body.decode("utf-8").encode("utf-8") == source.body
    assert source.preamble.decode("utf-8").encode("utf-8") == source.preamble


@pytest.mark.parametrize("variant", list(PatternVariant))
def test_builders_are_deterministic(variant):
    assert build_pattern(variant) == build_pattern(variant)


def test_ascii_alphabet_covers_printable_range():
    chars = ascii_pattern()
    assert len(chars) == 94
    assert chars[0] == "!"
    assert chars[-1] == "~"


def test_cjk_alphabet_is_fifty_three_byte_characters():
    chars = cjk_pattern()
    assert len(chars) == 50
    assert chars[0] == "元"
    assert chars[-1] == "判"
    assert len(chars.encode("utf-8")) == 150


def test_mixed_alphabet_interleaves_cjk_and_ascii():
    chars = mixed_pattern()
    assert len(chars) == 100
    assert chars[0:2] == "元!"
    assert chars[2:4] == "兄\""
    assert chars[-2:] == "判" + ascii_pattern()[49]


def test_plain_variants_have_no_escapes():
    for variant in (PatternVariant.ASCII, PatternVariant.CJK, PatternVariant.MIXED):
        source = build_pattern(variant)
        assert b"\x1b" not in source.body
        assert source.preamble == b""


def test_color16_prefixes_each_character():
    text = build_pattern(PatternVariant.ASCII_COLOR16).body.decode("utf-8")
    assert text.startswith("\x1b[103m\x1b[30m!\x1b[104m\x1b[31m\"")
    assert visible(text) == ascii_pattern()
    # table wraps after sixteen cells
    cells = re.findall(r"\x1b\[(\d+)m\x1b\[(\d+)m(.)", text)
    assert len(cells) == 94
    assert cells[16][:2] == cells[0][:2] == ("103", "30")
    assert cells[15][:2] == ("42", "97")


def test_color256_palette_programs_cube_and_gray_ramp():
    source = build_pattern(PatternVariant.CJK_COLOR256)
    palette = source.preamble.decode("utf-8")
    assert palette.count("\x1b]4;") == 240
    assert palette.startswith("\x1b]4;16;rgb:00/00/00\x1b\\")
    assert "\x1b]4;231;rgb:ff/ff/ff\x1b\\" in palette
    assert "\x1b]4;232;rgb:08/08/08\x1b\\" in palette
    assert palette.endswith("\x1b]4;255;rgb:EE/EE/EE\x1b\\")


def test_color256_body_selects_inverse_slots():
    text = build_pattern(PatternVariant.ASCII_COLOR256).body.decode("utf-8")
    cells = re.findall(r"\x1b\[48;5;(\d+)m\x1b\[38;5;(\d+)m(.)", text)
    assert len(cells) == 240
    for background, foreground, _ in cells:
        assert int(background) + int(foreground) == 271
    assert cells[0] == ("16", "255", ascii_pattern()[16])
    assert cells[-1] == ("255", "16", ascii_pattern()[255 % 94])
    assert "\x1b]" not in text


def test_palette_is_separate_from_indexed_cells():
    for variant in PatternVariant:
        source = build_pattern(variant)
        if variant.color_mode is ColorMode.COLOR256:
            assert b"\x1b]4;" in source.preamble
            assert b"\x1b[48;5;" not in source.preamble
        else:
            assert source.preamble == b""


def test_gradient_levels():
    levels = gradient_levels()
    assert len(levels) == 17
    assert levels[0] == 0
    assert levels[-1] == 255
    assert all(b - a == 16 for a, b in zip(levels, levels[1:-1]))


@pytest.mark.parametrize(
    "variant",
    [PatternVariant.ASCII_COLOR24, PatternVariant.CJK_COLOR24, PatternVariant.MIXED_COLOR24],
)
def test_color24_bands_ramp_one_channel(variant):
    text = build_pattern(variant).body.decode("utf-8")
    ramps = RGB_SGR.findall(text)
    assert len(ramps) == 6 * 17

    for band in range(6):
        entries = ramps[band * 17:(band + 1) * 17]
        kind = "48" if band < 3 else "38"
        channel = band % 3
        values = []
        for sgr_kind, *rgb in entries:
            assert sgr_kind == kind
            rgb = [int(v) for v in rgb]
            assert [v for i, v in enumerate(rgb) if i != channel] == [0, 0]
            values.append(rgb[channel])
        assert values == gradient_levels()
        assert values == sorted(values)


def test_color24_consumes_characters_sequentially():
    text = build_pattern(PatternVariant.ASCII_COLOR24).body.decode("utf-8")
    chars = ascii_pattern()
    assert visible(text) == "".join(chars[k % len(chars)] for k in range(102))


def test_color24_fixed_colors():
    text = build_pattern(PatternVariant.ASCII_COLOR24).body.decode("utf-8")
    assert text.startswith("\x1b[48;2;0;0;0m\x1b[97m!")
    assert "\x1b[107m\x1b[38;2;255;0;0m" in text
    assert text.count("\x1b[95m") == 17
    assert text.count("\x1b[103m") == 17


def test_unknown_variant_builds_nothing():
    assert build_pattern("ascii") is None
    assert build_pattern(None) is None


def test_resolve_variant():
    assert resolve_variant("ascii_color256") is PatternVariant.ASCII_COLOR256
    assert resolve_variant("MIXED-COLOR24") is PatternVariant.MIXED_COLOR24
    assert resolve_variant(" cjk ") is PatternVariant.CJK
    assert resolve_variant("kanji") is None


def test_variant_axes():
    assert PatternVariant.CJK_COLOR16.alphabet is Alphabet.CJK
    assert PatternVariant.CJK_COLOR16.color_mode is ColorMode.COLOR16
    assert PatternVariant.MIXED.color_mode is ColorMode.NONE
    assert list_variants()[0] == "ascii"
    assert get_variant_description(PatternVariant.MIXED_COLOR256) == "ASCII and CJK alternately, 256 colors"
