"""
Base alphabets for the benchmark patterns.

Each function returns one cycle of visible characters; color regimes are
layered on top by `patterns.definitions`.
"""

CJK_CODE_POINTS = (
    0x5143, 0x5144, 0x5145, 0x5146, 0x5148, 0x5149, 0x514B, 0x514D, 0x5165, 0x5168,
    0x516B, 0x516C, 0x516D, 0x5171, 0x5175, 0x5176, 0x5177, 0x5178, 0x517C, 0x5180,
    0x518D, 0x5192, 0x5195, 0x51A0, 0x51AC, 0x51B7, 0x51BD, 0x51C4, 0x51C6, 0x51C9,
    0x51CB, 0x51CC, 0x51DD, 0x51E1, 0x51F6, 0x51F8, 0x51F9, 0x51FA, 0x51FD, 0x5200,
    0x5203, 0x5206, 0x5207, 0x5208, 0x520A, 0x520E, 0x5211, 0x5217, 0x521D, 0x5224,
)


def ascii_pattern() -> str:
    """Printable ASCII from '!' (0x21) through '~' (0x7E)."""
    return "".join(chr(c) for c in range(0x21, 0x7F))


def cjk_pattern() -> str:
    """Fifty CJK ideographs, three bytes each in UTF-8."""
    return "".join(chr(c) for c in CJK_CODE_POINTS)


def mixed_pattern() -> str:
    """CJK and ASCII characters alternately, one pair per CJK character."""
    cjk = cjk_pattern()
    ascii_chars = ascii_pattern()
    return "".join(
        cjk[i] + ascii_chars[i % len(ascii_chars)]
        for i in range(len(cjk))
    )
