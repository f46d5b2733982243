"""
Escape and control sequence builders.

Covers the SGR (Select Graphic Rendition) forms used by the color patterns
and the OSC 4 palette definition sequence.
"""

ESC = "\x1b"
CSI = ESC + "["
OSC = ESC + "]"
ST = ESC + "\\"

SGR_RESET = CSI + "0m"

# (background, foreground) pairs cycled by the 16-color patterns
COLOR16_PAIRS = (
    (103, 30),
    (104, 31),
    (105, 32),
    (106, 33),
    (107, 34),
    (100, 35),
    (101, 36),
    (102, 37),
    (43, 90),
    (44, 91),
    (45, 92),
    (46, 93),
    (47, 94),
    (40, 95),
    (41, 96),
    (42, 97),
)

# Bright SGR codes used by the 24-bit bands
FG_BRIGHT_WHITE = 97
FG_BRIGHT_MAGENTA = 95
FG_BRIGHT_YELLOW = 93
BG_BRIGHT_WHITE = 107
BG_BRIGHT_MAGENTA = 105
BG_BRIGHT_YELLOW = 103

# Channel levels of the 6x6x6 color cube
CUBE_LEVELS = ("00", "33", "66", "99", "cc", "ff")


def sgr(*params: int) -> str:
    """Build a single SGR sequence, e.g. sgr(48, 5, 17) -> ESC[48;5;17m."""
    return CSI + ";".join(str(p) for p in params) + "m"


def color16(index: int) -> str:
    """Background/foreground pair for cell `index` of a 16-color pattern."""
    background, foreground = COLOR16_PAIRS[index % len(COLOR16_PAIRS)]
    return sgr(background) + sgr(foreground)


def indexed_background(slot: int) -> str:
    return sgr(48, 5, slot)


def indexed_foreground(slot: int) -> str:
    return sgr(38, 5, slot)


def rgb_background(r: int, g: int, b: int) -> str:
    return sgr(48, 2, r, g, b)


def rgb_foreground(r: int, g: int, b: int) -> str:
    return sgr(38, 2, r, g, b)


def palette_entry(slot: int, red: str, green: str, blue: str) -> str:
    """OSC 4 palette definition: ESC ] 4 ; slot ; rgb:RR/GG/BB ST."""
    return f"{OSC}4;{slot};rgb:{red}/{green}/{blue}{ST}"


def palette256() -> str:
    """Program slots 16-231 as the color cube and 232-255 as a gray ramp."""
    parts = []
    for r in range(6):
        for g in range(6):
            for b in range(6):
                parts.append(palette_entry(
                    16 + r * 36 + g * 6 + b,
                    CUBE_LEVELS[r],
                    CUBE_LEVELS[g],
                    CUBE_LEVELS[b],
                ))
    for i in range(24):
        level = f"{8 + i * 10:02X}"
        parts.append(palette_entry(232 + i, level, level, level))
    return "".join(parts)
