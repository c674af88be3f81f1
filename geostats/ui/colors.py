"""Theme colors and color utilities for the UI."""


class GameColors:
    """Dark red-on-black palette."""

    BG_TOP = "#0a0a0a"
    BG_MIDDLE = "#140606"
    BG_BOTTOM = "#1f0808"

    PRIMARY = "#dc2626"
    PRIMARY_LIGHT = "#ef4444"
    PRIMARY_DARK = "#7f1d1d"

    SUCCESS = "#22c55e"
    SUCCESS_DARK = "#14532d"
    GOLD = "#eab308"
    INFO = "#3b82f6"

    CARD_BG = "rgba(23, 23, 23, 0.85)"
    CARD_BG_HOVER = "rgba(38, 38, 38, 0.95)"
    CARD_BORDER = "rgba(127, 29, 29, 0.5)"

    TEXT_PRIMARY = "#ffffff"
    TEXT_SECONDARY = "#9ca3af"
    TEXT_MUTED = "#6b7280"

    # Difficulty buttons on the menu screen
    EASY = "#15803d"
    MEDIUM = "#a16207"
    HARD = "#b91c1c"


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    try:
        a = a.strip()
        b = b.strip()
        if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
            return a
        t = max(0.0, min(1.0, float(t)))
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
        r = int(ar + (br - ar) * t)
        g = int(ag + (bg - ag) * t)
        bl = int(ab + (bb - ab) * t)
        return f"#{r:02X}{g:02X}{bl:02X}"
    except ValueError:
        return a
