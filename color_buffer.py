from typing import Optional

ESC = "\033["
RESET = "\033[0m"

COLORS = {
    "bold": "1",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
    "white": "37",
}


def color_code(name: str) -> str:
    try:
        return COLORS[str(name).lower()]
    except KeyError:
        raise ValueError(
            f"Unknown color {name!r} (use one of: {', '.join(sorted(COLORS))})"
        ) from None


def center(text: str, width: int) -> str:
    """Center text in width; the odd space goes to the right."""
    text = text[:width] if width >= 0 else text
    gap = max(0, width - len(text))
    left = gap // 2
    return " " * left + text + " " * (gap - left)


def pad(text: str, width: int) -> str:
    text = text[:width] if width >= 0 else text
    return text.ljust(width)


class ColorBuffer:
    """A line of text built from styled segments.

    Lengths and truncation only count visible characters; styling is kept per
    segment and turned into ANSI escapes by ``render``.
    """

    def __init__(self, text: str = "", style=None):
        self.segments: list[tuple[str, str | None]] = []
        if text:
            self.append(text, style)

    def append(self, text, style=None) -> "ColorBuffer":
        if isinstance(text, ColorBuffer):
            self.segments.extend(text.segments)
            return self
        if text:
            code = color_code(style) if style is not None else None
            self.segments.append((str(text), code))
        return self

    def styled(self, name: str, text) -> "ColorBuffer":
        """Append ``text`` in one style; a buffer loses its own styling."""
        if isinstance(text, ColorBuffer):
            text = text.mono
        return self.append(text, name)

    @property
    def visible_length(self) -> int:
        return sum(len(text) for text, _ in self.segments)

    @property
    def mono(self) -> str:
        return "".join(text for text, _ in self.segments)

    def truncate(self, length: Optional[int]) -> "ColorBuffer":
        """First ``length`` visible characters; None keeps the whole line."""
        if length is None or self.visible_length <= length:
            return self
        out = ColorBuffer()
        remaining = length
        for text, code in self.segments:
            if remaining <= 0:
                break
            piece = text[:remaining]
            out.segments.append((piece, code))
            remaining -= len(piece)
        return out

    def render(self, color: bool = True) -> str:
        if not color:
            return self.mono
        parts = []
        for text, code in self.segments:
            if code is None:
                parts.append(text)
            else:
                parts.append(f"{ESC}{code}m{text}{RESET}")
        return "".join(parts)

    def __len__(self):
        return self.visible_length

    def __eq__(self, other):
        if not isinstance(other, ColorBuffer):
            return NotImplemented
        return self.segments == other.segments

    def __repr__(self):
        return f"ColorBuffer({self.segments!r})"

    def __str__(self):
        return self.mono
