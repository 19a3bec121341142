"""text_metrics.py
String measurement and wrapping of mixed-style text into lines.
"""
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from reportlab.pdfbase.pdfmetrics import stringWidth

from resume_builder.layout.fonts import register_fonts

Color = Tuple[float, float, float]

# Small tolerance so a line that fits exactly is not pushed to the next line
WIDTH_EPSILON = 1e-6

_TOKEN_PATTERN = re.compile(r"\S+|\s+")
_WHITESPACE_RUN = re.compile(r"\s+")

register_fonts()


@dataclass(frozen=True)
class TextStyle:
    """Font, size and color of a piece of text. Link runs are underlined."""
    font: str
    size: float
    color: Color
    underline: bool = False


@dataclass(frozen=True)
class Segment:
    """
    A run of text sharing one style, optionally hyperlinked.

    Consecutive segments form one visual sentence ("continued" runs): they
    are wrapped together and may share a line.
    """
    text: str
    style: TextStyle
    link: Optional[str] = None

    @property
    def width(self) -> float:
        return width_of(self.text, self.style.font, self.style.size)


@dataclass(frozen=True)
class LinePiece:
    """A measured piece of a wrapped line."""
    text: str
    style: TextStyle
    link: Optional[str]
    width: float


@dataclass
class Line:
    pieces: List[LinePiece]

    @property
    def width(self) -> float:
        return sum(piece.width for piece in self.pieces)

    @property
    def text(self) -> str:
        return "".join(piece.text for piece in self.pieces)


def width_of(text: str, font: str, size: float) -> float:
    """Return the rendered width of `text` in points."""
    if not text:
        return 0.0
    return stringWidth(text, font, size)


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run (newlines, tabs, repeated spaces) to one space."""
    return _WHITESPACE_RUN.sub(" ", text)


def _break_long_word(word: str, style: TextStyle, width: float) -> List[str]:
    """Split a single word wider than `width` into pieces that each fit."""
    chunks: List[str] = []
    current = ""
    for char in word:
        candidate = current + char
        if current and width_of(candidate, style.font, style.size) > width + WIDTH_EPSILON:
            chunks.append(current)
            current = char
        else:
            current = candidate
    if current:
        chunks.append(current)
    return chunks


def _merge_pieces(pieces: List[LinePiece]) -> List[LinePiece]:
    """Join neighbouring pieces that share style and link into one piece."""
    merged: List[LinePiece] = []
    for piece in pieces:
        if merged and merged[-1].style == piece.style and merged[-1].link == piece.link:
            previous = merged.pop()
            text = previous.text + piece.text
            merged.append(
                LinePiece(
                    text=text,
                    style=piece.style,
                    link=piece.link,
                    width=width_of(text, piece.style.font, piece.style.size),
                )
            )
        else:
            merged.append(piece)
    return merged


def _strip_trailing_whitespace(pieces: List[LinePiece]) -> List[LinePiece]:
    while pieces and not pieces[-1].text.strip():
        pieces.pop()
    if pieces and pieces[-1].text != pieces[-1].text.rstrip():
        last = pieces.pop()
        text = last.text.rstrip()
        pieces.append(
            LinePiece(text, last.style, last.link, width_of(text, last.style.font, last.style.size))
        )
    return pieces


def wrap_segments(segments: List[Segment], width: float) -> List[Line]:
    """
    Greedily wrap a sequence of styled segments into lines no wider than `width`.

    Words are never split across lines unless a single word is wider than
    `width`, in which case it is broken by character. Whitespace at the start
    and end of each line is dropped.

    Args:
        segments (List[Segment]): Segments in reading order.
        width (float): Available line width in points.

    Returns:
        List[Line]: Wrapped lines. Empty if the segments hold no visible text.
    """
    lines: List[Line] = []
    current: List[LinePiece] = []
    current_width = 0.0

    def flush():
        nonlocal current, current_width
        pieces = _strip_trailing_whitespace(current)
        if pieces:
            lines.append(Line(pieces=_merge_pieces(pieces)))
        current = []
        current_width = 0.0

    for segment in segments:
        style = segment.style
        for token in _TOKEN_PATTERN.findall(segment.text):
            if token.isspace():
                token = " "
            token_width = width_of(token, style.font, style.size)

            if token == " ":
                # Leading whitespace on a fresh line is dropped
                if current:
                    current.append(LinePiece(token, style, segment.link, token_width))
                    current_width += token_width
                continue

            if current_width + token_width <= width + WIDTH_EPSILON:
                current.append(LinePiece(token, style, segment.link, token_width))
                current_width += token_width
                continue

            if any(piece.text.strip() for piece in current):
                flush()

            if token_width <= width + WIDTH_EPSILON:
                current = [LinePiece(token, style, segment.link, token_width)]
                current_width = token_width
                continue

            chunks = _break_long_word(token, style, width)
            for chunk in chunks[:-1]:
                current = [
                    LinePiece(chunk, style, segment.link, width_of(chunk, style.font, style.size))
                ]
                flush()
            last = chunks[-1]
            last_width = width_of(last, style.font, style.size)
            current = [LinePiece(last, style, segment.link, last_width)]
            current_width = last_width

    flush()
    return lines


def measure_line(segments: List[Segment]) -> Line:
    """Measure segments as a single unwrapped line, whitespace runs collapsed to one space."""
    pieces = []
    for segment in segments:
        text = normalize_whitespace(segment.text)
        if text:
            style = segment.style
            pieces.append(LinePiece(text, style, segment.link, width_of(text, style.font, style.size)))
    return Line(pieces=_merge_pieces(pieces))
