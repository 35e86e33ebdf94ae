"""
Display-format mini-language for rendering a song as a line of text.

Templates mix literal text with field specifiers and conditional groups:

    %a / %A   artist (uppercase applies the "The X" -> "X, The" sort key)
    %b / %B   album (same sort-key rule for the uppercase form)
    %l        duration as M:SS
    %t        title
    %n        track number
    %f        file URI
    %%        a literal percent sign
    \\x       the character x, taken literally
    {...}     a group that renders only when every field inside it resolved
    |         toggles validity inside a group (fallback branch)

A field that is empty or still holds an "Unknown ..." sentinel marks the
current group invalid, and an invalid group renders as an empty string.
"""

import re
from typing import TYPE_CHECKING, Callable, Dict

if TYPE_CHECKING:
    from .models import Song

UNKNOWN_PREFIX = "Unknown"

_LEADING_THE = re.compile(r"^\s*the\s+", re.IGNORECASE)


def swap_the(text: str) -> str:
    """Move a leading "The" to the end: "The Beatles" -> "Beatles, The"."""
    swapped, count = _LEADING_THE.subn("", text, count=1)
    if count:
        return swapped + ", The"
    return text


SongAccessor = Callable[["Song"], str]

FIELD_ACCESSORS: Dict[str, SongAccessor] = {
    "a": lambda song: song.artist,
    "A": lambda song: swap_the(song.artist),
    "b": lambda song: song.album,
    "B": lambda song: swap_the(song.album),
    "l": lambda song: song.duration_string,
    "t": lambda song: song.title,
    "n": lambda song: song.track,
    "f": lambda song: song.uri,
}


class _TemplateParser:
    """Single-use recursive parser over one template.

    The validity flag lives on the parser so that every nesting level
    reads and writes the same value.
    """

    def __init__(self, template: str, song: "Song"):
        self._template = template
        self._end = len(template)
        self._pos = 0
        self._song = song
        self.valid = True

    def parse(self) -> str:
        result = []

        while self._pos < self._end:
            char = self._template[self._pos]

            if char == "\\":
                self._pos += 1
                if self._pos < self._end:
                    result.append(self._template[self._pos])
            elif char == "{":
                self._pos += 1
                result.append(self.parse())
            elif char == "}":
                # Leave the closing brace for the caller to step over
                if not self.valid:
                    return ""
                break
            elif char == "|":
                self.valid = not self.valid
            elif char == "%":
                self._pos += 1
                specifier = self._template[self._pos] if self._pos < self._end else ""
                self._substitute(specifier, result)
            else:
                result.append(char)

            self._pos += 1

        return "".join(result)

    def _substitute(self, specifier: str, result: list) -> None:
        if specifier == "%":
            result.append("%")
            return

        accessor = FIELD_ACCESSORS.get(specifier) if specifier else None
        if accessor is None:
            self.valid = False
            return

        value = accessor(self._song)
        if not value or value.startswith(UNKNOWN_PREFIX):
            self.valid = False
        else:
            result.append(value)


def render_template(song: "Song", template: str) -> str:
    """Render ``template`` against ``song`` without touching its cache.

    Args:
        song: Song whose fields are substituted
        template: Format string (see module docstring)

    Returns:
        Rendered text; invalid groups collapse to empty strings
    """
    return _TemplateParser(template, song).parse()
