"""puzzle_input.py - Line-oriented puzzle input.

Every solver reads its input through Input: the raw text, exposed either as a
string or as the list of its '\\n'-separated lines.
"""
from __future__ import annotations
from pathlib import Path
from typing import Iterable, List, Union
from .config import LINE_SEPARATOR


class Input:
    """Immutable wrapper around puzzle text.

    Derived instances (e.g. trim_trailing_newlines) are new objects; the
    stored text is never mutated.
    """

    __slots__ = ("_text",)

    def __init__(self, text: str):
        self._text = text

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Input":
        """Read the whole file at path as UTF-8 text.

        Raises:
            OSError: If the file is missing or unreadable (propagated as raised),
                     or if its contents are not valid UTF-8
        """
        path = Path(path)
        with path.open("r", encoding="utf-8", newline="") as f:
            try:
                text = f.read()
            except UnicodeDecodeError as e:
                raise OSError(f"Input is not valid UTF-8: {path}") from e
        return cls(text)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "Input":
        """Join lines with '\\n'; no trailing newline is added."""
        return cls(LINE_SEPARATOR.join(lines))

    @classmethod
    def from_str(cls, text: str) -> "Input":
        return cls(text)

    def trim_trailing_newlines(self) -> "Input":
        """Return a copy without any trailing '\\n' (interior blank lines kept)."""
        return Input(self._text.rstrip(LINE_SEPARATOR))

    def lines(self) -> List[str]:
        """Split on '\\n'. The empty text yields a single empty line."""
        return self._text.split(LINE_SEPARATOR)

    def as_text(self) -> str:
        return self._text

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Input):
            return NotImplemented
        return self._text == other._text

    def __hash__(self) -> int:
        return hash(self._text)

    def __repr__(self) -> str:
        return f"Input({self._text!r})"
