"""Text positions, sizes, spans and edits.

Character-based quantities (``Index``, ``Size``, ``Span``) count Unicode
code points. ``ByteIndex`` counts bytes of the UTF-8 encoding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Union

__all__ = [
    "Index",
    "ByteIndex",
    "Size",
    "Span",
    "TextLocation",
    "TextChange",
    "newline_indices",
    "newline_byte_indices",
    "rev_newline_byte_indices",
    "split_to_lines",
]


def _check_count(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


def _difference(left: int, right: int) -> int:
    if right > left:
        raise ValueError(f"subtraction underflow: {left} - {right}")
    return left - right


# === Index ===


@dataclass(frozen=True, order=True)
class Index:
    """Index of a character in a text."""

    value: int = 0

    def __post_init__(self) -> None:
        _check_count("index", self.value)

    @classmethod
    def convert_byte_index(cls, content: str, index: Union[ByteIndex, int]) -> Index:
        """Convert a byte index in ``content`` into a character index.

        Raises IndexError when the byte index is past the end and
        UnicodeDecodeError when it does not fall on a character boundary.
        """
        position = index.value if isinstance(index, ByteIndex) else _check_count("index", index)
        encoded = content.encode("utf-8")
        if position > len(encoded):
            raise IndexError(f"byte index {position} out of range for {len(encoded)} bytes")
        return cls(len(encoded[:position].decode("utf-8")))

    def checked_sub(self, size: Size) -> Optional[Index]:
        """Return ``self - size``, or None if the result would be negative."""
        if size.value > self.value:
            return None
        return Index(self.value - size.value)

    def __add__(self, other: object) -> Index:
        if isinstance(other, Size):
            return Index(self.value + other.value)
        return NotImplemented

    def __sub__(self, other: object) -> Union[Index, Size]:
        if isinstance(other, Size):
            return Index(_difference(self.value, other.value))
        if isinstance(other, Index):
            return Size(_difference(self.value, other.value))
        return NotImplemented

    def __str__(self) -> str:
        return str(self.value)


# === ByteIndex ===


@dataclass(frozen=True, order=True)
class ByteIndex:
    """Index of a byte in the UTF-8 encoding of a text."""

    value: int = 0

    def __post_init__(self) -> None:
        _check_count("byte index", self.value)

    def next(self) -> ByteIndex:
        """Return the index of the following byte."""
        return ByteIndex(self.value + 1)

    @classmethod
    def new_range(cls, start: int, end: int) -> tuple[ByteIndex, ByteIndex]:
        """Wrap a ``start, end`` pair of integers as byte indices."""
        return cls(start), cls(end)


# === Size ===


@dataclass(frozen=True, order=True)
class Size:
    """Number of characters."""

    value: int = 0

    def __post_init__(self) -> None:
        _check_count("size", self.value)

    @classmethod
    def from_text(cls, text: str) -> Size:
        """Return the number of characters in ``text``."""
        return cls(len(text))

    def non_empty(self) -> bool:
        """True when the size is above zero."""
        return self.value > 0

    def is_empty(self) -> bool:
        """True when the size is zero."""
        return self.value == 0

    def checked_sub(self, other: Size) -> Optional[Size]:
        """Return ``self - other``, or None if the result would be negative."""
        if other.value > self.value:
            return None
        return Size(self.value - other.value)

    def __add__(self, other: object) -> Size:
        if isinstance(other, Size):
            return Size(self.value + other.value)
        return NotImplemented

    def __sub__(self, other: object) -> Size:
        if isinstance(other, Size):
            return Size(_difference(self.value, other.value))
        return NotImplemented

    def __str__(self) -> str:
        return str(self.value)


# === Span ===


@dataclass(order=True)
class Span:
    """A run of characters given by its start index and its size."""

    index: Index = Index(0)
    size: Size = Size(0)

    @classmethod
    def from_indices(cls, begin: Index, end: Index) -> Span:
        """Span between two indices, in either order."""
        if end < begin:
            begin, end = end, begin
        return cls(begin, end - begin)

    @classmethod
    def from_range(cls, start: int, end: int) -> Span:
        """Span between two integer positions, in either order."""
        return cls.from_indices(Index(start), Index(end))

    @classmethod
    def from_beginning_to(cls, index: Index) -> Span:
        """Span from zero up to ``index``."""
        return cls.from_indices(Index(0), index)

    @classmethod
    def from_beginning(cls, size: Size) -> Span:
        """Span from zero with the given size."""
        return cls(Index(0), size)

    def last(self) -> Optional[Index]:
        """Index of the last character, or None for an empty span."""
        if self.is_empty():
            return None
        return self.end().checked_sub(Size(1))

    def end(self) -> Index:
        """Index just past the last character."""
        return self.index + self.size

    def contains(self, index: Index) -> bool:
        """True when the character at ``index`` is in the span."""
        return self.index <= index < self.end()

    def contains_span(self, span: Span) -> bool:
        """True when the whole of ``span`` lies inside this span."""
        return self.index <= span.index and self.end() >= span.end()

    def range(self) -> range:
        """The span as a range of integer positions."""
        return range(self.index.value, self.end().value)

    def extend_left(self, size: Size) -> None:
        """Grow the span by moving its start to the left."""
        self.index = self.index - size
        self.size = self.size + size

    def extend_right(self, size: Size) -> None:
        """Grow the span by moving its end to the right."""
        self.size = self.size + size

    def shrink_left(self, size: Size) -> None:
        """Shrink the span by moving its start to the right."""
        new_size = self.size - size
        self.index = self.index + size
        self.size = new_size

    def shrink_right(self, size: Size) -> None:
        """Shrink the span by moving its end to the left."""
        self.size = self.size - size

    def move_left(self, size: Size) -> None:
        """Move the whole span left, keeping its size."""
        self.index = self.index - size

    def move_right(self, size: Size) -> None:
        """Move the whole span right, keeping its size."""
        self.index = self.index + size

    def set_left(self, new_left: Index) -> None:
        """Move the start of the span, keeping its end."""
        end = self.end()
        new_size = end - new_left
        self.index = new_left
        self.size = new_size

    def set_right(self, new_right: Index) -> None:
        """Move the end of the span, keeping its start."""
        self.size = new_right - self.index

    def is_empty(self) -> bool:
        """True when the span holds no characters."""
        return self.size.is_empty()

    def slice(self, text: str) -> str:
        """Return the characters of ``text`` covered by the span.

        Raises IndexError when the start is not a character of ``text`` or the
        span runs past its end.
        """
        start = self.index.value
        end = self.end().value
        if start >= len(text) or end > len(text):
            raise IndexError(f"span {self} out of range for text of {len(text)} characters")
        return text[start:end]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, range):
            return other.step == 1 and self.range() == other
        if isinstance(other, Span):
            return (self.index, self.size) == (other.index, other.size)
        return NotImplemented

    def __str__(self) -> str:
        return f"{self.index.value}..{self.end().value}"


# === TextLocation ===


def _after_chars(text: str) -> TextLocation:
    return TextLocation(text.count("\n"), len(text) - (text.rfind("\n") + 1))


@dataclass(frozen=True, order=True)
class TextLocation:
    """Position of a character in a multiline text, by line and column."""

    line: int = 0
    column: int = 0

    def __post_init__(self) -> None:
        _check_count("line", self.line)
        _check_count("column", self.column)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"

    @classmethod
    def at_line_begin(cls, line: int) -> TextLocation:
        """Location at the start of ``line``."""
        return cls(line, 0)

    @classmethod
    def at_document_begin(cls) -> TextLocation:
        """Location at the start of the document."""
        return cls(0, 0)

    @classmethod
    def at_document_end(cls, content: str) -> TextLocation:
        """Location just past the last character of ``content``."""
        return _after_chars(content)

    @classmethod
    def from_index(cls, content: str, index: Index) -> TextLocation:
        """Location of the character index ``index`` in ``content``."""
        return _after_chars(content[: index.value])

    def to_index(self, content: str) -> Index:
        """Character index of this location in ``content``.

        Out-of-bounds locations give an unspecified index but never raise.
        """
        line_start = 0
        if self.line > 0:
            newlines = newline_indices(content)
            found = next(
                (ix for n, ix in enumerate(newlines) if n == self.line - 1), None
            )
            line_start = 0 if found is None else found + 1
        return Index(line_start + self.column)

    @classmethod
    def convert_range(
        cls, content: str, start: Index, end: Index
    ) -> tuple[TextLocation, TextLocation]:
        """Convert a pair of character indices into a pair of locations."""
        return cls.from_index(content, start), cls.from_index(content, end)

    @classmethod
    def convert_span(cls, content: str, span: Span) -> tuple[TextLocation, TextLocation]:
        """Convert a span into the locations of its start and end."""
        return cls.convert_range(content, span.index, span.end())

    @classmethod
    def convert_byte_range(
        cls, content: str, start: ByteIndex, end: ByteIndex
    ) -> tuple[TextLocation, TextLocation]:
        """Convert a pair of byte indices into a pair of locations."""
        return cls.convert_range(
            content,
            Index.convert_byte_index(content, start),
            Index.convert_byte_index(content, end),
        )


# === TextChange ===


@dataclass(frozen=True)
class TextChange:
    """Replacement of the text between ``start`` and ``end`` by ``inserted``."""

    start: Index
    end: Index
    inserted: str = ""

    @classmethod
    def insert(cls, at: Index, text: str) -> TextChange:
        """Change that inserts ``text`` at ``at``."""
        return cls(at, at, text)

    @classmethod
    def replace(cls, start: Index, end: Index, text: str) -> TextChange:
        """Change that replaces the text between ``start`` and ``end`` by ``text``."""
        return cls(start, end, text)

    @classmethod
    def delete(cls, start: Index, end: Index) -> TextChange:
        """Change that deletes the text between ``start`` and ``end``."""
        return cls(start, end, "")

    def replaced_size(self) -> Size:
        """Size of the replaced text."""
        return self.end - self.start

    def replaced_span(self) -> Span:
        """Span of the replaced text."""
        return Span(self.start, self.replaced_size())

    def applied(self, target: str) -> str:
        """Return ``target`` with the change applied.

        The positions are taken as offsets into the UTF-8 encoding of
        ``target``. Raises IndexError when they are out of bounds or reversed,
        and UnicodeDecodeError when they split a character.
        """
        start, end = self.start.value, self.end.value
        encoded = target.encode("utf-8")
        if start > end or end > len(encoded):
            raise IndexError(
                f"range {start}..{end} out of bounds for text of {len(encoded)} bytes"
            )
        head = encoded[:start].decode("utf-8")
        tail = encoded[end:].decode("utf-8")
        return head + self.inserted + tail


# === Utilities ===


def newline_indices(text: str) -> Iterator[int]:
    """Yield the character indices of newline characters."""
    return (ix for ix, char in enumerate(text) if char == "\n")


def newline_byte_indices(text: str) -> Iterator[int]:
    """Yield the byte indices of newline characters."""
    return (ix for ix, byte in enumerate(text.encode("utf-8")) if byte == 0x0A)


def rev_newline_byte_indices(text: str) -> Iterator[int]:
    """Yield the byte indices of newline characters, from the end backwards."""
    encoded = text.encode("utf-8")
    return (ix for ix in range(len(encoded) - 1, -1, -1) if encoded[ix] == 0x0A)


def split_to_lines(text: str) -> Iterator[str]:
    """Split ``text`` into lines, accepting both LF and CRLF endings."""
    for line in text.split("\n"):
        yield line[:-1] if line.endswith("\r") else line