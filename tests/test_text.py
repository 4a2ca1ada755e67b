import pytest

from structkit.text import (
    ByteIndex,
    Index,
    Size,
    Span,
    TextChange,
    TextLocation,
    newline_byte_indices,
    newline_indices,
    rev_newline_byte_indices,
    split_to_lines,
)


def assert_round_trip(text, index, location):
    assert TextLocation.from_index(text, index) == location
    assert location.to_index(text) == index


@pytest.mark.parametrize(
    "value, line, column",
    [(0, 0, 0), (5, 0, 5), (6, 1, 0), (9, 1, 3), (12, 1, 6), (13, 2, 0), (18, 2, 5)],
)
def test_converting_index_to_location(value, line, column):
    assert_round_trip("first\nsecond\nthird", Index(value), TextLocation(line, column))


def test_converting_index_to_location_edge_texts():
    assert_round_trip("", Index(0), TextLocation(0, 0))
    assert_round_trip("\n", Index(0), TextLocation(0, 0))
    assert_round_trip("\n", Index(1), TextLocation(1, 0))


def test_text_location_at_end():
    assert TextLocation.at_document_end("first\nsecond\nthird") == TextLocation(2, 5)
    assert TextLocation.at_document_end("") == TextLocation(0, 0)
    assert TextLocation.at_document_end("\n") == TextLocation(1, 0)


def test_indexing_utf8():
    text = "zazó黄ć gęślą jaźń"
    assert Span.from_range(2, 5).slice(text) == "zó黄"
    assert Span.from_range(5, 5).slice(text) == ""
    assert Size.from_text("日本語").value == 3
    assert Span.from_range(0, 0).slice("日本語") == ""
    assert Span.from_range(0, 3).slice("日本語") == "日本語"
    assert Span.from_range(0, 1).slice("日本語") == "日"
    assert Span.from_range(2, 3).slice("日本語") == "語"


def test_slice_out_of_range():
    with pytest.raises(IndexError):
        Span.from_range(2, 5).slice("abc")
    with pytest.raises(IndexError):
        Span.from_range(3, 3).slice("abc")


def test_index_arithmetic():
    assert Index(3) + Size(2) == Index(5)
    assert Index(5) - Size(2) == Index(3)
    assert Index(5) - Index(2) == Size(3)
    with pytest.raises(ValueError):
        Index(1) - Index(2)
    assert Index(3).checked_sub(Size(4)) is None
    assert Index(3).checked_sub(Size(3)) == Index(0)
    assert str(Index(7)) == "7"


def test_index_rejects_negative():
    with pytest.raises(ValueError):
        Index(-1)
    with pytest.raises(TypeError):
        Size("3")


def test_convert_byte_index():
    text = "aó黄b"
    assert Index.convert_byte_index(text, ByteIndex(0)) == Index(0)
    assert Index.convert_byte_index(text, ByteIndex(3)) == Index(2)
    assert Index.convert_byte_index(text, 6) == Index(3)
    with pytest.raises(UnicodeDecodeError):
        Index.convert_byte_index(text, ByteIndex(2))
    with pytest.raises(IndexError):
        Index.convert_byte_index(text, ByteIndex(20))


def test_byte_index():
    assert ByteIndex(4).next() == ByteIndex(5)
    assert ByteIndex.new_range(1, 3) == (ByteIndex(1), ByteIndex(3))


def test_size_operations():
    assert Size(2) + Size(3) == Size(5)
    assert Size(5) - Size(3) == Size(2)
    assert Size(2).checked_sub(Size(3)) is None
    assert Size(0).is_empty()
    assert Size(1).non_empty()
    assert not Size(0).non_empty()
    with pytest.raises(ValueError):
        Size(1) - Size(2)


def test_span_construction():
    assert Span.from_indices(Index(5), Index(2)) == Span(Index(2), Size(3))
    assert Span.from_beginning_to(Index(4)) == Span(Index(0), Size(4))
    assert Span.from_beginning(Size(3)) == Span(Index(0), Size(3))
    assert Span.from_range(1, 4) == range(1, 4)
    assert str(Span.from_range(1, 4)) == "1..4"


def test_span_queries():
    span = Span.from_range(2, 5)
    assert span.end() == Index(5)
    assert span.last() == Index(4)
    assert Span.from_range(2, 2).last() is None
    assert span.contains(Index(2))
    assert not span.contains(Index(5))
    assert span.contains_span(Span.from_range(3, 5))
    assert not span.contains_span(Span.from_range(1, 3))
    assert list(span.range()) == [2, 3, 4]


def test_span_mutations():
    span = Span.from_range(4, 6)
    span.extend_left(Size(2))
    assert span == range(2, 6)
    span.extend_right(Size(1))
    assert span == range(2, 7)
    span.shrink_left(Size(1))
    assert span == range(3, 7)
    span.shrink_right(Size(2))
    assert span == range(3, 5)
    span.move_left(Size(3))
    assert span == range(0, 2)
    span.move_right(Size(4))
    assert span == range(4, 6)
    span.set_left(Index(1))
    assert span == range(1, 6)
    span.set_right(Index(3))
    assert span == range(1, 3)


def test_span_mutation_underflow():
    span = Span.from_range(1, 2)
    with pytest.raises(ValueError):
        span.move_left(Size(2))
    with pytest.raises(ValueError):
        span.shrink_right(Size(2))


def test_text_location_constructors():
    assert TextLocation.at_line_begin(3) == TextLocation(3, 0)
    assert TextLocation.at_document_begin() == TextLocation(0, 0)
    assert str(TextLocation(2, 7)) == "2:7"
    assert TextLocation(1, 5) < TextLocation(2, 0)


def test_convert_ranges():
    text = "ab\ncd"
    start, end = TextLocation.convert_range(text, Index(1), Index(4))
    assert (start, end) == (TextLocation(0, 1), TextLocation(1, 1))
    assert TextLocation.convert_span(text, Span.from_range(1, 4)) == (start, end)
    assert TextLocation.convert_byte_range(text, ByteIndex(1), ByteIndex(4)) == (start, end)


def test_text_change_apply():
    assert TextChange.insert(Index(2), "XY").applied("abcd") == "abXYcd"
    assert TextChange.replace(Index(1), Index(3), "Z").applied("abcd") == "aZd"
    assert TextChange.delete(Index(0), Index(2)).applied("abcd") == "cd"
    with pytest.raises(IndexError):
        TextChange.delete(Index(0), Index(10)).applied("abcd")


def test_text_change_sizes():
    change = TextChange.replace(Index(2), Index(5), "x")
    assert change.replaced_size() == Size(3)
    assert change.replaced_span() == Span(Index(2), Size(3))
    assert TextChange.delete(Index(1), Index(2)).inserted == ""


def test_newline_indices():
    text = "ó\nb\n"
    assert list(newline_indices(text)) == [1, 3]
    assert list(newline_byte_indices(text)) == [2, 4]
    assert list(rev_newline_byte_indices(text)) == [4, 2]


def test_split_to_lines():
    assert list(split_to_lines("a\r\nb\nc")) == ["a", "b", "c"]
    assert list(split_to_lines("")) == [""]
    assert list(split_to_lines("x\n")) == ["x", ""]