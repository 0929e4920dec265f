import pytest

from readme_activity.exceptions import MarkerNotFoundError
from readme_activity.readme import (
    END_MARKER,
    START_MARKER,
    number_lines,
    patch,
    read_document,
    write_document,
)


def test_number_lines():
    assert number_lines(['a', 'b']) == ['1. a', '2. b']


class TestPatch:
    def test_fills_empty_region(self):
        doc = ['# Title', START_MARKER, END_MARKER, '## End']
        result = patch(doc, ['did X', 'did Y'])
        assert result.changed
        assert list(result.lines) == ['# Title', START_MARKER, '1. did X', '2. did Y', END_MARKER, '## End']

    def test_second_application_is_unchanged(self):
        doc = ['# Title', START_MARKER, END_MARKER, '## End']
        first = patch(doc, ['did X', 'did Y'])
        second = patch(first.lines, ['did X', 'did Y'])
        assert not second.changed
        assert second.lines == first.lines

    def test_creates_end_marker(self):
        doc = ['intro', START_MARKER, 'outro']
        result = patch(doc, ['a', 'b', 'c'])
        assert result.changed
        assert list(result.lines) == ['intro', START_MARKER, '1. a', '2. b', '3. c', END_MARKER, 'outro']

    def test_missing_start_marker(self):
        doc = ['# Title', END_MARKER]
        with pytest.raises(MarkerNotFoundError):
            patch(doc, ['a'])
        assert doc == ['# Title', END_MARKER]

    def test_markers_match_after_strip(self):
        doc = [f'  {START_MARKER} ', f'\t{END_MARKER}']
        result = patch(doc, ['a'])
        assert list(result.lines) == [f'  {START_MARKER} ', '1. a', f'\t{END_MARKER}']

    def test_no_new_lines_is_unchanged(self):
        doc = [START_MARKER, '1. old', END_MARKER]
        result = patch(doc, [])
        assert not result.changed
        assert list(result.lines) == doc

    def test_blank_lines_preserved(self):
        doc = [START_MARKER, '1. old A', '', '2. old B', END_MARKER]
        result = patch(doc, ['new A', 'new B'])
        assert result.changed
        assert list(result.lines) == [START_MARKER, '1. new A', '', '2. new B', END_MARKER]

    def test_whitespace_only_line_counts_as_blank(self):
        doc = [START_MARKER, '1. old A', '  ', '2. old B', END_MARKER]
        result = patch(doc, ['new A', 'new B'])
        assert list(result.lines) == [START_MARKER, '1. new A', '  ', '2. new B', END_MARKER]

    def test_leading_blank_line_from_formatter(self):
        doc = [START_MARKER, '', '1. old', '2. old', END_MARKER, 'tail']
        result = patch(doc, ['x', 'y'])
        assert list(result.lines) == [START_MARKER, '', '1. x', '2. y', END_MARKER, 'tail']

    def test_overwrite_does_not_grow_region(self):
        doc = [START_MARKER, '1. old', END_MARKER]
        result = patch(doc, ['a', 'b', 'c'])
        assert list(result.lines) == [START_MARKER, '1. a', END_MARKER]

    def test_overwrite_does_not_shrink_region(self):
        doc = [START_MARKER, '1. old', '2. old', '3. old', END_MARKER]
        result = patch(doc, ['a'])
        assert list(result.lines) == [START_MARKER, '1. a', '2. old', '3. old', END_MARKER]

    def test_blank_only_region_gets_filled(self):
        doc = [START_MARKER, '', END_MARKER]
        result = patch(doc, ['a'])
        assert list(result.lines) == [START_MARKER, '', '1. a', END_MARKER]

    def test_end_marker_before_start_is_ignored(self):
        doc = [END_MARKER, START_MARKER, 'rest']
        result = patch(doc, ['a'])
        assert list(result.lines) == [END_MARKER, START_MARKER, '1. a', END_MARKER, 'rest']

    def test_custom_markers(self):
        doc = ['<!--A-->', '<!--B-->']
        result = patch(doc, ['a'], '<!--A-->', '<!--B-->')
        assert list(result.lines) == ['<!--A-->', '1. a', '<!--B-->']

    def test_input_not_mutated(self):
        doc = [START_MARKER, '1. old', END_MARKER]
        patch(doc, ['new'])
        assert doc == [START_MARKER, '1. old', END_MARKER]


def test_document_round_trip(tmp_path):
    path = tmp_path / 'README.md'
    path.write_text(f'# Hi\n{START_MARKER}\n{END_MARKER}\n', encoding='utf-8')
    lines = read_document(path)
    assert lines == ['# Hi', START_MARKER, END_MARKER, '']
    write_document(path, patch(lines, ['x']).lines)
    assert path.read_text(encoding='utf-8') == f'# Hi\n{START_MARKER}\n1. x\n{END_MARKER}\n'


class TestCrlfDocuments:
    def test_fill_keeps_bytes_outside_region(self, tmp_path):
        path = tmp_path / 'README.md'
        path.write_bytes(f'# Hi\r\nintro\r\n{START_MARKER}\r\n{END_MARKER}\r\noutro\r\n'.encode())

        write_document(path, patch(read_document(path), ['x']).lines)

        data = path.read_bytes()
        assert data.startswith(f'# Hi\r\nintro\r\n{START_MARKER}\r\n'.encode())
        assert data.endswith(f'{END_MARKER}\r\noutro\r\n'.encode())
        assert data == f'# Hi\r\nintro\r\n{START_MARKER}\r\n1. x\r\n{END_MARKER}\r\noutro\r\n'.encode()

    def test_first_run_uses_crlf(self, tmp_path):
        path = tmp_path / 'README.md'
        path.write_bytes(f'top\r\n{START_MARKER}\r\nbottom\r\n'.encode())

        write_document(path, patch(read_document(path), ['x']).lines)

        assert path.read_bytes() == f'top\r\n{START_MARKER}\r\n1. x\r\n{END_MARKER}\r\nbottom\r\n'.encode()

    def test_reapplying_is_unchanged(self, tmp_path):
        path = tmp_path / 'README.md'
        path.write_bytes(f'{START_MARKER}\r\n1. old\r\n\r\n2. old\r\n{END_MARKER}\r\n'.encode())

        first = patch(read_document(path), ['a', 'b'])
        assert first.changed
        assert list(first.lines) == [f'{START_MARKER}\r', '1. a\r', '\r', '2. b\r', f'{END_MARKER}\r', '']

        write_document(path, first.lines)
        assert not patch(read_document(path), ['a', 'b']).changed
