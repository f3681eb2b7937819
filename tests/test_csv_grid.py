import pytest
from lineup_prep.csv_grid import parse_csv, read_grid, rectangularize, strip_bom
from lineup_prep.errors import InputError

def test_quoted_fields_keep_commas_newlines_and_escaped_quotes():
    text = 'Main,"B, Stage"\n"a ""x""","multi\nline"\n'
    assert parse_csv(text) == [['Main', 'B, Stage'], ['a "x"', 'multi\nline']]

def test_crlf_line_endings():
    assert parse_csv('a,b\r\nc,d\r\n') == [['a', 'b'], ['c', 'd']]

def test_fields_are_trimmed():
    assert parse_csv(' a , b \n') == [['a', 'b']]

def test_last_row_without_newline_is_kept():
    assert parse_csv('a,b\nc,d') == [['a', 'b'], ['c', 'd']]

def test_interior_blank_rows_kept_trailing_blank_rows_dropped():
    assert parse_csv('H\nx\n\ny\n,\n\n') == [['H'], ['x'], [''], ['y']]

def test_unterminated_quote_is_flushed_at_end_of_text():
    assert parse_csv('a,"open\nstill') == [['a', 'open\nstill']]

def test_only_blank_rows_parse_to_nothing():
    assert parse_csv('\n,,\n \n') == []

def test_strip_bom():
    assert strip_bom('\ufeffMain') == 'Main'
    assert strip_bom('Main') == 'Main'

def test_rectangularize_pads_short_rows():
    assert rectangularize([['a'], ['b', 'c']], 3) == [['a', '', ''], ['b', 'c', '']]

def test_read_grid_strips_bom(write_csv):
    path = write_csv('Main,Side\nYheti,\n', encoding='utf-8-sig')
    assert read_grid(path) == [['Main', 'Side'], ['Yheti', '']]

def test_read_grid_rejects_empty_file(write_csv):
    with pytest.raises(InputError, match='appears empty'):
        read_grid(write_csv(''))

def test_read_grid_rejects_missing_file(tmp_path):
    with pytest.raises(InputError, match='does not exist'):
        read_grid(tmp_path / 'nope.csv')

def test_quote_may_open_and_close_inside_a_field():
    assert parse_csv('ab"c,d"e,f\n') == [['abc,de', 'f']]
