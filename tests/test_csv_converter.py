"""Tests for the CSV bridge."""

import pytest

from toon_transformer.converters import (
    CsvToToonConverter,
    CsvToToonOptions,
    EmptyValueHandling,
    NestedDataHandling,
    QuoteMode,
    ToonToCsvConverter,
    ToonToCsvOptions,
)
from toon_transformer.types import ConversionError

USERS_CSV = "id,name,active\n1,Alice,true\n2,Bob,false\n"


class TestCsvToToonConverter:
    """Tests for CsvToToonConverter class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.converter = CsvToToonConverter()

    def test_convert(self):
        """Test rows become a tabular array under the wrapper key."""
        expected = "data[2]{active,id,name}:\ntrue,1,Alice\nfalse,2,Bob"
        assert self.converter.convert(USERS_CSV) == expected

    def test_to_rows_infers_types(self):
        """Test booleans and numbers are typed."""
        rows = self.converter.to_rows("a,b,c,d,e\nTRUE,1.5,+3,1_000,abc\n")
        assert rows == [{"a": True, "b": 1.5, "c": 3, "d": "1_000", "e": "abc"}]

    def test_without_type_inference(self):
        """Test every cell stays text."""
        converter = CsvToToonConverter(CsvToToonOptions(type_inference=False))
        assert converter.to_rows("a,b\n1,true\n") == [{"a": "1", "b": "true"}]

    @pytest.mark.parametrize("handling,expected", [
        (EmptyValueHandling.EMPTY_STRING, {"a": 1, "b": ""}),
        (EmptyValueHandling.NULL, {"a": 1, "b": None}),
        (EmptyValueHandling.SKIP, {"a": 1}),
    ])
    def test_empty_value_handling(self, handling, expected):
        """Test each empty cell policy."""
        converter = CsvToToonConverter(CsvToToonOptions(empty_value_handling=handling))
        assert converter.to_rows("a,b\n1,\n") == [expected]

    def test_null_value(self):
        """Test a marker cell reads as null."""
        converter = CsvToToonConverter(CsvToToonOptions(null_value="NA"))
        assert converter.to_rows("a,b\nNA,2\n") == [{"a": None, "b": 2}]

    def test_no_header(self):
        """Test generated column names when there is no header."""
        converter = CsvToToonConverter(CsvToToonOptions(has_header=False))
        assert converter.to_rows("1,2\n3,4\n") == [{"col0": 1, "col1": 2}, {"col0": 3, "col1": 4}]

    def test_custom_headers(self):
        """Test custom headers replace the header record."""
        converter = CsvToToonConverter(CsvToToonOptions(custom_headers=("a", "b")))
        assert converter.to_rows("x,y\n1,2\n") == [{"a": 1, "b": 2}]

    def test_skips_empty_lines_and_trims(self):
        """Test blank records are skipped and cells trimmed."""
        assert self.converter.to_rows("a, b\n\n 1 , x \n") == [{"a": 1, "b": "x"}]

    def test_quoted_cells(self):
        """Test quoted cells keep delimiters."""
        assert self.converter.to_rows('a,b\n"x,y",2\n') == [{"a": "x,y", "b": 2}]

    def test_semicolon_delimiter(self):
        """Test a custom CSV delimiter."""
        converter = CsvToToonConverter(CsvToToonOptions(delimiter=";"))
        assert converter.to_rows("a;b\n1;2\n") == [{"a": 1, "b": 2}]

    def test_custom_wrapper_key(self):
        """Test the wrapper key is configurable."""
        converter = CsvToToonConverter(CsvToToonOptions(wrapper_key="rows"))
        assert converter.convert("a\n1\n") == "rows[1]{a}:\n1"


class TestToonToCsvConverter:
    """Tests for ToonToCsvConverter class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.converter = ToonToCsvConverter()

    def test_convert_tabular(self):
        """Test a tabular array becomes CSV rows."""
        assert self.converter.convert("data[2]{id,name}:\n1,Alice\n2,Bob") == "id,name\n1,Alice\n2,Bob\n"

    def test_root_primitive_array(self):
        """Test primitives are written under a value column."""
        assert self.converter.from_value([1, 2]) == "value\n1\n2\n"

    def test_nulls_and_booleans(self):
        """Test null and boolean cells."""
        assert self.converter.from_value([{"a": None, "b": True}]) == "a,b\n,true\n"

    def test_header_union(self):
        """Test headers are the union of row keys in first-seen order."""
        assert self.converter.from_value([{"a": 1}, {"b": 2}]) == "a,b\n1,\n,2\n"

    def test_column_order(self):
        """Test an explicit column order."""
        converter = ToonToCsvConverter(ToonToCsvOptions(column_order=("b", "a")))
        assert converter.from_value([{"a": 1, "b": 2}]) == "b,a\n2,1\n"

    def test_nested_json_string(self):
        """Test nested values are written as JSON text."""
        value = {"rows": [{"id": 1, "meta": {"a": 1, "b": [1, 2]}}]}
        assert self.converter.from_value(value) == 'id,meta\n1,"{""a"":1,""b"":[1,2]}"\n'

    def test_nested_flatten(self):
        """Test nested objects are flattened into dotted columns."""
        converter = ToonToCsvConverter(
            ToonToCsvOptions(nested_data_handling=NestedDataHandling.FLATTEN)
        )
        value = {"rows": [{"id": 1, "meta": {"a": 1, "b": [1, 2]}}]}
        assert converter.from_value(value) == 'id,meta.a,meta.b\n1,1,"[1,2]"\n'

    def test_nested_error(self):
        """Test nested values can be refused."""
        converter = ToonToCsvConverter(
            ToonToCsvOptions(nested_data_handling=NestedDataHandling.ERROR)
        )
        with pytest.raises(ConversionError, match="meta"):
            converter.from_value([{"meta": {"a": 1}}])

    def test_array_path(self):
        """Test a dotted path selects the rows."""
        converter = ToonToCsvConverter(ToonToCsvOptions(array_path="a.b"))
        assert converter.from_value({"a": {"b": [{"x": 1}]}, "c": [{"y": 2}]}) == "x\n1\n"

        with pytest.raises(ConversionError, match="Array not found"):
            converter.from_value({"a": {}})

    def test_no_array(self):
        """Test an error when there is nothing tabular."""
        with pytest.raises(ConversionError, match="no array found"):
            self.converter.from_value({"a": 1})

    def test_empty_array(self):
        """Test an empty array writes nothing."""
        assert self.converter.convert("data[0]:") == ""

    def test_quote_all(self):
        """Test every cell can be quoted."""
        converter = ToonToCsvConverter(ToonToCsvOptions(quote_mode=QuoteMode.ALL))
        assert converter.from_value([{"a": 1}]) == '"a"\n"1"\n'

    def test_without_header(self):
        """Test the header record can be omitted."""
        converter = ToonToCsvConverter(ToonToCsvOptions(include_header=False, line_ending="\r\n"))
        assert converter.from_value([{"a": 1}, {"a": 2}]) == "1\r\n2\r\n"

    def test_csv_round_trip(self):
        """Test CSV survives a trip through TOON."""
        csv_text = "id,name\n1,Alice\n2,Bob\n"
        toon = CsvToToonConverter().convert(csv_text)
        assert self.converter.convert(toon) == csv_text
