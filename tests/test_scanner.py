"""
Test Suite for Reading and Scanning

Tests:
- DelimitedRowReader
- FileScanner
- FileReport rendering and summaries
"""

import io
import json

import pytest
import yaml

from csvprofile.config import ScanConfig
from csvprofile.errors import FieldCountError, HeaderDetectionError, ProfilerError, ReaderError
from csvprofile.inference import Kind
from csvprofile.reader import DelimitedRowReader, RowRead
from csvprofile.report import json_safe, render_report, reports_to_frame
from csvprofile.scanner import FileScanner, scan_file


def read_all(text, **kwargs):
    return list(DelimitedRowReader(io.StringIO(text, newline=""), **kwargs))


class TestDelimitedRowReader:
    """Test the csv adapter"""

    def test_rows_and_line_numbers(self):
        reads = read_all("a,b\n1,2\n")

        assert [r.row for r in reads] == [["a", "b"], ["1", "2"]]
        assert [r.line_number for r in reads] == [1, 2]
        assert all(r.error is None for r in reads)

    def test_blank_line_has_zero_fields(self):
        reads = read_all("a,b\n\n1,2\n")

        assert reads[1].field_count == 0
        assert reads[1].error is None

    def test_field_count_mismatch(self):
        reads = read_all("a,b,c\n1,2\n3,4,5\n")

        assert isinstance(reads[1].error, FieldCountError)
        assert reads[1].error.expected == 3
        assert reads[1].error.actual == 2
        assert reads[2].error is None

    def test_blank_first_line_does_not_fix_width(self):
        reads = read_all("\na,b\n1,2\n")

        assert all(r.error is None for r in reads)

    def test_leading_space_trimmed(self):
        assert read_all("a, b,  c\n")[0].row == ["a", "b", "c"]
        assert read_all("a, b\n", trim_leading_space=False)[0].row == ["a", " b"]

    def test_lazy_quotes(self):
        reads = read_all('h1,h2,h3\na,"b"c,d\n')

        assert reads[1].row == ["a", "bc", "d"]

    def test_strict_quotes_raise_with_row(self):
        with pytest.raises(ReaderError) as exc_info:
            read_all('h1,h2,h3\na,"b"c,d\n', lazy_quotes=False)

        error = exc_info.value
        assert error.line_number == 2
        assert error.raw_line == 'a,"b"c,d'
        assert error.to_dict()["code"] == "READER_ERROR"

    def test_custom_delimiter(self):
        assert read_all("a\tb\n", delimiter="\t")[0].row == ["a", "b"]

    def test_field_larger_than_csv_default_limit(self):
        blob = "x" * 200_000
        reads = read_all(f"id,blob\n1,{blob}\n2,y\n")

        assert reads[1].row == ["1", blob]
        assert all(r.error is None for r in reads)

    def test_configured_field_size_limit(self):
        with pytest.raises(ReaderError):
            read_all("id,blob\n1,xxxxxxxxxx\n", field_size_limit=5)


class TestFileScanner:
    """Test structure scanning"""

    @pytest.fixture
    def scanner(self):
        return FileScanner(ScanConfig())

    def test_counts_with_malformed_and_blank_rows(self, scanner):
        text = (
            "1,2,3,4,5\n"
            "2,3,4,5,6\n"
            "3,4,5,6,7\n"
            "x,y,z\n"
            "\n"
        )

        summary = scanner.scan_lines(io.StringIO(text, newline=""))

        assert summary.total_rows == 4
        assert dict(summary.field_counts) == {5: 3}
        assert summary.malformed_rows == 1
        assert summary.first_row_is_header is False

    def test_scan_rows_from_reads(self, scanner):
        reads = [
            RowRead(row=["a", "b"], line_number=1),
            RowRead(row=[], line_number=2),
            RowRead(row=["1"], line_number=3, error=FieldCountError(3, 2, 1)),
            RowRead(row=["1", "2"], line_number=4),
        ]

        summary = scanner.scan_rows(reads)

        assert summary.total_rows == 3
        assert dict(summary.field_counts) == {2: 2}
        assert summary.sample_rows == [["a", "b"], ["1", "2"]]
        assert summary.first_row_is_header is True

    def test_header_and_representative_row(self, scanner):
        text = "id,name,score\n1,Ann,3.5\n2,Bob,4.0\n3,Cy,1\n4,Di,2.5\n5,Ed,0.5\n"

        summary = scanner.scan_lines(io.StringIO(text, newline=""))

        assert summary.first_row_is_header is True
        assert len(summary.sample_rows) == 5
        assert summary.representative_row == ["2", "Bob", "4.0"]
        assert [a.kind for a in summary.type_details] == [Kind.INT, Kind.STRING, Kind.FLOAT]
        assert summary.type_tally.total == 3

    def test_short_file_uses_last_row(self, scanner):
        summary = scanner.scan_lines(io.StringIO("a,b\n1,2\n", newline=""))

        assert summary.representative_row == ["1", "2"]

    def test_custom_sample_settings(self):
        scanner = FileScanner(ScanConfig(header_window=2, sample_row_index=0))
        text = "1,a\n2,b\nx,c\n"

        summary = scanner.scan_lines(io.StringIO(text, newline=""))

        assert summary.first_row_is_header is False
        assert summary.representative_row == ["1", "a"]

    def test_empty_input_is_fatal(self, scanner):
        with pytest.raises(HeaderDetectionError):
            scanner.scan_lines(io.StringIO("\n\n", newline=""))

    def test_reader_error_aborts(self):
        scanner = FileScanner(ScanConfig(lazy_quotes=False))

        with pytest.raises(ReaderError):
            scanner.scan_lines(io.StringIO('a,b\n"x"y,z\n', newline=""))

    def test_scan_file(self, tmp_path):
        path = tmp_path / "people.csv"
        path.write_text("name,age\nAlice,30\nBob,45\nCara,51\n", encoding="utf-8")

        report = scan_file(path)

        assert report.path == str(path)
        assert report.total_row_count == 4
        assert report.field_counts == {2: 4}
        assert report.first_row_is_header is True
        assert report.is_regular is True
        assert report.elapsed_seconds >= 0
        assert report.started_at <= report.finished_at
        assert [a.converted_value for a in report.type_details] == ["Bob", 45]

    def test_scan_file_with_large_field(self, tmp_path):
        path = tmp_path / "blobs.csv"
        path.write_text(f"id,blob\n1,{'x' * 200_000}\n2,y\n3,z\n", encoding="utf-8")

        report = scan_file(path)

        assert report.total_row_count == 4
        assert report.field_counts == {2: 4}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProfilerError):
            scan_file(tmp_path / "missing.csv")

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "latin.csv"
        path.write_bytes("name\ncaf\xe9\n".encode("latin-1"))

        with pytest.raises(ReaderError):
            scan_file(path)


class TestFileReport:
    """Test report rendering"""

    @pytest.fixture
    def report(self, tmp_path):
        path = tmp_path / "mixed.csv"
        path.write_text("a,b,c\n1,2,3\n4,5\n6,nan,[x]\n", encoding="utf-8")
        return scan_file(path)

    def test_to_dict(self, report):
        data = report.to_dict()

        assert data["total_row_count"] == 4
        assert data["field_counts"] == {"3": 3}
        assert data["malformed_row_count"] == 1
        assert data["is_regular"] is False
        assert data["type_counts"]["int"] == 1
        assert data["type_counts"]["float"] == 1
        assert data["type_counts"]["string"] == 1
        assert data["type_details"][2]["is_array"] is True
        assert data["parse_started_at"] is not None

    def test_to_dict_without_details(self, report):
        assert "type_details" not in report.to_dict(include_details=False)

    def test_render_json_and_yaml(self, report):
        document = report.to_dict()

        assert json.loads(render_report(document, "json"))["total_row_count"] == 4
        assert yaml.safe_load(render_report(document, "yaml"))["field_counts"] == {"3": 3}

        with pytest.raises(ValueError):
            render_report(document, "xml")

    def test_json_safe(self, report):
        document = json_safe(report.to_dict())

        assert document["type_details"][1]["converted_value"] == "nan"
        json.dumps(document, allow_nan=False)

    def test_summary_frame(self, report):
        frame = reports_to_frame([report, report])

        assert len(frame) == 2
        assert frame.loc[0, "column_count"] == 3
        assert frame.loc[0, "malformed_row_count"] == 1
        assert "json-object_fields" in frame.columns
