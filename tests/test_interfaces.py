"""
Test Suite for the Command Line and HTTP Interfaces

Tests:
- CLI analyze / classify / config commands and exit codes
- FastAPI endpoints
"""

import json

import pandas as pd
import pytest
import yaml
from fastapi.testclient import TestClient

import cli
from api import app


@pytest.fixture
def sample_csv(tmp_path):
    path = tmp_path / "people.csv"
    path.write_text(
        "id,name,active\n1,Ann,true\n2,Bob,false\n3,Cy,t\n4,Di,f\n",
        encoding="utf-8",
    )
    return path


class TestCLI:
    """Test CLI commands"""

    @pytest.fixture
    def runner(self):
        return cli.CLI()

    def test_analyze_writes_json_report(self, runner, sample_csv, tmp_path):
        output = tmp_path / "report.json"

        runner.run(["analyze", str(sample_csv), "--output", str(output)])

        report = json.loads(output.read_text())
        assert report["total_row_count"] == 5
        assert report["first_row_is_header"] is True
        assert report["field_counts"] == {"3": 5}
        assert [d["kind"] for d in report["type_details"]] == ["int", "string", "string"]
        assert report["type_details"][2]["truthy_value"] is False

    def test_analyze_multiple_files_with_summary(self, runner, sample_csv, tmp_path):
        other = tmp_path / "numbers.csv"
        other.write_text("1,2\n3,4\n5\n", encoding="utf-8")
        output = tmp_path / "reports.yaml"
        summary = tmp_path / "summary.csv"

        runner.run([
            "analyze", str(sample_csv), str(other),
            "--output", str(output), "--summary", str(summary), "--no-details",
        ])

        reports = yaml.safe_load(output.read_text())
        assert len(reports) == 2
        assert "type_details" not in reports[0]

        frame = pd.read_csv(summary)
        assert list(frame["malformed_row_count"]) == [0, 1]

    def test_analyze_with_delimiter_override(self, runner, tmp_path):
        path = tmp_path / "data.tsv"
        path.write_text("a\tb\n1\t2\n", encoding="utf-8")
        output = tmp_path / "report.json"

        runner.run(["analyze", str(path), "-d", "\\t", "-o", str(output)])

        assert json.loads(output.read_text())["field_counts"] == {"2": 2}

    def test_non_finite_values_written_as_strict_json(self, runner, tmp_path):
        path = tmp_path / "special.csv"
        path.write_text("a,b\n1,2\nnan,inf\n", encoding="utf-8")
        output = tmp_path / "report.json"

        runner.run(["analyze", str(path), "-o", str(output)])

        def reject(token):
            raise ValueError(f"non-standard JSON token {token}")

        report = json.loads(output.read_text(), parse_constant=reject)
        assert [d["converted_value"] for d in report["type_details"]] == ["nan", "inf"]

    def test_wrongly_typed_config_exits_non_zero(self, runner, sample_csv, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("scan:\n  header_window: '5'\n", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            runner.run(["analyze", str(sample_csv), "--config", str(config)])

        assert exc_info.value.code == 1

    def test_reader_error_exits_non_zero(self, runner, tmp_path):
        path = tmp_path / "broken.csv"
        path.write_text('a,b\n"x"y,z\n', encoding="utf-8")
        output = tmp_path / "report.json"

        with pytest.raises(SystemExit) as exc_info:
            runner.run(["analyze", str(path), "--preset", "strict", "-o", str(output)])

        assert exc_info.value.code == 1
        assert not output.exists()

    def test_empty_file_exits_non_zero(self, runner, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            runner.run(["analyze", str(path)])

        assert exc_info.value.code == 1

    def test_missing_file_exits_non_zero(self, runner, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            runner.run(["analyze", str(tmp_path / "nope.csv")])

        assert exc_info.value.code == 1

    def test_invalid_window_exits_non_zero(self, runner, sample_csv):
        with pytest.raises(SystemExit) as exc_info:
            runner.run(["analyze", str(sample_csv), "--window", "0"])

        assert exc_info.value.code == 1

    def test_classify(self, runner, capsys):
        runner.run(["classify", "42", "nope"])

        out = capsys.readouterr().out
        assert "int" in out
        assert "string" in out

    def test_config_create(self, runner, tmp_path):
        path = tmp_path / "config.yaml"

        runner.run(["config", "create", str(path)])

        assert yaml.safe_load(path.read_text())["scan"]["delimiter"] == ","

    def test_unknown_preset_exits_non_zero(self, runner):
        with pytest.raises(SystemExit) as exc_info:
            runner.run(["config", "show", "nope"])

        assert exc_info.value.code == 1


class TestAPI:
    """Test HTTP endpoints"""

    @pytest.fixture
    def client(self):
        return TestClient(app)

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_analyze_upload(self, client, sample_csv):
        with open(sample_csv, "rb") as f:
            response = client.post("/analyze", files={"file": ("people.csv", f, "text/csv")})

        assert response.status_code == 200
        body = response.json()
        assert body["path"] == "people.csv"
        assert body["total_row_count"] == 5
        assert body["first_row_is_header"] is True
        assert body["type_counts"]["int"] == 1

    def test_analyze_escaped_tab_delimiter(self, client):
        response = client.post(
            "/analyze",
            params={"delimiter": "\\t"},
            files={"file": ("data.tsv", b"a\tb\n1\t2\n", "text/tab-separated-values")},
        )

        assert response.status_code == 200
        assert response.json()["field_counts"] == {"2": 2}

    def test_analyze_reader_error(self, client):
        response = client.post(
            "/analyze",
            params={"preset": "strict"},
            files={"file": ("broken.csv", b'a,b\n"x"y,z\n', "text/csv")},
        )

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "READER_ERROR"

    def test_analyze_empty_upload(self, client):
        response = client.post("/analyze", files={"file": ("empty.csv", b"", "text/csv")})

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "PRECONDITION"

    def test_analyze_undecodable_upload(self, client):
        response = client.post("/analyze", files={"file": ("latin.csv", b"caf\xe9\n", "text/csv")})

        assert response.status_code == 400

    def test_classify(self, client):
        response = client.post("/classify", json={"values": ["1", "nan", None, "[1]"]})

        assert response.status_code == 200
        assertions = response.json()["assertions"]
        assert [a["kind"] for a in assertions] == ["int", "float", "nil", "string"]
        assert assertions[1]["converted_value"] == "nan"
        assert assertions[3]["is_array"] is True

    def test_presets(self, client):
        assert "tsv" in client.get("/presets").json()["presets"]
        assert client.get("/presets/tsv").json()["config"]["scan"]["delimiter"] == "\t"
        assert client.get("/presets/nope").status_code == 404
