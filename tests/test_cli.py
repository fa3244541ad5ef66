"""Tests for the sqlscript command-line tool."""

import io
import json
import logging

import pytest

from sqlscript.cli import main, parse_edits


@pytest.fixture
def script(tmp_path):
    path = tmp_path / "script.sql"
    path.write_text("SELECT 1;\nSELECT 'a;b';\nSELECT 3")
    return path


def _raise_type_error(*args, **kwargs):
    raise TypeError("boom")


class TestSplit:
    def test_plain_output(self, script, capsys):
        assert main(["split", str(script)]) == 0
        out = capsys.readouterr().out
        assert out == (
            "-- [0:9]\nSELECT 1;\n"
            "-- [9:23]\nSELECT 'a;b';\n"
            "-- [23:32]\nSELECT 3\n"
        )

    def test_json_output(self, script, capsys):
        assert main(["split", "--json", str(script)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [d["text"] for d in data] == ["SELECT 1;", "SELECT 'a;b';", "SELECT 3"]
        assert data[0] == {"text": "SELECT 1;", "start": 0, "end": 9}

    def test_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("SELECT 1; SELECT 2;"))
        assert main(["split", "--json"]) == 0
        assert len(json.loads(capsys.readouterr().out)) == 2

    def test_missing_file(self, tmp_path, capsys):
        assert main(["split", str(tmp_path / "nope.sql")]) == 1
        assert "File not found" in capsys.readouterr().err


class TestAt:
    def test_statement_under_offset(self, script, capsys):
        assert main(["at", "12", str(script)]) == 0
        assert capsys.readouterr().out == "SELECT 'a;b';\n"

    def test_offset_out_of_range(self, script, capsys):
        assert main(["at", "500", str(script)]) == 1
        assert "outside the buffer" in capsys.readouterr().err

    def test_empty_buffer(self, tmp_path, capsys):
        path = tmp_path / "empty.sql"
        path.write_text("  ")
        assert main(["at", "0", str(path)]) == 1


class TestDelete:
    def test_build(self, tmp_path, capsys):
        rows = tmp_path / "rows.json"
        rows.write_text(json.dumps([[1, "Alice"], [2, "Bob"]]))
        argv = ["delete", "--table", "users", "--schema", "public", "--pk", "id",
                "--columns", "id,name", str(rows)]
        assert main(argv) == 0
        assert capsys.readouterr().out == (
            "DELETE FROM public.users\nWHERE (id = 1)\n   OR (id = 2);\n"
        )

    def test_extend_existing(self, tmp_path, capsys):
        rows = tmp_path / "rows.json"
        rows.write_text(json.dumps([[2, "Bob"]]))
        existing = tmp_path / "existing.sql"
        existing.write_text("DELETE FROM public.users\nWHERE (id = 1);")
        argv = ["delete", "--table", "users", "--schema", "public", "--pk", "id",
                "--columns", "id", "--columns", "name", "--existing", str(existing), str(rows)]
        assert main(argv) == 0
        assert capsys.readouterr().out == (
            "DELETE FROM public.users\nWHERE (id = 1)\n   OR (id = 2);\n"
        )

    def test_no_rows(self, tmp_path, capsys):
        rows = tmp_path / "rows.json"
        rows.write_text("[]")
        argv = ["delete", "--table", "users", "--schema", "public", "--columns", "id", str(rows)]
        assert main(argv) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_rows_not_arrays(self, tmp_path, capsys):
        rows = tmp_path / "rows.json"
        rows.write_text("[1, 2]")
        argv = ["delete", "--table", "t", "--schema", "s", "--pk", "id", "--columns", "id", str(rows)]
        assert main(argv) == 1
        assert capsys.readouterr().err == "Error: Row 0 is not an array\n"

    def test_rows_not_a_list(self, tmp_path, capsys):
        rows = tmp_path / "rows.json"
        rows.write_text('{"id": 1}')
        argv = ["delete", "--table", "t", "--schema", "s", "--columns", "id", str(rows)]
        assert main(argv) == 1
        assert "JSON array" in capsys.readouterr().err

    def test_extend_logs_decision(self, tmp_path, caplog, capsys):
        rows = tmp_path / "rows.json"
        rows.write_text("[[2]]")
        existing = tmp_path / "existing.sql"
        existing.write_text("SELECT 1;")
        argv = ["delete", "--table", "users", "--schema", "public", "--pk", "id",
                "--columns", "id", "--existing", str(existing), str(rows)]
        with caplog.at_level(logging.DEBUG, logger="sqlscript.dml"):
            assert main(argv) == 0
        assert "building a new one" in caplog.text
        assert capsys.readouterr().out == "DELETE FROM public.users\nWHERE (id = 2);\n"


class TestUpdate:
    def test_build(self, tmp_path, capsys):
        edits = tmp_path / "edits.json"
        edits.write_text(json.dumps([
            {"row_index": 0, "original_row": [100, 5, 2], "changes": {"2": 10}},
        ]))
        argv = ["update", "--table", "order_items", "--schema", "sales",
                "--pk", "order_id", "--pk", "product_id",
                "--columns", "order_id,product_id,quantity", str(edits)]
        assert main(argv) == 0
        assert capsys.readouterr().out == (
            "UPDATE sales.order_items SET quantity = 10 WHERE order_id = 100 AND product_id = 5;\n"
        )

    def test_empty_changes(self, tmp_path, capsys):
        edits = tmp_path / "edits.json"
        edits.write_text(json.dumps([{"original_row": [1], "changes": {}}]))
        argv = ["update", "--table", "t", "--schema", "s", "--pk", "id", "--columns", "id", str(edits)]
        assert main(argv) == 1
        assert "no changed columns" in capsys.readouterr().err

    def test_changes_not_an_object(self, tmp_path, capsys):
        edits = tmp_path / "edits.json"
        edits.write_text(json.dumps([{"original_row": [1], "changes": [5]}]))
        argv = ["update", "--table", "t", "--schema", "s", "--pk", "id", "--columns", "id", str(edits)]
        assert main(argv) == 1
        assert "changes must be an object" in capsys.readouterr().err

    def test_unexpected_error_is_reported(self, tmp_path, monkeypatch, capsys):
        edits = tmp_path / "edits.json"
        edits.write_text(json.dumps([{"original_row": [1], "changes": {"0": 2}}]))
        argv = ["update", "--table", "t", "--schema", "s", "--pk", "id", "--columns", "id", str(edits)]
        monkeypatch.setattr("sqlscript.cli.build_update_query", _raise_type_error)
        assert main(argv) == 1
        assert capsys.readouterr().err == "Error: boom\n"


class TestParseEdits:
    def test_keys_become_indices_in_order(self):
        edits = parse_edits([{"original_row": [1, "a", "b"], "changes": {"2": "x", "1": "y"}}])
        assert edits[0].row_index == 0
        assert list(edits[0].changes.items()) == [(2, "x"), (1, "y")]

    def test_rejects_non_object_item(self):
        with pytest.raises(ValueError, match="Edit 0 is not an object"):
            parse_edits([[1, 2]])

    def test_rejects_missing_original_row(self):
        with pytest.raises(ValueError, match="original_row must be an array"):
            parse_edits([{"changes": {"0": 1}}])


class TestExport:
    @pytest.fixture
    def result(self, tmp_path):
        path = tmp_path / "result.json"
        path.write_text(json.dumps({"columns": ["id", "name"], "rows": [[1, "O'Brien"]]}))
        return path

    def test_json(self, result, capsys):
        assert main(["export", str(result)]) == 0
        assert json.loads(capsys.readouterr().out) == [{"id": 1, "name": "O'Brien"}]

    def test_insert_postgres(self, result, capsys):
        argv = ["export", "--format", "insert", "--table", "users", "--dialect", "postgres", str(result)]
        assert main(argv) == 0
        assert capsys.readouterr().out == (
            "INSERT INTO users (id, name) VALUES\n  (1, 'O''Brien')\nON CONFLICT DO NOTHING;\n"
        )

    def test_insert_requires_table(self, result, capsys):
        assert main(["export", "--format", "insert", str(result)]) == 1
        assert "--table" in capsys.readouterr().err

    def test_missing_field(self, tmp_path, capsys):
        path = tmp_path / "result.json"
        path.write_text(json.dumps({"rows": [[1]]}))
        assert main(["export", str(path)]) == 1
        assert capsys.readouterr().err == "Error: Missing field 'columns'\n"
