"""
Tests for archive.py - the local append-only JSON archive.
"""
import json
from unittest.mock import patch


def _project(name):
    from schema import InvestorRecord, ProjectRecord

    return ProjectRecord(
        project_name=name,
        project_amount="$ 1 M",
        project_investors=[InvestorRecord(investor_name=f"{name} Capital")],
    )


class TestAppendProjects:

    def test_creates_archive_when_missing(self, tmp_path):
        from archive import append_projects

        path = tmp_path / "rootdata_projects.json"
        append_projects([_project("Acme")], path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [p["project_name"] for p in data["projects"]] == ["Acme"]
        assert data["projects"][0]["project_investors"][0]["investor_name"] == "Acme Capital"

    def test_appends_to_existing_archive(self, tmp_path):
        from archive import append_projects

        path = tmp_path / "rootdata_projects.json"
        path.write_text(json.dumps({"projects": [{"project_name": "Old"}]}), encoding="utf-8")

        append_projects([_project("New")], path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [p["project_name"] for p in data["projects"]] == ["Old", "New"]

    def test_append_is_associative(self, tmp_path):
        """A then B equals A+B in one call."""
        from archive import append_projects

        a = [_project("A1"), _project("A2")]
        b = [_project("B1")]

        split = tmp_path / "split.json"
        append_projects(a, split)
        append_projects(b, split)

        joined = tmp_path / "joined.json"
        append_projects(a + b, joined)

        assert json.loads(split.read_text()) == json.loads(joined.read_text())

    def test_corrupt_archive_is_treated_as_empty(self, tmp_path):
        from archive import append_projects

        path = tmp_path / "rootdata_projects.json"
        path.write_text("{not json", encoding="utf-8")

        append_projects([_project("Acme")], path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [p["project_name"] for p in data["projects"]] == ["Acme"]

    def test_output_is_pretty_printed(self, tmp_path):
        from archive import append_projects

        path = tmp_path / "rootdata_projects.json"
        append_projects([_project("Acme")], path)

        assert '\n  "projects": [' in path.read_text(encoding="utf-8")

    def test_write_errors_are_swallowed(self, tmp_path, caplog):
        from archive import append_projects

        with patch("archive.json.dump", side_effect=OSError("disk full")):
            append_projects([_project("Acme")], tmp_path / "archive.json")

        assert "Error appending to JSON archive" in caplog.text
