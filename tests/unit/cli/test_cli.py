"""Unit tests for the mimsy command-line interface."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest
from click.testing import CliRunner

from mimsy import collection, fields, get_all_collections
from mimsy.cli import cli, render_document, sanitize_for_filename

COLLECTIONS = '''
from mimsy import builtins, collection, fields

Tags = collection("tags", {"name": fields.short_string()})
Posts = collection("posts", {
    "title": fields.short_string(constraints={"minLength": 5}),
    "author": fields.relation(relates_to=builtins.User),
    "_secret": fields.short_string(),
})
'''


def read_commented_json(path: Path) -> tuple[list[str], dict]:
    """Split a file into its ``//`` header lines and decoded JSON body."""
    lines = path.read_text().splitlines()
    header = [line for line in lines if line.startswith("//")]
    body = "\n".join(line for line in lines if not line.startswith("//"))
    return header, json.loads(body)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    """A project with a schema file and a collections module, inside a git repo."""
    (tmp_path / ".git").mkdir()
    (tmp_path / "mimsy.schema.json").write_text("{}")
    module = tmp_path / "src" / "lib" / "collections.py"
    module.parent.mkdir(parents=True)
    module.write_text(COLLECTIONS)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestExportSchema:

    def test_export_with_import(self, runner, tmp_path):
        source = tmp_path / "blog.py"
        source.write_text(COLLECTIONS)
        output = tmp_path / "out.json"

        result = runner.invoke(cli, ["export-schema", "-i", str(source), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "Collections exported: 2" in result.output
        document = json.loads(output.read_text())
        assert [c["name"] for c in document["collections"]] == ["tags", "posts"]
        assert "_secret" not in document["collections"][1]["schema"]
        assert "\n" not in output.read_text()

    def test_pretty_output(self, runner, tmp_path):
        output = tmp_path / "out.json"

        result = runner.invoke(cli, ["export-schema", "-o", str(output), "--pretty"])

        assert result.exit_code == 0, result.output
        assert output.read_text().startswith("{\n  ")

    def test_clear_drops_previous_declarations(self, runner, tmp_path):
        collection("leftover", {"title": fields.short_string()})
        output = tmp_path / "out.json"

        result = runner.invoke(cli, ["export-schema", "-o", str(output), "--clear"])

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text())["collections"] == []

    def test_without_clear_keeps_previous_declarations(self, runner, tmp_path):
        collection("leftover", {})
        output = tmp_path / "out.json"

        runner.invoke(cli, ["export-schema", "-o", str(output)])

        assert [c["name"] for c in json.loads(output.read_text())["collections"]] == ["leftover"]

    def test_missing_import_file_fails(self, runner, tmp_path):
        result = runner.invoke(
            cli, ["export-schema", "-i", str(tmp_path / "missing.py"), "-o", str(tmp_path / "out.json")]
        )

        assert result.exit_code == 1
        assert "Error: Failed to export schema" in result.output
        assert not (tmp_path / "out.json").exists()

    def test_non_json_option_reports_error(self, runner, tmp_path):
        source = tmp_path / "dated.py"
        source.write_text(
            "import datetime\n"
            "from mimsy import collection, fields\n"
            "collection('events', {'day': fields.date(default=datetime.date(2024, 1, 1))})\n"
        )
        output = tmp_path / "out.json"

        result = runner.invoke(cli, ["export-schema", "-i", str(source), "-o", str(output)])

        assert result.exit_code == 1
        assert "Error: Failed to export schema" in result.output
        assert "not JSON serializable" in result.output
        assert not output.exists()

    def test_relation_to_string_reports_error(self, runner, project):
        (project / "src" / "lib" / "collections.py").write_text(
            "from mimsy import collection, fields\n"
            "collection('posts', {'tag': fields.relation(relates_to='tags')})\n"
        )

        result = runner.invoke(cli, ["update"])

        assert result.exit_code == 1
        assert "Error: Failed to update schema" in result.output

    def test_default_output_path(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, ["export-schema"])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "schema.json").is_file()


class TestUpdate:

    def test_update_writes_schema_with_header(self, runner, project):
        result = runner.invoke(cli, ["update"])

        assert result.exit_code == 0, result.output
        header, document = read_commented_json(project / "mimsy.schema.json")
        assert header[0].startswith("// Updated at: ")
        assert header[1] == "// Version: mimsy@0.1.0"
        assert [c["name"] for c in document["collections"]] == ["tags", "posts"]
        assert document["collections"][1]["schema"]["author"]["relatesTo"] == "<builtins.user>"

    def test_update_clears_registry_by_default(self, runner, project):
        collection("leftover", {})

        runner.invoke(cli, ["update"])

        _, document = read_commented_json(project / "mimsy.schema.json")
        assert "leftover" not in [c["name"] for c in document["collections"]]

    def test_update_runs_twice_in_one_process(self, runner, project):
        assert runner.invoke(cli, ["update"]).exit_code == 0
        assert runner.invoke(cli, ["update"]).exit_code == 0
        assert [c.name for c in get_all_collections()] == ["tags", "posts"]

    def test_update_from_subdirectory(self, runner, project, monkeypatch):
        monkeypatch.chdir(project / "src" / "lib")

        result = runner.invoke(cli, ["update"])

        assert result.exit_code == 0, result.output
        _, document = read_commented_json(project / "mimsy.schema.json")
        assert len(document["collections"]) == 2

    def test_update_without_collections_file(self, runner, project):
        (project / "src" / "lib" / "collections.py").unlink()

        result = runner.invoke(cli, ["update"])

        assert result.exit_code == 1
        assert "No collections file found" in result.output

    def test_update_outside_project(self, runner, tmp_path, monkeypatch):
        (tmp_path / ".git").mkdir()
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, ["update"])

        assert result.exit_code == 1
        assert "No mimsy project found" in result.output

    def test_collections_file_setting(self, runner, project, monkeypatch):
        (project / "cms.py").write_text(COLLECTIONS)
        (project / "src" / "lib" / "collections.py").unlink()
        monkeypatch.setenv("MIMSY_COLLECTIONS_FILE", "cms.py")

        result = runner.invoke(cli, ["update"])

        assert result.exit_code == 0, result.output


class TestApply:

    def test_apply_writes_snapshot(self, runner, project):
        result = runner.invoke(cli, ["apply", "-d", "Add Tags & Posts collections!"])

        assert result.exit_code == 0, result.output
        snapshots = list((project / ".mimsy" / "schemas").glob("*.jsonc"))
        assert len(snapshots) == 1
        snapshot = snapshots[0]
        today = datetime.now(timezone.utc).strftime("%y%m%d")
        assert snapshot.name == f"{today}-add-tags-posts-colle.jsonc"

        header, document = read_commented_json(snapshot)
        assert header[0] == "// Description: Add Tags & Posts collections!"
        assert header[1].startswith("// Applied at: ")
        assert header[2] == "// Version: mimsy@0.1.0"
        assert len(document["collections"]) == 2

    def test_apply_prompts_for_description(self, runner, project):
        result = runner.invoke(cli, ["apply"], input="Initial schema\n")

        assert result.exit_code == 0, result.output
        assert "Please describe the changes being applied" in result.output
        assert list((project / ".mimsy" / "schemas").glob("*-initial-schema.jsonc"))

    def test_apply_rejects_blank_description(self, runner, project):
        result = runner.invoke(cli, ["apply", "-d", "   "])

        assert result.exit_code == 1
        assert "Description is required" in result.output


class TestInit:

    def test_init_creates_project(self, runner, tmp_path, monkeypatch):
        (tmp_path / ".git").mkdir()
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(
            cli,
            [
                "init",
                "--schema-path", "mimsy.schema.json",
                "--collections-path", "src/lib/collections.py",
                "--yes",
            ],
        )

        assert result.exit_code == 0, result.output
        assert json.loads((tmp_path / "mimsy.config.json").read_text()) == {"basePath": "."}
        assert (tmp_path / "src" / "lib" / "collections.py").is_file()

        document = json.loads((tmp_path / "mimsy.schema.json").read_text())
        posts = document["collections"][1]
        assert posts["name"] == "posts"
        assert posts["schema"]["tags"]["type"] == "multi_relation"
        assert posts["schema"]["cover_image"]["relatesTo"] == "<builtins.media>"

        assert runner.invoke(cli, ["update"]).exit_code == 0

    def test_init_prompts_and_can_be_cancelled(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(cli, ["init"], input="\n\nn\n")

        assert result.exit_code == 0, result.output
        assert "Initialization cancelled." in result.output
        assert not (tmp_path / "mimsy.config.json").exists()

    def test_init_rejects_wrong_extensions(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(
            cli, ["init", "--schema-path", "schema.yaml", "--collections-path", "c.py", "--yes"]
        )

        assert result.exit_code == 1
        assert ".json extension" in result.output


class TestInfo:

    def test_info(self, runner, monkeypatch):
        monkeypatch.setenv("MIMSY_API_URL", "https://cms.example.com")

        result = runner.invoke(cli, ["info"])

        assert result.exit_code == 0
        assert "Mimsy v0.1.0" in result.output
        assert "https://cms.example.com" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert "0.1.0" in result.output


class TestHelpers:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Add tags", "add-tags"),
            ("  --Fix: Posts!!  ", "fix-posts"),
            ("a very long description of changes", "a-very-long-descript"),
            ("!!!", ""),
        ],
    )
    def test_sanitize_for_filename(self, text, expected):
        assert sanitize_for_filename(text) == expected

    def test_render_document_with_header(self):
        rendered = render_document({"collections": []}, ["Updated at: now"])

        assert rendered.splitlines()[0] == "// Updated at: now"
        assert json.loads("\n".join(rendered.splitlines()[1:])) == {"collections": []}

    def test_render_document_without_header(self):
        assert render_document({"a": 1}) == '{\n  "a": 1\n}'
