"""Tests for the CLI interface."""

import json

import pytest
import yaml
from click.testing import CliRunner

from responsive_privacy import __version__
from responsive_privacy.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def records_file(tmp_path, team_member, blog_post):
    path = tmp_path / "content.json"
    path.write_text(
        json.dumps({"team": [team_member], "posts": [blog_post]}), encoding="utf-8"
    )
    return path


@pytest.fixture
def board_config_file(tmp_path):
    path = tmp_path / "board.yaml"
    path.write_text(
        yaml.safe_dump({"collections": {"team": {"fields": {"board": "OR-02"}}}}),
        encoding="utf-8",
    )
    return path


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "disclosure-level filtering" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert f"responsive-privacy v{__version__}" in result.output

    @pytest.mark.parametrize("command", ["transform", "check", "attributes", "status"])
    def test_command_help(self, runner, command):
        result = runner.invoke(cli, [command, "--help"])
        assert result.exit_code == 0


class TestTransformCommand:
    """Test the transform command."""

    def test_transform_writes_filtered_records(self, runner, records_file, config_file):
        result = runner.invoke(
            cli, ["transform", str(records_file), "-c", str(config_file), "-l", "2"]
        )

        assert result.exit_code == 0, result.output
        assert "Filtering at Level 2 (Professional Identity)" in result.output
        assert "Responsive Privacy Build Summary" in result.output

        output_path = records_file.parent / "content_filtered.json"
        assert output_path.exists()
        filtered = json.loads(output_path.read_text(encoding="utf-8"))
        member = filtered["team"][0]
        assert "bio" not in member
        assert member["email"] == "Contact the organization"
        # posts has no mapping in this config
        assert filtered["posts"][0]["author"] == "Jane Smith"

    def test_explicit_output_and_no_summary(self, runner, records_file, config_file, tmp_path):
        output_path = tmp_path / "out" / "filtered.json"
        output_path.parent.mkdir()

        result = runner.invoke(
            cli,
            [
                "transform",
                str(records_file),
                "-c",
                str(config_file),
                "-l",
                "0",
                "-o",
                str(output_path),
                "--no-summary",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Build Summary" not in result.output
        filtered = json.loads(output_path.read_text(encoding="utf-8"))
        assert filtered["team"][0]["name"] == "Staff Member"

    def test_level_from_environment(self, runner, records_file, config_file):
        result = runner.invoke(
            cli,
            ["transform", str(records_file), "-c", str(config_file)],
            env={"PRIVACY_LEVEL": "1"},
        )
        assert result.exit_code == 0, result.output
        assert "Filtering at Level 1" in result.output

    def test_invalid_level_falls_back(self, runner, records_file, config_file):
        result = runner.invoke(
            cli, ["transform", str(records_file), "-c", str(config_file), "-l", "9"]
        )
        assert result.exit_code == 0, result.output
        assert "Filtering at Level 4 (Full Transparency)" in result.output

    def test_single_list_requires_collection(self, runner, tmp_path, config_file, team_member):
        records = tmp_path / "team.yaml"
        records.write_text(yaml.safe_dump([team_member]), encoding="utf-8")

        result = runner.invoke(cli, ["transform", str(records), "-c", str(config_file)])
        assert result.exit_code != 0
        assert "--collection" in result.output

        result = runner.invoke(
            cli,
            ["transform", str(records), "-c", str(config_file), "--collection", "team", "-l", "1"],
        )
        assert result.exit_code == 0, result.output
        filtered = json.loads((tmp_path / "team_filtered.json").read_text(encoding="utf-8"))
        assert filtered == {"team": [{"name": "Staff Member", "role": "Program Director",
                                      "email": "Contact the organization",
                                      "department": "Programs", "slug": "jane-smith"}]}

    def test_missing_collection(self, runner, records_file, config_file):
        result = runner.invoke(
            cli,
            ["transform", str(records_file), "-c", str(config_file), "--collection", "events"],
        )
        assert result.exit_code != 0
        assert "not found" in result.output

    def test_workers(self, runner, records_file, config_file):
        result = runner.invoke(
            cli, ["transform", str(records_file), "-c", str(config_file), "-l", "1", "-w", "4"]
        )
        assert result.exit_code == 0, result.output

    def test_strict_fails_on_compliance_warning(self, runner, tmp_path, board_config_file):
        records = tmp_path / "board.json"
        records.write_text(json.dumps({"team": [{"board": "Trustee"}]}), encoding="utf-8")

        result = runner.invoke(
            cli, ["transform", str(records), "-c", str(board_config_file), "-l", "1", "--strict"]
        )
        assert result.exit_code != 0
        assert "1 compliance warnings require review" in result.output

        result = runner.invoke(
            cli, ["transform", str(records), "-c", str(board_config_file), "-l", "1"]
        )
        assert result.exit_code == 0
        assert "WARNING (team)" in result.output

    def test_invalid_config(self, runner, records_file, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text(yaml.safe_dump({"collections": {}}), encoding="utf-8")

        result = runner.invoke(cli, ["transform", str(records_file), "-c", str(bad)])
        assert result.exit_code != 0
        assert "at least one collection" in result.output
        assert "Hint: Map at least one content collection" in result.output


class TestRecordsFileErrors:
    """Test that malformed records files fail with a clean error."""

    @staticmethod
    def _assert_clean_failure(result, fragment):
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error:" in result.output
        assert fragment in result.output

    def test_single_record_mapping(self, runner, tmp_path, config_file):
        records = tmp_path / "member.json"
        records.write_text(json.dumps({"name": "Jane", "slug": "jane"}), encoding="utf-8")

        result = runner.invoke(cli, ["transform", str(records), "-c", str(config_file), "-l", "2"])
        self._assert_clean_failure(result, "Collection 'name'")
        assert "must be a list of records" in result.output

    @pytest.mark.parametrize(
        "filename,content",
        [("bad.yaml", "team: [unclosed"), ("bad.json", '{"team": [')],
    )
    def test_malformed_file(self, runner, tmp_path, config_file, filename, content):
        records = tmp_path / filename
        records.write_text(content, encoding="utf-8")

        result = runner.invoke(cli, ["transform", str(records), "-c", str(config_file)])
        self._assert_clean_failure(result, "Could not parse records file")

    def test_undecodable_file(self, runner, tmp_path, config_file):
        records = tmp_path / "latin1.yaml"
        records.write_bytes("team:\n  - name: J\xe9r\xf4me\n".encode("latin-1"))

        result = runner.invoke(cli, ["transform", str(records), "-c", str(config_file)])
        self._assert_clean_failure(result, "Could not parse records file")

    def test_non_mapping_records(self, runner, tmp_path, config_file):
        records = tmp_path / "content.json"
        records.write_text(json.dumps({"team": [{"name": "Jane"}, "Sam"]}), encoding="utf-8")

        result = runner.invoke(cli, ["transform", str(records), "-c", str(config_file)])
        self._assert_clean_failure(result, "Record 1 of collection 'team'")

    def test_non_mapping_items_in_single_list(self, runner, tmp_path, config_file):
        records = tmp_path / "team.yaml"
        records.write_text(yaml.safe_dump(["Jane", "Sam"]), encoding="utf-8")

        result = runner.invoke(
            cli, ["transform", str(records), "-c", str(config_file), "--collection", "team"]
        )
        self._assert_clean_failure(result, "Record 0 of collection 'team'")

    def test_selected_collection_is_checked(self, runner, tmp_path, config_file):
        records = tmp_path / "content.json"
        records.write_text(json.dumps({"team": {"name": "Jane"}}), encoding="utf-8")

        result = runner.invoke(
            cli, ["transform", str(records), "-c", str(config_file), "--collection", "team"]
        )
        self._assert_clean_failure(result, "Collection 'team'")


class TestCheckCommand:
    """Test config validation from the command line."""

    def test_valid(self, runner, config_file):
        result = runner.invoke(cli, ["check", str(config_file)])
        assert result.exit_code == 0
        assert "is valid (1 collections)" in result.output

    def test_invalid(self, runner, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text(
            yaml.safe_dump({"collections": {"team": {}}, "attributes": {"ID-01": {"name": "x"}}}),
            encoding="utf-8",
        )
        result = runner.invoke(cli, ["check", str(bad)])
        assert result.exit_code != 0
        assert "Invalid configuration" in result.output


class TestInfoCommands:
    """Test the attributes and status commands."""

    def test_attributes(self, runner):
        result = runner.invoke(cli, ["attributes", "-l", "1"])
        assert result.exit_code == 0
        assert "Level 1 - Role-Only Visibility" in result.output

        lines = {line.split()[0]: line for line in result.output.splitlines()[1:] if line.strip()}
        assert len(lines) == 20
        assert lines["ID-03"].rstrip().endswith("visible")
        assert "hidden" in lines["CV-01"]
        assert "[compliance]" in lines["OR-02"]

    def test_attributes_with_override(self, runner, config_file):
        result = runner.invoke(cli, ["attributes", "-c", str(config_file), "-l", "4"])
        assert result.exit_code == 0
        assert "OR-06" in result.output
        assert "Board Seat" in result.output

    def test_status(self, runner):
        result = runner.invoke(cli, ["status", "-l", "2"])
        assert result.exit_code == 0
        assert "Level 2: Professional Identity" in result.output
        assert "Reduced disclosure is active" in result.output

    def test_status_full_transparency(self, runner):
        result = runner.invoke(cli, ["status"])
        assert result.exit_code == 0
        assert "Level 4: Full Transparency" in result.output
        assert "Reduced disclosure" not in result.output
