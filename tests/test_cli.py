"""Tests for the command line interface."""

import json
from unittest.mock import Mock, patch

import pytest
from typer.testing import CliRunner

from npm_compromised_scan import __version__
from npm_compromised_scan.cli.main import app

runner = CliRunner()

NPM_TREE = {
    "name": "my-app",
    "version": "1.0.0",
    "dependencies": {
        "event-stream": {
            "version": "3.3.6",
            "dependencies": {"flatmap-stream": {"version": "0.1.1"}},
        },
        "legacy": {
            "version": "0.0.1",
            "dependencies": {
                "event-stream": {"version": "3.3.5"},
                "left-pad": {"version": "1.0.0"},
            },
        },
    },
}

CLEAN_TREE = {"dependencies": {"lodash": {"version": "4.17.21"}}}


@pytest.fixture
def project(tmp_path):
    """Create a denylist and a saved npm ls document."""
    denylist = tmp_path / "compromised.txt"
    denylist.write_text("# known bad\nleft-pad\nevent-stream@3.3.6\n")

    npm_json = tmp_path / "npm-ls.json"
    npm_json.write_text(json.dumps(NPM_TREE))

    clean_json = tmp_path / "clean.json"
    clean_json.write_text(json.dumps(CLEAN_TREE))

    return tmp_path


class TestScanCommand:
    """Test the scan command end to end."""

    def test_text_output(self, project):
        """Test text report and default failure exit code."""
        result = runner.invoke(app, [
            "--list", str(project / "compromised.txt"),
            "--npm-json", str(project / "npm-ls.json"),
        ])

        assert result.exit_code == 42
        assert "[NAME MATCH ] event-stream@3.3.5\n" in result.stdout
        assert "[EXACT MATCH] event-stream@3.3.6\n" in result.stdout
        assert "[NAME MATCH ] left-pad@1.0.0\n" in result.stdout
        assert result.stdout.index("event-stream@3.3.5") < result.stdout.index("left-pad@1.0.0")

    def test_json_output(self, project):
        """Test JSON report."""
        result = runner.invoke(app, [
            "-l", str(project / "compromised.txt"),
            "--npm-json", str(project / "npm-ls.json"),
            "--format", "json",
        ])

        assert result.exit_code == 42
        data = json.loads(result.stdout)
        assert data["match_count"] == 3
        assert data["matches"][1] == {"match_type": "exact", "name": "event-stream", "version": "3.3.6"}
        assert data["compromised_names"] == ["event-stream", "left-pad"]
        assert data["compromised_exact"] == ["event-stream@3.3.6"]

    def test_no_matches(self, project):
        """Test a clean tree exits zero."""
        result = runner.invoke(app, [
            "-l", str(project / "compromised.txt"),
            "--npm-json", str(project / "clean.json"),
        ])

        assert result.exit_code == 0
        assert "No compromised dependencies found." in result.stdout

    def test_custom_fail_exit_code(self, project):
        """Test the exit code used when matches are found."""
        result = runner.invoke(app, [
            "-l", str(project / "compromised.txt"),
            "--npm-json", str(project / "npm-ls.json"),
            "--fail-exit-code", "3",
        ])

        assert result.exit_code == 3

    def test_stdin(self, project):
        """Test reading the tree from standard input."""
        result = runner.invoke(
            app,
            ["-l", str(project / "compromised.txt"), "--npm-json", "-", "--no-run-npm"],
            input=json.dumps(NPM_TREE),
        )

        assert result.exit_code == 42
        assert "[EXACT MATCH] event-stream@3.3.6" in result.stdout

    def test_output_file(self, project):
        """Test the JSON report is also written to a file."""
        report = project / "report.json"
        result = runner.invoke(app, [
            "-l", str(project / "compromised.txt"),
            "--npm-json", str(project / "npm-ls.json"),
            "--output", str(report),
        ])

        assert result.exit_code == 42
        assert "[EXACT MATCH] event-stream@3.3.6" in result.stdout
        assert json.loads(report.read_text())["match_count"] == 3

    @patch("npm_compromised_scan.sources.npm.subprocess.run")
    def test_runs_npm_by_default(self, mock_run, project):
        """Test that npm ls is run when no JSON source is given."""
        mock_run.return_value = Mock(returncode=0, stdout=json.dumps(CLEAN_TREE).encode())

        result = runner.invoke(app, ["-l", str(project / "compromised.txt")])

        assert result.exit_code == 0
        assert mock_run.call_args[0][0] == ["npm", "ls", "--all", "--json"]

    def test_list_from_environment(self, project):
        """Test the denylist path can come from the environment."""
        result = runner.invoke(
            app,
            ["--npm-json", str(project / "npm-ls.json")],
            env={"NPM_COMPROMISED_LIST": str(project / "compromised.txt")},
        )

        assert result.exit_code == 42


class TestScanErrors:
    """Test error reporting."""

    def test_invalid_denylist(self, project):
        """Test a bad denylist aborts before any matching."""
        bad = project / "bad.txt"
        bad.write_text("left-pad\nfoo@bar/baz\n")

        result = runner.invoke(app, ["-l", str(bad), "--npm-json", str(project / "npm-ls.json")])

        assert result.exit_code == 1
        assert "Invalid entry at line 2: 'foo@bar/baz' (Version contains '/')" in result.output
        assert "MATCH" not in result.output

    def test_missing_denylist(self, project):
        """Test a missing denylist file."""
        result = runner.invoke(app, ["-l", str(project / "nope.txt"), "--npm-json", "-"], input="{}")

        assert result.exit_code == 1
        assert "Unable to read compromised list file" in result.output

    def test_no_run_npm_without_source(self, project):
        """Test --no-run-npm requires a JSON source."""
        result = runner.invoke(app, ["-l", str(project / "compromised.txt"), "--no-run-npm"])

        assert result.exit_code == 1
        assert "no-run-npm specified but no --npm-json source provided" in result.output

    def test_malformed_json(self, project):
        """Test malformed tree input."""
        result = runner.invoke(
            app,
            ["-l", str(project / "compromised.txt"), "--npm-json", "-"],
            input="{not json",
        )

        assert result.exit_code == 1
        assert "Failed to parse JSON from stdin" in result.output

    def test_deeply_nested_json(self, project):
        """Test JSON nested past the decoder's limit is reported as an error."""
        depth = 100000
        deep = project / "deep.json"
        deep.write_text('{"dependencies": {"a": ' * depth + "{}" + "}}" * depth)

        result = runner.invoke(app, ["-l", str(project / "compromised.txt"), "--npm-json", str(deep)])

        assert result.exit_code == 1
        assert "Error: Failed to parse provided npm JSON file" in result.output
        assert not isinstance(result.exception, RecursionError)

    def test_unwritable_log_file(self, project):
        """Test a log file in a missing directory is reported as an error."""
        result = runner.invoke(app, [
            "-l", str(project / "compromised.txt"),
            "--npm-json", str(project / "npm-ls.json"),
            "--log-file", str(project / "nodir" / "x.log"),
        ])

        assert result.exit_code == 1
        assert "Error: Unable to open log file" in result.output
        assert "MATCH" not in result.output

    def test_invalid_format(self, project):
        """Test an unknown output format is a usage error."""
        result = runner.invoke(app, ["-l", str(project / "compromised.txt"), "--format", "xml"])

        assert result.exit_code == 2


class TestVersion:
    """Test the version option."""

    def test_version(self):
        """Test --version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout
