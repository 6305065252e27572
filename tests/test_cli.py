"""
Unit tests for the OCM CLI entry points.

Tests the Typer CLI commands and argument parsing.
"""
import json

import pytest
from typer.testing import CliRunner

from ocm_cli import __version__
from ocm_cli.cli import app

runner = CliRunner()

CLUSTERS = {
    "kind": "ClusterList",
    "page": 1,
    "size": 2,
    "total": 2,
    "items": [
        {
            "kind": "Cluster",
            "id": "1a2b3c",
            "external_id": "e30bac0b-b337-47d7-a378-2c302b4c868a",
            "name": "mycluster",
            "api": {"url": "https://api.mycluster.example.com:6443", "listening": "external"},
            "region": {"id": "us-east-1"},
            "state": "ready",
        },
        {
            "kind": "Cluster",
            "id": "4d5e6f",
            "name": "yourcluster",
            "region": {"id": "eu-west-1"},
            "state": "installing",
        },
    ],
}


@pytest.fixture
def env(tmp_path):
    """Environment that points to a configuration file that doesn't exist yet."""
    return {"OCM_CONFIG": str(tmp_path / "ocm.json")}


@pytest.fixture
def clusters_file(tmp_path):
    path = tmp_path / "clusters.json"
    path.write_text(json.dumps(CLUSTERS))
    return path


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_no_args(self):
        """Test CLI with no arguments shows help."""
        result = runner.invoke(app, [])
        # Should show help or error with no args
        assert result.exit_code != 0 or "Usage" in result.stdout

    def test_version(self):
        """Test that the version is printed."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_debug(self, clusters_file):
        """Test that debug mode doesn't change the output."""
        result = runner.invoke(app, ["--debug", "dig", "region.id", str(clusters_file)])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["us-east-1", "eu-west-1"]


class TestListCommand:
    """Test list command CLI."""

    def test_list_selected_columns(self, env, clusters_file):
        """Test printing selected columns."""
        result = runner.invoke(app, ["list", "clusters", str(clusters_file), "-c", "name,region.id,state"], env=env)
        assert result.exit_code == 0

        # The widths described for the table are the minimum widths:
        lines = result.stdout.splitlines()
        assert lines == [
            "NAME".ljust(28) + "  " + "REGION ID".ljust(14) + "  " + "STATE".ljust(11),
            "mycluster".ljust(28) + "  " + "us-east-1".ljust(14) + "  " + "ready".ljust(11),
            "yourcluster".ljust(28) + "  " + "eu-west-1".ljust(14) + "  " + "installing".ljust(11),
        ]

    def test_list_default_columns(self, env, clusters_file):
        """Test that the described columns are used when none are given."""
        result = runner.invoke(app, ["list", "clusters", str(clusters_file)], env=env)
        assert result.exit_code == 0

        lines = result.stdout.splitlines()
        assert len(lines) == 3
        assert lines[0].split()[:3] == ["ID", "EXTERNAL", "ID"]
        assert "e30bac0b-b337-47d7-a378-2c302b4c868a" in lines[1]
        assert "NONE" in lines[2]

    def test_list_without_headers(self, env, clusters_file):
        """Test that headers can be omitted."""
        result = runner.invoke(app, ["list", "clusters", str(clusters_file), "-c", "id", "--no-headers"], env=env)
        assert result.exit_code == 0
        assert result.stdout.split() == ["1a2b3c", "4d5e6f"]

    def test_list_without_learning(self, env, clusters_file):
        """Test that described widths are used when learning is disabled."""
        result = runner.invoke(
            app, ["list", "clusters", str(clusters_file), "-c", "id,name", "--no-learning"], env=env
        )
        assert result.exit_code == 0
        assert result.stdout.splitlines()[0] == "ID" + " " * 32 + "NAME" + " " * 24

    def test_list_from_stdin(self, env):
        """Test reading the objects from the standard input."""
        idps = {"items": [{"name": "my_github", "type": "GithubIdentityProvider", "mappingMethod": "claim"}]}
        result = runner.invoke(app, ["list", "idps", "-c", "name,mapping_method"], input=json.dumps(idps), env=env)
        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            "NAME       MAPPING METHOD",
            "my_github  claim         ",
        ]

    def test_list_unknown_table_without_columns(self, env, clusters_file):
        """Test that tables without description need explicit columns."""
        result = runner.invoke(app, ["list", "does_not_exist", str(clusters_file)], env=env)
        assert result.exit_code == 1
        assert "--columns" in result.stdout

    def test_list_list_values(self, env):
        """Test that list and mapping values are printed readably."""
        pool = {"id": "w", "availabilityZones": ["us-east-1a", "us-east-1b"], "labels": {"role": "worker"}}
        args = ["list", "machine_pools", "-c", "id,availability_zones,labels"]
        result = runner.invoke(app, args, input=json.dumps({"items": [pool]}), env=env)
        assert result.exit_code == 0
        assert result.stdout.splitlines()[1] == "w   us-east-1a, us-east-1b  role=worker"

    def test_list_negative_learning_limit(self, env, clusters_file):
        """Test that negative learning limits are rejected."""
        result = runner.invoke(app, ["list", "clusters", str(clusters_file), "--learning-limit", "-1"], env=env)
        assert result.exit_code == 2
        assert "1a2b3c" not in result.output

    def test_list_nonexistent_input(self, env):
        """Test list fails with nonexistent input file."""
        result = runner.invoke(app, ["list", "clusters", "/nonexistent/file.json"], env=env)
        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_list_missing_pager(self, env, clusters_file):
        """Test that a pager that doesn't exist is ignored."""
        result = runner.invoke(
            app, ["list", "clusters", str(clusters_file), "-c", "id", "--pager", "does-not-exist-pager"], env=env
        )
        assert result.exit_code == 0
        assert result.stdout.split() == ["ID", "1a2b3c", "4d5e6f"]


class TestDumpCommand:
    """Test dump command CLI."""

    def test_dump_indented(self, tmp_path):
        """Test printing a document indented."""
        path = tmp_path / "cluster.json"
        path.write_text('{"id": "123", "region": {"id": "us-east-1"}}')
        result = runner.invoke(app, ["dump", str(path)])
        assert result.exit_code == 0
        assert result.stdout == '{\n  "id": "123",\n  "region": {\n    "id": "us-east-1"\n  }\n}\n'

    def test_dump_single_line(self):
        """Test printing a document read from stdin in a single line."""
        result = runner.invoke(app, ["dump", "--single"], input='{\n  "id": "123"\n}')
        assert result.exit_code == 0
        assert result.stdout == '{"id":"123"}\n'

    def test_dump_nonexistent_input(self):
        """Test dump fails with nonexistent input file."""
        result = runner.invoke(app, ["dump", "/nonexistent/file.json"])
        assert result.exit_code == 1
        assert "not found" in result.stdout


class TestDigCommand:
    """Test dig command CLI."""

    def test_dig(self, clusters_file):
        """Test printing a path of each object."""
        result = runner.invoke(app, ["dig", "api.url", str(clusters_file)])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["https://api.mycluster.example.com:6443", "NONE"]

    def test_dig_nested_values(self, clusters_file):
        """Test that nested objects are printed as single line JSON."""
        result = runner.invoke(app, ["dig", "api", str(clusters_file)])
        assert result.exit_code == 0
        assert result.stdout.splitlines() == [
            '{"url":"https://api.mycluster.example.com:6443","listening":"external"}',
            "NONE",
        ]

    def test_dig_list_values(self):
        """Test that lists are printed as single line JSON."""
        pools = {"items": [{"id": "w", "availabilityZones": ["us-east-1a", "us-east-1b"]}]}
        result = runner.invoke(app, ["dig", "availability_zones", "-"], input=json.dumps(pools))
        assert result.exit_code == 0
        assert result.stdout == '["us-east-1a","us-east-1b"]\n'

    def test_dig_requires_path(self):
        """Test dig fails without a path."""
        result = runner.invoke(app, ["dig"])
        assert result.exit_code != 0


class TestConfigCommand:
    """Test config command CLI."""

    def test_set_and_get(self, env):
        """Test changing a setting and reading it back."""
        result = runner.invoke(app, ["config", "set", "pager", "less -R"], env=env)
        assert result.exit_code == 0

        result = runner.invoke(app, ["config", "get", "pager"], env=env)
        assert result.exit_code == 0
        assert result.stdout == "less -R\n"

    def test_get_unknown_setting(self, env):
        """Test that unknown settings are reported."""
        result = runner.invoke(app, ["config", "get", "colour"], env=env)
        assert result.exit_code == 1
        assert "unknown setting" in result.stdout

    def test_location(self, env):
        """Test printing the location of the configuration file."""
        result = runner.invoke(app, ["config", "location"], env=env)
        assert result.exit_code == 0
        assert result.stdout.strip() == env["OCM_CONFIG"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
