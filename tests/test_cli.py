"""Tests for the command line interface."""

import pytest

from streamtitle_core.cli import main

SNAPSHOT = """
title: "Crunchyroll - Watch Shirobako Episode 5 - Mozilla Firefox"
tree:
  role: window
  children:
    - role: toolbar
      children:
        - name: Search or enter address
          role: text
          value: https://www.crunchyroll.com/shirobako/episode-5-678141
"""


class TestCli:
    """Test CLI commands."""

    def test_no_command(self, capsys):
        """Missing command prints help and fails."""
        assert main([]) == 1

    def test_providers(self, providers_file, capsys):
        """Providers are listed by name."""
        assert main(["-c", str(providers_file), "providers"]) == 0

        out = capsys.readouterr().out
        assert "Crunchyroll" in out
        assert "Example Video" in out

    def test_bad_config(self, tmp_path, capsys):
        """Unreadable catalog exits with 2."""
        assert main(["-c", str(tmp_path / "missing.yaml"), "providers"]) == 2

    def test_parse(self, providers_file, capsys):
        """Parse prints the resolved title."""
        code = main([
            "-c", str(providers_file), "parse",
            "https://www.crunchyroll.com/shirobako/episode-5-678141",
            "Crunchyroll - Watch Shirobako Episode 5",
        ])

        assert code == 0
        assert capsys.readouterr().out.strip() == "Shirobako Episode 5"

    def test_parse_no_match(self, providers_file, capsys):
        """Unsupported URL exits with 1."""
        assert main(["-c", str(providers_file), "parse", "https://www.example.org/", "Title"]) == 1

    def test_resolve(self, providers_file, tmp_path, capsys):
        """Resolve prints the title found in a snapshot."""
        snapshot = tmp_path / "firefox.yaml"
        snapshot.write_text(SNAPSHOT, encoding="utf-8")

        assert main(["-c", str(providers_file), "resolve", str(snapshot), "--engine", "Gecko"]) == 0
        assert capsys.readouterr().out.strip() == "Shirobako Episode 5"

    def test_resolve_bad_snapshot(self, providers_file, tmp_path, capsys):
        """Unreadable snapshot exits with 2."""
        assert main(["-c", str(providers_file), "resolve", str(tmp_path / "none.yaml"), "-e", "Gecko"]) == 2

    def test_config_after_command(self, providers_file, capsys):
        """Catalog option is accepted after the subcommand."""
        assert main(["providers", "-c", str(providers_file)]) == 0

        out = capsys.readouterr().out
        assert "Crunchyroll" in out

    def test_parse_config_after_command(self, providers_file, capsys):
        """Parse takes the catalog option after its arguments."""
        code = main([
            "parse",
            "https://www.crunchyroll.com/shirobako/episode-5-678141",
            "Crunchyroll - Watch Shirobako Episode 5",
            "--config", str(providers_file),
        ])

        assert code == 0
        assert capsys.readouterr().out.strip() == "Shirobako Episode 5"

    def test_resolve_malformed_snapshot(self, providers_file, tmp_path, capsys):
        """Snapshot with a non-mapping child exits with 2."""
        snapshot = tmp_path / "broken.yaml"
        snapshot.write_text("tree:\n  role: window\n  children:\n    - oops\n", encoding="utf-8")

        assert main(["resolve", str(snapshot), "-e", "Gecko", "-c", str(providers_file)]) == 2
        assert "mapping" in capsys.readouterr().err
