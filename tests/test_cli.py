"""
Tests for the command line entry point.
"""

from pathlib import Path

import pytest

from results_builder.__main__ import args_to_typed, main, parse_args

pytestmark = pytest.mark.usefixtures("reset_logging")


def cli_args(site: Path, *extra: str) -> list[str]:
    return [
        "--results-dir", str(site / "results"),
        "--logos-dir", str(site / "public" / "results" / "logos"),
        "--output-dir", str(site / "public" / "results"),
        "--repo-root", str(site),
        *extra,
    ]


class TestParseArgs:
    def test_defaults(self):
        args = args_to_typed(parse_args([]))

        assert args["results_dir"] == "results"
        assert args["logos_dir"] == "public/results/logos"
        assert args["output_dir"] == "public/results"
        assert args["workers"] == 1
        assert args["canonical_names"] is True
        assert args["no_history"] is False

    def test_flags(self):
        args = args_to_typed(parse_args(["--no-canonical-names", "--skip-malformed", "--workers", "4"]))

        assert args["canonical_names"] is False
        assert args["skip_malformed"] is True
        assert args["workers"] == 4


class TestMain:
    def test_builds_site(self, site: Path, monkeypatch, capsys):
        monkeypatch.chdir(site)

        main(cli_args(site, "--no-history"))

        output = capsys.readouterr().out
        assert "Done!" in output
        assert "2021-04-01_regional_x_b.html" in output
        assert (site / "public" / "results" / "index.html").is_file()
        assert (site / "public" / "results" / "events.csv").is_file()

    def test_missing_default_logo_exits(self, site: Path, monkeypatch):
        monkeypatch.chdir(site)
        (site / "public" / "results" / "logos" / "default.png").unlink()

        with pytest.raises(SystemExit) as exc_info:
            main(cli_args(site, "--no-history"))

        assert exc_info.value.code == 1

    def test_non_positive_workers_exits(self, site: Path, monkeypatch):
        monkeypatch.chdir(site)

        with pytest.raises(SystemExit) as exc_info:
            main(cli_args(site, "--no-history", "--workers", "0"))

        assert exc_info.value.code == 1

    def test_malformed_result_exits(self, site: Path, monkeypatch, capsys):
        monkeypatch.chdir(site)
        (site / "results" / "notes.yaml").write_text("")

        with pytest.raises(SystemExit) as exc_info:
            main(cli_args(site, "--no-history"))

        assert exc_info.value.code == 1
        assert "notes.yaml" in capsys.readouterr().out

    def test_skip_malformed_reports_skipped_files(self, site: Path, monkeypatch, capsys):
        monkeypatch.chdir(site)
        (site / "results" / "notes.yaml").write_text("")

        main(cli_args(site, "--no-history", "--skip-malformed"))

        assert "Skipped 1 malformed result files" in capsys.readouterr().out

    def test_missing_templates_dir_exits(self, site: Path, monkeypatch):
        monkeypatch.chdir(site)

        with pytest.raises(SystemExit) as exc_info:
            main(cli_args(site, "--no-history", "--templates-dir", str(site / "missing")))

        assert exc_info.value.code == 1

    def test_non_utf8_result_file_exits(self, site: Path, monkeypatch, capsys):
        monkeypatch.chdir(site)
        (site / "results" / "2021-05-01_regional_x_b.yaml").write_bytes(b"Tournament: \xff\xfe\n")

        with pytest.raises(SystemExit) as exc_info:
            main(cli_args(site, "--no-history"))

        assert exc_info.value.code == 1
        assert "2021-05-01_regional_x_b.yaml is not valid UTF-8" in capsys.readouterr().out
