"""
Unit tests for the command-line entry point.
"""

import json
import logging
import sys
from unittest.mock import AsyncMock

import pytest
import structlog

from profile_graph import cli
from profile_graph.agents.templates import PRODUCT_MANAGER_TEMPLATE
from profile_graph.models.scrape import ScrapeResult
from profile_graph.utils.logger import configure_logging
from profile_graph.utils.text_fetcher import TextFetcherError


@pytest.fixture(autouse=True)
def no_log_files(mocker):
    """Keep tests from creating log files; log lines go to stderr, off the JSON output."""
    structlog.configure(
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )
    yield mocker.patch("profile_graph.cli.configure_logging")
    structlog.reset_defaults()


@pytest.fixture
def keyless_env(tmp_path, clean_env):
    """Path to a missing .env, so generation runs template-only."""
    return str(tmp_path / "missing.env")


class TestOutputFilename:
    """Test cases for output_filename."""

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Senior Product Manager", "knowledge-graph-senior-product-manager.json"),
            ("Sales  Director", "knowledge-graph-sales-director.json"),
            ("CTO", "knowledge-graph-cto.json"),
        ],
    )
    def test_slug(self, title, expected):
        assert cli.output_filename(title) == expected


class TestGraphCommand:
    """Test cases for the graph subcommand."""

    def test_no_scrape_json_outputs_template(self, keyless_env, capsys):
        """Test template-only generation printed as camelCase JSON."""
        # Act
        exit_code = cli.main(
            [
                "--env-file", keyless_env,
                "graph",
                "--title", "Senior Product Manager",
                "--company", "Acme",
                "--location", "NYC",
                "--no-scrape",
                "--json",
            ]
        )

        # Assert
        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output == {
            "knowledgeGraph": PRODUCT_MANAGER_TEMPLATE.model_dump(by_alias=True)
        }

    def test_blank_title_exits_with_usage_error(self, keyless_env, mocker):
        """Test that an invalid profile never reaches research."""
        research = mocker.patch("profile_graph.cli.research_profile")

        exit_code = cli.main(
            [
                "--env-file", keyless_env,
                "graph", "--title", "  ", "--company", "Acme", "--location", "NYC",
            ]
        )

        assert exit_code == 2
        research.assert_not_called()

    def test_save_writes_slugged_file(self, keyless_env, tmp_path, monkeypatch):
        """Test that --save writes knowledge-graph-<slug>.json in the working directory."""
        # Arrange
        monkeypatch.chdir(tmp_path)

        # Act
        exit_code = cli.main(
            [
                "--env-file", keyless_env,
                "graph",
                "--title", "Senior Product Manager",
                "--company", "Acme",
                "--location", "NYC",
                "--no-scrape",
                "--save",
            ]
        )

        # Assert
        assert exit_code == 0
        saved = tmp_path / "knowledge-graph-senior-product-manager.json"
        data = json.loads(saved.read_text(encoding="utf-8"))
        assert data["toolsUsed"]["highProbability"][0] == "JIRA"

    def test_browser_failure_exits_1(self, keyless_env, mocker):
        mocker.patch(
            "profile_graph.cli.research_profile",
            new=AsyncMock(side_effect=TextFetcherError("Could not start browser")),
        )

        exit_code = cli.main(
            [
                "--env-file", keyless_env,
                "graph", "--title", "Engineer", "--company", "Acme", "--location", "NYC",
            ]
        )

        assert exit_code == 1

    def test_context_entries_reach_profile(self, keyless_env, mocker):
        # Arrange
        research = mocker.patch(
            "profile_graph.cli.research_profile",
            new=AsyncMock(return_value=PRODUCT_MANAGER_TEMPLATE),
        )

        # Act
        cli.main(
            [
                "--env-file", keyless_env,
                "graph",
                "--title", "Product Manager",
                "--company", "Acme",
                "--location", "NYC",
                "--age", "40",
                "--context", "B2B SaaS",
                "--context", "Remote",
                "--json",
            ]
        )

        # Assert
        profile = research.call_args.args[0]
        assert profile.age == 40
        assert profile.additional_context == ["B2B SaaS", "Remote"]
        assert research.call_args.kwargs["skip_scraping"] is False


class TestScrapeCommand:
    """Test cases for the scrape subcommand."""

    def test_json_output(self, keyless_env, mocker, capsys):
        """Test that results are printed without empty fields."""
        # Arrange
        mocker.patch(
            "profile_graph.cli.scrape_urls",
            new=AsyncMock(
                return_value=[
                    ScrapeResult(
                        url="https://a.test", success=True, title="A", text_content="a..."
                    ),
                    ScrapeResult(url="https://b.test", success=False, error="Timeout"),
                ]
            ),
        )

        # Act
        exit_code = cli.main(
            ["--env-file", keyless_env, "scrape", "https://a.test", "https://b.test", "--json"]
        )

        # Assert
        assert exit_code == 0
        assert json.loads(capsys.readouterr().out) == {
            "results": [
                {"url": "https://a.test", "success": True, "title": "A", "text_content": "a..."},
                {"url": "https://b.test", "success": False, "error": "Timeout"},
            ]
        }

    def test_browser_failure_exits_1(self, keyless_env, mocker):
        mocker.patch(
            "profile_graph.cli.scrape_urls",
            new=AsyncMock(side_effect=TextFetcherError("Could not start browser")),
        )

        assert cli.main(["--env-file", keyless_env, "scrape", "https://a.test"]) == 1

    def test_requires_at_least_one_url(self, keyless_env):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--env-file", keyless_env, "scrape"])

        assert exc_info.value.code == 2


class TestSettingsLoading:
    """Test cases for --config handling."""

    def test_missing_config_file_exits_2(self, tmp_path, no_log_files):
        exit_code = cli.main(
            ["--config", str(tmp_path / "settings.json"), "scrape", "https://a.test"]
        )

        assert exit_code == 2
        no_log_files.assert_called_once_with()

    def test_logging_configured_from_settings(self, tmp_path, no_log_files, mocker):
        # Arrange
        config_path = tmp_path / "settings.json"
        config_path.write_text(
            json.dumps({"log_level": "debug", "log_file": str(tmp_path / "run.log")}),
            encoding="utf-8",
        )
        mocker.patch("profile_graph.cli.scrape_urls", new=AsyncMock(return_value=[]))

        # Act
        cli.main(["--config", str(config_path), "scrape", "https://a.test"])

        # Assert
        assert no_log_files.call_count == 2
        no_log_files.assert_called_with(
            log_file=str(tmp_path / "run.log"), log_level="DEBUG"
        )


class TestOutputStreams:
    """Test that stdout carries only the command's output."""

    @pytest.fixture
    def real_logging(self, mocker, tmp_path, monkeypatch):
        """Run the real logging setup inside tmp_path and undo it afterwards."""
        monkeypatch.chdir(tmp_path)
        mocker.patch("profile_graph.cli.configure_logging", side_effect=configure_logging)
        yield tmp_path / "logs" / "profile-graph.log"
        structlog.reset_defaults()
        root = logging.getLogger()
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()

    def test_json_with_save_prints_only_json(
        self, keyless_env, tmp_path, monkeypatch, capsys
    ):
        """Test that the saved-file message goes to stderr."""
        # Arrange
        monkeypatch.chdir(tmp_path)

        # Act
        exit_code = cli.main(
            [
                "--env-file", keyless_env,
                "graph",
                "--title", "Developer",
                "--company", "Initech",
                "--location", "Austin",
                "--no-scrape",
                "--json",
                "--save",
            ]
        )

        # Assert
        captured = capsys.readouterr()
        assert exit_code == 0
        assert "knowledgeGraph" in json.loads(captured.out)
        assert "Saved knowledge graph to knowledge-graph-developer.json" in captured.err
        assert (tmp_path / "knowledge-graph-developer.json").exists()

    def test_log_lines_stay_off_stdout(self, real_logging, clean_env, mocker, capsys):
        """Test a completion-backed run with debug logging and JSON output."""
        # Arrange
        env_file = real_logging.parent.parent / ".env"
        env_file.write_text("OPENAI_API_KEY=sk-real\nLOG_LEVEL=DEBUG\n", encoding="utf-8")
        env_file.chmod(0o600)
        mocker.patch(
            "profile_graph.agents.knowledge_graph_generator.call_completion",
            new=AsyncMock(return_value='{"Tools Used": {"High Probability": ["A"]}}'),
        )

        # Act
        exit_code = cli.main(
            [
                "--env-file", str(env_file),
                "graph",
                "--title", "Sales Director",
                "--company", "Globex",
                "--location", "Chicago",
                "--no-scrape",
                "--json",
            ]
        )

        # Assert
        captured = capsys.readouterr()
        assert exit_code == 0
        graph = json.loads(captured.out)["knowledgeGraph"]
        assert graph["toolsUsed"]["highProbability"] == ["A"]
        assert "Fields taken from template" in captured.err
        assert "sk-real" not in captured.err

        log_lines = [
            json.loads(line)
            for line in real_logging.read_text(encoding="utf-8").splitlines()
            if line.startswith("{")
        ]
        events = {line["event"] for line in log_lines}
        assert {"credentials_loaded_from_env", "Fields taken from template"} <= events
