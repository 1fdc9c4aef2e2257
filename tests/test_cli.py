"""Tests for the TradeJournal CLI.

**Feature: trade-journal**
"""

import pytest
from click.testing import CliRunner

from tradejournal.cli.main import LAZY_SUBCOMMANDS, cli
from tradejournal.db.store import JournalStore

JOURNAL = """Trading Journal - March 20, 2025
Overall Conviction: Bearish
Entry: short on the retest of ORH
Lessons Learned:
- Chased a few setups today but took SL every time.

Trading Journal - March 21, 2025
Overall Conviction: Bullish
Entry: retest of key level
Lessons Learned:
1. waited for close before entering
"""


@pytest.fixture
def home(tmp_path, monkeypatch):
    """Isolated config directory with AI disabled."""
    monkeypatch.setenv("TRADEJOURNAL_HOME", str(tmp_path))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    return tmp_path


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def journal_file(tmp_path):
    path = tmp_path / "journal.txt"
    path.write_text(JOURNAL, encoding="utf-8")
    return path


def _store(home) -> JournalStore:
    return JournalStore(home / "journal.db")


class TestCommandRegistry:
    """
    **Feature: trade-journal, Property 32: Lazy Command Loading**

    *For any* registered command name, the lazy group resolves a command.
    """

    @pytest.mark.parametrize("name", sorted(LAZY_SUBCOMMANDS))
    def test_lazy_commands_resolve(self, runner, name):
        result = runner.invoke(cli, [name, "--help"])
        assert result.exit_code == 0, result.output

    def test_unknown_command(self, runner):
        result = runner.invoke(cli, ["nope"])
        assert result.exit_code != 0


class TestImport:
    """
    **Feature: trade-journal, Property 33: Import Stores Analyzed Entries**
    """

    def test_import(self, runner, home, journal_file):
        result = runner.invoke(cli, ["import", str(journal_file), "--no-ai"])

        assert result.exit_code == 0, result.output
        assert "Imported 2 entries" in result.output

        entries = _store(home).get_all()
        assert [str(entry.date) for entry in entries] == ["2025-03-21", "2025-03-20"]
        assert all(entry.process_score is not None for entry in entries)
        assert {tag.tag for tag in entries[0].detected_tags} >= {"patience_confirmation"}

    def test_dry_run_stores_nothing(self, runner, home, journal_file):
        result = runner.invoke(cli, ["import", str(journal_file), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert _store(home).get_all() == []

    def test_no_entries_found(self, runner, home, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("nothing useful", encoding="utf-8")

        result = runner.invoke(cli, ["import", str(path)])

        assert result.exit_code == 0
        assert "No journal entries found" in result.output

    def test_missing_file(self, runner, home):
        result = runner.invoke(cli, ["import", "does-not-exist.txt"])
        assert result.exit_code == 2


class TestEntryCommands:
    """
    **Feature: trade-journal, Property 34: Entry Management**
    """

    def test_add(self, runner, home):
        result = runner.invoke(
            cli,
            ["add", "--text", "Stayed patient and took SL once", "--date", "2025-03-21", "--no-ai"],
        )

        assert result.exit_code == 0, result.output
        assert "Entry Added" in result.output
        entries = _store(home).get_all()
        assert len(entries) == 1
        assert str(entries[0].date) == "2025-03-21"

    def test_add_from_stdin_detects_date(self, runner, home):
        result = runner.invoke(
            cli, ["add", "--no-ai"], input="Trading Journal - March 18, 2025\nWaited for close\n"
        )

        assert result.exit_code == 0, result.output
        assert str(_store(home).get_all()[0].date) == "2025-03-18"

    def test_add_empty_text_fails(self, runner, home):
        result = runner.invoke(cli, ["add", "--text", "   "])
        assert result.exit_code == 1

    def test_list_and_show(self, runner, home, journal_file):
        runner.invoke(cli, ["import", str(journal_file), "--no-ai"])

        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 0, result.output
        assert "Journal Entries" in result.output

        entry = _store(home).get_all()[0]
        result = runner.invoke(cli, ["show", entry.id])
        assert result.exit_code == 0, result.output
        assert "Bullish" in result.output
        assert "2025-03-21" in result.output
        assert "Detected Tags" in result.output

    def test_list_empty(self, runner, home):
        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "No journal entries found" in result.output

    def test_delete(self, runner, home, journal_file):
        runner.invoke(cli, ["import", str(journal_file), "--no-ai"])
        entry = _store(home).get_all()[0]

        result = runner.invoke(cli, ["delete", entry.id])
        assert result.exit_code == 0, result.output
        assert _store(home).get(entry.id) is None

        result = runner.invoke(cli, ["delete", entry.id])
        assert result.exit_code == 1


class TestAnalysisCommands:
    """
    **Feature: trade-journal, Property 35: Analysis Reports**
    """

    def test_analyze(self, runner, home, journal_file):
        runner.invoke(cli, ["import", str(journal_file), "--no-ai"])

        result = runner.invoke(cli, ["analyze", "--no-ai"])
        assert result.exit_code == 0, result.output
        assert "Average process score" in result.output

    def test_analyze_empty(self, runner, home):
        result = runner.invoke(cli, ["analyze"])
        assert result.exit_code == 0
        assert "No journal entries found" in result.output

    def test_plan(self, runner, home, journal_file):
        runner.invoke(cli, ["import", str(journal_file), "--no-ai"])

        result = runner.invoke(cli, ["plan", "--date", "2025-03-22"])
        assert result.exit_code == 0, result.output
        assert "Plan for 2025-03-22" in result.output
        assert "$250-$500" in result.output

    def test_week(self, runner, home, journal_file):
        runner.invoke(cli, ["import", str(journal_file), "--no-ai"])

        result = runner.invoke(cli, ["week", "--start", "2025-03-17"])
        assert result.exit_code == 0, result.output
        assert "2025-03-20" in result.output
        assert "2025-03-21" in result.output

    def test_ai_without_key_falls_back(self, runner, home, journal_file):
        result = runner.invoke(cli, ["import", str(journal_file), "--ai", "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "OPENAI_API_KEY not set" in result.output


class TestTemplateCommand:
    """
    **Feature: trade-journal, Property 36: Template Output**
    """

    def test_list_templates(self, runner, home):
        result = runner.invoke(cli, ["template"])
        assert result.exit_code == 0, result.output
        assert "Journal Templates" in result.output

    def test_render_template(self, runner, home):
        result = runner.invoke(cli, ["template", "quick-log", "--date", "2025-03-21"])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("Trading Journal - March 21, 2025")

    def test_unknown_template(self, runner, home):
        result = runner.invoke(cli, ["template", "nope"])

        assert result.exit_code == 1
        assert "Unknown template" in result.output
