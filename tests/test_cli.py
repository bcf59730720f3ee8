# =============================================================================
# test_cli.py - dfalex Command-Line Tool Tests
# =============================================================================

from pathlib import Path

from click.testing import CliRunner

from dfalex import __version__
from dfalex.cli.dfalex import main


class TestScanCommand:
    """Test scanning files from the command line."""

    def test_clean_scan(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.src").write_text("int x = 10;\n")
            result = runner.invoke(main, ["prog.src"])

            assert result.exit_code == 0, result.output
            assert "<KEYWORD, int>" in result.output
            assert "<DELIMITER, ;>" in result.output
            assert "Symbol Table:" in result.output
            assert "Errors:" not in result.output

    def test_scan_with_errors(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("bad.src").write_text("int Abc;\n}\n")
            result = runner.invoke(main, ["bad.src"])

            assert result.exit_code == 1
            assert "Errors:" in result.output
            assert "<INVALID, Abc>" in result.output
            assert "Error at line 1: Invalid identifier 'Abc'" in result.output
            assert "Error at line 2: Unmatched closing brace '}'" in result.output

    def test_terminator_label(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.src").write_text("x;")
            result = runner.invoke(main, ["--terminator-label", "prog.src"])

            assert result.exit_code == 0
            assert "<KEYWORD, TERMINATOR>" in result.output

    def test_no_symbols(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.src").write_text("int x;")
            result = runner.invoke(main, ["--no-symbols", "prog.src"])

            assert result.exit_code == 0
            assert "Symbol Table:" not in result.output

    def test_stdin(self):
        runner = CliRunner()
        result = runner.invoke(main, ["-"], input="float y = 2.5;")

        assert result.exit_code == 0, result.output
        assert "<DECIMAL, 2.5>" in result.output
        assert "2.50000" in result.output

    def test_missing_file(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["nope.src"])
            assert result.exit_code == 2

    def test_missing_source(self):
        result = CliRunner().invoke(main, [])
        assert result.exit_code == 2


class TestAutomataDump:
    """Test the automaton inspection options."""

    def test_list(self):
        result = CliRunner().invoke(main, ["--list-automata"])
        assert result.exit_code == 0
        names = result.output.split()
        assert names[0] == "character_literal"
        assert names[-1] == "integer"
        assert "while" in names

    def test_dump_one(self):
        result = CliRunner().invoke(main, ["--dump-automata", "identifier"])
        assert result.exit_code == 0
        assert "Automaton: identifier" in result.output
        assert "start: q0" in result.output
        assert "accepting: q1" in result.output
        assert "q0 --[_a-z]--> q1" in result.output
        assert "q1 --[0-9_a-z]--> q1" in result.output

    def test_dump_all(self):
        result = CliRunner().invoke(main, ["--dump-automata", "all"])
        assert result.exit_code == 0
        assert "Automaton: multi_line_comment" in result.output
        assert "Automaton: switch" in result.output

    def test_dump_unknown(self):
        result = CliRunner().invoke(main, ["--dump-automata", "bogus"])
        assert result.exit_code == 2
        assert "unknown automaton 'bogus'" in result.output


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
