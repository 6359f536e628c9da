from typer.testing import CliRunner

from spansnip.main import app

runner = CliRunner()


def write_source(tmp_path, text="hello\nworld\n"):
    path = tmp_path / "source.txt"
    path.write_bytes(text.encode("utf-8"))
    return str(path)


def test_cli_show_plain(tmp_path):
    path = write_source(tmp_path)
    result = runner.invoke(app, ["show", path, "1", "4", "--no-color"])
    assert result.exit_code == 0
    assert result.output == "  |\n1 | hello␊\n  |  ^^^\n"


def test_cli_show_styled(tmp_path):
    path = write_source(tmp_path, "a\nb\nc\nd\n")
    result = runner.invoke(app, ["show", path, "0", "7"])
    assert result.exit_code == 0
    assert "1 | a␊" in result.output
    assert "  | ..." in result.output
    assert "4 | d␊" in result.output


def test_cli_show_with_message(tmp_path):
    path = write_source(tmp_path)
    result = runner.invoke(app, ["show", path, "7", "9", "-m", "bad token", "-l", "warning", "--no-color"])
    assert result.exit_code == 0
    assert "WARNING: bad token at 2:1" in result.output
    assert "2 | world␊" in result.output


def test_cli_show_keeps_crlf_offsets(tmp_path):
    path = write_source(tmp_path, "a\r\nbc\r\n")
    result = runner.invoke(app, ["show", path, "3", "5", "--no-color"])
    assert result.exit_code == 0
    assert "2 | bc␍␊" in result.output


def test_cli_show_out_of_range(tmp_path):
    path = write_source(tmp_path)
    result = runner.invoke(app, ["show", path, "0", "100"])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_cli_show_unknown_level(tmp_path):
    path = write_source(tmp_path)
    result = runner.invoke(app, ["show", path, "1", "4", "-m", "x", "-l", "fatal"])
    assert result.exit_code == 1


def test_cli_missing_file(tmp_path):
    result = runner.invoke(app, ["show", str(tmp_path / "missing.txt"), "0", "1"])
    assert result.exit_code == 2


def test_cli_locate(tmp_path):
    path = write_source(tmp_path)
    result = runner.invoke(app, ["locate", path, "7"])
    assert result.exit_code == 0
    assert result.output.strip() == "2:1"


def test_cli_show_level_with_markup_characters(tmp_path):
    path = write_source(tmp_path)
    result = runner.invoke(app, ["show", path, "1", "4", "-m", "x", "-l", "[/x]"])
    assert result.exit_code == 1
    assert "unknown level" in result.output
    assert "[/x]" in result.output


def test_cli_show_verbose(tmp_path):
    path = write_source(tmp_path)
    result = runner.invoke(app, ["show", path, "1", "4", "--no-color", "-v"])
    assert result.exit_code == 0
    assert "1 | hello␊" in result.output
