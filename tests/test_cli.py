# File: tests/test_cli.py
"""Тесты для CLI (`mdrowser.cli`) с использованием click.testing.CliRunner.
Проверяют команды `url`, `follow`, `browse`, `config`, `--version` и обработку ошибок.
"""
import json
import sys

import pytest
from click.testing import CliRunner
import mdrowser.cli as cli_module
from mdrowser.cli import cli


@pytest.fixture()
def config_file(tmp_path, config_dict):
    """Пишет JSON-конфиг, где curl и html2markdown заменены Python-скриптами."""

    def _write(**kwargs):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(config_dict(**kwargs)), encoding="utf-8")
        return path

    return _write


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "mdrowser" in result.output


def test_show_config(config_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file()), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["domain_flag"] == "--domain"
    assert data["fetcher"]["args"][0] == "-c"


def test_bad_config(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("not: a: mapping", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(bad), "config"])
    assert result.exit_code == 1
    assert "Failed to load configuration" in result.output


def test_url_prints_markdown(config_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file()), "url", "https://example.com/page"])
    assert result.exit_code == 0, result.output
    assert "# converted" in result.output
    assert "--domain=https://example.com" in result.output
    assert "<h1>https://example.com/page</h1>" in result.output


def test_url_prompts_when_missing(config_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file()), "url"], input="https://example.com/p\n")
    assert result.exit_code == 0, result.output
    assert "Fetch URL" in result.output
    assert "<h1>https://example.com/p</h1>" in result.output


def test_url_empty_input_is_silent(config_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file()), "url"], input="   \n")
    assert result.exit_code == 0
    assert "converted" not in result.output
    assert "[mdrowser]" not in result.output


def test_url_invalid(config_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file()), "url", "example.com"])
    assert result.exit_code == 1
    assert "[mdrowser] Failed to extract domain from URL" in result.output


def test_url_command_error(config_file, scripts):
    runner = CliRunner()
    cfg = config_file(convert=scripts.convert_fail)
    result = runner.invoke(cli, ["--config", str(cfg), "url", "https://example.com/"])
    assert result.exit_code == 1
    assert "[mdrowser] error: timeout" in result.output
    assert result.output.count("error: timeout") == 1


def test_url_saves_output(config_file, tmp_path):
    out = tmp_path / "pages" / "page.md"
    runner = CliRunner()
    result = runner.invoke(
        cli, ["--config", str(config_file()), "url", "https://example.com/a", "--output", str(out)]
    )
    assert result.exit_code == 0, result.output
    assert out.read_text(encoding="utf-8") == (
        "# converted\n--domain=https://example.com\n<h1>https://example.com/a</h1>\n"
    )


def test_missing_executable_is_fatal(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(
        json.dumps(
            {
                "fetcher": {"executable": sys.executable},
                "converter": {"executable": "no-such-html2markdown-tool"},
            }
        ),
        encoding="utf-8",
    )
    result = CliRunner().invoke(cli, ["--config", str(cfg), "url", "https://example.com/"])
    assert result.exit_code == 1
    assert "no-such-html2markdown-tool executable is required" in result.output


def test_follow(config_file, tmp_path):
    doc = tmp_path / "notes.md"
    doc.write_text("# Notes\nsee [docs](https://example.com/x) here\n", encoding="utf-8")
    column = "see [docs](https://example.com/x) here".index("docs") + 1
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--config", str(config_file()), "follow", str(doc), "--line", "2", "--column", str(column)],
    )
    assert result.exit_code == 0, result.output
    assert "<h1>https://example.com/x</h1>" in result.output


def test_follow_no_link(config_file, tmp_path):
    doc = tmp_path / "notes.md"
    doc.write_text("plain text\n", encoding="utf-8")
    result = CliRunner().invoke(
        cli, ["--config", str(config_file()), "follow", str(doc), "-l", "1", "-c", "2"]
    )
    assert result.exit_code == 1
    assert "No markdown link under cursor" in result.output


def test_follow_line_out_of_range(config_file, tmp_path):
    doc = tmp_path / "notes.md"
    doc.write_text("one line\n", encoding="utf-8")
    result = CliRunner().invoke(
        cli, ["--config", str(config_file()), "follow", str(doc), "-l", "5", "-c", "1"]
    )
    assert result.exit_code == 1
    assert "out of range" in result.output


def test_browse_fetch_then_follow(tmp_path, config_dict):
    # The converter echoes a markdown link so that `:follow` has a target.
    convert = (
        "import sys\n"
        "data = sys.stdin.read().strip()\n"
        "print('[next](https://example.com/next)')\n"
        "print(data)\n"
    )
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps(config_dict(convert=convert)), encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--config", str(cfg), "browse"],
        input="https://example.com/start\n:follow 1 3\n:quit\n",
    )
    assert result.exit_code == 0, result.output
    assert "<h1>https://example.com/start</h1>" in result.output
    assert "<h1>https://example.com/next</h1>" in result.output


def test_browse_bad_follow_usage(config_file):
    result = CliRunner().invoke(
        cli, ["--config", str(config_file()), "browse"], input=":follow x\n:follow 1 1\n"
    )
    assert result.exit_code == 0
    assert "Usage: :follow LINE COLUMN" in result.output
    assert "No markdown link under cursor" in result.output


def test_launch_error_reported_once(tmp_path):
    # Executable bit set but no interpreter line: found on PATH, fails to exec.
    missing = tmp_path / "broken-fetcher"
    missing.write_text("", encoding="utf-8")
    missing.chmod(0o755)
    cfg = tmp_path / "config.json"
    cfg.write_text(
        json.dumps(
            {
                "fetcher": {"executable": str(missing)},
                "converter": {"executable": sys.executable},
            }
        ),
        encoding="utf-8",
    )
    result = CliRunner().invoke(cli, ["--config", str(cfg), "url", "https://example.com/"])
    assert result.exit_code == 1
    assert result.output.count("Failed to start command") == 1


def test_url_prompt_goes_to_stderr(config_file, monkeypatch):
    calls = []

    def fake_prompt(text, **kwargs):
        calls.append((text, kwargs))
        return "https://example.com/p"

    monkeypatch.setattr(cli_module.click, "prompt", fake_prompt)
    result = CliRunner().invoke(cli, ["--config", str(config_file()), "url"])
    assert result.exit_code == 0, result.output
    assert calls == [("Fetch URL", {"default": "", "show_default": False, "err": True})]


def test_follow_non_utf8_file(config_file, tmp_path):
    doc = tmp_path / "latin1.md"
    doc.write_bytes(b"caf\xe9 [docs](https://example.com/x)\n")
    result = CliRunner().invoke(
        cli, ["--config", str(config_file()), "follow", str(doc), "-l", "1", "-c", "8"]
    )
    assert result.exit_code == 1
    assert "is not valid UTF-8" in result.output
    assert "Traceback" not in result.output
