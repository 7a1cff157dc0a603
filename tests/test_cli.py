import logging
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from bloggo import __version__
from bloggo.cli import cli


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
    logging.getLogger("bloggo").setLevel(logging.NOTSET)


def create_site(root: Path) -> Path:
    source = root / "site"
    (source / "posts").mkdir(parents=True)
    (source / "templates").mkdir()
    (source / "templates" / "index.html.jinja").write_text(
        "{% for post in posts %}{{ post.url }};{% endfor %}", encoding="utf-8"
    )
    (source / "templates" / "default.html.jinja").write_text(
        "{{ text | safe }}", encoding="utf-8"
    )
    (source / "posts" / "2024-01-01-first.md").write_text(
        "---\ntitle: First\n---\nHello.\n", encoding="utf-8"
    )
    return source


def test_cli_build_with_flags(tmp_path):
    source = create_site(tmp_path)
    dest = tmp_path / "out"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["-s", str(source), "-o", str(dest), "-b", "https://blog.example/", "build"],
        env={"BLOGGO_LOG": None},
    )
    assert result.exit_code == 0, result.output
    assert f"Built 1 posts into {dest}" in result.output
    assert (dest / "index.html").read_text(encoding="utf-8") == (
        "https://blog.example/2024-01-01-first.html;"
    )
    assert (dest / "2024-01-01-first.html").exists()
    assert (dest / "atom.xml").exists()


def test_cli_reads_environment(tmp_path):
    source = create_site(tmp_path)
    dest = tmp_path / "from-env"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["build"],
        env={
            "BLOGGO_SOURCE": str(source),
            "BLOGGO_DEST": str(dest),
            "BLOGGO_BASE_URL": "/blog",
            "BLOGGO_LOG": None,
        },
    )
    assert result.exit_code == 0, result.output
    assert (dest / "index.html").read_text(encoding="utf-8") == "/blog/2024-01-01-first.html;"


def test_cli_flags_override_environment(tmp_path):
    source = create_site(tmp_path)
    dest = tmp_path / "flag"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--dest", str(dest), "build"],
        env={"BLOGGO_SOURCE": str(source), "BLOGGO_DEST": str(tmp_path / "env")},
    )
    assert result.exit_code == 0, result.output
    assert (dest / "index.html").exists()
    assert not (tmp_path / "env").exists()


def test_cli_build_failure_reports_file_and_exits_nonzero(tmp_path):
    source = create_site(tmp_path)
    bad = source / "posts" / "bad.md"
    bad.write_text("no front matter here\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(
        cli, ["-s", str(source), "-o", str(tmp_path / "out"), "build"], env={"BLOGGO_LOG": None}
    )
    assert result.exit_code == 1
    assert "Build failed:" in result.output
    assert f"File: {bad}" in result.output
    assert "Error: Missing front matter." in result.output


def test_cli_missing_template_fails(tmp_path):
    source = create_site(tmp_path)
    (source / "templates" / "index.html.jinja").unlink()
    runner = CliRunner()
    result = runner.invoke(
        cli, ["-s", str(source), "-o", str(tmp_path / "out"), "build"], env={"BLOGGO_LOG": None}
    )
    assert result.exit_code == 1
    assert "Template not found: index" in result.output


def test_cli_clean(tmp_path):
    dest = tmp_path / "out"
    (dest / "sub").mkdir(parents=True)
    runner = CliRunner()
    result = runner.invoke(cli, ["-o", str(dest), "clean"], env={"BLOGGO_LOG": None})
    assert result.exit_code == 0, result.output
    assert f"Cleaned {dest}" in result.output
    assert not dest.exists()

    result = runner.invoke(cli, ["-o", str(dest), "clean"], env={"BLOGGO_LOG": None})
    assert result.exit_code == 0


def test_cli_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
