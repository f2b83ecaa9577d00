"""Tests for CLI commands."""

from collections.abc import Callable
from pathlib import Path

from click.testing import CliRunner
from espresso.cli import cli

Writer = Callable[..., Path]


def _write_config(tmp_path: Path, extra: str = "") -> Path:
    config_file = tmp_path / "site.toml"
    config_file.write_text(
        '[site]\ntitle = "Coffee Blog"\nbase_url = "https://example.com"\n' + extra,
    )
    return config_file


class TestBuildCommand:
    """Tests for the build command."""

    def test__builds_site_and_writes_feed(self, tmp_path: Path, write_content: Writer) -> None:
        write_content("blog/first.md", title="First")
        write_content("blog/second.md", title="Second", related=["blog/first"])
        config_file = _write_config(tmp_path)

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "-c", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "Build completed successfully!" in result.output
        assert "Pages: 2" in result.output
        assert (tmp_path / "target" / "atom.xml").exists()

    def test__atom_disabled__no_feed(self, tmp_path: Path, write_content: Writer) -> None:
        write_content("blog/first.md")
        config_file = _write_config(tmp_path, "[atom]\nenabled = false\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "-c", str(config_file)])

        assert result.exit_code == 0, result.output
        assert not (tmp_path / "target" / "atom.xml").exists()

    def test__unresolved_links__printed(self, tmp_path: Path, write_content: Writer) -> None:
        write_content("blog/post.md", related=["blog/missing"])
        config_file = _write_config(tmp_path)

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "-c", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "1 related link(s) could not be resolved" in result.output
        assert "blog/missing" in result.output

    def test__strict__fails_on_unresolved_links(self, tmp_path: Path, write_content: Writer) -> None:
        write_content("blog/post.md", related=["blog/missing"])
        config_file = _write_config(tmp_path)

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "-c", str(config_file), "--strict"])

        assert result.exit_code == 1
        assert "could not be resolved" in result.output

    def test__parse_error__fails(self, tmp_path: Path, write_content: Writer) -> None:
        write_content("blog/good.md")
        (tmp_path / "content" / "blog" / "bad.md").write_text("no front matter")
        config_file = _write_config(tmp_path)

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "bad.md" in result.output

    def test__invalid_config__fails(self, tmp_path: Path) -> None:
        config_file = tmp_path / "site.toml"
        config_file.write_text("[build]\nworkers = 0\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["build", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "build.workers" in result.output

    def test__fails_on_missing_config(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["build", "-c", str(tmp_path / "nonexistent.toml")])

        assert result.exit_code != 0


class TestRoutesCommand:
    """Tests for the routes command."""

    def test__prints_route_tree(self, tmp_path: Path, write_content: Writer) -> None:
        write_content("index.md", title="Home")
        write_content("blog/first.md")
        write_content("blog/coffee/roasting.md")
        config_file = _write_config(tmp_path)

        runner = CliRunner()
        result = runner.invoke(cli, ["routes", "-c", str(config_file)])

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "/ (0 pages, index)",
            "  blog/ (1 pages, list)",
            "    coffee/ (1 pages, list)",
        ]
