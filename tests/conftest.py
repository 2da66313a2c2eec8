import pytest
from click.testing import CliRunner

from markdown_builder.formatting import MarkdownFormat, WriterSettings
from markdown_builder.writer import MarkdownStringWriter


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def make_writer():
    """Builds string writers from `MarkdownFormat` keyword options."""

    def _make(**format_options) -> MarkdownStringWriter:
        settings = WriterSettings.from_format(MarkdownFormat(**format_options))
        return MarkdownStringWriter(settings)

    return _make


@pytest.fixture()
def writer() -> MarkdownStringWriter:
    return MarkdownStringWriter()
