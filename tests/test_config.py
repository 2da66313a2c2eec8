from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from markdown_builder.config import (
    ConfigError,
    apply_overrides,
    build_format,
    load_format,
    validate_config,
)
from markdown_builder.formatting import HorizontalRuleFormat, MarkdownFormat


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".markdown-builder.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_format_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.markdown-builder]
        bold_style = "underscore"
        list_style = "asterisk"
        table_padding = false
        indent_chars = "    "

        [tool.markdown-builder.horizontal_rule]
        style = "asterisk"
        count = 5
        space = ""
        """,
    )

    markdown_format = load_format(tmp_path)

    assert markdown_format == MarkdownFormat(
        bold_style="underscore",
        list_style="asterisk",
        table_padding=False,
        indent_chars="    ",
        horizontal_rule=HorizontalRuleFormat(style="asterisk", count=5, space=""),
    )


def test_loads_format_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [markdown-builder]
        ordered_list_style = "parenthesis"
        """,
    )

    assert load_format(tmp_path).ordered_list_style == "parenthesis"


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.markdown-builder]
        close_heading = true
        """,
    )

    assert load_format(tmp_path).close_heading is True


def test_pyproject_wins_over_dotfile(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.markdown-builder]
        list_style = "plus"
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [markdown-builder]
        list_style = "asterisk"
        """,
    )

    assert load_format(tmp_path).list_style == "plus"


def test_searches_parent_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.markdown-builder]
        code_fence_style = "tilde"
        """,
    )
    nested = tmp_path / "docs" / "guide"
    nested.mkdir(parents=True)

    assert load_format(nested).code_fence_style == "tilde"


def test_pyproject_without_table_is_skipped(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [project]
        name = "example"
        """,
    )
    _write_dotfile(
        tmp_path,
        """
        [markdown-builder]
        italic_style = "underscore"
        """,
    )

    assert load_format(tmp_path).italic_style == "underscore"


def test_empty_table_returns_defaults(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.markdown-builder]
        """,
    )

    assert load_format(tmp_path) == MarkdownFormat()


def test_unreadable_toml_is_skipped(tmp_path: Path):
    _write_pyproject(tmp_path, "not = [valid")
    nested = tmp_path / "child"
    nested.mkdir()

    assert load_format(nested) == MarkdownFormat()


def test_unknown_key_raises(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.markdown-builder]
        bold = "underscore"
        """,
    )

    with pytest.raises(ConfigError):
        load_format(tmp_path)


def test_non_table_settings_raise(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        markdown-builder = 5
        """,
    )

    with pytest.raises(ConfigError, match="Invalid"):
        load_format(tmp_path)


@pytest.mark.parametrize(
    "rule",
    [
        "horizontal_rule = 3",
        "horizontal_rule = { count = 2 }",
        "horizontal_rule = { width = 4 }",
    ],
)
def test_invalid_horizontal_rule_raises(tmp_path: Path, rule: str):
    _write_pyproject(tmp_path, f"[tool.markdown-builder]\n{rule}\n")

    with pytest.raises(ConfigError):
        load_format(tmp_path)


def test_apply_overrides_ignores_none():
    markdown_format = MarkdownFormat()

    assert apply_overrides(markdown_format, list_style=None) is markdown_format
    assert apply_overrides(markdown_format, list_style="plus").list_style == "plus"


def test_apply_overrides_rejects_unknown_field():
    with pytest.raises(TypeError):
        apply_overrides(MarkdownFormat(), colour="red")


@pytest.mark.parametrize(
    "markdown_format",
    [
        MarkdownFormat(bold_style="heavy"),
        MarkdownFormat(table_padding="yes"),
        MarkdownFormat(indent_chars=""),
        MarkdownFormat(horizontal_rule=HorizontalRuleFormat(style="wave")),
    ],
)
def test_validate_config_rejects_invalid_values(markdown_format: MarkdownFormat):
    with pytest.raises(ConfigError):
        validate_config(markdown_format)


def test_validate_config_accepts_defaults():
    validate_config(MarkdownFormat())


def test_build_format_applies_overrides(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.markdown-builder]
        list_style = "plus"
        bold_style = "underscore"
        """,
    )

    markdown_format = build_format(tmp_path, list_style="asterisk", italic_style=None)

    assert markdown_format.list_style == "asterisk"
    assert markdown_format.bold_style == "underscore"


def test_build_format_validates_file_values(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.markdown-builder]
        table_outer_delimiter = "no"
        """,
    )

    with pytest.raises(ConfigError, match="table_outer_delimiter"):
        build_format(tmp_path)
