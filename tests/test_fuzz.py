from __future__ import annotations

import os

import pytest

from markdown_builder import factory as md
from markdown_builder.escaping import escape
from markdown_builder.writer import MarkdownStringWriter

atheris = pytest.importorskip("atheris")


def test_escape_with_fuzzed_input():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    checked = 0

    for _ in range(128):
        if provider.remaining_bytes() == 0:
            break
        text = provider.ConsumeUnicodeNoSurrogates(64)
        escaped = escape(text)
        assert escape(escaped) == escaped
        checked += 1

    assert checked  # ensure we exercised the loop


def test_table_with_fuzzed_cells():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    column_count = provider.ConsumeIntInRange(1, 5)
    rows: list[list[str]] = []

    while provider.remaining_bytes() > 0 and len(rows) < 16:
        rows.append(
            [
                provider.ConsumeUnicodeNoSurrogates(16).replace("\r", "").replace("\n", "")
                for _ in range(column_count)
            ]
        )

    writer = MarkdownStringWriter()
    writer.write_table(rows)
    lines = writer.getvalue().split("\n")[:-1]

    if rows:
        assert len(lines) == len(rows) + 1
        assert set(lines[1]) <= {"|", "-", " "}


def test_document_with_fuzzed_text():
    data = os.urandom(4096)
    provider = atheris.FuzzedDataProvider(data)
    content = []

    while provider.remaining_bytes() > 0 and len(content) < 32:
        text = provider.ConsumeUnicodeNoSurrogates(32).replace("\r", " ").replace("\n", " ")
        if provider.ConsumeBool():
            content.append(md.heading(text, level=provider.ConsumeIntInRange(1, 6)))
        else:
            content.append(md.bullet_list(text))

    output = md.document(*content).to_string()
    assert "\n\n\n" not in output
