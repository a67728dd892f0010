# topmark:header:start
#
#   project      : Pressroom
#   file         : test_components.py
#   file_relpath : tests/registry/test_components.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the reader and writer registries."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import pytest

from pressroom.config import BoolType, OptionSpec, SettingsRegistry
from pressroom.readers import LineReader
from pressroom.registry import (
    get_reader,
    get_writer,
    reader_names,
    readers,
    register_reader,
    register_writer,
    unregister_reader,
    unregister_writer,
    writer_names,
    writers,
)
from pressroom.transforms import Transform
from pressroom.writers import MarkdownWriter, TextWriter, Writer

if TYPE_CHECKING:
    from pressroom.transforms import TransformContext, TransformSpec


class _Flagged(Transform):
    default_priority: ClassVar[int] = 10
    settings_spec: ClassVar[tuple[OptionSpec, ...]] = (
        OptionSpec("flag_everything", BoolType(), False, "Flag every node."),
    )

    def apply(self, ctx: TransformContext) -> None:
        pass


class _PluginReader(LineReader):
    name: ClassVar[str] = "plugin-lines"
    transforms: ClassVar[tuple[TransformSpec, ...]] = (_Flagged,)


class _PluginWriter(Writer):
    name: ClassVar[str] = "plugin-writer"
    settings_spec: ClassVar[tuple[OptionSpec, ...]] = (
        OptionSpec("plugin_wrap", BoolType(), True),
    )


def test_bundled_components_are_registered() -> None:
    assert "lines" in reader_names()
    assert writer_names() == sorted(writer_names())
    assert {"markdown", "text"} <= set(writer_names())
    assert get_reader("lines") is LineReader
    assert get_writer("text") is TextWriter
    assert get_writer("markdown") is MarkdownWriter


def test_unknown_names_list_known_ones() -> None:
    with pytest.raises(KeyError, match="known: .*lines"):
        get_reader("rst")
    with pytest.raises(KeyError, match="Unknown writer 'html'"):
        get_writer("html")


def test_register_reader_adds_transform_options() -> None:
    catalogue = SettingsRegistry()
    try:
        register_reader(_PluginReader, registry=catalogue)
        assert get_reader("plugin-lines") is _PluginReader
        assert "flag_everything" in catalogue
        assert "doctitle" not in catalogue
    finally:
        assert unregister_reader("plugin-lines") is True
    assert unregister_reader("plugin-lines") is False
    assert "plugin-lines" not in readers()


def test_register_writer_adds_options() -> None:
    catalogue = SettingsRegistry()
    try:
        register_writer(_PluginWriter, registry=catalogue)
        assert writers()["plugin-writer"] is _PluginWriter
        assert catalogue.defaults() == {"plugin_wrap": True}
    finally:
        unregister_writer("plugin-writer")
    assert "plugin-writer" not in writer_names()


def test_snapshots_are_read_only() -> None:
    view = readers()
    with pytest.raises(TypeError):
        view["x"] = LineReader  # type: ignore[index]
