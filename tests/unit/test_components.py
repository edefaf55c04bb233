"""Tests for :mod:`webmarkup.components`."""

from __future__ import annotations

from pathlib import Path

import pytest

from webmarkup.components import ComponentLoader
from webmarkup.errors import ComponentError


def test_load_by_name_from_directory(components_dir: Path) -> None:
    """Given an include directory When a view is loaded by name Then .html is appended and data rendered."""

    loader = ComponentLoader(include=components_dir)

    assert loader.load("hello", {"name": "Ada"}) == '<div id="hello">Ada</div>'
    assert loader.load("goodbye.html", {"name": "Bob"}) == '<div id="goodbye">Bob</div>'


def test_rendered_data_is_escaped(components_dir: Path) -> None:
    """Given markup in the data When rendered Then it is autoescaped."""

    loader = ComponentLoader(include=components_dir)

    assert loader.load("hello", {"name": "<b>"}) == '<div id="hello">&lt;b&gt;</div>'


def test_missing_view_raises(components_dir: Path) -> None:
    """Given an unknown view When loaded Then a ComponentError is raised."""

    with pytest.raises(ComponentError):
        ComponentLoader(include=components_dir).load("missing")


def test_load_by_path_without_include(components_dir: Path) -> None:
    """Given no include directory When a file path is given Then that file is rendered."""

    loader = ComponentLoader()

    assert loader.load(str(components_dir / "hello.html"), {"name": "Cy"}) == '<div id="hello">Cy</div>'

    with pytest.raises(ComponentError):
        loader.load("hello")


def test_missing_include_directory(tmp_path: Path) -> None:
    """Given an include directory that does not exist When loading Then a ComponentError is raised."""

    with pytest.raises(ComponentError):
        ComponentLoader(include=tmp_path / "absent").load("hello")
