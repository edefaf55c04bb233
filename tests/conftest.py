"""Shared pytest fixtures for the webmarkup test-suite."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from webmarkup.context import RenderContext, RouteTable
from webmarkup.strings import StringTable


@pytest.fixture
def route_table() -> RouteTable:
    """Return a router with a handful of named routes."""

    return RouteTable(
        {
            "home": "/",
            "about": "/about",
            "contact": "/contact",
            "user": "/users/{id}",
        }
    )


@pytest.fixture
def context_for(route_table: RouteTable) -> Callable[[str], RenderContext]:
    """Return a callable building a render context for a request path."""

    def _build(path: str) -> RenderContext:
        return route_table.context_for(path)

    return _build


@pytest.fixture
def home_context(context_for: Callable[[str], RenderContext]) -> RenderContext:
    """Return the context of a request to the home page."""

    return context_for("/")


@pytest.fixture
def strings() -> StringTable:
    """Return a translation table used by label and option tests."""

    return StringTable(
        {
            "About": "Über uns",
            "Section": "Abschnitt",
            "opt.first": "Erste",
            "opt.second": "Zweite",
            "tip.first": "The first one",
            "btn.save": "Save",
            "tip.save": "Store the record",
        }
    )


@pytest.fixture
def components_dir(tmp_path: Path) -> Path:
    """Return a directory holding two component templates."""

    views = tmp_path / "views"
    views.mkdir()
    (views / "hello.html").write_text('<div id="hello">{{ name }}</div>', encoding="utf-8")
    (views / "goodbye.html").write_text('<div id="goodbye">{{ name }}</div>', encoding="utf-8")
    return views
