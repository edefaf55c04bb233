"""Render menus, nested lists and form controls from declarative definitions."""

from .context import RenderContext, RouteMatch, RouteTable
from .errors import ComponentError, MarkupConfigError, MarkupError, RouteBuildError
from .helper import Helper
from .lists import ListCompiler
from .markup import return_value, serialize
from .menu import MenuCompiler
from .models import RenderSettings
from .rules import merge_options
from .selection import SelectionMatcher
from .simple import SimpleMarkup
from .strings import StringTable

__all__ = [
    "ComponentError",
    "Helper",
    "ListCompiler",
    "MarkupConfigError",
    "MarkupError",
    "MenuCompiler",
    "RenderContext",
    "RenderSettings",
    "RouteBuildError",
    "RouteMatch",
    "RouteTable",
    "SelectionMatcher",
    "SimpleMarkup",
    "StringTable",
    "merge_options",
    "return_value",
    "serialize",
]
