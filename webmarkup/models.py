"""Validated settings shared by the command line and the :class:`Helper` facade."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

_LIST_TYPES = {"ul", "ol"}


class RenderSettings(BaseModel):
    """Defaults applied to every render call that does not override them."""

    current_class: str = Field(
        default="current",
        description="Class given to the menu item matching the current route",
    )
    item_class: str | None = Field(
        default=None,
        description="Class given to every menu item",
    )
    list_type: str = Field(
        default="ul",
        description="List element used by ul() when no type is requested",
    )
    trim: bool = Field(
        default=False,
        description="Strip outer whitespace from serialised markup",
    )
    log_level: str = Field(
        default="INFO",
        description="Desired logging verbosity",
    )
    components_dir: str | None = Field(
        default=None,
        description="Directory holding component templates",
    )

    @field_validator("current_class", mode="before")
    @classmethod
    def _ensure_current_class(cls, value: str | None) -> str:
        text = str(value or "").strip()
        if not text:
            raise ValueError("current_class must be a non-empty string")
        return text

    @field_validator("item_class", "components_dir", mode="before")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("list_type", mode="before")
    @classmethod
    def _normalise_list_type(cls, value: str | None) -> str:
        candidate = (value or "ul").strip().lower()
        if candidate not in _LIST_TYPES:
            raise ValueError(
                f"Unsupported list_type '{value}'. Expected one of: {', '.join(sorted(_LIST_TYPES))}."
            )
        return candidate

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: str | None) -> str:
        return (value or "INFO").strip().upper()

    def menu_defaults(self) -> Dict[str, Any]:
        """Return the option defaults relevant to menu rendering."""

        defaults: Dict[str, Any] = {"current_class": self.current_class, "trim": self.trim}
        if self.item_class is not None:
            defaults["item_class"] = self.item_class
        return defaults

    def list_defaults(self) -> Dict[str, Any]:
        """Return the option defaults relevant to list rendering."""

        return {"type": self.list_type, "trim": self.trim}


__all__ = ["RenderSettings"]
