"""Markup Converter - Markdown <-> remote HTML for rich-text fields."""

from adosync.markup.converter import to_local_markup, to_remote_markup

__all__ = [
    "to_local_markup",
    "to_remote_markup",
]
