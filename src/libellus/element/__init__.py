from ._meta import config, logger
from .base import (
    ElementDefinition,
    ElementMeta,
    ElementRegistry,
    OptionalText,
    RequiredText,
    definition_for,
    palette,
)
from .builtin import Checkbox, Select, SelectOption, Slider, Switch, Textarea, TextField, Title
from .render import ElementRenderer, renderer


__all__ = [
    "config", "logger",
    "ElementDefinition", "ElementMeta", "ElementRegistry",
    "OptionalText", "RequiredText",
    "definition_for", "palette",
    "Checkbox", "Select", "SelectOption", "Slider", "Switch", "Textarea", "TextField", "Title",
    "ElementRenderer", "renderer",
]
