"""
Builtin element types of the builder palette.
"""
from typing import List

from pydantic import Field, ValidationInfo, field_validator

from libellus.data import DataModel

from .base import ElementDefinition, OptionalText, RequiredText

LABEL_MESSAGES = {"label": "Label is required"}


class TextField(ElementDefinition):
    """Single-line text input."""
    label: RequiredText = "Text Field"
    placeholder: OptionalText = "Enter text here"
    helper_text: OptionalText = ""
    required: bool = False

    messages = LABEL_MESSAGES

    class Meta:
        key = "TextField"
        title = "Text Field"
        icon = "text"
        template = "text_field.html"


class Textarea(ElementDefinition):
    """Multi-line text input."""
    label: RequiredText = "Textarea"
    placeholder: OptionalText = "Enter text here"
    helper_text: OptionalText = ""
    required: bool = False
    rows: int = Field(3, ge=1, le=20)

    messages = LABEL_MESSAGES

    class Meta:
        key = "Textarea"
        title = "Textarea"
        icon = "file-text"
        template = "textarea.html"


class Title(ElementDefinition):
    """Heading with an optional subtitle. Collects no value."""
    title: RequiredText = "Form Title"
    subtitle: OptionalText = "Fill out the form below"

    messages = {"title": "Title is required"}

    class Meta:
        key = "Title"
        title = "Title"
        icon = "type"
        template = "title.html"
        collects_value = False


class Checkbox(ElementDefinition):
    """Single checkbox."""
    label: RequiredText = "Checkbox"
    helper_text: OptionalText = ""
    default_checked: bool = Field(False, alias="defaultChecked")

    messages = LABEL_MESSAGES

    class Meta:
        key = "Checkbox"
        title = "Checkbox"
        icon = "check-square"
        template = "checkbox.html"
        value_kind = "boolean"


class SelectOption(DataModel):
    label: RequiredText
    value: RequiredText


def _default_options():
    return [
        {"label": "Option 1", "value": "option1"},
        {"label": "Option 2", "value": "option2"},
    ]


class Select(ElementDefinition):
    """Drop-down with a single choice."""
    label: RequiredText = "Select"
    placeholder: OptionalText = "Select an option"
    helper_text: OptionalText = ""
    required: bool = False
    options: List[SelectOption] = Field(default_factory=_default_options, min_length=1)

    messages = {
        **LABEL_MESSAGES,
        "options": "At least one option is required",
        "options.*.label": "Option label is required",
        "options.*.value": "Option value is required",
    }

    @field_validator("options")
    @classmethod
    def _unique_values(cls, options):
        values = [opt.value for opt in options]
        if len(set(values)) != len(values):
            raise ValueError("Option values must be unique")

        return options

    class Meta:
        key = "Select"
        title = "Select"
        icon = "list"
        template = "select.html"


class Switch(ElementDefinition):
    """On/off toggle switch."""
    label: RequiredText = "Switch"
    helper_text: OptionalText = ""
    default_checked: bool = Field(False, alias="defaultChecked")

    messages = LABEL_MESSAGES

    class Meta:
        key = "Switch"
        title = "Switch"
        icon = "toggle-left"
        template = "switch.html"
        value_kind = "boolean"


class Slider(ElementDefinition):
    """Numeric slider over [min, max]."""
    label: RequiredText = "Slider"
    helper_text: OptionalText = ""
    min: float = 0
    max: float = 100
    step: float = 1
    default_value: float = Field(50, alias="defaultValue")

    messages = LABEL_MESSAGES

    @field_validator("max")
    @classmethod
    def _max_not_below_min(cls, value, info: ValidationInfo):
        low = info.data.get("min")
        if low is not None and value < low:
            raise ValueError("Max must be greater than or equal to min")

        return value

    @field_validator("step")
    @classmethod
    def _positive_step(cls, value):
        if value <= 0:
            raise ValueError("Step must be greater than 0")

        return value

    @field_validator("default_value")
    @classmethod
    def _value_within_range(cls, value, info: ValidationInfo):
        low, high = info.data.get("min"), info.data.get("max")
        if low is not None and high is not None and not low <= value <= high:
            raise ValueError("Default value must be between min and max")

        return value

    class Meta:
        key = "Slider"
        title = "Slider"
        icon = "sliders"
        template = "slider.html"
        value_kind = "number"
