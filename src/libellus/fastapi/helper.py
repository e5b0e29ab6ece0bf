import os
from typing import Any, Dict, Mapping

from libellus.element import definition_for
from libellus.error import BadRequestError

TRUTHY_VALUES = ("1", "true", "on", "yes")


def uri(*elements):
    for e in elements[1:]:
        if e.startswith('/'):
            raise BadRequestError('A00.202', 'Path elements must not start with `/`')

    return os.path.join(*elements)


def read_field(definition, raw):
    kind = definition.Meta.value_kind

    if kind == "boolean":
        if isinstance(raw, bool):
            return raw
        return raw is not None and str(raw).strip().lower() in TRUTHY_VALUES

    if raw is None:
        return None

    if kind == "number":
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return raw
        if not str(raw).strip():
            return None
        try:
            return float(raw)
        except ValueError:
            raise BadRequestError('A00.301', f'Invalid number: {raw!r}')

    return raw


def read_form_values(form, fields: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Values of a posted public form keyed by element id. Unchecked
    checkboxes are absent from an HTML post and are read as False.
    """
    values = {}
    for element in form.elements:
        definition = definition_for(element.type)
        if definition is None or not definition.Meta.collects_value:
            continue

        value = read_field(definition, fields.get(element.id))
        if value is not None:
            values[element.id] = value

    return values
