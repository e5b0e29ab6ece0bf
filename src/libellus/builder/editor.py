from typing import Any, Dict, Optional

from libellus.element import definition_for
from libellus.error import BadRequestError, FieldValidationError

from ._meta import logger
from .canvas import BuilderCanvas
from .model import ElementInstance


class PropertyEditor(object):
    """
    Editable snapshot of one instance's properties.

    The snapshot is seeded from the instance attributes merged over the type
    defaults. `submit` validates the whole snapshot against the type's schema
    and merges it into the instance only when every field passes.
    """

    def __init__(self, canvas: BuilderCanvas, instance_id=None):
        self._canvas = canvas
        self._instance_id = canvas.selected_id if instance_id is None else instance_id
        self._definition = None
        self.values: Dict[str, Any] = {}
        self.errors: Dict[str, str] = {}
        self.reset()

    @property
    def instance_id(self):
        return self._instance_id

    @property
    def instance(self) -> Optional[ElementInstance]:
        return self._canvas.get(self._instance_id)

    @property
    def definition(self):
        return self._definition

    @property
    def bound(self) -> bool:
        return self._definition is not None and self.instance is not None

    @property
    def schema(self):
        return self._definition.json_schema() if self._definition else None

    def reset(self):
        instance = self.instance
        self._definition = definition_for(instance.type) if instance else None
        self.values = self._definition.seed(instance.attributes) if self.bound else {}
        self.errors = {}

    def set(self, name, value):
        if not self.bound:
            raise BadRequestError("B00.201", "Property editor is not bound to an element")

        if not self._definition.declares(name):
            raise BadRequestError(
                "B00.202",
                f"Element [{self._definition.Meta.key}] has no property [{name}]"
            )

        self.values[name] = value
        return self

    def update(self, values):
        for name, value in values.items():
            self.set(name, value)

        return self

    def validate(self) -> Dict[str, str]:
        self.errors = self._definition.check_attributes(self.values) if self.bound else {}
        return self.errors

    def submit(self) -> Optional[ElementInstance]:
        if not self.bound:
            logger.warning('Skip property commit for unbound element [%s]', self._instance_id)
            return None

        try:
            validated = self._definition.validate_attributes(self.values)
        except FieldValidationError as e:
            self.errors = e.errors
            raise

        updated = self._canvas.update_instance(self._instance_id, validated)
        self.values = self._definition.seed(updated.attributes)
        self.errors = {}
        return updated
