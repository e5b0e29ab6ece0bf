from typing import Any, List, Mapping, Optional

from libellus.element import definition_for
from libellus.error import UnknownElementError

from ._meta import config, logger
from .model import ElementInstance, FormDefinition

DEBUG_CANVAS = config.DEBUG_CANVAS


class BuilderCanvas(object):
    """
    Ordered element instances of the form being built, plus the selected
    instance and the palette entry currently being dragged.

    All operations are synchronous and in-memory; nothing leaves the canvas
    until its owner saves a form produced by `to_form`.
    """

    def __init__(self, elements=None):
        self._elements: List[ElementInstance] = list(elements or [])
        self._selected_id: Optional[str] = None
        self._dragging: Optional[str] = None

    def __len__(self):
        return len(self._elements)

    def __iter__(self):
        return iter(tuple(self._elements))

    def __contains__(self, instance_id):
        return self.index_of(instance_id) is not None

    @property
    def elements(self):
        return tuple(self._elements)

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected(self) -> Optional[ElementInstance]:
        return self.get(self._selected_id)

    @property
    def dragging(self) -> Optional[str]:
        return self._dragging

    def index_of(self, instance_id) -> Optional[int]:
        if instance_id is None:
            return None

        for index, element in enumerate(self._elements):
            if element.id == instance_id:
                return index

        return None

    def get(self, instance_id) -> Optional[ElementInstance]:
        index = self.index_of(instance_id)
        return None if index is None else self._elements[index]

    def select(self, instance_id) -> Optional[ElementInstance]:
        instance = self.get(instance_id)
        if instance is not None:
            self._selected_id = instance.id

        return instance

    def deselect(self):
        self._selected_id = None

    def add_instance(self, elem_type, index: Optional[int] = None) -> ElementInstance:
        definition = definition_for(elem_type)
        if definition is None:
            raise UnknownElementError(
                "B00.101",
                f"Cannot add element of unknown type [{elem_type}]"
            )

        instance = ElementInstance(type=definition.Meta.key, attributes=definition.construct())
        if index is None:
            self._elements.append(instance)
        else:
            self._elements.insert(max(0, index), instance)

        self._selected_id = instance.id
        DEBUG_CANVAS and logger.debug('Added element [%s] of type [%s]', instance.id, elem_type)
        return instance

    def update_instance(self, instance_id, attributes: Mapping[str, Any]) -> Optional[ElementInstance]:
        index = self.index_of(instance_id)
        if index is None:
            return None

        updated = self._elements[index].merge(attributes)
        self._elements[index] = updated
        DEBUG_CANVAS and logger.debug('Updated element [%s] with %s', instance_id, list(attributes))
        return updated

    def remove_instance(self, instance_id) -> Optional[ElementInstance]:
        index = self.index_of(instance_id)
        if index is None:
            return None

        removed = self._elements.pop(index)
        if self._selected_id == instance_id:
            self._selected_id = None

        DEBUG_CANVAS and logger.debug('Removed element [%s]', instance_id)
        return removed

    def move_instance(self, instance_id, index: int) -> Optional[ElementInstance]:
        current = self.index_of(instance_id)
        if current is None:
            return None

        instance = self._elements.pop(current)
        self._elements.insert(min(max(0, index), len(self._elements)), instance)
        return instance

    def clear(self):
        if not self._elements:
            return

        self._elements = []
        self._selected_id = None
        logger.info('Canvas cleared.')

    def begin_drag(self, elem_type):
        if definition_for(elem_type) is None:
            raise UnknownElementError(
                "B00.102",
                f"Cannot drag element of unknown type [{elem_type}]"
            )

        self._dragging = elem_type

    def drop(self, over_canvas=True) -> Optional[ElementInstance]:
        ''' Finish the drag. Dropping on the canvas adds the dragged type. '''
        elem_type, self._dragging = self._dragging, None
        if elem_type is None or not over_canvas:
            return None

        return self.add_instance(elem_type)

    def cancel_drag(self):
        self._dragging = None

    def to_form(self, name, description="", form_id=None, published=False) -> FormDefinition:
        return FormDefinition(
            id=form_id,
            name=name,
            description=description,
            elements=list(self._elements),
            published=published,
        )

    def load(self, form: FormDefinition):
        self._elements = list(form.elements)
        self._selected_id = None
        self._dragging = None
