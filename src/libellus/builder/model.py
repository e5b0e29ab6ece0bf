"""
Runtime models of the builder.

ElementInstance is one placed element: its id, the type tag of its definition
and the attributes configured for it. FormDefinition is the unit of
persistence; SubmissionRecord is one end-user's values for a form.

Wire names follow the storage API: instance attributes travel as
`extra_attributes`, the publish flag is read from `published` or `status`.
"""
from datetime import datetime
from typing import Annotated, Any, Dict, List, Mapping, Optional

from pydantic import AliasChoices, BeforeValidator, Field

from libellus.data import DataModel, ELEMENT_ID_GENR
from libellus.element import definition_for
from libellus.helper import timestamp

from ._meta import config


def _none_as_empty(value):
    return {} if value is None else value


def _none_as_list(value):
    return [] if value is None else value


AttributeMap = Annotated[Dict[str, Any], BeforeValidator(_none_as_empty)]


class ElementInstance(DataModel):
    id: str = Field(default_factory=ELEMENT_ID_GENR)
    type: str
    attributes: AttributeMap = Field(default_factory=dict, alias="extra_attributes")

    @property
    def definition(self):
        return definition_for(self.type)

    @property
    def label(self) -> str:
        definition = self.definition
        if definition is None:
            return self.attributes.get('label') or self.type

        return definition.label_of(self.attributes)

    def merge(self, attributes: Mapping[str, Any]) -> "ElementInstance":
        ''' Shallow merge: given keys overwrite, the others are kept. '''
        return self.set(attributes={**self.attributes, **attributes})


class FormDefinition(DataModel):
    id: Optional[str] = None
    name: str = config.DEFAULT_FORM_NAME
    description: Optional[str] = config.DEFAULT_FORM_DESCRIPTION
    elements: Annotated[List[ElementInstance], BeforeValidator(_none_as_list)] = Field(default_factory=list)
    published: bool = Field(False, validation_alias=AliasChoices("published", "status"))
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def get_element(self, instance_id) -> Optional[ElementInstance]:
        for element in self.elements:
            if element.id == instance_id:
                return element

        return None

    def payload(self) -> Dict[str, Any]:
        ''' Outbound body of a save: name, description and the ordered elements. '''
        return {
            "name": self.name,
            "description": self.description or "",
            "elements": [element.model_dump(mode="json") for element in self.elements],
        }


class SubmissionRecord(DataModel):
    id: Optional[str] = None
    form_id: str = Field(validation_alias=AliasChoices("form_id", "formId"))
    data: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=timestamp)
    updated_at: Optional[datetime] = None

    def payload(self) -> Dict[str, Any]:
        return {"form_id": self.form_id, "data": dict(self.data)}
