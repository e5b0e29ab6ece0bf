"""
Element Type System

Element types are created by inheriting ElementDefinition. The pydantic fields
of the subclass are the element's property schema (names, value types and
constraints); their defaults are what a freshly dropped element starts with.
A nested Meta class carries the type tag and presentation data.

Usage:
    class Rating(ElementDefinition):
        label: RequiredText = "Rating"
        stars: int = Field(5, ge=1, le=10)

        class Meta:
            key = "Rating"
            title = "Rating"
            icon = "star"
            template = "rating.html"

Defining the class registers it under `Meta.key`; nothing else has to change
for the builder, the property editor or the public form to support it.
"""
import re
from typing import Annotated, Any, ClassVar, Dict, Mapping, Optional

from pydantic import BeforeValidator, ConfigDict, StringConstraints, ValidationError

from libellus.data import DataModel
from libellus.error import FieldValidationError, InternalServerError, NotFoundError
from libellus.helper import ClassRegistry, camel_to_title

from ._meta import config, logger

DEFAULT_FIELD_MESSAGE = config.DEFAULT_FIELD_MESSAGE
RX_INDEX_PART = re.compile(r'(?<=\.)\d+(?=\.|$)')
BLANK_ERROR_TYPES = ('missing', 'string_too_short', 'too_short')


def _none_as_blank(value):
    return "" if value is None else value


RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalText = Annotated[str, BeforeValidator(_none_as_blank)]


def error_path(loc) -> str:
    return '.'.join(str(part) for part in loc) or '__root__'


class ElementMeta(DataModel):
    """
    Metadata of an element type.

    - key: type tag stored on every instance (required)
    - title: palette label (defaults to the class name as words)
    - description: palette hint
    - icon: palette icon name
    - template: render template name
    - collects_value: whether the public form collects a value for it
    - value_kind: how a posted form field is read (`text`, `boolean`, `number`)
    """
    key: str
    title: str
    description: Optional[str] = None
    icon: Optional[str] = None
    template: Optional[str] = None
    collects_value: bool = True
    value_kind: str = "text"


class ElementDefinition(DataModel):
    """
    Base class of element types. An instance of a definition is one validated
    set of element attributes; the class itself is the immutable type.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        validate_default=True,
        extra='ignore',
    )

    # Field path (indices written as `*`) => message shown instead of pydantic's
    messages: ClassVar[Dict[str, str]] = {}

    class Meta:
        pass

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs):
        super().__pydantic_init_subclass__(**kwargs)

        if cls.__dict__.get('__abstract__'):
            return

        if 'Meta' not in cls.__dict__:
            raise InternalServerError(
                "E00.101",
                f"ElementDefinition subclass {cls.__name__} must define a Meta class",
                None
            )

        meta_cls = cls.Meta
        cls.Meta = ElementMeta.create(meta_cls, defaults={
            'key': cls.__name__,
            'title': camel_to_title(cls.__name__),
            'description': cls.__doc__ and cls.__doc__.strip(),
        })

        ElementRegistry.register(cls.Meta.key)(cls)

    @classmethod
    def construct(cls, **overrides) -> Dict[str, Any]:
        """ Fresh default attribute set of this type (wire names). """
        return cls(**overrides).model_dump()

    @classmethod
    def property_names(cls):
        return tuple(field.alias or name for name, field in cls.model_fields.items())

    @classmethod
    def declares(cls, name) -> bool:
        return name in cls.property_names()

    @classmethod
    def seed(cls, attributes: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """ Editable snapshot: current attributes merged over type defaults,
            restricted to the recognized property names. """
        names = cls.property_names()
        values = cls.construct()
        values.update({k: v for k, v in (attributes or {}).items() if k in names})
        return values

    @classmethod
    def check_attributes(cls, values: Mapping[str, Any]) -> Dict[str, str]:
        """ Validate `values`, returning {field path: message}; empty when valid. """
        try:
            cls.model_validate(dict(values))
        except ValidationError as e:
            return cls._collect_errors(e)

        return {}

    @classmethod
    def validate_attributes(cls, values: Mapping[str, Any]) -> Dict[str, Any]:
        """ Validated and normalized attribute set, or FieldValidationError. """
        try:
            return cls.model_validate(dict(values)).model_dump()
        except ValidationError as e:
            raise FieldValidationError(
                "E00.201",
                f"Invalid properties for element [{cls.Meta.key}]",
                cls._collect_errors(e)
            )

    @classmethod
    def _collect_errors(cls, exc: ValidationError) -> Dict[str, str]:
        errors = {}
        for err in exc.errors():
            path = error_path(err['loc'])
            if path in errors:
                continue

            if err['type'] in BLANK_ERROR_TYPES:
                message = cls.messages.get(RX_INDEX_PART.sub('*', path))
            elif err['type'] == 'value_error':
                message = str(err.get('ctx', {}).get('error', '')) or None
            else:
                message = None

            errors[path] = message or err.get('msg') or DEFAULT_FIELD_MESSAGE

        return errors

    @classmethod
    def json_schema(cls):
        return cls.model_json_schema(by_alias=True)

    @classmethod
    def label_of(cls, attributes: Optional[Mapping[str, Any]]) -> str:
        attributes = attributes or {}
        return attributes.get('label') or attributes.get('title') or cls.Meta.key

    @classmethod
    def is_required(cls, attributes: Optional[Mapping[str, Any]]) -> bool:
        return cls.declares('required') and bool((attributes or {}).get('required'))

    @classmethod
    def render(cls, instance, value=None):
        from .render import renderer
        return renderer.render_element(instance, value)


ElementRegistry = ClassRegistry(ElementDefinition)


def definition_for(elem_type) -> Optional[type]:
    """ Definition registered under `elem_type`, or None for an unknown type. """
    try:
        return ElementRegistry.get(elem_type)
    except NotFoundError:
        logger.debug('Unknown element type [%s]', elem_type)
        return None


def palette():
    return [
        {
            "key": key,
            "title": definition.Meta.title,
            "description": definition.Meta.description,
            "icon": definition.Meta.icon,
        }
        for key, definition in ElementRegistry.items()
    ]
