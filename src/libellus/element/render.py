from typing import Any, Dict, Mapping, Optional

import jinja2
from markupsafe import Markup

from ._meta import config, logger
from .base import definition_for


def format_number(value):
    ''' 50.0 -> 50, 0.5 -> 0.5 '''
    if isinstance(value, float) and value.is_integer():
        return int(value)

    return value


class ElementRenderer(object):
    def __init__(self, package=config.TEMPLATE_PACKAGE, template_dir=config.TEMPLATE_DIR):
        self.template_loader = jinja2.PackageLoader(package, template_dir)
        self.template_env = jinja2.Environment(
            loader=self.template_loader,
            autoescape=jinja2.select_autoescape(['html']),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.add_filter('number', format_number)

    def add_filter(self, name, func):
        self.template_env.filters[name] = func

    def add_global(self, key, value):
        self.template_env.globals[key] = value

    def render_element(self, instance, value: Any = None) -> Markup:
        definition = definition_for(instance.type)
        if definition is None or not definition.Meta.template:
            logger.warning('Skip rendering element [%s] of unknown type [%s]', instance.id, instance.type)
            return Markup('')

        template = self.template_env.get_template(definition.Meta.template)
        return Markup(template.render(
            element=instance,
            attrs=definition.seed(instance.attributes),
            value=value,
            name=instance.id,
            field_id=f"field-{instance.id}",
        ))

    def render_form(
        self,
        form,
        values: Optional[Mapping[str, Any]] = None,
        errors: Optional[Dict[str, str]] = None,
        action: Optional[str] = None,
        message: Optional[str] = None,
    ) -> str:
        values = values or {}
        fields = [
            (element, self.render_element(element, values.get(element.id)))
            for element in form.elements
        ]
        template = self.template_env.get_template(config.FORM_TEMPLATE)
        return template.render(
            form=form,
            fields=[(element, html) for element, html in fields if html],
            errors=errors or {},
            action=action,
            message=message,
        )


renderer = ElementRenderer()
