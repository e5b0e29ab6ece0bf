from typing import Any, Dict, List, Mapping

from libellus.builder.model import ElementInstance, FormDefinition, SubmissionRecord
from libellus.element import definition_for
from libellus.error import ForbiddenError, InternalServerError, RequiredFieldsMissing

from ._meta import config, logger

DEBUG_INTAKE = config.DEBUG_INTAKE


def is_blank(value) -> bool:
    ''' None, a blank string or an empty collection. 0 and False are values. '''
    if value is None:
        return True

    if isinstance(value, str):
        return not value.strip()

    if isinstance(value, (list, tuple, set, dict)):
        return not value

    return False


class SubmissionIntake(object):
    """
    Values an end user entered into a public form, keyed by element id.

    `submit` checks the required elements, forwards the values to storage and
    empties the value map once storage accepted them.
    """

    def __init__(self, form: FormDefinition, bridge=None):
        self.form = form
        self.bridge = bridge
        self._values: Dict[str, Any] = {}

    @property
    def values(self) -> Dict[str, Any]:
        return dict(self._values)

    def set_value(self, instance_id, value):
        self._values[instance_id] = value
        return self

    def update(self, values: Mapping[str, Any]):
        for instance_id, value in values.items():
            self.set_value(instance_id, value)

        return self

    def clear(self):
        self._values = {}

    def required_elements(self) -> List[ElementInstance]:
        required = []
        for element in self.form.elements:
            definition = definition_for(element.type)
            if definition is None:
                continue

            if definition.is_required(element.attributes):
                required.append(element)

        return required

    def missing_fields(self) -> List[str]:
        return [
            element.label
            for element in self.required_elements()
            if is_blank(self._values.get(element.id))
        ]

    def errors(self) -> Dict[str, str]:
        ''' Required-field message per element id, for redisplaying the form. '''
        return {
            element.id: config.REQUIRED_FIELD_MESSAGE.format(label=element.label)
            for element in self.required_elements()
            if is_blank(self._values.get(element.id))
        }

    def payload(self) -> Dict[str, Any]:
        known = {element.id for element in self.form.elements}
        return {k: v for k, v in self._values.items() if k in known}

    async def submit(self) -> SubmissionRecord:
        if config.INTAKE_REQUIRE_PUBLISHED and not self.form.published:
            raise ForbiddenError("I00.301", "This form is not accepting submissions")

        missing = self.missing_fields()
        if missing:
            raise RequiredFieldsMissing("I00.201", missing, self.errors())

        if self.bridge is None:
            raise InternalServerError("I00.501", "Submission intake has no storage bridge", None)

        data = self.payload()
        DEBUG_INTAKE and logger.debug('Submitting form [%s] with %s', self.form.id, list(data))

        # A failed submit leaves the values in place
        record = await self.bridge.submit(self.form.id, data)
        self.clear()
        logger.info('Submission [%s] stored for form [%s]', record.id, self.form.id)
        return record
