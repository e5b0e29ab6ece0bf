from libellus.error import BadRequestError, ConflictError

from ._meta import config, logger
from .canvas import BuilderCanvas
from .editor import PropertyEditor
from .model import FormDefinition


class FormBuilder(object):
    """
    One editing session: a canvas, the form metadata and the bridge used to
    save it. While a save is pending a second save is refused.
    """

    def __init__(self, bridge, canvas=None, name=config.DEFAULT_FORM_NAME,
                 description=config.DEFAULT_FORM_DESCRIPTION):
        self.bridge = bridge
        self.canvas = canvas or BuilderCanvas()
        self.form_id = None
        self.name = name
        self.description = description
        self.published = False
        self._saving = False

    @property
    def is_saving(self) -> bool:
        return self._saving

    def edit(self, instance_id=None) -> PropertyEditor:
        return PropertyEditor(self.canvas, instance_id)

    async def save(self, name=None, description=None) -> str:
        if not len(self.canvas):
            raise BadRequestError(
                "B00.401",
                "Cannot save empty form. Add at least one element to your form before saving."
            )

        name = (self.name if name is None else name).strip()
        if not name:
            raise BadRequestError("B00.402", "Form name is required")

        if self._saving:
            raise ConflictError("B00.403", "A save of this form is already in progress")

        description = self.description if description is None else description
        form = self.canvas.to_form(name, description, form_id=self.form_id, published=self.published)

        self._saving = True
        try:
            stored_id = await self.bridge.save(form)
        finally:
            self._saving = False

        self.form_id = stored_id or self.form_id
        self.name, self.description = name, description
        logger.info('Form "%s" saved [%s] with %d elements', name, self.form_id, len(form.elements))
        return self.form_id

    async def resume(self, form_id) -> FormDefinition:
        form = await self.bridge.load(form_id)
        self.canvas.load(form)
        self.form_id = form.id or form_id
        self.name = form.name
        self.description = form.description or ""
        self.published = form.published
        return form
