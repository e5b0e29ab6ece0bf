# jinja2 PackageLoader location of the element templates
TEMPLATE_PACKAGE = "libellus.element"
TEMPLATE_DIR = "templates"
FORM_TEMPLATE = "form.html"

# Error message used when a property fails without a specific message
DEFAULT_FIELD_MESSAGE = "Invalid value"
