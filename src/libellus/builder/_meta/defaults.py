DEBUG_CANVAS = False

DEFAULT_FORM_NAME = "My Form"
DEFAULT_FORM_DESCRIPTION = ""
