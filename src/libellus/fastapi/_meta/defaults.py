from libellus import __version__
from libellus.helper.timeutil import timestamp

APPLICATION_BUILD_TIME = str(timestamp())
APPLICATION_DESC = 'Libellus Form Application (Update config to change this)'
APPLICATION_NAME = 'Libellus Forms'
APPLICATION_ROOT = ""
APPLICATION_VERSION = __version__
DEVELOPER_MODE = False

FORM_SUBMITTED_MESSAGE = "Form submitted successfully!"
