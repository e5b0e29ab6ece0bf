from libellus import config, logger


DEBUG_APP_EXCEPTION = config.DEBUG_APP_EXCEPTION


class LibellusException(Exception):
    status_code = 500
    label = "Internal Error"
    errcode = "L00.000"

    def __init__(self, errcode, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.errcode = errcode

        DEBUG_APP_EXCEPTION and logger.exception(message)

    def __str__(self):
        if self.details is None:
            return f"{self.errcode} [{self.status_code}] >> {self.message}"

        return f"{self.errcode} [{self.status_code}] >> {self.message} >> {self.details}"

    @property
    def content(self):
        if not self.details:
            return {"errcode": self.errcode, "message": self.message}

        return {"errcode": self.errcode, "message": self.message, "details": self.details}


class BadRequestError(LibellusException):
    label = "Bad Request"
    status_code = 400
    errcode = "L00.400"


class UnauthorizedError(LibellusException):
    label = "Unauthorized Request"
    status_code = 401
    errcode = "L00.401"


class ForbiddenError(LibellusException):
    label = "Forbidden"
    status_code = 403
    errcode = "L00.403"


class NotFoundError(LibellusException):
    label = "Not Found"
    status_code = 404
    errcode = "L00.404"


class ConflictError(LibellusException):
    label = "Conflict"
    status_code = 409
    errcode = "L00.409"


class UnprocessableError(LibellusException):
    label = "Unprocessable Entity"
    status_code = 422
    errcode = "L00.422"


class InternalServerError(LibellusException):
    label = "Internal Server Error"
    status_code = 500
    errcode = "L00.500"


class StorageError(LibellusException):
    ''' The storage collaborator could not be reached or refused the operation.
        Nothing was changed; the caller may retry.
    '''
    label = "Bad Gateway"
    status_code = 502
    errcode = "L00.502"


class UnknownElementError(NotFoundError):
    label = "Unknown Element Type"


class FieldValidationError(UnprocessableError):
    ''' Per-field validation failure. `details` maps a field path
        (e.g. `label`, `options.0.value`) to its message.
    '''
    label = "Validation Failed"

    @property
    def errors(self):
        return dict(self.details or {})


class RequiredFieldsMissing(FieldValidationError):
    label = "Required Fields Missing"

    def __init__(self, errcode, missing, details=None):
        self.missing = list(missing)
        super().__init__(
            errcode,
            f"Please fill in: {', '.join(self.missing)}",
            details
        )
