from http import HTTPStatus


class ApplicationError(Exception):
    """
    The base exception class for application errors.

    :ivar message: The descriptive message associated with the error.
    """

    template = "{message}"
    """Message template"""
    message: str
    """Rendered message template"""
    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR.value
    """Status code associated to the error, most useful for HTTPExceptions"""

    def __init__(self, **kwargs):
        self.message = self.template.format(**kwargs)
        if "status_code" in kwargs:
            self.status_code = kwargs["status_code"]
        super().__init__(self, self.message)

    def __str__(self) -> str:
        return f"{self.message} ({self.__class__.__name__} {self.status_code})"


class MissingPropertiesError(ApplicationError):
    """
    One or more required properties are missing from a request body.

    :ivar object_name: The name of the object that has missing properties.
    :ivar missing: The names of the missing properties.
    """

    template = "The following properties are missing for {object_name}: {missing}"
    status_code = HTTPStatus.BAD_REQUEST.value

