def _exception_from_packed_args(exception_cls, args=None, kwargs=None):
    # This is helpful for reducing Exceptions that only accept kwargs as
    # only positional arguments can be provided for __reduce__
    # Ideally, this would also be a class method on ServiceError
    # but instance methods cannot be pickled.
    if args is None:
        args = ()
    if kwargs is None:
        kwargs = {}
    return exception_cls(*args, **kwargs)


class ServiceError(Exception):
    """
    The base exception class for Service exceptions.

    :ivar msg: The descriptive message associated with the error.
    """

    fmt = "{msg}"

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.msg = self.fmt.format(**kwargs)
        super().__init__(self, self.msg)

    def __str__(self) -> str:
        return self.msg

    def __reduce__(self):
        return _exception_from_packed_args, (self.__class__, None, self.kwargs)


class DirectiveDecodeError(ServiceError):
    """
    An annotation value could not be decoded into a directive.

    :ivar key: The annotation key.
    :ivar reason: Why decoding failed.
    """

    fmt = "Unable to decode annotation '{key}': {reason}"


class MountEntryError(DirectiveDecodeError):
    """
    A mounts annotation item does not match `<secret_name>/<sub_path>:<mount_path>`.

    :ivar entry: The offending item.
    """

    fmt = "Malformed mount entry '{entry}', expected '<secret_name>/<sub_path>:<mount_path>'"
