"""Exceptions raised while turning schema documents into validators."""


class SchemaConversionError(ValueError):
    """Raised when a schema node cannot be compiled into a validator.

    Attributes:
        message: Description of what is wrong with the schema node.
        path: JSON pointer of the offending node ('#' for the root).
    """

    def __init__(self, message: str, path: str = "#"):
        self.message = message
        self.path = path
        if path and path != "#":
            message = f"{message} (at {path})"
        super().__init__(message)
