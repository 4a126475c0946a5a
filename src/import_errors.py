class SpecImportError(ValueError):
    """Base class for failures that abort a specification import."""


class MalformedInputError(SpecImportError):
    """The input text is not valid JSON or not a recognizable document shape."""


class EmptySpecificationArrayError(SpecImportError):
    def __init__(self, message: str = "Empty specification array"):
        super().__init__(message)


class MissingTransactionSetError(SpecImportError):
    def __init__(self, message: str = "No transaction set found in OpenAPI schema (missing x-openedi-message-id)"):
        super().__init__(message)
