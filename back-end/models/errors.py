from typing import Sequence


class InputValidationError(ValueError):
    """Raw inputs rejected before any estimation runs."""

    code = "invalid_input"
    title = "Invalid Input"

    def __init__(self, fields: Sequence[str], message: str):
        super().__init__(message)
        self.fields = list(fields)
        self.message = message
        self.notices = []


class MissingField(InputValidationError):
    code = "missing_field"
    title = "Missing Information"

    def __init__(self, fields: Sequence[str]):
        super().__init__(fields, "Please fill in all fields to calculate performance.")


class NotANumber(InputValidationError):
    code = "not_a_number"
    title = "Invalid Input"

    def __init__(self, fields: Sequence[str]):
        super().__init__(fields, f"Fields must be finite numbers: {', '.join(fields)}.")


class InsightServiceError(Exception):
    """The advisory service could not produce a usable response."""


class RemoteTransportFailure(InsightServiceError):
    pass


class MalformedRemoteResponse(InsightServiceError):
    pass
