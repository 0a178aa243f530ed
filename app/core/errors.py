from typing import Optional


class PlateIQError(Exception):
    """Base class for every failure the planner reports to its callers."""


class InvalidProfile(PlateIQError):
    """A profile edit or request input is outside its legal domain."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class GenerationFailed(PlateIQError):
    """The generation service could not produce a response."""


class MalformedResponse(PlateIQError):
    """
    The generation service answered, but the payload does not match the
    expected shape. The raw text is kept for diagnostics only; callers show
    the generic message.
    """

    def __init__(self, message: str, raw_text: str, reason: str):
        super().__init__(message)
        self.raw_text = raw_text
        self.reason = reason


class SupersededRequest(PlateIQError):
    """A newer request of the same kind started before this one finished."""

    def __init__(self, kind: str, sequence: int, latest: int):
        super().__init__(
            f"{kind} request #{sequence} was superseded by request #{latest}"
        )
        self.kind = kind
        self.sequence = sequence
        self.latest = latest
