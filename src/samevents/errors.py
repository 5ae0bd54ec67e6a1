class SamEventsError(Exception):
    """Base class for every error raised by samevents."""


class MalformedCigar(SamEventsError, ValueError):
    def __init__(self, cigar: str, reason: str):
        super().__init__(f"malformed CIGAR {cigar!r}: {reason}")
        self.cigar = cigar
        self.reason = reason


class SequenceOutOfBounds(SamEventsError, IndexError):
    def __init__(self, which: str, needed: int, available: int):
        super().__init__(f"{which} needs {needed} bases but only {available} were supplied")
        self.which = which
        self.needed = needed
        self.available = available


class ReferenceLookupFailed(SamEventsError, LookupError):
    """The reference store could not resolve or load a sequence."""


class ReferenceNotFound(ReferenceLookupFailed):
    pass


class ReferenceLoadFailure(ReferenceLookupFailed):
    pass
