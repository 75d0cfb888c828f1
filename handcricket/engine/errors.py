"""
Errors raised by the match engine. All are raised before any state changes.
"""


class MatchError(Exception):
    """Base class for rejected match actions"""


class InvalidMove(MatchError):
    """Ball value outside 1-6 or an unknown choice"""


class InvalidPhase(MatchError):
    """Action not legal in the current phase of the match"""


class ResolutionPending(MatchError):
    """A ball is still being revealed; the next one is not accepted yet"""
