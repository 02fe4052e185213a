"""Error taxonomy for the regulator core.

UnitError subclasses are recoverable per unit: the regulator logs them and moves
on to the next unit. Everything else signals a programming error or a failure
that aborts the room's tick.
"""

from hivemind.models.entities import Action, ReturnCode


class HivemindError(Exception):
    """Base class for all regulator errors."""


class UnitError(HivemindError):
    """A single unit could not complete its turn."""


class CommandError(UnitError):
    """A world command returned a status that is neither success nor a release signal."""

    def __init__(self, unit: str, action: Action, code: ReturnCode):
        self.unit = unit
        self.action = action
        self.code = code
        super().__init__(f"{unit} couldn't {action.value}: {code.name}")


class MissingContextError(UnitError):
    """A unit or job needs a room object that isn't visible."""


class NoControllerError(MissingContextError):
    """An upgrade job's controller can't be resolved."""

    def __init__(self, unit: str):
        self.unit = unit
        super().__init__(f"{unit} has no controller to upgrade")


class JobKindMismatch(HivemindError, TypeError):
    """A job accessor was called for the wrong job kind."""


class OfferExhausted(HivemindError, ValueError):
    """A place was taken from an offer with none left."""


class WorldQueryError(HivemindError):
    """The world layer failed to answer a query."""


class ScanError(HivemindError):
    """The offer pool could not be rebuilt."""
