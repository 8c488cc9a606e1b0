###########EXTERNAL IMPORTS############

#######################################

#############LOCAL IMPORTS#############

#######################################

##########     C U R S O R     E X C E P T I O N S     ##########


class CursorError(Exception):
    """Base class for errors raised by the buffered cursor."""

    pass


class StrategyFetchError(CursorError):
    """Raised when the strategy fetch fails. The cursor window is left unchanged."""

    pass


class InvalidRangeError(CursorError):
    """Raised when a requested index range cannot be addressed by the cursor."""

    pass


class TrimPolicyError(CursorError):
    """Raised when a trim policy returns counts that would break the window invariants."""

    pass


class CursorConfigError(CursorError):
    """Raised when the cursor configuration holds invalid values."""

    pass
