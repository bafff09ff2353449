class InvalidMoveError(ValueError):
    """Raised when a group too small to blast is handed to the move applier.

    The board is never touched before this is raised.
    """
