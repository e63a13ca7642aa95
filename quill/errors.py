"""Error types shared across Quill."""


class QuillError(Exception):
    """Raised for failures the user can act on. Printed without a traceback."""
    pass


class OperationCancelled(Exception):
    """Raised when the user cancels an interactive prompt."""

    def __init__(self, message: str = "Operation cancelled."):
        super().__init__(message)
