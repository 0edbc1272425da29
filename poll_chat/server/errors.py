class ChatError(Exception):
    """Base class for errors that map onto an HTTP status at the boundary."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadInput(ChatError):
    status_code = 400


class Conflict(ChatError):
    status_code = 409


class NotFound(ChatError):
    status_code = 404
