class PawshopError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(PawshopError):
    """User input was rejected before any request was sent."""
