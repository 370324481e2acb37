"""Domain errors raised by the catalog and engagement layers"""


class DomainValidationError(Exception):
    """Caller-supplied data failed a precondition (empty title, empty comment...)"""
    def __init__(self, message: str, code: str = "VALIDATION_FAILED"):
        self.message = message
        self.code = code
        super().__init__(message)


class NotFoundError(Exception):
    """Referenced video does not exist"""
    def __init__(self, message: str, code: str = "NOT_FOUND"):
        self.message = message
        self.code = code
        super().__init__(message)
