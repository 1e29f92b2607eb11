class CheeperException(Exception):
    """Base exception for the application"""
    pass


class ValidationError(CheeperException):
    """Validation related errors"""
    pass


class MalformedTimeError(ValidationError):
    """Time window string is not in "HH:MM DD-MM-YYYY" form"""
    pass


class NotFoundError(CheeperException):
    """Resource not found errors"""
    pass


class ConflictError(CheeperException):
    """Resource conflict errors"""
    pass


class DuplicateLoginError(ConflictError):
    """A user with this login already exists"""
    pass


class DuplicateFriendshipError(ConflictError):
    """The user -> friend edge already exists"""
    pass


class StoreError(CheeperException):
    """Storage engine errors (connection loss, write or decode failure)"""
    pass


class StoreConnectionError(StoreError):
    """The store could not be reached at startup"""
    pass
