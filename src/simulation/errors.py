"""Exceptions raised by the elevator system."""


class ElevatorSystemError(Exception):
    """Base class for every error raised by the simulation core."""


class InvalidConfigurationError(ElevatorSystemError, ValueError):
    """A building was configured with a non-positive size or capacity."""


class InvalidRequestError(ElevatorSystemError, ValueError):
    """A request was absent, out of range, or did not change floors."""


class NotAcceptingRequestsError(ElevatorSystemError, RuntimeError):
    """A request arrived while the system was not running."""
