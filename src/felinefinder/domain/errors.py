"""Domain-layer error definitions."""

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


# ============================================================================
#                           Booking related errors
# ============================================================================


class BookingValidationError(DomainError):
    """Raised when booking data is malformed (bad time window, missing reference, ...)."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid booking: {reason}")
        self.reason = reason


class InvalidTransitionError(DomainError):
    """Raised when an action is not permitted from the booking's current status."""

    def __init__(self, booking_id: str, status: str, action: str) -> None:
        super().__init__(
            f"Action '{action}' is not allowed for booking {booking_id} "
            f"in status '{status}'."
        )
        self.booking_id = booking_id
        self.status = status
        self.action = action


class MissingActionPayloadError(BookingValidationError):
    """Raised when an action that requires a payload is applied without one."""

    def __init__(self, action: str, payload: str) -> None:
        super().__init__(f"action '{action}' requires a {payload}")
        self.action = action
        self.payload = payload
