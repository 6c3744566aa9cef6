"""Custom exception classes for the FastSpring billing integration."""


class CashierError(Exception):
    """Base exception for cashier-fastspring."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class IntegrityViolation(CashierError):
    """Webhook signature does not match the configured HMAC secret."""

    def __init__(self, message: str = "Message security violation, MAC is wrong!"):
        super().__init__("INTEGRITY_VIOLATION", message, status_code=403)


class MalformedPayload(CashierError):
    """Webhook body (or a single event in it) could not be parsed."""

    def __init__(self, message: str, details=None):
        super().__init__("MALFORMED_PAYLOAD", message, details, status_code=400)


class UnknownEventType(CashierError):
    """No registered category or activity variant for an event type."""

    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(
            "UNKNOWN_EVENT_TYPE",
            f"There is no event for {event_type}",
            details={"type": event_type},
            status_code=422,
        )


class DispatchFailure(CashierError):
    """A subscriber raised while an event was being published."""

    def __init__(self, event_id: str, kind: str, reason: str):
        self.event_id = event_id
        self.kind = kind
        super().__init__(
            "DISPATCH_FAILURE",
            f"Publishing {kind} for event '{event_id}' failed: {reason}",
            details={"event_id": event_id, "kind": kind},
        )


class CustomerResolutionFailure(CashierError):
    """FastSpring refused to create the customer account for a reason other than a duplicate e-mail."""

    def __init__(self, message: str, details=None):
        super().__init__("CUSTOMER_RESOLUTION_FAILURE", message, details, status_code=502)
