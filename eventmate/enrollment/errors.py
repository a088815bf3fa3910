"""Client side enrollment errors.

Everything except InvalidStepError is reported to the attendee through the
notifier and leaves the flow usable.
"""


class EnrollmentError(Exception):
    """Base class for errors raised while driving an enrollment."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class EnrollmentValidationError(EnrollmentError):
    """Raised when the form cannot be submitted as filled in."""


class PromoCodeError(EnrollmentError):
    """Raised when a promo code cannot be applied."""


class PromoNotAllowedError(PromoCodeError):
    def __init__(self) -> None:
        super().__init__("Promo codes are not applicable for this event.")


class InvalidPromoCodeError(PromoCodeError):
    def __init__(self, code: str) -> None:
        super().__init__("Invalid promo code")
        self.code = code


class PaymentError(EnrollmentError):
    """Raised by a payment provider when a payment is not confirmed."""


class InvalidStepError(EnrollmentError):
    """Raised when an operation is called from a step that does not offer it."""

    def __init__(self, operation: str, step: str) -> None:
        super().__init__(f"Cannot {operation} while on step {step}")
        self.operation = operation
        self.step = step
