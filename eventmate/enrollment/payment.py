import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from enum import Enum

logger = logging.getLogger(__name__)


class PaymentMethod(str, Enum):
    CARD = "CARD"
    UPI = "UPI"
    RAZORPAY = "RAZORPAY"


class PaymentProvider(ABC):
    @abstractmethod
    async def confirm(self, method: PaymentMethod, amount: Decimal) -> None:
        """
        Confirm that the attendee has paid ``amount``.

        Raises:
            PaymentError: If the payment was not completed.
        """
        pass


class MockPaymentProvider(PaymentProvider):
    """Accepts every payment. There is no gateway behind it."""

    async def confirm(self, method: PaymentMethod, amount: Decimal) -> None:
        logger.info("Payment confirmed (%s) for %.2f", method.value, amount)
