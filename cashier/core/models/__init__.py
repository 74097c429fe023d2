from cashier.core.models.student import Student
from cashier.core.models.payment import Payment

__all__ = [
    "Student",
    "Payment",
]
