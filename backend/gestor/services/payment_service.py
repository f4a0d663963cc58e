"""
Payment Service - splitting a sale into paid and receivable parts
"""
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from gestor.core.config import settings
from gestor.models import PaymentStatus
from gestor.services.pricing import to_money

PAYMENT_TOTAL = "total"
PAYMENT_PARTIAL = "partial"


@dataclass
class PaymentSplit:
    payment_status: str
    paid_amount: Decimal
    receivable_amount: Optional[Decimal] = None
    receivable_due_date: Optional[date] = None

    @property
    def creates_receivable(self) -> bool:
        return self.receivable_amount is not None


def split_payment(total: Decimal, payment_type: str, paid_amount: Optional[Decimal] = None,
                  today: Optional[date] = None) -> PaymentSplit:
    """Decide the sale's payment status and the receivable owed, if any.

    A partial payment must satisfy 0 <= paid_amount < total; the remainder
    becomes one receivable due RECEIVABLE_DUE_DAYS after ``today``.
    """
    total = to_money(total)
    if payment_type == PAYMENT_TOTAL:
        return PaymentSplit(payment_status=PaymentStatus.PAID.value, paid_amount=total)

    if payment_type != PAYMENT_PARTIAL:
        raise ValueError("Forma de pagamento inválida")

    if paid_amount is None:
        raise ValueError("Informe o valor pago")
    paid_amount = to_money(paid_amount)
    if paid_amount < 0:
        raise ValueError("O valor pago não pode ser negativo")
    if paid_amount >= total:
        raise ValueError("O valor pago deve ser menor que o total da venda")

    today = today or date.today()
    return PaymentSplit(
        payment_status=PaymentStatus.PENDING.value,
        paid_amount=paid_amount,
        receivable_amount=total - paid_amount,
        receivable_due_date=today + timedelta(days=settings.RECEIVABLE_DUE_DAYS),
    )
