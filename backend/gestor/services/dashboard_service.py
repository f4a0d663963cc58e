"""
Dashboard Service - Revenue, expenses and record counts
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable
from sqlalchemy.orm import Session
from gestor.models import (
    Sale, AccountReceivable, AccountPayable, PaymentStatus, SettlementStatus
)
from gestor.services.customer_service import CustomerService
from gestor.services.product_service import ProductService
from gestor.services.quote_service import QuoteService


@dataclass
class FinancialSummary:
    revenue: Decimal
    expenses: Decimal
    balance: Decimal


def _sum(values: Iterable) -> Decimal:
    return sum((Decimal(str(v)) for v in values if v is not None), Decimal("0.00"))


def aggregate(sales: Iterable, receivables: Iterable, payables: Iterable) -> FinancialSummary:
    """Revenue = settled receivables + paid sales; expenses = settled payables.

    A paid sale counts its full total. A sale settled through the partial
    payment path only stays correct because completing it removes its
    receivable in the same transaction.
    """
    revenue = _sum(r.amount for r in receivables if r.status == SettlementStatus.PAID.value)
    revenue += _sum(s.total_amount for s in sales if s.payment_status == PaymentStatus.PAID.value)
    expenses = _sum(p.amount for p in payables if p.status == SettlementStatus.PAID.value)
    return FinancialSummary(revenue=revenue, expenses=expenses, balance=revenue - expenses)


class DashboardService:
    def __init__(self, db: Session):
        self.db = db

    def get_financial_summary(self, user_id: int) -> FinancialSummary:
        sales = self.db.query(Sale).filter(Sale.user_id == user_id).all()
        receivables = self.db.query(AccountReceivable).filter(AccountReceivable.user_id == user_id).all()
        payables = self.db.query(AccountPayable).filter(AccountPayable.user_id == user_id).all()
        return aggregate(sales, receivables, payables)

    def get_stats(self, user_id: int) -> Dict:
        """Get main dashboard statistics"""
        summary = self.get_financial_summary(user_id)
        return {
            "total_customers": CustomerService(self.db).count(user_id),
            "total_products": ProductService(self.db).count(user_id),
            "pending_quotes": QuoteService(self.db).count_pending(user_id),
            "total_sales": self.db.query(Sale).filter(Sale.user_id == user_id).count(),
            "revenue": summary.revenue,
            "expenses": summary.expenses,
            "balance": summary.balance,
        }
