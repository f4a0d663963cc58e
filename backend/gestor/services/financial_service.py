"""
Financial Service - Receivables, payables and cash transactions
"""
from datetime import date
from decimal import Decimal
from typing import Optional, List
from sqlalchemy import func
from sqlalchemy.orm import Session
from gestor.models import (
    AccountReceivable, AccountPayable, Transaction, SettlementStatus, TransactionType
)
from gestor.schemas import (
    ReceivableCreate, ReceivableUpdate, PayableCreate, PayableUpdate, TransactionCreate
)
from gestor.services.customer_service import CustomerService
from gestor.services.sales_service import SalesService


class _SettlementService:
    """Shared CRUD for the two account ledgers (receivable and payable)"""
    model = None

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, record_id: int, user_id: int):
        return self.db.query(self.model).filter(
            self.model.id == record_id,
            self.model.user_id == user_id
        ).first()

    def get_all(self, user_id: int, status: str = None) -> list:
        query = self.db.query(self.model).filter(self.model.user_id == user_id)
        if status:
            query = query.filter(self.model.status == status)
        return query.order_by(self.model.due_date, self.model.id).all()

    def mark_paid(self, record_id: int, user_id: int, paid_date: date = None):
        record = self.get_by_id(record_id, user_id)
        if not record:
            return None
        if record.status == SettlementStatus.PAID.value:
            raise ValueError("Conta já está quitada")

        record.status = SettlementStatus.PAID.value
        record.paid_date = paid_date or date.today()
        self.db.flush()
        return record

    def delete(self, record_id: int, user_id: int) -> bool:
        record = self.get_by_id(record_id, user_id)
        if not record:
            return False
        self.db.delete(record)
        self.db.flush()
        return True

    def _write(self, record, data):
        for key, value in data.model_dump().items():
            setattr(record, key, value)


class ReceivableService(_SettlementService):
    model = AccountReceivable

    def create(self, receivable_data: ReceivableCreate, user_id: int) -> AccountReceivable:
        self._check_references(receivable_data, user_id)
        receivable = AccountReceivable(
            **receivable_data.model_dump(),
            status=SettlementStatus.PENDING.value,
            user_id=user_id
        )
        self.db.add(receivable)
        self.db.flush()
        return receivable

    def update(self, receivable_id: int, user_id: int, receivable_data: ReceivableUpdate) -> Optional[AccountReceivable]:
        receivable = self.get_by_id(receivable_id, user_id)
        if not receivable:
            return None
        self._check_references(receivable_data, user_id)
        self._write(receivable, receivable_data)
        self.db.flush()
        return receivable

    def _check_references(self, data, user_id: int):
        if data.customer_id is not None and not CustomerService(self.db).get_by_id(data.customer_id, user_id):
            raise ValueError("Cliente não encontrado")
        if data.sale_id is not None and not SalesService(self.db).get_by_id(data.sale_id, user_id):
            raise ValueError("Venda não encontrada")


class PayableService(_SettlementService):
    model = AccountPayable

    def create(self, payable_data: PayableCreate, user_id: int) -> AccountPayable:
        payable = AccountPayable(
            **payable_data.model_dump(),
            status=SettlementStatus.PENDING.value,
            user_id=user_id
        )
        self.db.add(payable)
        self.db.flush()
        return payable

    def update(self, payable_id: int, user_id: int, payable_data: PayableUpdate) -> Optional[AccountPayable]:
        payable = self.get_by_id(payable_id, user_id)
        if not payable:
            return None
        self._write(payable, payable_data)
        self.db.flush()
        return payable


class TransactionService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, transaction_id: int, user_id: int) -> Optional[Transaction]:
        return self.db.query(Transaction).filter(
            Transaction.id == transaction_id,
            Transaction.user_id == user_id
        ).first()

    def get_all(self, user_id: int, type: str = None, start_date: date = None,
                end_date: date = None) -> List[Transaction]:
        query = self.db.query(Transaction).filter(Transaction.user_id == user_id)
        if type:
            query = query.filter(Transaction.type == type)
        if start_date:
            query = query.filter(Transaction.transaction_date >= start_date)
        if end_date:
            query = query.filter(Transaction.transaction_date <= end_date)
        return query.order_by(Transaction.transaction_date.desc(), Transaction.id.desc()).all()

    def create(self, transaction_data: TransactionCreate, user_id: int) -> Transaction:
        if transaction_data.sale_id is not None:
            if not SalesService(self.db).get_by_id(transaction_data.sale_id, user_id):
                raise ValueError("Venda não encontrada")

        data = transaction_data.model_dump()
        data["transaction_date"] = data["transaction_date"] or date.today()
        transaction = Transaction(**data, user_id=user_id)
        self.db.add(transaction)
        self.db.flush()
        return transaction

    def delete(self, transaction_id: int, user_id: int) -> bool:
        transaction = self.get_by_id(transaction_id, user_id)
        if not transaction:
            return False
        self.db.delete(transaction)
        self.db.flush()
        return True

    def get_summary(self, user_id: int, start_date: date = None, end_date: date = None) -> dict:
        """Income and expense totals over an optional date range"""
        query = self.db.query(
            Transaction.type, func.sum(Transaction.amount)
        ).filter(Transaction.user_id == user_id)
        if start_date:
            query = query.filter(Transaction.transaction_date >= start_date)
        if end_date:
            query = query.filter(Transaction.transaction_date <= end_date)

        totals = {row[0]: Decimal(str(row[1] or 0)) for row in query.group_by(Transaction.type).all()}
        income = totals.get(TransactionType.INCOME.value, Decimal("0.00"))
        expense = totals.get(TransactionType.EXPENSE.value, Decimal("0.00"))
        return {"income": income, "expense": expense, "net": income - expense}
