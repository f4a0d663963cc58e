"""
Sales Service - Sales, their line items and payment settlement
"""
import logging
from datetime import date
from typing import Optional, List
from sqlalchemy.orm import Session, selectinload, joinedload
from gestor.core.config import settings
from gestor.models import Sale, SaleItem, AccountReceivable, PaymentStatus, SettlementStatus
from gestor.schemas import SaleCreate
from gestor.services.customer_service import CustomerService
from gestor.services.product_service import ProductService
from gestor.services.payment_service import split_payment
from gestor.services.quote_service import timestamp_number

logger = logging.getLogger(__name__)


class SalesService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, sale_id: int, user_id: int) -> Optional[Sale]:
        return self.db.query(Sale).options(
            selectinload(Sale.items),
            selectinload(Sale.receivables),
            joinedload(Sale.customer)
        ).filter(
            Sale.id == sale_id,
            Sale.user_id == user_id
        ).first()

    def get_all(self, user_id: int, payment_status: str = None) -> List[Sale]:
        query = self.db.query(Sale).options(
            joinedload(Sale.customer)
        ).filter(Sale.user_id == user_id)
        if payment_status:
            query = query.filter(Sale.payment_status == payment_status)
        return query.order_by(Sale.created_at.desc(), Sale.id.desc()).all()

    def get_next_number(self) -> str:
        return timestamp_number(settings.SALE_NUMBER_PREFIX)

    def create(self, sale_data: SaleCreate, user_id: int) -> Sale:
        """Insert the sale, its items and, for a partial payment, the receivable for the balance"""
        if sale_data.customer_id is None:
            raise ValueError("Cliente é obrigatório")
        if not CustomerService(self.db).get_by_id(sale_data.customer_id, user_id):
            raise ValueError("Cliente não encontrado")

        accumulator = ProductService(self.db).compose_items(sale_data.items, user_id)
        accumulator.require_items("Adicione pelo menos um item à venda")

        total = accumulator.total()
        sale_date = sale_data.sale_date or date.today()
        split = split_payment(total, sale_data.payment_type, sale_data.paid_amount, today=sale_date)

        sale = Sale(
            sale_number=sale_data.sale_number or self.get_next_number(),
            sale_date=sale_date,
            customer_id=sale_data.customer_id,
            total_amount=total,
            payment_method=sale_data.payment_method,
            payment_status=split.payment_status,
            notes=sale_data.notes,
            user_id=user_id
        )
        self.db.add(sale)
        self.db.flush()

        for line in accumulator:
            self.db.add(SaleItem(
                sale_id=sale.id,
                product_id=line.product_id,
                variant_id=line.variant_id,
                description=line.description,
                quantity=line.quantity,
                unit_price=line.unit_price,
                total_price=line.total_price
            ))

        if split.creates_receivable:
            self.db.add(AccountReceivable(
                customer_id=sale.customer_id,
                sale_id=sale.id,
                amount=split.receivable_amount,
                due_date=split.receivable_due_date,
                status=SettlementStatus.PENDING.value,
                notes=f"Saldo restante da venda {sale.sale_number}",
                user_id=user_id
            ))

        self.db.flush()
        self.db.refresh(sale)

        logger.info(
            "Sale %s created: total %s, status %s, receivable %s",
            sale.sale_number, total, sale.payment_status, split.receivable_amount
        )
        return sale

    def complete_payment(self, sale_id: int, user_id: int) -> Optional[Sale]:
        """Mark the sale paid and drop every receivable linked to it.

        Both writes belong to the caller's transaction, so the sale never
        counts as paid while its receivable still exists.
        """
        sale = self.get_by_id(sale_id, user_id)
        if not sale:
            return None

        if sale.payment_status == PaymentStatus.PAID.value:
            raise ValueError("Venda já está paga")
        if sale.payment_status == PaymentStatus.CANCELLED.value:
            raise ValueError("Venda cancelada não pode ser paga")

        removed = self.db.query(AccountReceivable).filter(
            AccountReceivable.sale_id == sale.id,
            AccountReceivable.user_id == user_id
        ).delete(synchronize_session=False)

        sale.payment_status = PaymentStatus.PAID.value
        self.db.flush()
        self.db.expire(sale, ["receivables"])

        logger.info("Sale %s completed, %d receivable(s) removed", sale.sale_number, removed)
        return sale

    def delete(self, sale_id: int, user_id: int) -> bool:
        sale = self.get_by_id(sale_id, user_id)
        if not sale:
            return False

        self.db.delete(sale)
        self.db.flush()
        return True
