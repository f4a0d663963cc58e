"""
Quote Service - Quotes, their line items and conversion into sales
"""
import logging
import time
from datetime import date
from typing import Optional, List
from sqlalchemy.orm import Session, selectinload, joinedload
from gestor.core.config import settings
from gestor.models import Quote, QuoteItem, QuoteStatus, Sale, SaleItem, PaymentStatus
from gestor.schemas import QuoteCreate
from gestor.services.customer_service import CustomerService
from gestor.services.product_service import ProductService

logger = logging.getLogger(__name__)

CONVERTIBLE_STATUSES = (QuoteStatus.PENDING.value, QuoteStatus.APPROVED.value)


def timestamp_number(prefix: str) -> str:
    """``<prefix>-<epoch-ms>``; collision-improbable at human interaction rates"""
    return f"{prefix}-{int(time.time() * 1000)}"


class QuoteService:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, quote_id: int, user_id: int) -> Optional[Quote]:
        return self.db.query(Quote).options(
            selectinload(Quote.items),
            joinedload(Quote.customer)
        ).filter(
            Quote.id == quote_id,
            Quote.user_id == user_id
        ).first()

    def get_all(self, user_id: int, status: str = None) -> List[Quote]:
        query = self.db.query(Quote).options(
            joinedload(Quote.customer)
        ).filter(Quote.user_id == user_id)
        if status:
            query = query.filter(Quote.status == status)
        return query.order_by(Quote.created_at.desc(), Quote.id.desc()).all()

    def count_pending(self, user_id: int) -> int:
        return self.db.query(Quote).filter(
            Quote.user_id == user_id,
            Quote.status == QuoteStatus.PENDING.value
        ).count()

    def get_next_number(self) -> str:
        return timestamp_number(settings.QUOTE_NUMBER_PREFIX)

    def create(self, quote_data: QuoteCreate, user_id: int) -> Quote:
        """Insert the quote header and its items as one unit of work"""
        if quote_data.customer_id is None:
            raise ValueError("Cliente é obrigatório")
        if not CustomerService(self.db).get_by_id(quote_data.customer_id, user_id):
            raise ValueError("Cliente não encontrado")
        if quote_data.valid_until is None:
            raise ValueError("Data de validade é obrigatória")

        accumulator = ProductService(self.db).compose_items(quote_data.items, user_id, active_only=True)
        accumulator.require_items("Adicione pelo menos um item ao orçamento")

        quote = Quote(
            quote_number=quote_data.quote_number or self.get_next_number(),
            customer_id=quote_data.customer_id,
            issue_date=quote_data.issue_date or date.today(),
            valid_until=quote_data.valid_until,
            total_amount=accumulator.total(),
            status=QuoteStatus.PENDING.value,
            notes=quote_data.notes,
            user_id=user_id
        )
        self.db.add(quote)
        self.db.flush()

        for line in accumulator:
            self.db.add(QuoteItem(
                quote_id=quote.id,
                product_id=line.product_id,
                variant_id=line.variant_id,
                description=line.description,
                quantity=line.quantity,
                unit_price=line.unit_price,
                total_price=line.total_price
            ))
        self.db.flush()
        self.db.refresh(quote)

        logger.info("Quote %s created with %d items, total %s", quote.quote_number, len(accumulator), quote.total_amount)
        return quote

    def update_status(self, quote_id: int, user_id: int, status: str) -> Optional[Quote]:
        """Approve or reject a pending quote"""
        quote = self.get_by_id(quote_id, user_id)
        if not quote:
            return None

        if status not in (QuoteStatus.APPROVED.value, QuoteStatus.REJECTED.value):
            raise ValueError("Status inválido")
        if quote.status != QuoteStatus.PENDING.value:
            raise ValueError("Apenas orçamentos pendentes podem ser aprovados ou rejeitados")

        quote.status = status
        self.db.flush()
        return quote

    def convert_to_sale(self, quote_id: int, user_id: int) -> Optional[Sale]:
        """Copy the quote into a new pending sale and mark the quote converted.

        The copied items are independent rows; the quote's own items are left
        untouched.
        """
        quote = self.get_by_id(quote_id, user_id)
        if not quote:
            return None

        if quote.status == QuoteStatus.CONVERTED.value:
            raise ValueError("Orçamento já convertido em venda")
        if quote.status not in CONVERTIBLE_STATUSES:
            raise ValueError("Orçamento rejeitado não pode ser convertido")
        if not quote.items:
            raise ValueError("Orçamento sem itens não pode ser convertido")

        sale = Sale(
            sale_number=timestamp_number(settings.SALE_NUMBER_PREFIX),
            sale_date=date.today(),
            customer_id=quote.customer_id,
            quote_id=quote.id,
            total_amount=quote.total_amount,
            payment_status=PaymentStatus.PENDING.value,
            notes=quote.notes,
            user_id=user_id
        )
        self.db.add(sale)
        self.db.flush()

        for item in quote.items:
            self.db.add(SaleItem(
                sale_id=sale.id,
                product_id=item.product_id,
                variant_id=item.variant_id,
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.total_price
            ))

        quote.status = QuoteStatus.CONVERTED.value
        self.db.flush()
        self.db.refresh(sale)

        logger.info("Quote %s converted into sale %s", quote.quote_number, sale.sale_number)
        return sale

    def delete(self, quote_id: int, user_id: int) -> bool:
        quote = self.get_by_id(quote_id, user_id)
        if not quote:
            return False

        self.db.delete(quote)
        self.db.flush()
        return True
