"""
Document Service - printable layout of quotes and sales

Produces the data for the fixed print layout (store header, party details,
item table, total, notes). Printing itself happens on the client.
"""
from datetime import date
from decimal import Decimal
from typing import Optional
from sqlalchemy.orm import Session
from gestor.core.config import settings
from gestor.services.quote_service import QuoteService
from gestor.services.sales_service import SalesService
from gestor.services.settings_service import StoreSettingsService

STATUS_LABELS = {
    "pending": "Pendente",
    "approved": "Aprovado",
    "rejected": "Rejeitado",
    "converted": "Convertido",
    "paid": "Pago",
    "cancelled": "Cancelado",
}


def format_currency(value) -> str:
    """1234.5 -> 'R$ 1.234,50'"""
    amount = Decimal(str(value or 0))
    text = f"{amount:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{settings.CURRENCY_SYMBOL} {text}"


def format_date(value: Optional[date]) -> Optional[str]:
    return value.strftime("%d/%m/%Y") if value else None


class DocumentService:
    def __init__(self, db: Session):
        self.db = db

    def render_quote(self, quote_id: int, user_id: int) -> Optional[dict]:
        quote = QuoteService(self.db).get_by_id(quote_id, user_id)
        if not quote:
            return None

        document = self._base("Orçamento", quote.quote_number, quote, user_id)
        document["issue_date"] = format_date(quote.issue_date)
        document["valid_until"] = format_date(quote.valid_until)
        document["status"] = STATUS_LABELS.get(quote.status, quote.status)
        return document

    def render_sale(self, sale_id: int, user_id: int) -> Optional[dict]:
        sale = SalesService(self.db).get_by_id(sale_id, user_id)
        if not sale:
            return None

        document = self._base("Venda", sale.sale_number, sale, user_id)
        document["sale_date"] = format_date(sale.sale_date)
        document["payment_method"] = sale.payment_method
        document["status"] = STATUS_LABELS.get(sale.payment_status, sale.payment_status)
        return document

    def _base(self, title: str, number: str, record, user_id: int) -> dict:
        store = StoreSettingsService(self.db).get(user_id)
        customer = record.customer
        return {
            "title": title,
            "number": number,
            "store": {
                "company_name": store.company_name if store else None,
                "tax_id": store.tax_id if store else None,
                "address": store.address if store else None,
                "phone": store.phone if store else None,
                "email": store.email if store else None,
                "logo_url": store.logo_url if store else None,
            },
            "customer": {
                "name": customer.name if customer else None,
                "tax_id": customer.tax_id if customer else None,
                "email": customer.email if customer else None,
                "phone": customer.phone if customer else None,
                "address": customer.address if customer else None,
            },
            "items": [
                {
                    "description": item.description,
                    "quantity": item.quantity,
                    "unit_price": format_currency(item.unit_price),
                    "total_price": format_currency(item.total_price),
                }
                for item in record.items
            ],
            "total": format_currency(record.total_amount),
            "notes": record.notes,
        }
