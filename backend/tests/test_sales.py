# Gestor Tests - Sales
#
# Tests for:
# - Totals computed from the line items
# - Partial payments and the receivable for the balance
# - Completing a pending sale
# - Nothing persisted when a sale is rejected

from datetime import date, timedelta
from decimal import Decimal

import pytest

from gestor.models import Sale, SaleItem, AccountReceivable
from gestor.schemas import SaleCreate, LineItemCreate
from gestor.services.sales_service import SalesService
from gestor.services.dashboard_service import DashboardService
from tests.conftest import variant_named


def sale_request(customer, product, variant=None, quantity=1, **kwargs) -> SaleCreate:
    return SaleCreate(
        customer_id=customer.id,
        items=[LineItemCreate(
            product_id=product.id,
            variant_id=variant.id if variant else None,
            quantity=quantity,
        )],
        **kwargs
    )


class TestSaleCreation:

    @pytest.mark.smoke
    def test_variant_price_drives_line_and_sale_total(self, db_session, user, customer, shirt):
        """Camiseta 50.00 + Azul 5.00, three units"""
        azul = variant_named(shirt, "Azul")
        sale = SalesService(db_session).create(sale_request(customer, shirt, azul, quantity=3), user.id)
        db_session.commit()

        assert len(sale.items) == 1
        item = sale.items[0]
        assert item.description == "Camiseta - Azul"
        assert item.unit_price == Decimal("55.00")
        assert item.total_price == Decimal("165.00")
        assert sale.total_amount == Decimal("165.00")
        assert sale.payment_status == "paid"
        assert sale.receivables == []

    def test_total_matches_sum_of_items(self, db_session, user, customer, shirt, service_product):
        request = SaleCreate(
            customer_id=customer.id,
            items=[
                LineItemCreate(product_id=shirt.id, quantity=2),
                LineItemCreate(product_id=service_product.id, quantity=1, unit_price=Decimal("150.00")),
            ],
        )
        sale = SalesService(db_session).create(request, user.id)
        db_session.commit()

        assert sale.total_amount == sum(item.quantity * item.unit_price for item in sale.items)
        assert sale.total_amount == Decimal("250.00")

    def test_persisted_total_matches_items_with_sub_cent_prices(self, db_session, user, customer, shirt):
        item = LineItemCreate.model_construct(
            product_id=shirt.id, variant_id=None, quantity=1, unit_price=Decimal("0.005"), description=None
        )
        sale = SalesService(db_session).create(SaleCreate(customer_id=customer.id, items=[item, item, item]), user.id)
        db_session.commit()
        db_session.expire_all()

        stored = db_session.query(Sale).one()
        assert stored.total_amount == Decimal("0.03")
        assert stored.total_amount == sum(i.total_price for i in stored.items)
        assert sale.id == stored.id

    def test_generated_number_uses_sale_prefix(self, db_session, user, customer, shirt):
        sale = SalesService(db_session).create(sale_request(customer, shirt), user.id)
        assert sale.sale_number.startswith("VND-")
        assert sale.sale_number[4:].isdigit()

    def test_customer_is_required(self, db_session, user, shirt):
        request = SaleCreate(items=[LineItemCreate(product_id=shirt.id)])
        with pytest.raises(ValueError, match="Cliente é obrigatório"):
            SalesService(db_session).create(request, user.id)

    def test_items_are_required(self, db_session, user, customer):
        with pytest.raises(ValueError, match="Adicione pelo menos um item"):
            SalesService(db_session).create(SaleCreate(customer_id=customer.id), user.id)

    def test_unknown_variant_is_rejected(self, db_session, user, customer, shirt):
        request = SaleCreate(
            customer_id=customer.id,
            items=[LineItemCreate(product_id=shirt.id, variant_id=9999)],
        )
        with pytest.raises(ValueError, match="Variação não encontrada"):
            SalesService(db_session).create(request, user.id)


class TestPartialPayment:

    @pytest.mark.smoke
    def test_balance_becomes_receivable(self, db_session, user, customer, service_product):
        """Total 200.00, 80.00 paid up front"""
        request = sale_request(customer, service_product, payment_type="partial", paid_amount=Decimal("80.00"))
        sale = SalesService(db_session).create(request, user.id)
        db_session.commit()

        assert sale.total_amount == Decimal("200.00")
        assert sale.payment_status == "pending"
        assert len(sale.receivables) == 1

        receivable = sale.receivables[0]
        assert receivable.amount == Decimal("120.00")
        assert receivable.amount == sale.total_amount - Decimal("80.00")
        assert receivable.due_date == sale.sale_date + timedelta(days=30)
        assert receivable.status == "pending"
        assert receivable.customer_id == customer.id
        assert sale.sale_number in receivable.notes

    def test_due_date_follows_sale_date(self, db_session, user, customer, service_product):
        request = sale_request(
            customer, service_product,
            sale_date=date(2024, 1, 15), payment_type="partial", paid_amount=Decimal("50.00")
        )
        sale = SalesService(db_session).create(request, user.id)
        assert sale.receivables[0].due_date == date(2024, 2, 14)

    @pytest.mark.smoke
    def test_overpayment_is_rejected_and_nothing_is_written(self, db_session, user, customer, service_product):
        """Total 200.00, 250.00 declared as a partial payment"""
        request = sale_request(customer, service_product, payment_type="partial", paid_amount=Decimal("250.00"))

        with pytest.raises(ValueError, match="menor que o total"):
            SalesService(db_session).create(request, user.id)
        db_session.rollback()

        assert db_session.query(Sale).count() == 0
        assert db_session.query(SaleItem).count() == 0
        assert db_session.query(AccountReceivable).count() == 0


class TestCompletePayment:

    def _pending_sale(self, db_session, user, customer, service_product):
        request = sale_request(customer, service_product, payment_type="partial", paid_amount=Decimal("80.00"))
        sale = SalesService(db_session).create(request, user.id)
        db_session.commit()
        return sale

    @pytest.mark.smoke
    def test_completion_removes_receivable_and_counts_revenue_once(self, db_session, user, customer, service_product):
        sale = self._pending_sale(db_session, user, customer, service_product)
        dashboard = DashboardService(db_session)
        revenue_before = dashboard.get_financial_summary(user.id).revenue

        completed = SalesService(db_session).complete_payment(sale.id, user.id)
        db_session.commit()

        assert completed.payment_status == "paid"
        assert completed.receivables == []
        assert db_session.query(AccountReceivable).filter(AccountReceivable.sale_id == sale.id).count() == 0

        revenue_after = dashboard.get_financial_summary(user.id).revenue
        assert revenue_after - revenue_before == Decimal("200.00")

    def test_paid_sale_cannot_be_completed_again(self, db_session, user, customer, shirt):
        sale = SalesService(db_session).create(sale_request(customer, shirt), user.id)
        db_session.commit()

        with pytest.raises(ValueError, match="Venda já está paga"):
            SalesService(db_session).complete_payment(sale.id, user.id)

    def test_other_users_sale_is_not_found(self, db_session, user, other_user, customer, service_product):
        sale = self._pending_sale(db_session, user, customer, service_product)
        assert SalesService(db_session).complete_payment(sale.id, other_user.id) is None


class TestSaleDeletion:

    def test_delete_removes_items_and_keeps_receivable_history(self, db_session, user, customer, service_product):
        request = sale_request(customer, service_product, payment_type="partial", paid_amount=Decimal("80.00"))
        sale = SalesService(db_session).create(request, user.id)
        db_session.commit()
        sale_id = sale.id

        assert SalesService(db_session).delete(sale_id, user.id)
        db_session.commit()

        assert db_session.query(SaleItem).filter(SaleItem.sale_id == sale_id).count() == 0
        receivable = db_session.query(AccountReceivable).one()
        assert receivable.sale_id is None
