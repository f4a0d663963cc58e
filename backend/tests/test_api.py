# Gestor Tests - HTTP API
#
# Tests for:
# - Authentication (signup, login, protected routes)
# - Isolation between users
# - Deletion confirmation
# - Atomic writes and localized error responses
# - Sales, quotes, dashboard and store settings end to end

from decimal import Decimal

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError

from gestor.api.v1.common import write_operation
from gestor.models import Customer
from tests.conftest import in_days

API = "/api/v1"


def create_customer(client, headers, name="Ana"):
    response = client.post(f"{API}/customers", json={"name": name, "email": ""}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def create_product(client, headers, **overrides):
    payload = {
        "name": "Camiseta",
        "base_price": "50.00",
        "variants": [{"name": "Azul", "price_modifier": "5.00"}, {"name": "GG", "price_modifier": "10.00"}],
    }
    payload.update(overrides)
    response = client.post(f"{API}/products", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestAuthentication:

    @pytest.mark.smoke
    def test_signup_then_me(self, client):
        response = client.post(f"{API}/auth/signup", json={
            "email": "Carla@Loja.com", "password": "segredo1", "full_name": "Carla"
        })
        assert response.status_code == 200, response.text
        token = response.json()["access_token"]

        me = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["email"] == "carla@loja.com"

    def test_duplicate_signup(self, client, user):
        response = client.post(f"{API}/auth/signup", json={"email": user.email, "password": "segredo1"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Email já cadastrado"

    def test_login(self, client, user):
        ok = client.post(f"{API}/auth/login", json={"email": user.email, "password": "senha123"})
        assert ok.status_code == 200
        assert ok.json()["token_type"] == "bearer"

        bad = client.post(f"{API}/auth/login", json={"email": user.email, "password": "errada"})
        assert bad.status_code == 401
        assert bad.json()["detail"] == "Email ou senha inválidos"

    def test_protected_route_requires_token(self, client):
        response = client.get(f"{API}/customers")
        assert response.status_code == 401
        assert response.json()["detail"] == "Usuário não autenticado"

    def test_garbage_token(self, client):
        response = client.get(f"{API}/customers", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_inactive_user(self, client, db_session, user, auth_headers):
        user.is_active = False
        db_session.commit()
        response = client.get(f"{API}/customers", headers=auth_headers)
        assert response.status_code == 403


class TestValidationErrors:

    def test_invalid_payload_gets_localized_message(self, client, auth_headers):
        response = client.post(f"{API}/customers", json={"name": ""}, headers=auth_headers)
        assert response.status_code == 422
        assert response.json()["detail"] == "Dados inválidos"

    def test_zero_quantity_is_rejected(self, client, auth_headers):
        customer = create_customer(client, auth_headers)
        product = create_product(client, auth_headers)
        response = client.post(f"{API}/sales", json={
            "customer_id": customer["id"],
            "items": [{"product_id": product["id"], "quantity": 0}],
        }, headers=auth_headers)
        assert response.status_code == 422

    def test_sub_cent_amounts_are_rejected(self, client, auth_headers):
        customer = create_customer(client, auth_headers)
        product = create_product(client, auth_headers)
        response = client.post(f"{API}/sales", json={
            "customer_id": customer["id"],
            "payment_type": "partial",
            "paid_amount": "10.005",
            "items": [{"product_id": product["id"], "unit_price": "0.005"}],
        }, headers=auth_headers)
        assert response.status_code == 422
        assert client.get(f"{API}/sales", headers=auth_headers).json() == []


class TestUserIsolation:

    @pytest.mark.isolation
    def test_records_are_invisible_to_other_users(self, client, auth_headers, other_auth_headers):
        customer = create_customer(client, auth_headers)
        product = create_product(client, auth_headers)

        assert client.get(f"{API}/customers", headers=other_auth_headers).json() == []
        assert client.get(f"{API}/products", headers=other_auth_headers).json() == []
        assert client.get(f"{API}/customers/{customer['id']}", headers=other_auth_headers).status_code == 404
        assert client.get(f"{API}/products/{product['id']}", headers=other_auth_headers).status_code == 404

    @pytest.mark.isolation
    def test_cannot_sell_another_users_product(self, client, auth_headers, other_auth_headers):
        product = create_product(client, auth_headers)
        foreign_customer = create_customer(client, other_auth_headers, name="Bruno")

        response = client.post(f"{API}/sales", json={
            "customer_id": foreign_customer["id"],
            "items": [{"product_id": product["id"], "quantity": 1}],
        }, headers=other_auth_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Produto não encontrado"


class TestDeletionConfirmation:

    def test_delete_requires_confirm_flag(self, client, auth_headers):
        customer = create_customer(client, auth_headers)

        refused = client.delete(f"{API}/customers/{customer['id']}", headers=auth_headers)
        assert refused.status_code == 400
        assert refused.json()["detail"] == "Confirme a exclusão"
        assert client.get(f"{API}/customers/{customer['id']}", headers=auth_headers).status_code == 200

        confirmed = client.delete(f"{API}/customers/{customer['id']}", params={"confirm": "true"}, headers=auth_headers)
        assert confirmed.status_code == 200
        assert confirmed.json()["message"] == "Cliente excluído com sucesso"
        assert client.get(f"{API}/customers/{customer['id']}", headers=auth_headers).status_code == 404


class TestAtomicWrites:

    def test_validation_failure_rolls_back_flushed_rows(self, db_session, user):
        with pytest.raises(HTTPException) as exc_info:
            with write_operation(db_session, "Erro ao cadastrar cliente"):
                db_session.add(Customer(name="Temporário", user_id=user.id))
                db_session.flush()
                raise ValueError("Nome inválido")

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "Nome inválido"
        assert db_session.query(Customer).count() == 0

    def test_store_failure_becomes_localized_500(self, db_session, user):
        with pytest.raises(HTTPException) as exc_info:
            with write_operation(db_session, "Erro ao cadastrar cliente"):
                db_session.add(Customer(name="Temporário", user_id=user.id))
                db_session.flush()
                raise SQLAlchemyError("disk I/O error")

        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "Erro ao cadastrar cliente"
        assert db_session.query(Customer).count() == 0


class TestSalesFlow:

    @pytest.mark.smoke
    def test_partial_sale_then_complete(self, client, auth_headers):
        customer = create_customer(client, auth_headers)
        service = create_product(client, auth_headers, name="Instalação", base_price="200.00", is_service=True, variants=[])

        created = client.post(f"{API}/sales", json={
            "customer_id": customer["id"],
            "payment_method": "Dinheiro",
            "payment_type": "partial",
            "paid_amount": "80.00",
            "items": [{"product_id": service["id"], "quantity": 1}],
        }, headers=auth_headers)
        assert created.status_code == 201, created.text
        sale = created.json()
        assert sale["payment_status"] == "pending"
        assert len(sale["receivables"]) == 1
        assert Decimal(sale["receivables"][0]["amount"]) == Decimal("120.00")

        stats = client.get(f"{API}/dashboard/financial", headers=auth_headers).json()
        assert Decimal(stats["revenue"]) == Decimal("0")

        completed = client.post(f"{API}/sales/{sale['id']}/complete-payment", headers=auth_headers)
        assert completed.status_code == 200, completed.text
        assert completed.json()["payment_status"] == "paid"
        assert completed.json()["receivables"] == []
        assert client.get(f"{API}/financial/receivables", headers=auth_headers).json() == []

        stats = client.get(f"{API}/dashboard/financial", headers=auth_headers).json()
        assert Decimal(stats["revenue"]) == Decimal("200.00")

    @pytest.mark.smoke
    def test_rejected_sale_leaves_no_rows(self, client, auth_headers):
        customer = create_customer(client, auth_headers)
        service = create_product(client, auth_headers, name="Instalação", base_price="200.00", variants=[])

        response = client.post(f"{API}/sales", json={
            "customer_id": customer["id"],
            "payment_type": "partial",
            "paid_amount": "250.00",
            "items": [{"product_id": service["id"], "quantity": 1}],
        }, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "O valor pago deve ser menor que o total da venda"
        assert client.get(f"{API}/sales", headers=auth_headers).json() == []
        assert client.get(f"{API}/financial/receivables", headers=auth_headers).json() == []

    def test_sale_list_includes_customer_name(self, client, auth_headers):
        customer = create_customer(client, auth_headers, name="Dora")
        product = create_product(client, auth_headers)
        client.post(f"{API}/sales", json={
            "customer_id": customer["id"],
            "items": [{"product_id": product["id"], "variant_id": product["variants"][0]["id"], "quantity": 3}],
        }, headers=auth_headers)

        sales = client.get(f"{API}/sales", headers=auth_headers).json()
        assert len(sales) == 1
        assert sales[0]["customer_name"] == "Dora"
        assert Decimal(sales[0]["total_amount"]) == Decimal("165.00")


class TestQuotesFlow:

    def test_quote_convert_and_print(self, client, auth_headers):
        customer = create_customer(client, auth_headers)
        product = create_product(client, auth_headers)

        created = client.post(f"{API}/quotes", json={
            "customer_id": customer["id"],
            "valid_until": in_days(10).isoformat(),
            "items": [{"product_id": product["id"], "quantity": 2}],
        }, headers=auth_headers)
        assert created.status_code == 201, created.text
        quote = created.json()

        printed = client.get(f"{API}/quotes/{quote['id']}/print", headers=auth_headers)
        assert printed.status_code == 200
        assert printed.json()["total"] == "R$ 100,00"

        converted = client.post(f"{API}/quotes/{quote['id']}/convert", headers=auth_headers)
        assert converted.status_code == 201, converted.text
        sale = converted.json()
        assert sale["quote_id"] == quote["id"]
        assert sale["payment_status"] == "pending"
        assert Decimal(sale["total_amount"]) == Decimal(quote["total_amount"])

        again = client.post(f"{API}/quotes/{quote['id']}/convert", headers=auth_headers)
        assert again.status_code == 400
        assert client.get(f"{API}/quotes/{quote['id']}", headers=auth_headers).json()["status"] == "converted"

    def test_quote_status_change(self, client, auth_headers):
        customer = create_customer(client, auth_headers)
        product = create_product(client, auth_headers)
        quote = client.post(f"{API}/quotes", json={
            "customer_id": customer["id"],
            "valid_until": in_days(10).isoformat(),
            "items": [{"product_id": product["id"]}],
        }, headers=auth_headers).json()

        response = client.patch(f"{API}/quotes/{quote['id']}/status", json={"status": "rejected"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "rejected"

        blocked = client.post(f"{API}/quotes/{quote['id']}/convert", headers=auth_headers)
        assert blocked.status_code == 400


class TestDashboardAndSettings:

    def test_stats_count_records(self, client, auth_headers):
        create_customer(client, auth_headers)
        create_product(client, auth_headers)

        stats = client.get(f"{API}/dashboard/stats", headers=auth_headers).json()
        assert stats["total_customers"] == 1
        assert stats["total_products"] == 1
        assert stats["pending_quotes"] == 0
        assert stats["total_sales"] == 0

    def test_store_settings_upsert(self, client, auth_headers):
        missing = client.get(f"{API}/settings/store", headers=auth_headers)
        assert missing.status_code == 404

        saved = client.put(f"{API}/settings/store", json={"company_name": "Loja da Ana", "email": ""}, headers=auth_headers)
        assert saved.status_code == 200, saved.text
        assert saved.json()["email"] is None

        client.put(f"{API}/settings/store", json={"company_name": "Ana Modas"}, headers=auth_headers)
        assert client.get(f"{API}/settings/store", headers=auth_headers).json()["company_name"] == "Ana Modas"

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"
