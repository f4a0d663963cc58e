"""
Quote API Routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from gestor.core.database import get_db
from gestor.core.security import get_current_user
from gestor.schemas import (
    QuoteCreate, QuoteResponse, QuoteWithItems, QuoteStatusUpdate,
    SaleWithItems, MessageResponse
)
from gestor.services.quote_service import QuoteService
from gestor.services.document_service import DocumentService
from gestor.api.v1.common import write_operation, require_confirmation, not_found

router = APIRouter(prefix="/quotes", tags=["Quotes"])


def _with_customer_name(quote) -> dict:
    data = QuoteResponse.model_validate(quote).model_dump()
    data["customer_name"] = quote.customer.name if quote.customer else None
    return data


@router.get("")
async def list_quotes(
    status: str = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """List quotes, newest first"""
    quotes = QuoteService(db).get_all(current_user.id, status)
    return [_with_customer_name(quote) for quote in quotes]


@router.post("", response_model=QuoteWithItems, status_code=201)
async def create_quote(
    quote_data: QuoteCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Create a quote with its items"""
    quote_service = QuoteService(db)
    with write_operation(db, "Erro ao criar orçamento"):
        quote = quote_service.create(quote_data, current_user.id)
    return quote


@router.get("/{quote_id}", response_model=QuoteWithItems)
async def get_quote(
    quote_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    quote = QuoteService(db).get_by_id(quote_id, current_user.id)
    if not quote:
        raise not_found("Orçamento não encontrado")
    return quote


@router.get("/{quote_id}/print")
async def print_quote(
    quote_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Printable layout of the quote"""
    document = DocumentService(db).render_quote(quote_id, current_user.id)
    if not document:
        raise not_found("Orçamento não encontrado")
    return document


@router.patch("/{quote_id}/status", response_model=QuoteResponse)
async def update_quote_status(
    quote_id: int,
    status_data: QuoteStatusUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Approve or reject a pending quote"""
    quote_service = QuoteService(db)
    with write_operation(db, "Erro ao atualizar orçamento"):
        quote = quote_service.update_status(quote_id, current_user.id, status_data.status)
        if not quote:
            raise not_found("Orçamento não encontrado")
    return quote


@router.post("/{quote_id}/convert", response_model=SaleWithItems, status_code=201)
async def convert_quote(
    quote_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Turn the quote into a sale"""
    quote_service = QuoteService(db)
    with write_operation(db, "Erro ao converter orçamento em venda"):
        sale = quote_service.convert_to_sale(quote_id, current_user.id)
        if not sale:
            raise not_found("Orçamento não encontrado")
    return sale


@router.delete("/{quote_id}", response_model=MessageResponse, dependencies=[Depends(require_confirmation)])
async def delete_quote(
    quote_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    quote_service = QuoteService(db)
    with write_operation(db, "Erro ao excluir orçamento"):
        if not quote_service.delete(quote_id, current_user.id):
            raise not_found("Orçamento não encontrado")
    return {"message": "Orçamento excluído com sucesso"}
