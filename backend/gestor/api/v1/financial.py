"""
Financial API Routes - receivables, payables and transactions
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date

from gestor.core.database import get_db
from gestor.core.security import get_current_user
from gestor.schemas import (
    ReceivableCreate, ReceivableUpdate, ReceivableResponse,
    PayableCreate, PayableUpdate, PayableResponse, SettleRequest,
    TransactionCreate, TransactionResponse, TransactionSummary, MessageResponse
)
from gestor.services.financial_service import ReceivableService, PayableService, TransactionService
from gestor.api.v1.common import write_operation, require_confirmation, not_found

router = APIRouter(prefix="/financial", tags=["Financial"])


# ==================== RECEIVABLES ====================

@router.get("/receivables", response_model=List[ReceivableResponse])
async def list_receivables(
    status: str = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """List accounts receivable ordered by due date"""
    return ReceivableService(db).get_all(current_user.id, status)


@router.post("/receivables", response_model=ReceivableResponse, status_code=201)
async def create_receivable(
    receivable_data: ReceivableCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    service = ReceivableService(db)
    with write_operation(db, "Erro ao registrar conta a receber"):
        receivable = service.create(receivable_data, current_user.id)
    return receivable


@router.put("/receivables/{receivable_id}", response_model=ReceivableResponse)
async def update_receivable(
    receivable_id: int,
    receivable_data: ReceivableUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    service = ReceivableService(db)
    with write_operation(db, "Erro ao atualizar conta a receber"):
        receivable = service.update(receivable_id, current_user.id, receivable_data)
        if not receivable:
            raise not_found("Conta a receber não encontrada")
    return receivable


@router.post("/receivables/{receivable_id}/pay", response_model=ReceivableResponse)
async def settle_receivable(
    receivable_id: int,
    settle_data: Optional[SettleRequest] = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Mark the receivable as collected"""
    service = ReceivableService(db)
    paid_date = settle_data.paid_date if settle_data else None
    with write_operation(db, "Erro ao quitar conta a receber"):
        receivable = service.mark_paid(receivable_id, current_user.id, paid_date)
        if not receivable:
            raise not_found("Conta a receber não encontrada")
    return receivable


@router.delete("/receivables/{receivable_id}", response_model=MessageResponse, dependencies=[Depends(require_confirmation)])
async def delete_receivable(
    receivable_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    service = ReceivableService(db)
    with write_operation(db, "Erro ao excluir conta a receber"):
        if not service.delete(receivable_id, current_user.id):
            raise not_found("Conta a receber não encontrada")
    return {"message": "Conta a receber excluída com sucesso"}


# ==================== PAYABLES ====================

@router.get("/payables", response_model=List[PayableResponse])
async def list_payables(
    status: str = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """List accounts payable ordered by due date"""
    return PayableService(db).get_all(current_user.id, status)


@router.post("/payables", response_model=PayableResponse, status_code=201)
async def create_payable(
    payable_data: PayableCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    service = PayableService(db)
    with write_operation(db, "Erro ao registrar conta a pagar"):
        payable = service.create(payable_data, current_user.id)
    return payable


@router.put("/payables/{payable_id}", response_model=PayableResponse)
async def update_payable(
    payable_id: int,
    payable_data: PayableUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    service = PayableService(db)
    with write_operation(db, "Erro ao atualizar conta a pagar"):
        payable = service.update(payable_id, current_user.id, payable_data)
        if not payable:
            raise not_found("Conta a pagar não encontrada")
    return payable


@router.post("/payables/{payable_id}/pay", response_model=PayableResponse)
async def settle_payable(
    payable_id: int,
    settle_data: Optional[SettleRequest] = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Mark the payable as paid"""
    service = PayableService(db)
    paid_date = settle_data.paid_date if settle_data else None
    with write_operation(db, "Erro ao quitar conta a pagar"):
        payable = service.mark_paid(payable_id, current_user.id, paid_date)
        if not payable:
            raise not_found("Conta a pagar não encontrada")
    return payable


@router.delete("/payables/{payable_id}", response_model=MessageResponse, dependencies=[Depends(require_confirmation)])
async def delete_payable(
    payable_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    service = PayableService(db)
    with write_operation(db, "Erro ao excluir conta a pagar"):
        if not service.delete(payable_id, current_user.id):
            raise not_found("Conta a pagar não encontrada")
    return {"message": "Conta a pagar excluída com sucesso"}


# ==================== TRANSACTIONS ====================

@router.get("/transactions", response_model=List[TransactionResponse])
async def list_transactions(
    type: str = None,
    start_date: date = None,
    end_date: date = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """List income and expense entries"""
    return TransactionService(db).get_all(current_user.id, type, start_date, end_date)


@router.get("/transactions/summary", response_model=TransactionSummary)
async def transactions_summary(
    start_date: date = None,
    end_date: date = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    return TransactionService(db).get_summary(current_user.id, start_date, end_date)


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
async def create_transaction(
    transaction_data: TransactionCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    service = TransactionService(db)
    with write_operation(db, "Erro ao registrar transação"):
        transaction = service.create(transaction_data, current_user.id)
    return transaction


@router.delete("/transactions/{transaction_id}", response_model=MessageResponse, dependencies=[Depends(require_confirmation)])
async def delete_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    service = TransactionService(db)
    with write_operation(db, "Erro ao excluir transação"):
        if not service.delete(transaction_id, current_user.id):
            raise not_found("Transação não encontrada")
    return {"message": "Transação excluída com sucesso"}
