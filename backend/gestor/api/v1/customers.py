"""
Customer API Routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from gestor.core.database import get_db
from gestor.core.security import get_current_user
from gestor.schemas import CustomerCreate, CustomerUpdate, CustomerResponse, MessageResponse
from gestor.services.customer_service import CustomerService
from gestor.api.v1.common import write_operation, require_confirmation, not_found

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get("", response_model=List[CustomerResponse])
async def list_customers(
    search: str = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """List customers of the current user"""
    return CustomerService(db).get_all(current_user.id, search)


@router.post("", response_model=CustomerResponse, status_code=201)
async def create_customer(
    customer_data: CustomerCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Create a new customer"""
    customer_service = CustomerService(db)
    with write_operation(db, "Erro ao cadastrar cliente"):
        customer = customer_service.create(customer_data, current_user.id)
    return customer


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    customer = CustomerService(db).get_by_id(customer_id, current_user.id)
    if not customer:
        raise not_found("Cliente não encontrado")
    return customer


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: int,
    customer_data: CustomerUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Update customer"""
    customer_service = CustomerService(db)
    with write_operation(db, "Erro ao atualizar cliente"):
        customer = customer_service.update(customer_id, current_user.id, customer_data)
        if not customer:
            raise not_found("Cliente não encontrado")
    return customer


@router.delete("/{customer_id}", response_model=MessageResponse, dependencies=[Depends(require_confirmation)])
async def delete_customer(
    customer_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Delete customer"""
    customer_service = CustomerService(db)
    with write_operation(db, "Erro ao excluir cliente"):
        if not customer_service.delete(customer_id, current_user.id):
            raise not_found("Cliente não encontrado")
    return {"message": "Cliente excluído com sucesso"}
