"""
Sales API Routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gestor.core.database import get_db
from gestor.core.security import get_current_user
from gestor.schemas import SaleCreate, SaleResponse, SaleWithItems, MessageResponse
from gestor.services.sales_service import SalesService
from gestor.services.document_service import DocumentService
from gestor.api.v1.common import write_operation, require_confirmation, not_found

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.get("")
async def list_sales(
    payment_status: str = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """List sales, newest first"""
    sales = SalesService(db).get_all(current_user.id, payment_status)
    result = []
    for sale in sales:
        sale_dict = SaleResponse.model_validate(sale).model_dump()
        sale_dict["customer_name"] = sale.customer.name if sale.customer else None
        result.append(sale_dict)
    return result


@router.post("", response_model=SaleWithItems, status_code=201)
async def create_sale(
    sale_data: SaleCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Register a sale; a partial payment also records the receivable for the balance"""
    sales_service = SalesService(db)
    with write_operation(db, "Erro ao registrar venda"):
        sale = sales_service.create(sale_data, current_user.id)
    return sale


@router.get("/{sale_id}", response_model=SaleWithItems)
async def get_sale(
    sale_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    sale = SalesService(db).get_by_id(sale_id, current_user.id)
    if not sale:
        raise not_found("Venda não encontrada")
    return sale


@router.get("/{sale_id}/print")
async def print_sale(
    sale_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Printable layout of the sale"""
    document = DocumentService(db).render_sale(sale_id, current_user.id)
    if not document:
        raise not_found("Venda não encontrada")
    return document


@router.post("/{sale_id}/complete-payment", response_model=SaleWithItems)
async def complete_payment(
    sale_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Mark a pending sale as paid and clear its receivables"""
    sales_service = SalesService(db)
    with write_operation(db, "Erro ao concluir pagamento da venda"):
        sale = sales_service.complete_payment(sale_id, current_user.id)
        if not sale:
            raise not_found("Venda não encontrada")
    return sale


@router.delete("/{sale_id}", response_model=MessageResponse, dependencies=[Depends(require_confirmation)])
async def delete_sale(
    sale_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    sales_service = SalesService(db)
    with write_operation(db, "Erro ao excluir venda"):
        if not sales_service.delete(sale_id, current_user.id):
            raise not_found("Venda não encontrada")
    return {"message": "Venda excluída com sucesso"}
