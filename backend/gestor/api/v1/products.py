"""
Product API Routes - products, services and variants
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from gestor.core.database import get_db
from gestor.core.security import get_current_user
from gestor.schemas import ProductCreate, ProductUpdate, ProductResponse, MessageResponse
from gestor.services.product_service import ProductService
from gestor.api.v1.common import write_operation, require_confirmation, not_found

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=List[ProductResponse])
async def list_products(
    active_only: bool = False,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """List products with their variants"""
    return ProductService(db).get_all(current_user.id, active_only)


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Create a product together with its variants"""
    product_service = ProductService(db)
    with write_operation(db, "Erro ao cadastrar produto"):
        product = product_service.create(product_data, current_user.id)
    return product


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    product = ProductService(db).get_by_id(product_id, current_user.id)
    if not product:
        raise not_found("Produto não encontrado")
    return product


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    product_data: ProductUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Overwrite product fields and replace its variant set"""
    product_service = ProductService(db)
    with write_operation(db, "Erro ao atualizar produto"):
        product = product_service.update(product_id, current_user.id, product_data)
        if not product:
            raise not_found("Produto não encontrado")
    return product


@router.delete("/{product_id}", response_model=MessageResponse, dependencies=[Depends(require_confirmation)])
async def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Delete product and its variants"""
    product_service = ProductService(db)
    with write_operation(db, "Erro ao excluir produto"):
        if not product_service.delete(product_id, current_user.id):
            raise not_found("Produto não encontrado")
    return {"message": "Produto excluído com sucesso"}
