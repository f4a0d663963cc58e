"""
Store Settings API Routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gestor.core.database import get_db
from gestor.core.security import get_current_user
from gestor.schemas import StoreSettingsUpdate, StoreSettingsResponse
from gestor.services.settings_service import StoreSettingsService
from gestor.api.v1.common import write_operation, not_found

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("/store", response_model=StoreSettingsResponse)
async def get_store_settings(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Get the company profile used on printed documents"""
    store = StoreSettingsService(db).get(current_user.id)
    if not store:
        raise not_found("Configurações da loja não encontradas")
    return store


@router.put("/store", response_model=StoreSettingsResponse)
async def save_store_settings(
    settings_data: StoreSettingsUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user)
):
    service = StoreSettingsService(db)
    with write_operation(db, "Erro ao salvar configurações"):
        store = service.save(settings_data, current_user.id)
    return store
