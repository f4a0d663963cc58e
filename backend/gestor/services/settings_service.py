"""
Store Settings Service - company profile shown on printed documents
"""
from typing import Optional
from sqlalchemy.orm import Session
from gestor.models import StoreSettings
from gestor.schemas import StoreSettingsUpdate


class StoreSettingsService:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> Optional[StoreSettings]:
        return self.db.query(StoreSettings).filter(StoreSettings.user_id == user_id).first()

    def save(self, settings_data: StoreSettingsUpdate, user_id: int) -> StoreSettings:
        """Create the profile on first save, overwrite it afterwards"""
        store = self.get(user_id)
        if store is None:
            store = StoreSettings(user_id=user_id)
            self.db.add(store)

        for key, value in settings_data.model_dump().items():
            setattr(store, key, value)

        self.db.flush()
        return store
