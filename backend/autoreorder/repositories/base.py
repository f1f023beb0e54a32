from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from autoreorder.database import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic CRUD access; subclasses add the queries their aggregate needs."""

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    def get_by_id(self, entity_id: int) -> Optional[ModelType]:
        return self.db.get(self.model, entity_id)

    def create(self, obj: ModelType, commit: bool = True) -> ModelType:
        self.db.add(obj)
        if commit:
            self.db.commit()
            self.db.refresh(obj)
        else:
            self.db.flush()
        return obj

    def update(self, obj: ModelType, updates: Dict[str, Any], commit: bool = True) -> ModelType:
        for key, value in updates.items():
            setattr(obj, key, value)
        if commit:
            self.db.commit()
            self.db.refresh(obj)
        else:
            self.db.flush()
        return obj

    def delete(self, obj: ModelType, commit: bool = True) -> None:
        self.db.delete(obj)
        if commit:
            self.db.commit()
        else:
            self.db.flush()
