from uuid import UUID

from sqlalchemy.orm import Session

from caixa.models.service import Service
from caixa.schemas.directory import ServiceCreate


class ServiceRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, service_id: UUID) -> Service | None:
        return self.db.query(Service).filter(Service.id == service_id).first()

    def create(self, data: ServiceCreate) -> Service:
        service = Service(**data.model_dump())
        self.db.add(service)
        self.db.commit()
        self.db.refresh(service)
        return service
