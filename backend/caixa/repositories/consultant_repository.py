from uuid import UUID

from sqlalchemy.orm import Session

from caixa.models.consultant import Consultant
from caixa.schemas.directory import ConsultantCreate


class ConsultantRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, consultant_id: UUID) -> Consultant | None:
        return self.db.query(Consultant).filter(Consultant.id == consultant_id).first()

    def create(self, data: ConsultantCreate) -> Consultant:
        consultant = Consultant(**data.model_dump())
        self.db.add(consultant)
        self.db.commit()
        self.db.refresh(consultant)
        return consultant

    def deactivate(self, consultant_id: UUID) -> Consultant | None:
        consultant = self.get_by_id(consultant_id)
        if not consultant:
            return None
        consultant.active = False  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(consultant)
        return consultant
