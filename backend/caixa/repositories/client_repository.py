from uuid import UUID

from sqlalchemy.orm import Session

from caixa.models.client import Client
from caixa.schemas.directory import ClientCreate


class ClientRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, client_id: UUID) -> Client | None:
        return self.db.query(Client).filter(Client.id == client_id).first()

    def create(self, data: ClientCreate) -> Client:
        client = Client(**data.model_dump())
        self.db.add(client)
        self.db.commit()
        self.db.refresh(client)
        return client
