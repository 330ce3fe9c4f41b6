import uuid

from sqlalchemy import Column, DateTime, String, Uuid
from sqlalchemy.sql import func

from embodied_journal.db.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    email = Column(String(255), nullable=False, unique=True)

    # Opaque bearer token; every journal query is scoped by the owning user
    api_token = Column(String(128), nullable=False, unique=True, index=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
