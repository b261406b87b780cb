from datetime import datetime

from sqlalchemy import DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class QueueTicketModel(Base):
    __tablename__ = 'queue_ticket'

    # Unbounded: ids come back through restore and numbers have no length limit
    id: Mapped[str] = mapped_column(String, primary_key=True)
    number: Mapped[str] = mapped_column(String, nullable=False)
    # QueueTicket.number_key, folded in Python so every database matches the same way
    number_key: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False)
    # Set by the application so a restored ticket keeps its original position
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('ix_queue_ticket_number_key', 'number_key'),
        Index('ix_queue_ticket_created_at', 'created_at'),
    )
