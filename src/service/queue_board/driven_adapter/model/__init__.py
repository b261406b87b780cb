"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.queue_board.driven_adapter.model.queue_ticket_model import QueueTicketModel

__all__ = [
    'QueueTicketModel',
]
