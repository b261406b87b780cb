from collections.abc import AsyncGenerator
from typing import List

import anyio
from anyio import WouldBlock, create_memory_object_stream
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response, status
import orjson
from sse_starlette.sse import EventSourceResponse

from src.platform.config.core_setting import Settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.queue_board.app.command.add_ticket_use_case import AddTicketUseCase
from src.service.queue_board.app.command.remove_ticket_use_case import RemoveTicketUseCase
from src.service.queue_board.app.command.restore_ticket_use_case import RestoreTicketUseCase
from src.service.queue_board.app.command.update_ticket_status_use_case import (
    UpdateTicketStatusUseCase,
)
from src.service.queue_board.app.interface.i_change_notifier import IChangeNotifier
from src.service.queue_board.app.query.list_tickets_use_case import ListTicketsUseCase
from src.service.queue_board.domain.enum.sse_event_type import SseEventType
from src.service.queue_board.domain.enum.ticket_status import TicketStatusSchema
from src.service.queue_board.driving_adapter.http_controller.schema.queue_ticket_schema import (
    AddTicketResponse,
    DeleteTicketResponse,
    DisplayBoardResponse,
    DisplayGroupResponse,
    RestoreTicketResponse,
    StatusSchemaResponse,
    TicketCreateRequest,
    TicketResponse,
    TicketRestoreRequest,
    TicketStatusUpdateRequest,
)


router = APIRouter()


@router.get('', response_model=List[TicketResponse])
@Logger.io
async def list_tickets(
    use_case: ListTicketsUseCase = Depends(ListTicketsUseCase.depends),
) -> List[TicketResponse]:
    """All live tickets, newest first (operator view and polling displays)."""
    tickets = await use_case.list_all()
    return [TicketResponse.from_entity(ticket) for ticket in tickets]


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def add_ticket(
    request: TicketCreateRequest,
    response: Response,
    use_case: AddTicketUseCase = Depends(AddTicketUseCase.depends),
) -> AddTicketResponse:
    ticket, is_existing = await use_case.execute(number=request.number)
    if is_existing:
        response.status_code = status.HTTP_200_OK
    return AddTicketResponse(ticket=TicketResponse.from_entity(ticket), is_existing=is_existing)


@router.get('/statuses')
@inject
async def get_status_schema(
    status_schema: TicketStatusSchema = Depends(Provide[Container.status_schema]),
) -> StatusSchemaResponse:
    return StatusSchemaResponse(
        version=status_schema.version,
        statuses=list(status_schema.statuses),
        initial=status_schema.initial,
    )


@router.get('/display')
@inject
async def get_display_board(
    use_case: ListTicketsUseCase = Depends(ListTicketsUseCase.depends),
    settings: Settings = Depends(Provide[Container.config_service]),
) -> DisplayBoardResponse:
    """Read-only board for the public display, grouped by status."""
    board = await use_case.display_board()
    return DisplayBoardResponse(
        schema_version=use_case.status_schema.version,
        statuses=[ticket_status for ticket_status, _ in board],
        groups=[
            DisplayGroupResponse(
                status=ticket_status,
                tickets=[TicketResponse.from_entity(ticket) for ticket in tickets],
            )
            for ticket_status, tickets in board
        ],
        poll_interval_ms=settings.DISPLAY_POLL_INTERVAL_MS,
    )


@router.post('/restore')
@Logger.io
async def restore_ticket(
    request: TicketRestoreRequest,
    use_case: RestoreTicketUseCase = Depends(RestoreTicketUseCase.depends),
) -> RestoreTicketResponse:
    """Undo a delete with the `deleted` record returned by DELETE."""
    restored = await use_case.execute(ticket=request.to_entity())
    return RestoreTicketResponse(restored=restored)


@router.patch('/{ticket_id}')
@Logger.io
async def update_ticket_status(
    ticket_id: str,
    request: TicketStatusUpdateRequest,
    use_case: UpdateTicketStatusUseCase = Depends(UpdateTicketStatusUseCase.depends),
) -> TicketResponse:
    ticket = await use_case.execute(ticket_id=ticket_id, status=request.status)
    return TicketResponse.from_entity(ticket)


@router.delete('/{ticket_id}')
@Logger.io
async def remove_ticket(
    ticket_id: str,
    use_case: RemoveTicketUseCase = Depends(RemoveTicketUseCase.depends),
) -> DeleteTicketResponse:
    deleted = await use_case.execute(ticket_id=ticket_id)
    return DeleteTicketResponse(deleted=TicketResponse.from_entity(deleted))


# ============================ SSE Endpoint ============================


@router.get('/sse', status_code=status.HTTP_200_OK)
@inject
async def stream_ticket_changes(
    change_notifier: IChangeNotifier = Depends(Provide[Container.change_notifier]),
    settings: Settings = Depends(Provide[Container.config_service]),
) -> EventSourceResponse:
    """
    SSE reload signals for operator and display views

    Flow:
    1. Client connects → `connected` event
    2. Every committed mutation → `tickets_updated` event (no payload)
    3. Client re-fetches GET /api/tickets on each event
    """
    return EventSourceResponse(
        ticket_change_events(
            change_notifier=change_notifier, buffer_size=settings.SSE_BUFFER_SIZE
        ),
        ping=settings.SSE_PING_SECONDS,
    )


async def ticket_change_events(
    *, change_notifier: IChangeNotifier, buffer_size: int
) -> AsyncGenerator[dict[str, str], None]:
    """
    SSE event stream for one client, subscribed while it is being iterated.

    Signals are coalesced: when a slow client's buffer is full the extra
    signal is dropped, the pending one already triggers a re-fetch.
    """
    send_stream, receive_stream = create_memory_object_stream[str](max_buffer_size=buffer_size)

    def on_change() -> None:
        try:
            send_stream.send_nowait(SseEventType.TICKETS_UPDATED.value)
        except WouldBlock:
            Logger.base.debug('📡 [SSE] Client buffer full, coalescing reload signal')

    unsubscribe = change_notifier.subscribe(on_change)
    Logger.base.info('📡 [SSE] Client subscribed to ticket changes')
    try:
        yield {
            'event': SseEventType.CONNECTED.value,
            'data': orjson.dumps({'message': 'subscribed'}).decode(),
        }
        async with receive_stream:
            async for event_type in receive_stream:
                yield {'event': event_type, 'data': '{}'}
    except anyio.get_cancelled_exc_class():
        Logger.base.info('🔌 [SSE] Client disconnected')
        raise
    finally:
        unsubscribe()
        await send_stream.aclose()
