from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from . import store
from .config import Settings
from .db import get_db
from .schemas import (
    CommentAck,
    CommentCreate,
    CommentOut,
    ErrorOut,
    StatusUpdate,
    TicketCreate,
    TicketOut,
)

router = APIRouter(prefix="/api/tickets", tags=["tickets"])

ERROR_RESPONSES = {
    400: {"model": ErrorOut},
    404: {"model": ErrorOut},
    500: {"model": ErrorOut},
}


def get_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


# ========== TICKET ENDPOINTS ==========

@router.post("", response_model=TicketOut, status_code=201, responses=ERROR_RESPONSES)
def create_ticket(
    payload: TicketCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Open a new ticket. Status starts as Open and a ticket code is assigned."""
    return store.create_ticket(
        db,
        payload.model_dump(),
        ticket_id_prefix=settings.ticket_id_prefix,
        ticket_id_length=settings.ticket_id_length,
        max_attempts=settings.ticket_id_max_attempts,
        employee_id_prefix=settings.employee_id_prefix,
        email_domain=settings.email_domain,
    )


@router.get("", response_model=list[TicketOut], responses=ERROR_RESPONSES)
def list_tickets(db: Session = Depends(get_db)):
    """List every ticket, newest first."""
    return store.list_tickets(db)


@router.get("/{key}", response_model=TicketOut, responses=ERROR_RESPONSES)
def get_ticket(
    key: str,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return store.get_ticket(db, key, settings.ticket_lookup_key)


@router.api_route(
    "/{key}/status",
    methods=["PUT", "PATCH"],
    response_model=TicketOut,
    responses=ERROR_RESPONSES,
)
def update_ticket_status(
    key: str,
    payload: StatusUpdate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Set a new status. Any non-empty value is accepted; updated_at is refreshed."""
    return store.update_status(db, key, payload.status, settings.ticket_lookup_key)


# ========== COMMENT ENDPOINTS ==========

@router.post("/{key}/comments", response_model=CommentAck, status_code=201, responses=ERROR_RESPONSES)
def add_comment(
    key: str,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    c = store.add_comment(db, key, payload.comment, payload.author, settings.ticket_lookup_key)
    return {"message": "Comment added successfully", "id": c.id}


@router.get("/{key}/comments", response_model=list[CommentOut], responses=ERROR_RESPONSES)
def list_comments(
    key: str,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Comments for a ticket, oldest first."""
    return store.list_comments(db, key, settings.ticket_lookup_key)
