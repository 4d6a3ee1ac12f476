"""Ticket and comment operations against a SQLAlchemy session.

Every function takes the request's Session and performs at most two round
trips. Not-found conditions raise NotFound; bad input raises a
ValidationError subclass before the database is touched.
"""
import logging
import re
from typing import Any, Mapping

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import ids
from .errors import NotFound, PersistenceError
from .models import Comment, Ticket, utcnow
from .validation import TICKET_FIELDS, require_fields, validate_ticket_fields

logger = logging.getLogger(__name__)

MAX_TICKET_PK = 2**63 - 1
_NUMERIC_KEY = re.compile(r"[0-9]+")


def _ticket_filter(key: str | int, lookup_key: str):
    """Column condition for {key}, or None when the key can't match anything."""
    if lookup_key == "ticket_id":
        return Ticket.ticket_id == str(key)
    # ASCII digits only, within BIGINT range
    if not _NUMERIC_KEY.fullmatch(str(key)):
        return None
    pk = int(key)
    if pk > MAX_TICKET_PK:
        return None
    return Ticket.id == pk


# ========== TICKETS ==========

def create_ticket(
    db: Session,
    fields: Mapping[str, Any],
    *,
    ticket_id_prefix: str = "VPPL",
    ticket_id_length: int = 6,
    max_attempts: int = 5,
    employee_id_prefix: str = "VPPL",
    email_domain: str = "venturebiz.in",
) -> Ticket:
    validate_ticket_fields(
        fields, employee_id_prefix=employee_id_prefix, email_domain=email_domain
    )
    values = {name: fields[name] for name in TICKET_FIELDS}

    for attempt in range(1, max_attempts + 1):
        code = ids.generate_ticket_id(ticket_id_prefix, ticket_id_length)
        now = utcnow()
        t = Ticket(ticket_id=code, status="Open", created_at=now, updated_at=now, **values)
        db.add(t)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(
                "Ticket code collision on %s (attempt %d/%d)", code, attempt, max_attempts
            )
            continue
        db.refresh(t)
        logger.info("Created ticket %s (id=%s) for %s", t.ticket_id, t.id, t.employee_id)
        return t

    raise PersistenceError(f"Could not allocate a unique ticket code after {max_attempts} attempts")


def list_tickets(db: Session) -> list[Ticket]:
    return db.query(Ticket).order_by(desc(Ticket.created_at), desc(Ticket.id)).all()


def get_ticket(db: Session, key: str | int, lookup_key: str = "id") -> Ticket:
    condition = _ticket_filter(key, lookup_key)
    t = db.query(Ticket).filter(condition).first() if condition is not None else None
    if not t:
        raise NotFound("Ticket not found")
    return t


def update_status(
    db: Session, key: str | int, new_status: str | None, lookup_key: str = "id"
) -> Ticket:
    require_fields({"status": new_status}, ["status"])

    t = get_ticket(db, key, lookup_key)
    old_status = t.status
    t.status = new_status
    t.updated_at = utcnow()
    db.commit()
    db.refresh(t)

    logger.info("Ticket %s status changed from %s to %s", t.ticket_id, old_status, t.status)
    return t


# ========== COMMENTS ==========

def add_comment(
    db: Session,
    key: str | int,
    comment: str | None,
    author: str | None,
    lookup_key: str = "id",
) -> Comment:
    """Attach a comment; the ticket must exist so a missing one is a NotFound, not an FK error."""
    require_fields({"comment": comment, "author": author}, ["comment", "author"])

    t = get_ticket(db, key, lookup_key)
    c = Comment(ticket_id=t.id, comment=comment, author=author, created_at=utcnow())
    db.add(c)
    db.commit()
    db.refresh(c)

    logger.info("Comment %s added to ticket %s by %s", c.id, t.ticket_id, author)
    return c


def list_comments(db: Session, key: str | int, lookup_key: str = "id") -> list[Comment]:
    t = get_ticket(db, key, lookup_key)
    return (
        db.query(Comment)
        .filter(Comment.ticket_id == t.id)
        .order_by(Comment.created_at, Comment.id)
        .all()
    )
