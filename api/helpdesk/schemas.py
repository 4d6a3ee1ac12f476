from datetime import datetime
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field


# Ticket schemas
class TicketCreate(BaseModel):
    """
    Schema for creating a ticket. Fields are optional here so that presence and
    format are checked by the intake rules, which report the first failure.
    Older clients send emp_id/emp_name/emp_email; those are accepted on input
    only. Responses (TicketOut) always use the employee_* names, so clients that
    read emp_* from a response must switch to employee_*.
    """
    employee_id: Optional[str] = Field(None, validation_alias=AliasChoices("employee_id", "emp_id"))
    employee_name: Optional[str] = Field(None, validation_alias=AliasChoices("employee_name", "emp_name"))
    employee_email: Optional[str] = Field(None, validation_alias=AliasChoices("employee_email", "emp_email"))
    department: Optional[str] = None
    priority: Optional[str] = None
    issue_type: Optional[str] = None
    description: Optional[str] = None


class StatusUpdate(BaseModel):
    """Schema for changing a ticket's status."""
    status: Optional[str] = None


class TicketOut(BaseModel):
    """Schema for ticket response output."""
    id: int
    ticket_id: str
    employee_id: str
    employee_name: str
    employee_email: str
    department: str
    priority: str
    issue_type: str
    description: str
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# Comment schemas
class CommentCreate(BaseModel):
    """Schema for creating a comment."""
    comment: Optional[str] = None
    author: Optional[str] = None


class CommentOut(BaseModel):
    """Schema for comment response."""
    id: int
    ticket_id: int
    comment: str
    author: str
    created_at: datetime

    class Config:
        from_attributes = True


class CommentAck(BaseModel):
    message: str
    id: int


class ErrorOut(BaseModel):
    error: str
    code: str
