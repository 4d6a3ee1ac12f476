import re
from typing import Any, Iterable, Mapping

from .errors import InvalidEmailDomain, InvalidEmployeeId, MissingField

TICKET_FIELDS = (
    "employee_id",
    "employee_name",
    "employee_email",
    "department",
    "priority",
    "issue_type",
    "description",
)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(fields: Mapping[str, Any], names: Iterable[str]) -> None:
    """Raise MissingField for the first name that is absent or blank."""
    for name in names:
        if _is_blank(fields.get(name)):
            raise MissingField(name)


def employee_id_pattern(prefix: str) -> re.Pattern:
    return re.compile(rf"^{re.escape(prefix)}(0[1-9]|[1-9][0-9])$")


def email_pattern(domain: str) -> re.Pattern:
    return re.compile(rf"^[A-Za-z][A-Za-z0-9._-]*[A-Za-z]@{re.escape(domain)}$")


def validate_ticket_fields(
    fields: Mapping[str, Any],
    *,
    employee_id_prefix: str = "VPPL",
    email_domain: str = "venturebiz.in",
) -> None:
    """
    Gate ticket creation. Rules run in order and the first failure is raised:
    presence of all seven fields, employee id format, then email domain.
    """
    require_fields(fields, TICKET_FIELDS)

    if not employee_id_pattern(employee_id_prefix).fullmatch(fields["employee_id"]):
        raise InvalidEmployeeId(
            f"Employee ID must be {employee_id_prefix} followed by two digits from 01 to 99"
        )

    if not email_pattern(email_domain).fullmatch(fields["employee_email"]):
        raise InvalidEmailDomain(f"Email must be a valid @{email_domain} address")
