import pytest

from helpdesk.errors import InvalidEmailDomain, InvalidEmployeeId, MissingField, ValidationError
from helpdesk.validation import TICKET_FIELDS, require_fields, validate_ticket_fields


@pytest.fixture
def fields(ticket_payload):
    return dict(ticket_payload)


def test_valid_fields_pass(fields):
    validate_ticket_fields(fields)


@pytest.mark.parametrize("employee_id", ["VPPL07", "VPPL01", "VPPL10", "VPPL99"])
def test_employee_id_accepted(fields, employee_id):
    fields["employee_id"] = employee_id
    validate_ticket_fields(fields)


@pytest.mark.parametrize("employee_id", ["XYZZ07", "VPPL00", "VPPL7", "VPPL100", "vppl07", "VPPL07 "])
def test_employee_id_rejected(fields, employee_id):
    fields["employee_id"] = employee_id
    with pytest.raises(InvalidEmployeeId):
        validate_ticket_fields(fields)


@pytest.mark.parametrize("email", ["john.doe@venturebiz.in", "ab@venturebiz.in", "Mary-Ann_Lee@venturebiz.in"])
def test_email_accepted(fields, email):
    fields["employee_email"] = email
    validate_ticket_fields(fields)


@pytest.mark.parametrize(
    "email",
    [
        "john@gmail.com",
        "a@venturebiz.in",        # local part too short
        "1john@venturebiz.in",    # must start with a letter
        "john1@venturebiz.in",    # must end with a letter
        "john@venturebiz.com",
        "john@venturebizXin",
    ],
)
def test_email_rejected(fields, email):
    fields["employee_email"] = email
    with pytest.raises(InvalidEmailDomain):
        validate_ticket_fields(fields)


@pytest.mark.parametrize("missing", TICKET_FIELDS)
def test_missing_field_reported(fields, missing):
    del fields[missing]
    with pytest.raises(MissingField) as exc:
        validate_ticket_fields(fields)
    assert exc.value.field == missing


def test_blank_counts_as_missing(fields):
    fields["department"] = "   "
    with pytest.raises(MissingField) as exc:
        validate_ticket_fields(fields)
    assert exc.value.field == "department"


def test_first_failure_wins(fields):
    # Missing field beats a bad employee id, which beats a bad email
    fields["employee_id"] = "XYZZ07"
    fields["employee_email"] = "john@gmail.com"
    with pytest.raises(InvalidEmployeeId):
        validate_ticket_fields(fields)

    fields["description"] = ""
    with pytest.raises(MissingField):
        validate_ticket_fields(fields)


def test_first_missing_field_in_order(fields):
    fields["priority"] = None
    fields["employee_name"] = None
    with pytest.raises(MissingField) as exc:
        validate_ticket_fields(fields)
    assert exc.value.field == "employee_name"


def test_configurable_prefix_and_domain(fields):
    fields["employee_id"] = "ACME42"
    fields["employee_email"] = "jane@acme.example"
    validate_ticket_fields(fields, employee_id_prefix="ACME", email_domain="acme.example")


def test_require_fields():
    require_fields({"status": "Closed"}, ["status"])
    with pytest.raises(ValidationError):
        require_fields({"status": ""}, ["status"])
