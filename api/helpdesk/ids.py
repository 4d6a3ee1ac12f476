import secrets
import string

ALPHABET = string.ascii_uppercase + string.digits


def generate_ticket_id(prefix: str = "VPPL", length: int = 6) -> str:
    """Return prefix followed by `length` random characters from A-Z0-9.

    Not unique on its own; the tickets.ticket_id unique constraint is what
    guarantees uniqueness, and creation retries on a clash.
    """
    return prefix + "".join(secrets.choice(ALPHABET) for _ in range(length))
