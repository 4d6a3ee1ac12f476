import re

from helpdesk.ids import ALPHABET, generate_ticket_id


def test_default_format():
    code = generate_ticket_id()
    assert len(code) == 10
    assert re.fullmatch(r"VPPL[A-Z0-9]{6}", code)


def test_custom_prefix_and_length():
    code = generate_ticket_id("TKT", 7)
    assert re.fullmatch(r"TKT[A-Z0-9]{7}", code)


def test_characters_come_from_alphabet():
    suffixes = "".join(generate_ticket_id("", 6) for _ in range(200))
    assert set(suffixes) <= set(ALPHABET)
    assert len(ALPHABET) == 36
