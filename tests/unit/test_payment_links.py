from tripsync.utils.invite_code import INVITE_CODE_LENGTH, generate_invite_code, is_valid_invite_code
from tripsync.utils.payment_links import generate_payment_link, payment_app_name, supports_deep_link


def test_venmo_link_strips_at_and_formats_amount():
    link = generate_payment_link("venmo", "@alice", 42.5)
    assert link.startswith("venmo://paycharge?txn=pay&")
    assert "recipients=alice&amount=42.50" in link
    assert "note=Trip%20settlement" in link


def test_venmo_link_encodes_note():
    link = generate_payment_link("venmo", "alice", 10, note="Tahoe & gas")
    assert link.endswith("note=Tahoe%20%26%20gas")


def test_cashapp_link():
    assert generate_payment_link("cashapp", "$bob", 7) == "https://cash.app/$bob/7.00"


def test_zelle_has_no_deep_link():
    assert generate_payment_link("zelle", "carol@example.com", 20) is None
    assert not supports_deep_link("zelle")
    assert supports_deep_link("venmo")


def test_payment_app_names():
    assert payment_app_name("cashapp") == "Cash App"


def test_invite_codes_are_valid_and_distinct():
    codes = {generate_invite_code() for _ in range(50)}
    assert len(codes) == 50
    for code in codes:
        assert len(code) == INVITE_CODE_LENGTH
        assert is_valid_invite_code(code)


def test_invalid_invite_codes():
    assert not is_valid_invite_code("")
    assert not is_valid_invite_code(None)
    assert not is_valid_invite_code("short")
    assert not is_valid_invite_code("has spaces!!")
