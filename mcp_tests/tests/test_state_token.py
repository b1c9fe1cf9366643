import pytest

from core.state_token import STATE_TTL_MS, new_state, sign_state, verify_state


T0 = 1_700_000_000_000


def test_new_state_format():
    state = new_state(T0)
    ts, rest = state.split("-", 1)
    assert ts == str(T0)
    assert len(rest) == 36


def test_sign_is_deterministic_and_hex():
    a = sign_state("123-abc", "secret")
    b = sign_state("123-abc", "secret")
    assert a == b
    state, sig = a.rsplit(".", 1)
    assert state == "123-abc"
    assert len(sig) == 64
    int(sig, 16)


def test_verify_roundtrip_at_creation_time():
    state = new_state(T0)
    assert verify_state(sign_state(state, "s3cret"), "s3cret", now_ms=T0) == state


def test_verify_accepts_exactly_at_window_edge():
    state = new_state(T0)
    assert verify_state(sign_state(state, "k"), "k", now_ms=T0 + STATE_TTL_MS) == state


def test_verify_rejects_expired():
    state = new_state(T0)
    assert verify_state(sign_state(state, "k"), "k", now_ms=T0 + 11 * 60 * 1000) is None


def test_verify_rejects_other_secret():
    state = new_state(T0)
    assert verify_state(sign_state(state, "secretA"), "secretB", now_ms=T0) is None


def test_verify_rejects_tampered_state():
    signed = sign_state(new_state(T0), "k")
    _, sig = signed.rsplit(".", 1)
    forged = f"{T0 + 1}-00000000-0000-0000-0000-000000000000.{sig}"
    assert verify_state(forged, "k", now_ms=T0) is None


@pytest.mark.parametrize("bad", ["", "no-delimiter", ".abc", "123-abc.", "."])
def test_verify_rejects_malformed(bad):
    assert verify_state(bad, "k", now_ms=T0) is None


def test_verify_rejects_non_numeric_timestamp():
    signed = sign_state("abc-def", "k")
    assert verify_state(signed, "k", now_ms=T0) is None


def test_verify_rejects_unicode_digit_timestamp():
    assert verify_state(sign_state("²-abc", "k"), "k", now_ms=T0) is None
