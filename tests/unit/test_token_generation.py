import pytest

# bound before the autouse fixture swaps the module attribute
from accounts.domain.services import generate_activation_token


def test_token_is_hex_of_expected_length():
    t = generate_activation_token()
    assert len(t) == 32
    int(t, 16)


def test_token_length_follows_byte_count():
    assert len(generate_activation_token(32)) == 64


def test_tokens_do_not_repeat():
    seen = {generate_activation_token() for _ in range(500)}
    assert len(seen) == 500


def test_short_tokens_refused():
    with pytest.raises(ValueError):
        generate_activation_token(4)
