import json

import pytest

import config
from message_cipher import decrypt_message, encrypt_message


def test_encrypt_known_message():
    """'A' -> 7*65+13 = 468 -> 212 (+0); 'B' -> 475 -> 219 (+1)."""
    assert encrypt_message("AB") == "[212,220]"


def test_decrypt_known_message():
    assert decrypt_message("[212,220]") == "AB"
    # Whitespace inside the array is irrelevant.
    assert decrypt_message("[212, 220]") == "AB"


def test_empty_message():
    assert encrypt_message("") == "[]"
    assert decrypt_message("[]") == ""


def test_position_term_is_not_reduced():
    values = json.loads(encrypt_message("a" * 20))
    assert values[19] - values[18] == 19 * 19 - 18 * 18
    assert max(values) > 255


def test_round_trip_full_byte_range():
    text = "".join(chr(code) for code in range(256))
    assert decrypt_message(encrypt_message(text)) == text


@pytest.mark.parametrize("text", ["Salam, dünya!", "grid 42-17 at 0600", "line\nbreak\ttab"])
def test_round_trip_text(text):
    assert decrypt_message(encrypt_message(text)) == text


@pytest.mark.parametrize("ciphertext", ["not-json", "", "[1, 2", "{'a': 1}"])
def test_unparseable_input_returns_sentinel(ciphertext):
    assert decrypt_message(ciphertext) == config.DECRYPTION_ERROR_SENTINEL


@pytest.mark.parametrize("ciphertext", ['{"a": 1}', "42", '"text"', "null"])
def test_non_array_returns_format_sentinel(ciphertext):
    assert decrypt_message(ciphertext) == config.FORMAT_ERROR_SENTINEL


@pytest.mark.parametrize("ciphertext", ["[1.5]", '["a"]', "[true]", "[[1]]"])
def test_non_integer_elements_return_sentinel(ciphertext):
    assert decrypt_message(ciphertext) == config.DECRYPTION_ERROR_SENTINEL


def test_whole_number_floats_still_decrypt():
    """Arrays written by older clients may hold numbers like 212.0."""
    assert decrypt_message("[212.0,220]") == "AB"
    assert decrypt_message("[212.0,220.0]") == "AB"
