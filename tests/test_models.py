import pytest
from pydantic import ValidationError

import config
from models import DecryptPayload, EncryptPayload, MessagePayload, OperationTarget


def test_message_payload_rejects_characters_above_255():
    with pytest.raises(ValidationError):
        MessagePayload(text="snow ☃")


def test_message_payload_accepts_full_byte_range():
    text = "".join(chr(code) for code in range(256))
    assert MessagePayload(text=text).text == text


@pytest.mark.parametrize("value", [1.7e308, -1.7e308, config.MAX_COORDINATE_MAGNITUDE * 2])
def test_plain_coordinates_are_bounded(value):
    with pytest.raises(ValidationError):
        EncryptPayload(latitude=value, longitude=0.0, key="k")
    with pytest.raises(ValidationError):
        OperationTarget(id="t1", latitude=0.0, longitude=value)


def test_decoy_coordinates_have_wider_bound():
    value = config.MAX_COORDINATE_MAGNITUDE * 1.5
    assert DecryptPayload(latitude=value, longitude=-value, key="k").latitude == value
    with pytest.raises(ValidationError):
        DecryptPayload(latitude=1.7e308, longitude=0.0, key="k")
