import pytest

from decoys import create_decoy, create_decoys, reveal_decoy
from models import OperationTarget


@pytest.fixture
def targets():
    return [
        OperationTarget(id="t1", name="Alpha", latitude=40.4093, longitude=49.8671),
        OperationTarget(id="t2", latitude=25.0, longitude=60.5),
    ]


def test_create_decoy_keeps_original_and_steps(targets):
    decoy = create_decoy(targets[0], "secret")
    assert decoy.public_name == "Alpha"
    assert decoy.operation_target_id == "t1"
    assert (decoy.original_latitude, decoy.original_longitude) == (40.4093, 49.8671)
    assert (decoy.latitude, decoy.longitude) != (40.4093, 49.8671)
    assert len(decoy.derivation_steps) == 5


def test_public_name_fallbacks(targets):
    assert create_decoy(targets[1], "secret").public_name == "Decoy t2"
    assert create_decoy(targets[1], "secret", public_name="Company B").public_name == "Company B"


def test_create_decoys_batch(targets):
    decoys = create_decoys(targets, "secret")
    assert [d.operation_target_id for d in decoys] == ["t1", "t2"]


def test_reveal_with_right_key(targets):
    decoy = create_decoy(targets[0], "secret")
    revealed = reveal_decoy(decoy, "secret")
    assert revealed is not None
    assert revealed.latitude == pytest.approx(40.4093, abs=1e-6)
    assert revealed.longitude == pytest.approx(49.8671, abs=1e-6)


def test_reveal_with_wrong_key(targets):
    decoy = create_decoy(targets[0], "secret")
    assert reveal_decoy(decoy, "not the secret") is None
