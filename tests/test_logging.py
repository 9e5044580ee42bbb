import logging

import core_logic
import decoys
import message_cipher
import obfuscation
import router
from models import OperationTarget


def test_module_loggers_are_children_of_app_logger():
    app_logger = logging.getLogger("decoy_cipher")
    for module in (decoys, message_cipher, obfuscation, router):
        assert module.logger.name == f"decoy_cipher.{module.__name__}"
        assert module.logger.parent is app_logger
        assert module.logger.handlers == []


def test_app_logger_owns_the_handlers():
    assert core_logic.logger.name == "decoy_cipher"
    assert core_logic.logger.handlers


def test_module_records_reach_app_logger(caplog):
    targets = [OperationTarget(id="t1", latitude=1.5, longitude=2.5)]
    with caplog.at_level(logging.INFO, logger="decoy_cipher"):
        decoys.create_decoys(targets, "secret")
    records = [r for r in caplog.records if r.name == "decoy_cipher.decoys"]
    assert [r.getMessage() for r in records] == ["Created 1 decoys"]
