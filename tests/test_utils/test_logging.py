import logging

from albert_encoder.utils.logging import configure_logging, get_logger


def test_get_logger_returns_named_logger():
    logger = get_logger("albert_encoder.test")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "albert_encoder.test"


def test_configure_logging_sets_up_root_handler(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", logging.WARNING)

    configure_logging(logging.DEBUG)

    assert root.level == logging.DEBUG
    assert root.handlers
