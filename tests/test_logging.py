import logging
import logging.handlers

import pytest

from config.logging import GENERATION_LOGGERS, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name in GENERATION_LOGGERS:
        for handler in logging.getLogger(name).handlers:
            handler.close()
        logging.getLogger(name).handlers.clear()


def test_writes_main_and_generation_logs(tmp_path, restore_root_logger):
    setup_logging(tmp_path, level="debug")

    logging.getLogger("coach.services.program_generator").info("attempt 1/3")
    logging.getLogger("coach.services.exercise_catalog").info("catalog read")
    for handler in logging.getLogger().handlers + logging.getLogger(GENERATION_LOGGERS[0]).handlers:
        handler.flush()

    assert logging.getLogger().level == logging.DEBUG
    main_log = (tmp_path / "coach.log").read_text(encoding="utf-8")
    generation_log = (tmp_path / "generation.log").read_text(encoding="utf-8")
    assert "attempt 1/3" in main_log
    assert "catalog read" in main_log
    assert "attempt 1/3" in generation_log
    assert "catalog read" not in generation_log


def test_repeated_setup_does_not_stack_handlers(tmp_path, restore_root_logger):
    setup_logging(tmp_path)
    setup_logging(tmp_path)

    assert len(logging.getLogger().handlers) == 2
    assert len(logging.getLogger(GENERATION_LOGGERS[0]).handlers) == 1
    assert logging.getLogger("openai").level == logging.WARNING


def test_repeated_setup_closes_previous_files(tmp_path, restore_root_logger):
    setup_logging(tmp_path)
    first_handlers = [
        handler
        for handler in logging.getLogger().handlers + logging.getLogger(GENERATION_LOGGERS[0]).handlers
        if isinstance(handler, logging.handlers.RotatingFileHandler)
    ]

    setup_logging(tmp_path)

    assert len(first_handlers) == 2
    assert all(handler.stream is None for handler in first_handlers)


def test_parser_warnings_reach_generation_log(tmp_path, restore_root_logger):
    setup_logging(tmp_path)

    logging.getLogger("coach.services.response_parser").warning("Invalid JSON from LLM at position 12")
    for handler in logging.getLogger("coach.services.response_parser").handlers:
        handler.flush()

    assert "Invalid JSON from LLM at position 12" in (tmp_path / "generation.log").read_text(encoding="utf-8")
