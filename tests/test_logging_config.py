from __future__ import annotations

import logging

import pytest

from diamondviz.cli import main
from diamondviz.logging_config import PACKAGE_LOGGER, setup_logging


@pytest.fixture(autouse=True)
def restore_package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


def _installed(logger: logging.Logger) -> list[logging.Handler]:
    return [handler for handler in logger.handlers if getattr(handler, "_diamondviz_handler", False)]


def test_repeated_setup_does_not_stack_handlers(tmp_path) -> None:
    setup_logging("info", log_file=tmp_path / "first.log")
    logger = setup_logging(logging.DEBUG)

    assert logger.name == "diamondviz"
    assert logger.level == logging.DEBUG
    assert len(_installed(logger)) == 1


def test_level_names_are_case_insensitive() -> None:
    assert setup_logging(" Warning ", console=False).level == logging.WARNING


def test_unknown_level_name_raises() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        setup_logging("chatty")


def test_log_file_receives_grade_fallbacks(tmp_path) -> None:
    log_path = tmp_path / "logs" / "diamondviz.log"
    setup_logging("warning", log_file=log_path, console=False)

    logging.getLogger("diamondviz.grades.keys").warning("Unknown clarity grade %r, using %s", "VS 3", "VS2")

    text = log_path.read_text(encoding="utf-8")
    assert "WARNING" in text
    assert "Unknown clarity grade 'VS 3'" in text


def test_cli_log_file_keeps_stdout_clean(tmp_path, capsys) -> None:
    log_path = tmp_path / "cli.log"

    assert main(["--log-file", str(log_path), "--log-level", "warning", "inclusions", "VS 3"]) == 0

    captured = capsys.readouterr()
    assert "Unknown clarity grade" not in captured.out
    assert "Unknown clarity grade" in log_path.read_text(encoding="utf-8")
