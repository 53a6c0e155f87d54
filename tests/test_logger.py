from logging import CRITICAL, DEBUG, ERROR, INFO, NOTSET, WARNING, Logger

from pytest_cases import parametrize, parametrize_with_cases

from tests.utils import pvc, random_lower_string
from virt_storage.logger import (
    PACKAGE_LOGGER_NAME,
    StderrFilter,
    StdoutFilter,
    create_logger,
    get_logger,
)
from virt_storage.pvc import is_wait_for_first_consumer
from virt_storage.store import InMemoryStore


class CaseLevel:
    @parametrize(level=(NOTSET, DEBUG, INFO, WARNING, ERROR, CRITICAL))
    def case_level(self, level: int) -> int:
        return level


def test_logger() -> None:
    name = random_lower_string()
    logger = create_logger(name)
    assert isinstance(logger, Logger)
    assert logger.name == name
    assert logger.level == NOTSET
    assert len(logger.handlers) == 2
    assert isinstance(logger.handlers[0].filters[0], StdoutFilter)
    assert isinstance(logger.handlers[1].filters[0], StderrFilter)


def test_logger_handlers_added_once() -> None:
    name = random_lower_string()
    create_logger(name)
    logger = create_logger(name, DEBUG)
    assert len(logger.handlers) == 2
    assert logger.level == DEBUG


@parametrize_with_cases("level", cases=CaseLevel)
def test_level(level: int) -> None:
    logger = create_logger(random_lower_string(), level)
    assert logger.level == level


def test_invalid_level(caplog) -> None:
    level = random_lower_string()
    logger = create_logger(random_lower_string(), level)
    assert logger.level == NOTSET
    assert f"Invalid log level: {level}" in caplog.text


def test_stdout_filter(capsys) -> None:
    logger = create_logger(random_lower_string(), DEBUG)
    logger.debug("debug")
    logger.warning("warning")
    logger.info("info")
    logger.error("error")
    logger.critical("critical")
    captured = capsys.readouterr()
    assert "debug" in captured.out
    assert "warning" in captured.out
    assert "info" in captured.out
    assert "error" in captured.err
    assert "critical" in captured.err


def test_package_logger_from_settings(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    logger = get_logger()
    assert logger.name == PACKAGE_LOGGER_NAME
    assert logger.level == DEBUG
    assert get_logger() is logger


def test_package_logger_receives_module_records(monkeypatch, caplog) -> None:
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    get_logger()
    assert not is_wait_for_first_consumer(pvc(), InMemoryStore())
    assert "No default StorageClass configured" in caplog.text
