"""
Tests for the shared package logger.
"""

import logging

from hypepulse.utils.logger import PACKAGE_LOGGER, log_file_path, setup_logger


class TestSetupLogger:

    def test_package_logger_writes_dated_file(self):
        setup_logger("hypepulse.services.base")
        package_logger = logging.getLogger(PACKAGE_LOGGER)

        file_handlers = [h for h in package_logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].baseFilename.endswith(log_file_path().name)

    def test_module_loggers_propagate_to_package_handlers(self):
        module_logger = setup_logger("hypepulse.services.base")

        assert module_logger.handlers == []
        assert module_logger.propagate
        assert module_logger.isEnabledFor(logging.WARNING)

    def test_handlers_are_added_once(self):
        setup_logger("hypepulse.services.upstream")
        setup_logger("hypepulse.services.result_cache")

        assert len(logging.getLogger(PACKAGE_LOGGER).handlers) == 2

    def test_outside_names_nest_under_package(self):
        assert setup_logger("__main__").name == "hypepulse.__main__"
