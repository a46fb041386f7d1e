"""Tests logging functions in image_merger."""
import logging

import image_merger.logging_utils as im_logging_utils


class TestLoggingUtils:
    def test_logger_singleton_behavior(self) -> None:
        """Test that logger instances are singleton per name."""
        logger1 = im_logging_utils.setup_logger("test_logger")
        logger2 = im_logging_utils.setup_logger("test_logger")
        assert logger1 is logger2
        assert len(logger1.handlers) == 1

    def test_logger_custom_formatter_and_handler(self) -> None:
        """Test custom formatter and handler are applied."""
        formatter = logging.Formatter("[CUSTOM] %(message)s")
        handler = logging.StreamHandler()
        logger = im_logging_utils.setup_logger(
            "custom_logger",
            formatter=formatter,
            handler=handler
        )
        assert logger.name == "custom_logger"
        assert len(logger.handlers) == 1
        assert logger.handlers[0].formatter._fmt.startswith("[CUSTOM]")

    def test_set_verbosity(self) -> None:
        """Verbose mode switches the shared logger to DEBUG and back."""
        shared = im_logging_utils.logger
        try:
            im_logging_utils.set_verbosity(verbose=True)
            assert shared.level == logging.DEBUG
        finally:
            im_logging_utils.set_verbosity(verbose=False)
        assert shared.level == logging.INFO
