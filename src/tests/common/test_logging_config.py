"""Tests for the centralized logging configuration."""

import logging
import logging.handlers
import os
import shutil
import tempfile
import unittest

import constants
from common.base.logging_config import configure_logging, get_logger, APP_LOGGERS


class TestConfigureLogging(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.root = logging.getLogger()
        self.saved_handlers = self.root.handlers[:]
        self.saved_level = self.root.level
        self.saved_app_levels = {name: logging.getLogger(name).level for name in APP_LOGGERS}
        self.saved_log_dir = constants.LOG_DIR
        constants.LOG_DIR = self.temp_dir

    def tearDown(self):
        for handler in self.root.handlers[:]:
            self.root.removeHandler(handler)
            handler.close()
        for handler in self.saved_handlers:
            self.root.addHandler(handler)
        self.root.setLevel(self.saved_level)
        for name, level in self.saved_app_levels.items():
            logging.getLogger(name).setLevel(level)
        constants.LOG_DIR = self.saved_log_dir
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_console_only(self):
        path = configure_logging(log_level="ERROR", app_log_level="DEBUG")
        self.assertIsNone(path)
        self.assertEqual(self.root.level, logging.ERROR)
        self.assertEqual(len(self.root.handlers), 1)
        self.assertEqual(logging.getLogger("lol_parser").level, logging.DEBUG)

    def test_reconfigure_does_not_duplicate_handlers(self):
        configure_logging()
        configure_logging()
        self.assertEqual(len(self.root.handlers), 1)

    def test_file_handler(self):
        path = configure_logging(log_filename="run.log")
        self.assertEqual(str(path), os.path.join(self.temp_dir, "run.log"))
        file_handlers = [
            h for h in self.root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        self.assertEqual(len(file_handlers), 1)

        get_logger("lol_parser.test").warning("kitteh")
        file_handlers[0].flush()
        with open(path, encoding="utf-8") as f:
            self.assertIn("kitteh", f.read())

    def test_get_logger(self):
        self.assertIs(get_logger("lol_parser.lexer"), logging.getLogger("lol_parser.lexer"))


if __name__ == '__main__':
    unittest.main()
