from __future__ import annotations

import glob
import logging
import os
import tempfile
import threading
import unittest
from unittest import mock

import numpy as np

from trackals.correction import batch_correction
from trackals.optimizer import optimize_plan_line
from trackals.utils import logger as logger_module
from trackals.utils.logger import (
    LOGGER_NAME,
    get_logger,
    log_debug,
    log_error,
    log_info,
    log_warning,
    setup_logger,
)


def series(n, interval=0.25):
    return [{'position': i * interval, 'value': float(np.sin(i / 5))} for i in range(n)]


class TestLogHelpers(unittest.TestCase):
    def setUp(self) -> None:
        self.addCleanup(setup_logger)
        setup_logger(log_level=logging.DEBUG)

    def test_helpers_use_shared_logger(self) -> None:
        with self.assertLogs(LOGGER_NAME, level='DEBUG') as logs:
            log_debug("debug line")
            log_info("info line")
            log_warning("warning line")
            log_error("error line")
        self.assertEqual([r.levelname for r in logs.records], ['DEBUG', 'INFO', 'WARNING', 'ERROR'])

    def test_log_error_attaches_exception(self) -> None:
        with self.assertLogs(LOGGER_NAME, level='ERROR') as logs:
            log_error("load failed", ValueError("bad column"))
        self.assertIn("load failed: bad column", logs.output[0])
        self.assertIsNotNone(logs.records[0].exc_info)

    def test_log_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            logger = setup_logger(log_dir=tmp)
            self.assertIs(get_logger(), logger)
            log_info("written to file")
            for handler in logger.handlers:
                handler.flush()
            (path,) = glob.glob(os.path.join(tmp, 'trackals_*.log'))
            with open(path) as f:
                self.assertIn("written to file", f.read())
            for handler in logger.handlers:
                handler.close()


class TestEngineLogging(unittest.TestCase):
    def setUp(self) -> None:
        get_logger()

    def test_batch_failures_are_logged_as_warnings(self) -> None:
        with self.assertLogs(LOGGER_NAME, level='WARNING') as logs:
            batch_correction([{'id': 'bad', 'data': 5}, {'id': 'ok', 'data': series(40)}])
        self.assertTrue(any("ALS correction failed for bad" in line for line in logs.output))

    def test_optimizer_reports_progress(self) -> None:
        with mock.patch('trackals.optimizer.upward_priority.log_info') as info:
            optimize_plan_line(series(20), [{'value': v - 5} for v in np.sin(np.arange(20) / 5)])
        self.assertGreaterEqual(info.call_count, 2)


class TestLazySetup(unittest.TestCase):
    def setUp(self) -> None:
        saved = logger_module._logger
        self.addCleanup(setattr, logger_module, '_logger', saved)
        logger_module._logger = None

    def test_concurrent_first_use_configures_once(self) -> None:
        barrier = threading.Barrier(8)
        loggers = []

        def worker():
            barrier.wait()
            loggers.append(get_logger())

        with mock.patch.object(logger_module, 'setup_logger', wraps=logger_module.setup_logger) as setup:
            threads = [threading.Thread(target=worker) for _ in range(8)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        self.assertEqual(setup.call_count, 1)
        self.assertEqual(len(loggers), 8)
        self.assertTrue(all(lg is loggers[0] for lg in loggers))

    def test_threaded_batch(self) -> None:
        batch = batch_correction([series(40), series(50), series(3)], max_workers=3)
        self.assertEqual(batch['summary']['successful'], 2)


if __name__ == "__main__":
    unittest.main()
