#!/usr/bin/env python -O
# -*- coding: utf-8 -*-

import unittest
from unittest import mock

from update_batching import __main__ as entry_point
from update_batching.util.ExceptionFactory import ExceptionFactory


class TestMain(unittest.TestCase):

    @mock.patch.object(entry_point, "BenchmarkDriver")
    def test_success(self, driver_class):
        self.assertEqual(0, entry_point.main())
        driver_class.return_value.run_all.assert_called_once_with()

    @mock.patch.object(entry_point, "BenchmarkDriver")
    def test_failure_exit_status(self, driver_class):
        err = ExceptionFactory({}).of_case("Multiple Readers").create("Can't connect", "08001", 2003)
        driver_class.return_value.run_all.side_effect = err
        with self.assertLogs("update_batching", level="ERROR") as logs:
            self.assertEqual(1, entry_point.main())
        self.assertIn("benchmark aborted: (case=Multiple Readers) Can't connect", logs.output[0])


if __name__ == '__main__':
    unittest.main()
