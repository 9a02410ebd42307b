"""Tests for the JSON-lines sleep log.

Covers: babysleep.core.sleep_log
"""

import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch


def _completed_period(duration=27000.0, resumes=0):
    from babysleep.core.sleep_period import SleepPeriod
    # 2024/02/29 23:00:00 UTC
    period = SleepPeriod()
    period.begin(1000.0, 1709247600.0)
    period.end = 1000.0 + duration
    period.resumes = resumes
    return period


class TestWriteSleepPeriod(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.log_path = Path(self.tmpdir) / "nested" / "sleep_log.jsonl"

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_creates_file_and_folder(self):
        from babysleep.core.sleep_log import write_sleep_period
        write_sleep_period(self.log_path, _completed_period())
        self.assertTrue(os.path.exists(self.log_path))

    def test_record_content(self):
        from babysleep.core.sleep_log import write_sleep_period
        write_sleep_period(self.log_path, _completed_period())
        with open(self.log_path, encoding="utf-8") as f:
            lines = f.read().splitlines()
        self.assertEqual(len(lines), 1)
        record = json.loads(lines[0])
        self.assertEqual(record["start"], "2024/02/29 23:00:00")
        self.assertEqual(record["end"], "2024/03/01 06:30:00")
        self.assertEqual(record["duration"], "07:30:00")
        self.assertAlmostEqual(record["duration_seconds"], 27000.0)
        self.assertAlmostEqual(record["start_epoch"], 1709247600.0)
        self.assertEqual(record["resumes"], 0)

    def test_appends_one_line_per_call(self):
        from babysleep.core.sleep_log import write_sleep_period
        write_sleep_period(self.log_path, _completed_period(60))
        write_sleep_period(self.log_path, _completed_period(120, resumes=1))
        with open(self.log_path, encoding="utf-8") as f:
            lines = f.read().splitlines()
        self.assertEqual(len(lines), 2)
        self.assertEqual(json.loads(lines[1])["duration"], "00:02:00")
        self.assertEqual(json.loads(lines[1])["resumes"], 1)

    def test_duration_excludes_paused_seconds(self):
        from babysleep.core.sleep_log import build_record
        period = _completed_period(600)
        period.paused_seconds = 240
        record = build_record(period)
        self.assertEqual(record["duration"], "00:06:00")
        # wall-clock end still reflects when the stop happened
        self.assertEqual(record["end"], "2024/02/29 23:10:00")

    def test_missing_wall_clock_start(self):
        from babysleep.core.sleep_log import build_record
        period = _completed_period(60)
        period.start_wall_clock = None
        record = build_record(period)
        self.assertIsNone(record["start"])
        self.assertIsNone(record["end"])
        self.assertEqual(record["duration"], "00:01:00")

    def test_refuses_running_period(self):
        from babysleep.core.sleep_log import write_sleep_period
        from babysleep.core.sleep_period import SleepPeriod
        period = SleepPeriod()
        period.begin(1.0, 2.0)
        with self.assertRaises(ValueError):
            write_sleep_period(self.log_path, period)
        self.assertFalse(os.path.exists(self.log_path))

    def test_io_error_becomes_persistence_failure(self):
        from babysleep.core.sleep_log import write_sleep_period
        from babysleep.core.errors import PersistenceFailure
        with patch("builtins.open", side_effect=PermissionError("read-only")):
            with self.assertRaises(PersistenceFailure):
                write_sleep_period(self.log_path, _completed_period())

    def test_path_is_a_directory(self):
        from babysleep.core.sleep_log import write_sleep_period
        from babysleep.core.errors import PersistenceFailure
        os.makedirs(self.log_path)
        with self.assertRaises(PersistenceFailure):
            write_sleep_period(self.log_path, _completed_period())


class TestReadSleepLog(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.log_path = Path(self.tmpdir) / "sleep_log.jsonl"

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_missing_file_is_empty(self):
        from babysleep.core.sleep_log import read_sleep_log
        self.assertEqual(read_sleep_log(self.log_path), [])

    def test_reads_back_written_records(self):
        from babysleep.core.sleep_log import read_sleep_log, write_sleep_period
        write_sleep_period(self.log_path, _completed_period(60))
        write_sleep_period(self.log_path, _completed_period(90))
        records = read_sleep_log(self.log_path)
        self.assertEqual([r["duration"] for r in records], ["00:01:00", "00:01:30"])

    def test_skips_garbage_lines(self):
        from babysleep.core.sleep_log import read_sleep_log
        with open(self.log_path, "w", encoding="utf-8") as f:
            f.write('{"duration": "00:00:10"}\n')
            f.write("not json\n")
            f.write("\n")
            f.write("[1, 2]\n")
            f.write('{"duration": "00:00:20"}\n')
        records = read_sleep_log(self.log_path)
        self.assertEqual([r["duration"] for r in records], ["00:00:10", "00:00:20"])


if __name__ == "__main__":
    unittest.main()
