import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_coach.store.kv_store import SqliteKVStore  # noqa: E402


class SqliteKVStoreTests(unittest.TestCase):
    def setUp(self):
        self.store = SqliteKVStore(":memory:")

    def tearDown(self):
        self.store.close()

    def test_put_replaces_value_and_bumps_version(self):
        self.store.put("resume:u1:r1", {"id": "r1", "fileName": "a.pdf"})
        self.store.put("resume:u1:r1", {"id": "r1", "fileName": "b.pdf"})

        value, version = self.store.get_versioned("resume:u1:r1")
        self.assertEqual(value["fileName"], "b.pdf")
        self.assertEqual(version, 2)

    def test_get_missing_key_returns_none(self):
        self.assertIsNone(self.store.get("resume:u1:missing"))
        self.assertIsNone(self.store.get_versioned("resume:u1:missing"))

    def test_put_if_absent_keeps_first_value(self):
        self.assertTrue(self.store.put_if_absent("resume:u1:r1", {"fileName": "first.txt"}))
        self.assertFalse(self.store.put_if_absent("resume:u1:r1", {"fileName": "second.txt"}))
        self.assertEqual(self.store.get("resume:u1:r1"), {"fileName": "first.txt"})

    def test_put_if_version_rejects_stale_writes(self):
        self.store.put("feedback:u1:f1", {"n": 1})
        _, version = self.store.get_versioned("feedback:u1:f1")

        self.assertTrue(self.store.put_if_version("feedback:u1:f1", {"n": 2}, version))
        self.assertFalse(self.store.put_if_version("feedback:u1:f1", {"n": 3}, version))
        self.assertEqual(self.store.get("feedback:u1:f1"), {"n": 2})

    def test_put_if_version_on_missing_key_writes_nothing(self):
        self.assertFalse(self.store.put_if_version("feedback:u1:nope", {"n": 1}, 1))
        self.assertIsNone(self.store.get("feedback:u1:nope"))

    def test_scan_by_prefix_is_exact(self):
        self.store.put("resume:u1:r1", {"id": "r1"})
        self.store.put("resume:u1:r2", {"id": "r2"})
        self.store.put("resume:u10:r3", {"id": "r3"})
        self.store.put("feedback:u1:f1", {"id": "f1"})
        self.store.put("resume:u_:r4", {"id": "r4"})

        keys = sorted(key for key, _ in self.store.scan_by_prefix("resume:u1:"))
        self.assertEqual(keys, ["resume:u1:r1", "resume:u1:r2"])

        wildcard_keys = [key for key, _ in self.store.scan_by_prefix("resume:u_:")]
        self.assertEqual(wildcard_keys, ["resume:u_:r4"])

    def test_file_backed_store_persists_between_instances(self):
        import tempfile

        with tempfile.TemporaryDirectory() as tmp_dir:
            db_path = str(Path(tmp_dir) / "nested" / "kv.db")
            first = SqliteKVStore(db_path)
            first.put("user:u1", {"id": "u1"})
            first.close()

            second = SqliteKVStore(db_path)
            try:
                self.assertEqual(second.get("user:u1"), {"id": "u1"})
            finally:
                second.close()


if __name__ == "__main__":
    unittest.main()
