import sqlite3
import tempfile
import unittest
from pathlib import Path

from digicache.core.database import Database
from digicache.core.errors import ConflictError, StorageError


class DatabaseTests(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.db_path = Path(self.temp_dir.name) / "nested" / "digicache.db"

    def tearDown(self):
        self.temp_dir.cleanup()

    def _tables(self, db):
        return {r["name"] for r in db.fetchall("SELECT name FROM sqlite_master WHERE type='table'")}

    def test_bootstrap_creates_every_table_and_parent_dir(self):
        db = Database(self.db_path)
        self.addCleanup(db.close)
        self.assertTrue(self.db_path.exists())
        self.assertTrue(
            {"box_ids", "images", "box_contents", "background_images", "texts", "spotify_songs"}
            <= self._tables(db)
        )

    def test_bootstrap_is_idempotent(self):
        db = Database(self.db_path)
        db.execute("INSERT INTO box_ids (id) VALUES (?)", ("b1",))
        db.close()

        db = Database(self.db_path)
        self.addCleanup(db.close)
        self.assertEqual([r["id"] for r in db.fetchall("SELECT id FROM box_ids")], ["b1"])

    def test_old_schema_gets_missing_columns(self):
        self.db_path.parent.mkdir(parents=True)
        conn = sqlite3.connect(self.db_path)
        conn.execute("CREATE TABLE images (id TEXT PRIMARY KEY, box_id TEXT NOT NULL, image_data BLOB NOT NULL)")
        conn.execute("CREATE TABLE texts (id INTEGER PRIMARY KEY AUTOINCREMENT, box_id TEXT NOT NULL, content TEXT NOT NULL)")
        conn.commit()
        conn.close()

        db = Database(self.db_path)
        self.addCleanup(db.close)
        image_cols = {r["name"] for r in db.fetchall("PRAGMA table_info(images)")}
        text_cols = {r["name"] for r in db.fetchall("PRAGMA table_info(texts)")}
        self.assertIn("content_type", image_cols)
        self.assertIn("created_at", image_cols)
        self.assertIn("created_at", text_cols)

    def test_errors_are_translated(self):
        db = Database(self.db_path)
        self.addCleanup(db.close)
        db.execute("INSERT INTO box_ids (id) VALUES (?)", ("b1",))
        with self.assertRaises(ConflictError):
            db.execute("INSERT INTO box_ids (id) VALUES (?)", ("b1",))
        with self.assertRaises(StorageError):
            db.fetchall("SELECT * FROM no_such_table")

    def test_transaction_rolls_back_on_error(self):
        db = Database(self.db_path)
        self.addCleanup(db.close)
        with self.assertRaises(ConflictError):
            with db.transaction() as conn:
                conn.execute("INSERT INTO box_ids (id) VALUES (?)", ("b2",))
                conn.execute("INSERT INTO box_ids (id) VALUES (?)", ("b2",))
        self.assertIsNone(db.fetchone("SELECT id FROM box_ids WHERE id = ?", ("b2",)))


if __name__ == "__main__":
    unittest.main()
