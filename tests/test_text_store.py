import tempfile
import unittest
from pathlib import Path

from digicache.core.database import Database
from digicache.core.errors import InvalidInputError, NotFoundError
from digicache.core.text_store import TextStore


class TextStoreTests(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.db = Database(Path(self.temp_dir.name) / "digicache.db")
        self.texts = TextStore(self.db)

    def tearDown(self):
        self.db.close()
        self.temp_dir.cleanup()

    def test_save_returns_generated_id(self):
        note = self.texts.save_text("b1", "hi")
        self.assertIsInstance(note.id, int)
        self.assertEqual(note.box_id, "b1")
        self.assertEqual(note.content, "hi")

    def test_content_is_stored_untrimmed(self):
        self.texts.save_text("b1", "  padded  ")
        self.assertEqual(self.texts.list_texts("b1")[0].content, "  padded  ")

    def test_blank_content_rejected(self):
        for content in ("", "   ", "\n\t"):
            with self.assertRaises(InvalidInputError):
                self.texts.save_text("b1", content)
        self.assertEqual(self.texts.list_texts("b1"), [])

    def test_length_limit(self):
        self.texts.save_text("b1", "x" * 500)
        with self.assertRaises(InvalidInputError) as ctx:
            self.texts.save_text("b1", "x" * 501)
        self.assertIn("500", ctx.exception.message)

    def test_list_is_newest_first_and_scoped_to_box(self):
        ids = [self.texts.save_text("b1", f"note {i}").id for i in range(3)]
        self.texts.save_text("b2", "elsewhere")

        listed = self.texts.list_texts("b1")

        self.assertEqual([t.id for t in listed], list(reversed(ids)))
        self.assertTrue(all(t.created_at for t in listed))

    def test_delete(self):
        note = self.texts.save_text("b1", "bye")
        self.texts.delete_text(note.id)
        self.assertEqual(self.texts.list_texts("b1"), [])
        with self.assertRaises(NotFoundError):
            self.texts.delete_text(note.id)

    def test_delete_id_outside_integer_range(self):
        with self.assertRaises(NotFoundError):
            self.texts.delete_text(2 ** 64)


if __name__ == "__main__":
    unittest.main()
