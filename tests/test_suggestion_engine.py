import sys
import unittest
import uuid
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_coach.core.errors import NoSuggestions, UpstreamError, ValidationError  # noqa: E402
from resume_coach.services.suggestion_engine import PASTED_RESUME_FILE_NAME, SuggestionEngine  # noqa: E402
from resume_coach.store.kv_store import SqliteKVStore  # noqa: E402
from resume_coach.store.repository import RecordRepository  # noqa: E402
from tests.fakes import SAMPLE_SUGGESTIONS, SAMPLE_SUMMARY, FakeCompletionClient, completion_json  # noqa: E402

RESUME_TEXT = "Experienced backend engineer with eight years of Python and distributed systems."


class SuggestionEngineTests(unittest.TestCase):
    def setUp(self):
        self.store = SqliteKVStore(":memory:")
        self.repository = RecordRepository(self.store)

    def tearDown(self):
        self.store.close()

    def _engine(self, *responses):
        self.ai_client = FakeCompletionClient(list(responses))
        return SuggestionEngine(self.repository, self.ai_client, max_resume_chars=5000)

    def test_generate_persists_feedback_in_order(self):
        engine = self._engine(completion_json(SAMPLE_SUGGESTIONS, summary=SAMPLE_SUMMARY))
        resume_id = str(uuid.uuid4())

        outcome = engine.generate("user-1", RESUME_TEXT, resume_id)

        self.assertEqual([s.title for s in outcome.suggestions], [s["title"] for s in SAMPLE_SUGGESTIONS])
        self.assertTrue(all(s.status == "pending" for s in outcome.suggestions))
        self.assertEqual(outcome.summary.professional_title, "Backend Engineer")

        stored, _ = self.repository.get_feedback_versioned("user-1", outcome.feedback_id)
        self.assertEqual(stored.resume_id, resume_id)
        self.assertEqual(stored.suggestions, outcome.suggestions)

        prompt = self.ai_client.calls[0]
        self.assertEqual(prompt[0].role, "system")
        self.assertIn("suggestions", prompt[0].content)
        self.assertIn(RESUME_TEXT, prompt[1].content)

    def test_pasted_resume_is_created_once(self):
        engine = self._engine(
            completion_json(SAMPLE_SUGGESTIONS),
            completion_json(SAMPLE_SUGGESTIONS[:1]),
        )
        resume_id = str(uuid.uuid4())

        engine.generate("user-1", RESUME_TEXT, resume_id)
        first = self.repository.get_resume("user-1", resume_id)
        engine.generate("user-1", RESUME_TEXT + " Updated.", resume_id)

        resumes = self.repository.list_resumes("user-1")
        self.assertEqual(len(resumes), 1)
        self.assertEqual(resumes[0].file_name, PASTED_RESUME_FILE_NAME)
        self.assertIsNone(resumes[0].storage_path)
        self.assertEqual(resumes[0].uploaded_at, first.uploaded_at)
        self.assertEqual(len(self.repository.list_feedback("user-1")), 2)

    def test_existing_resume_record_is_not_overwritten(self):
        engine = self._engine(completion_json(SAMPLE_SUGGESTIONS))
        resume_id = str(uuid.uuid4())
        self.store.put(
            f"resume:user-1:{resume_id}",
            {
                "id": resume_id,
                "userId": "user-1",
                "fileName": "cv.pdf",
                "storagePath": f"user-1/{resume_id}/cv.pdf",
                "uploadedAt": "2026-01-01T00:00:00+00:00",
            },
        )

        self.assertFalse(engine.ensure_resume_exists("user-1", resume_id))
        engine.generate("user-1", RESUME_TEXT, resume_id)
        self.assertEqual(self.repository.get_resume("user-1", resume_id).file_name, "cv.pdf")

    def test_missing_resume_id_gets_generated(self):
        engine = self._engine(completion_json(SAMPLE_SUGGESTIONS))
        outcome = engine.generate("user-1", RESUME_TEXT, None)

        self.assertTrue(outcome.resume_id)
        self.assertIsNotNone(self.repository.get_resume("user-1", outcome.resume_id))

    def test_empty_result_persists_no_feedback(self):
        engine = self._engine(completion_json([]))

        with self.assertRaises(NoSuggestions):
            engine.generate("user-1", RESUME_TEXT, str(uuid.uuid4()))
        self.assertEqual(self.repository.list_feedback("user-1"), [])

    def test_upstream_failure_persists_no_feedback(self):
        engine = self._engine(UpstreamError("The suggestion service is unavailable right now."))

        with self.assertRaises(UpstreamError):
            engine.generate("user-1", RESUME_TEXT, str(uuid.uuid4()))
        self.assertEqual(self.repository.list_feedback("user-1"), [])

    def test_validation_happens_before_side_effects(self):
        engine = self._engine()

        for text, resume_id in (("", "r1"), ("   \n", "r1"), ("x" * 5001, "r1"), (RESUME_TEXT, "bad:id")):
            with self.subTest(text_len=len(text), resume_id=resume_id):
                with self.assertRaises(ValidationError):
                    engine.generate("user-1", text, resume_id)

        self.assertEqual(self.ai_client.calls, [])
        self.assertEqual(self.repository.list_resumes("user-1"), [])


if __name__ == "__main__":
    unittest.main()
