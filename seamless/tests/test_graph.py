"""Tests for graph routing and node behavior."""

from unittest import TestCase
from unittest.mock import patch

from langgraph.graph import END

from seamless.constants import START_OF_VIDEO
from seamless.generators.graph import after_request, recursion_limit_for, should_continue_generation
from seamless.generators.nodes import accept_batch, handle_error, record_failure
from seamless.generators.schemas import BatchEnvelope, GenerationOptions

from .fakes import make_batch


def make_state(**overrides) -> dict:
    state = {
        "options": GenerationOptions(idea="idea"),
        "mode": "generate",
        "idea_context": "idea",
        "target_count": 5,
        "start_scene_number": 1,
        "scenes": [],
        "continuity_state": START_OF_VIDEO,
        "story_summary": "",
        "raw_batch": None,
        "batch_summary": "",
        "batch_error": None,
        "consecutive_failures": 0,
        "error": None,
        "status": "pending",
    }
    state.update(overrides)
    return state


class RoutingTest(TestCase):
    """Tests for conditional edges."""

    def test_after_request(self):
        self.assertEqual(after_request(make_state(batch_error="boom")), "record_failure")
        self.assertEqual(after_request(make_state()), "accept_batch")

    def test_done_when_target_reached(self):
        state = make_state(target_count=0, consecutive_failures=5)
        self.assertEqual(should_continue_generation(state), END)

    def test_breaker_trips_at_five(self):
        self.assertEqual(should_continue_generation(make_state(consecutive_failures=5)), "handle_error")
        self.assertEqual(should_continue_generation(make_state(consecutive_failures=4)), "request_batch")

    def test_recursion_limit_grows_with_target(self):
        self.assertGreater(recursion_limit_for(100), recursion_limit_for(10))
        self.assertGreaterEqual(recursion_limit_for(1), 2 * 5 + 1)


@patch("time.sleep")
class AcceptBatchTest(TestCase):
    """Tests for the accept_batch node."""

    def test_truncates_to_remaining(self, sleep):
        raw = BatchEnvelope.model_validate_json(make_batch(1, 7)).scenes
        updates = accept_batch(make_state(target_count=3, raw_batch=raw, batch_summary="S"))

        self.assertEqual([scene.scene_number for scene in updates["scenes"]], [1, 2, 3])
        self.assertEqual(updates["consecutive_failures"], 0)
        self.assertEqual(updates["story_summary"], "S")
        self.assertEqual(updates["status"], "completed")
        sleep.assert_not_called()

    def test_extension_fingerprint_has_no_camera(self, sleep):
        raw = BatchEnvelope.model_validate_json(make_batch(6, 2)).scenes
        updates = accept_batch(make_state(mode="extend", start_scene_number=6, raw_batch=raw))

        self.assertTrue(updates["continuity_state"].startswith("LAST SCENE NUMBER: 7"))
        self.assertNotIn("LAST CAMERA", updates["continuity_state"])
        sleep.assert_called_once_with(1.5)

    def test_empty_batch_is_failure(self, sleep):
        updates = accept_batch(make_state(raw_batch=[], consecutive_failures=2))

        self.assertEqual(updates["consecutive_failures"], 3)
        self.assertNotIn("scenes", updates)
        self.assertNotIn("continuity_state", updates)

    def test_summary_not_replaced(self, sleep):
        raw = BatchEnvelope.model_validate_json(make_batch(1, 1)).scenes
        updates = accept_batch(make_state(story_summary="First", batch_summary="Second", raw_batch=raw))
        self.assertNotIn("story_summary", updates)


@patch("time.sleep")
class RecordFailureTest(TestCase):
    """Tests for the record_failure node."""

    def test_counts_and_reports(self, sleep):
        messages = []
        config = {"configurable": {"on_progress": messages.append}}

        updates = record_failure(make_state(batch_error="timeout", consecutive_failures=1), config)

        self.assertEqual(updates["consecutive_failures"], 2)
        self.assertEqual(messages, ["Connection error: timeout. Retrying..."])
        sleep.assert_called_once_with(2.0)

    def test_no_pause_when_breaker_trips(self, sleep):
        record_failure(make_state(batch_error="timeout", consecutive_failures=4), {})
        sleep.assert_not_called()


class HandleErrorTest(TestCase):
    """Tests for the handle_error node."""

    def test_generate_message(self):
        updates = handle_error(make_state(target_count=20, consecutive_failures=5))
        self.assertIn("20 scenes", updates["error"])
        self.assertEqual(updates["status"], "error")

    def test_extend_message(self):
        updates = handle_error(make_state(mode="extend", target_count=3, consecutive_failures=5))
        self.assertIn("extend", updates["error"])
