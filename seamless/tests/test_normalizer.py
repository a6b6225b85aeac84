"""Tests for the scene normalizer."""

import json
from unittest import TestCase

from seamless.generators.normalizer import build_structured_prompt, normalize_batch, normalize_scene
from seamless.generators.schemas import BatchEnvelope, RawScene

from .fakes import make_item


def raw(item: dict) -> RawScene:
    return RawScene.model_validate(item)


class SceneNumberingTest(TestCase):
    """Tests for contiguous scene numbering."""

    def test_model_index_is_ignored(self):
        """Test a wrong model-supplied index does not leak into the scene number."""
        items = [raw(make_item(n)) for n in (1, 2, 3, 4, 9)]
        scenes = normalize_batch(items, start_index=1)

        self.assertEqual([scene.scene_number for scene in scenes], [1, 2, 3, 4, 5])
        self.assertEqual(json.loads(scenes[4].structured_prompt)["scene"], 5)

    def test_numbering_from_start_index(self):
        scenes = normalize_batch([raw({}), raw({}), raw({})], start_index=11)
        self.assertEqual([scene.scene_number for scene in scenes], [11, 12, 13])

    def test_non_object_items_dropped_before_numbering(self):
        """Test unusable items are dropped and numbering stays contiguous."""
        envelope = BatchEnvelope.model_validate({"scenes": [make_item(1), "oops", 42, make_item(3)]})
        scenes = normalize_batch(envelope.scenes, start_index=6)
        self.assertEqual([scene.scene_number for scene in scenes], [6, 7])


class StructuredPromptTest(TestCase):
    """Tests for the canonical structured payload."""

    def test_empty_item_has_full_layout(self):
        """Test every key is present even when the model sent nothing."""
        payload = build_structured_prompt(raw({}), 3)

        self.assertEqual(
            payload,
            {
                "scene": 3,
                "time": {"start": 0, "end": 5},
                "continuity_reference": "",
                "environment": {"location": "", "weather": "", "ambient_sound": []},
                "characters": [],
                "camera": {"shot_type": "", "movement": ""},
                "visual_style": {"style": "", "lighting": ""},
                "dialogue": {"line": "", "language": ""},
            },
        )

    def test_partial_time_window_defaults(self):
        payload = build_structured_prompt(raw({"time": {"end": 8}}), 1)
        self.assertEqual(payload["time"], {"start": 0, "end": 8})

    def test_non_finite_times_use_defaults(self):
        """Test overflowing or NaN times never reach the payload as bare Infinity/NaN."""
        item = json.loads('{"time": {"start": 1e999, "end": "nan"}}')
        scene = normalize_scene(raw(item), 1)

        def reject_constant(token):
            raise ValueError(f"non-standard JSON constant {token}")

        payload = json.loads(scene.structured_prompt, parse_constant=reject_constant)
        self.assertEqual(payload["time"], {"start": 0, "end": 5})
        self.assertIn("Duration: 0s - 5s", scene.script_description)

    def test_placeholders_kept_in_payload(self):
        """Test the payload keeps placeholder words the description drops."""
        scene = normalize_scene(raw({"environment": {"location": "N/A", "weather": "Rain\n\nstorm"}}), 1)
        payload = json.loads(scene.structured_prompt)

        self.assertEqual(payload["environment"]["location"], "N/A")
        self.assertEqual(payload["environment"]["weather"], "Rain storm")
        self.assertNotIn("Location:", scene.script_description)

    def test_single_ambient_sound_string_becomes_list(self):
        payload = build_structured_prompt(raw({"environment": {"ambient_sound": "distant  thunder"}}), 1)
        self.assertEqual(payload["environment"]["ambient_sound"], ["distant thunder"])

    def test_loose_types_are_tolerated(self):
        """Test wrongly typed leaves do not break normalization."""
        item = {
            "time": {"start": "2", "end": "6s"},
            "environment": "a beach",
            "characters": {"name": "not a list"},
            "camera": {"shot_type": 35, "movement": None},
            "dialogue": ["hello"],
        }
        payload = build_structured_prompt(raw(item), 1)

        self.assertEqual(payload["time"], {"start": 2, "end": 6})
        self.assertEqual(payload["environment"]["location"], "")
        self.assertEqual(payload["characters"], [])
        self.assertEqual(payload["camera"]["shot_type"], "35")
        self.assertEqual(payload["dialogue"]["line"], "")

    def test_renormalizing_payload_is_idempotent(self):
        """Test normalizing the parsed payload again yields the same payload."""
        first = normalize_scene(raw(make_item(4)), 4)
        second = normalize_scene(RawScene.model_validate_json(first.structured_prompt), 4)

        self.assertEqual(json.loads(second.structured_prompt), json.loads(first.structured_prompt))
        self.assertEqual(second.script_description, first.script_description)

    def test_freeform_prompt_cleaned(self):
        scene = normalize_scene(raw({"wishk_prompt": "  A woman\n walks  "}), 1)
        self.assertEqual(scene.freeform_prompt, "A woman walks")

    def test_freeform_prompt_absent(self):
        self.assertEqual(normalize_scene(raw({}), 1).freeform_prompt, "")


class DescriptionTest(TestCase):
    """Tests for the human readable description."""

    def test_full_description(self):
        item = make_item(2)
        item["dialogue"] = {"line": "Look at the waves!", "language": "English"}
        description = normalize_scene(raw(item), 2).script_description

        self.assertEqual(
            description,
            "Scene 2 (Duration: 0s - 5s)"
            " | Continuity: Continues from scene 1"
            " | Location: Sunny beach | Weather: Clear | Sound: waves, gulls"
            " | Characters: Lan [long black hair, white linen dress] (Emotion: calm)"
            " -> Action: walks along the shoreline"
            " | Camera: Wide shot | slow dolly"
            " | Visual: Cinematic | Light: golden hour"
            ' | Dialogue (English): "Look at the waves!"',
        )

    def test_empty_item_description(self):
        """Test empty parts are omitted and the no-dialogue marker remains."""
        description = normalize_scene(raw({}), 7).script_description
        self.assertEqual(description, "Scene 7 (Duration: 0s - 5s) | Dialogue: none")

    def test_placeholder_dialogue_is_no_dialogue(self):
        description = normalize_scene(raw({"dialogue": {"line": "none", "language": "None"}}), 1).script_description
        self.assertTrue(description.endswith("Dialogue: none"))

    def test_multiple_characters_joined(self):
        item = {
            "characters": [
                {"name": "Lan", "emotion": "happy"},
                {"name": "Minh", "outfit": "blue shirt", "actions": {"body_movement": "waves"}},
            ]
        }
        description = normalize_scene(raw(item), 1).script_description
        self.assertIn("Characters: Lan (Emotion: happy); Minh [blue shirt] -> Action: waves", description)
