"""Prompt templates for batch scene generation.

Every batch is a single human message built from ``BATCH_PROMPT``. The first
batch only states the core idea; later batches restate the idea, the running
story summary and the continuity fingerprint of the previous scene so the
model starts exactly where the last batch ended.
"""

from enum import Enum

from langchain_core.prompts import ChatPromptTemplate


class DialogueLanguage(str, Enum):
    """Spoken dialogue language for generated scenes."""

    NONE = "None"
    VIETNAMESE = "Vietnamese"
    ENGLISH = "English"

    @classmethod
    def _missing_(cls, value):
        # Vietnamese UI labels and short codes
        aliases = {
            "": cls.NONE,
            "none": cls.NONE,
            "không có": cls.NONE,
            "tiếng việt": cls.VIETNAMESE,
            "vi": cls.VIETNAMESE,
            "tiếng anh": cls.ENGLISH,
            "en": cls.ENGLISH,
        }
        if isinstance(value, str):
            return aliases.get(value.strip().lower())
        return None


class PromptType(str, Enum):
    """Camera strategy for the whole script."""

    DEFAULT = "default"  # varied camera angles
    CAMERA_LOCK = "camera_lock"  # one locked camera, one-shot feel


DEFAULT_VIDEO_STYLE = "Cinematic"
DEFAULT_ASPECT_RATIO = "16:9"


# =============================================================================
# Context sections
# =============================================================================

FIRST_BATCH_CONTEXT = """CORE IDEA: "{idea}"
START: Begin Scene 1 according to the core idea."""

NEXT_BATCH_CONTEXT = """CORE IDEA: "{idea}"
STORY SO FAR: "{summary}"

CRITICAL - PREVIOUS SCENE ENDING VISUALS:
"{continuity}"

TASK: Start Scene {start} EXACTLY where the previous scene ended."""


# =============================================================================
# Camera rules
# =============================================================================

CAMERA_RULES = {
    PromptType.DEFAULT: "5. **CAMERA**: Maintain smooth camera flow. Vary shot types only through continuous moves, never hard cuts.",
    PromptType.CAMERA_LOCK: (
        "5. **CAMERA LOCK**: The camera is locked off for the entire video. Use the SAME shot type and framing "
        'in every scene and set camera.movement to "static". Only the subjects move.'
    ),
}


def get_dialogue_rule(language: DialogueLanguage) -> str:
    if language == DialogueLanguage.NONE:
        return '6. **DIALOGUE**: No spoken dialogue. Leave dialogue.line empty and set dialogue.language to "None".'
    return f"6. **DIALOGUE**: Any spoken line must be in {language.value}. Keep lines short and natural."


# =============================================================================
# Batch prompt
# =============================================================================

# Braces belonging to the JSON example are doubled for the template engine
BATCH_PROMPT = ChatPromptTemplate.from_template(
    """You are a world-class AI Cinematographer specializing in SINGLE-TAKE / CONTINUOUS SHOT videos.
Your task is to generate JSON prompts for Scene {start} to {end}.

{context}

ABSOLUTE RULES FOR SEAMLESS CONTINUITY
1. **NO CUTS**: Treat this as a continuous video stream. Scene N starts *visually* exactly where Scene N-1 ended.
2. **LOCK ENVIRONMENT**: Do NOT change the location, background, time of day, or weather unless the characters physically travel there in the scene.
3. **LOCK CHARACTERS**: Characters must have the EXACT SAME appearance (clothes, hair, face) as described in the previous scene.
4. **FLOW**: If Scene 1 ends with a character raising a hand, Scene 2 MUST start with that hand raised.
{camera_rule}
{dialogue_rule}
7. **FORMAT**: Frame every scene for a {aspect_ratio} video.

JSON OUTPUT STRUCTURE (Must be valid JSON):
{{
  "story_summary": "Update the running summary of the whole story",
  "scenes": [
    {{
      "scene": <number>,
      "time": {{ "start": 0, "end": 5 }},
      "continuity_reference": "Describe the EXACT visual state from the end of the previous scene to match here.",
      "environment": {{ "location": "SAME AS PREVIOUS", "weather": "SAME AS PREVIOUS", "ambient_sound": ["..."] }},
      "characters": [
        {{
          "name": "...",
          "appearance": "MUST MATCH PREVIOUS",
          "outfit": "MUST MATCH PREVIOUS",
          "emotion": "...",
          "actions": {{ "body_movement": "Action that flows naturally from previous scene..." }}
        }}
      ],
      "camera": {{ "shot_type": "...", "movement": "..." }},
      "visual_style": {{ "style": "{video_style}", "lighting": "..." }},
      "dialogue": {{ "line": "...", "language": "{dialogue_language}" }},
      "wishk_prompt": "A detailed descriptive prompt describing this specific frame moment."
    }}
  ]
}}

Return exactly {count} scene objects."""
)
