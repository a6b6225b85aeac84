"""Continuity-locked scene prompt generation for text-to-video models."""

from .generators.exceptions import GenerationError, GenerationExhaustedError, InvalidInputError
from .generators.prompts import DialogueLanguage, PromptType
from .generators.schemas import GenerationOptions, Scene, Script
from .services import check_api_key, extend_script, generate_script

__all__ = [
    "generate_script",
    "extend_script",
    "check_api_key",
    "GenerationOptions",
    "Scene",
    "Script",
    "DialogueLanguage",
    "PromptType",
    "GenerationError",
    "GenerationExhaustedError",
    "InvalidInputError",
]
