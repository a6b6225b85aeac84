"""Command line front end: generate, extend and check-key."""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .generators.config import GEMINI_API_KEY
from .generators.exceptions import GenerationError
from .generators.prompts import DEFAULT_ASPECT_RATIO, DEFAULT_VIDEO_STYLE, DialogueLanguage, PromptType
from .generators.schemas import GenerationOptions, Script
from .generators.utils.logging import log
from .services import check_api_key, extend_script, generate_script

OUTPUT_FORMATS = ("json", "veo", "freeform")


def _add_option_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--style", default=DEFAULT_VIDEO_STYLE, help="Visual style (default: Cinematic)")
    parser.add_argument(
        "--dialogue",
        default=DialogueLanguage.NONE.value,
        choices=[language.value for language in DialogueLanguage],
        help="Dialogue language (default: None)",
    )
    parser.add_argument(
        "--prompt-type",
        default=PromptType.DEFAULT.value,
        choices=[prompt_type.value for prompt_type in PromptType],
        help="'camera_lock' keeps one static camera for the whole video",
    )
    parser.add_argument("--aspect-ratio", default=DEFAULT_ASPECT_RATIO)
    parser.add_argument("--format", dest="output_format", default="json", choices=OUTPUT_FORMATS)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seamless",
        description="Generate continuity-locked scene prompts for text-to-video models.",
    )
    parser.add_argument("--api-key", default=GEMINI_API_KEY, help="Google AI Studio key (default: $GEMINI_API_KEY)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show prompts and raw responses")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate a new script from an idea")
    generate.add_argument("idea")
    generate.add_argument("--count", default=None, help="Number of scenes (default: 5)")
    _add_option_arguments(generate)

    extend = subparsers.add_parser("extend", help="Continue a script printed by 'generate --format json'")
    extend.add_argument("script", type=Path, help="Path to the script JSON")
    extend.add_argument("extension_idea")
    extend.add_argument("--idea", default=None, help="Original idea (default: the script's story summary)")
    extend.add_argument("--count", required=True, help="Number of scenes to add")
    _add_option_arguments(extend)

    subparsers.add_parser("check-key", help="Exit 0 when the API key is usable")
    return parser


def _options_from_args(args: argparse.Namespace, idea: str, count) -> GenerationOptions:
    return GenerationOptions(
        idea=idea,
        prompt_count=count,
        video_style=args.style,
        dialogue_language=args.dialogue,
        prompt_type=args.prompt_type,
        aspect_ratio=args.aspect_ratio,
    )


def render_script(script: Script, output_format: str) -> str:
    if output_format == "veo":
        return script.structured_prompts_text()
    if output_format == "freeform":
        return script.freeform_prompts_text()
    return script.model_dump_json(indent=2)


def _print_progress(message: str) -> None:
    print(message, file=sys.stderr)


def _generate(args: argparse.Namespace) -> Script:
    options = _options_from_args(args, args.idea, args.count)
    return generate_script(options, args.api_key, on_progress=_print_progress)


def _extend(args: argparse.Namespace) -> Script:
    script = Script.model_validate_json(args.script.read_text(encoding="utf-8"))
    if script.last_scene is None:
        raise GenerationError(f"{args.script} has no scenes to extend")

    options = _options_from_args(args, args.idea or script.story_summary or args.extension_idea, None)
    new_scenes = extend_script(
        script.last_scene,
        args.extension_idea,
        args.count,
        options,
        args.api_key,
        on_progress=_print_progress,
    )
    return Script(story_summary=script.story_summary, scenes=[*script.scenes, *new_scenes])


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    if args.command == "check-key":
        return 0 if check_api_key(args.api_key) else 1

    try:
        script = _generate(args) if args.command == "generate" else _extend(args)
    except (GenerationError, ValidationError, OSError) as e:
        log(f"Failed: {e}", "ERROR")
        return 1

    print(render_script(script, args.output_format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
