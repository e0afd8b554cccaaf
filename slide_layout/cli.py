"""Command line entry point for the slide layout decision engine."""

from __future__ import annotations

import argparse
import json
import logging
import traceback
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .config import EngineSettings, build_rule_table, load_settings
from .errors import RuleConfigurationError
from .layout_engine import LayoutEngine
from .layout_models import SlideContent
from .pptx_reader import load_deck_contents
from .signal_extraction import extract_signals
from .visualization import analyze_content, content_suggestions, detect_visualization, visualization_priority


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slide-layout",
        description="Recommend slide layouts and data visualizations for draft slide content",
    )
    parser.add_argument("--rules", default=None, help="Optional JSON file overriding rule weights or disabling rules")
    parser.add_argument("--log-level", default=None, help="Logging level (default: SLIDE_LAYOUT_LOG_LEVEL or WARNING)")
    parser.add_argument("--env-file", default=None, help="Optional .env file to load settings from")
    parser.add_argument("--debug", action="store_true", help="Show full traceback for unexpected errors")

    subparsers = parser.add_subparsers(dest="command", required=True)
    recommend = subparsers.add_parser("recommend", help="Recommend a layout for each slide in a JSON file")
    recommend.add_argument("content", help="JSON file holding one slide object or a list of them")
    visualize = subparsers.add_parser("visualize", help="Recommend chart, table or text for each slide")
    visualize.add_argument("content", help="JSON file holding one slide object or a list of them")
    deck = subparsers.add_parser("deck", help="Read a draft PPTX deck and recommend per slide")
    deck.add_argument("deck", help="Path to the .pptx file")
    subparsers.add_parser("rules", help="List the active rule table")
    return parser


def _load_content_file(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Content file not found at {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def _recommendation_payload(engine: LayoutEngine, content: SlideContent) -> Dict[str, Any]:
    signals = extract_signals(content)
    payload = engine.recommend(signals).to_dict()
    payload["signals"] = signals.to_dict()
    return payload


def _visualization_payload(content: SlideContent) -> Dict[str, Any]:
    analysis = analyze_content(content)
    return {
        "visualization": detect_visualization(content).to_dict(),
        "content_type": analysis.content_type,
        "data_complexity": analysis.data_complexity,
        "priority": visualization_priority(analysis),
        "suggestions": content_suggestions(analysis),
    }


def _map_slides(data: Any, build) -> Any:
    if isinstance(data, list):
        return [build(SlideContent.from_dict(item)) for item in data]
    return build(SlideContent.from_dict(data))


def _run(args: argparse.Namespace, settings: EngineSettings) -> Any:
    rule_table = build_rule_table(settings)

    if args.command == "rules":
        return rule_table.to_list()

    if args.command == "deck":
        engine = LayoutEngine(rule_table)
        slides: List[Dict[str, Any]] = []
        for index, content in enumerate(load_deck_contents(Path(args.deck)), start=1):
            slides.append(
                {
                    "slide": index,
                    "title": content.title,
                    "layout": _recommendation_payload(engine, content),
                    "visualization": detect_visualization(content).to_dict(),
                }
            )
        return slides

    data = _load_content_file(Path(args.content))
    if args.command == "recommend":
        engine = LayoutEngine(rule_table)
        return _map_slides(data, lambda content: _recommendation_payload(engine, content))
    return _map_slides(data, _visualization_payload)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = load_settings(Path(args.env_file) if args.env_file else None)
    settings = EngineSettings(
        rules_file=Path(args.rules) if args.rules else settings.rules_file,
        log_level=(args.log_level or settings.log_level).upper(),
    )
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        result = _run(args, settings)
    except RuleConfigurationError as e:
        raise SystemExit(str(e)) from e
    except FileNotFoundError as e:
        raise SystemExit(str(e)) from e
    except json.JSONDecodeError as e:
        raise SystemExit(f"Invalid JSON input: {e.msg} (line {e.lineno})") from e
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        raise SystemExit(f"Layout recommendation failed: {e}") from e

    print(json.dumps(result, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
