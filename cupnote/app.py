import argparse
import json
from pathlib import Path
from typing import Any, Dict

from .env import load_env

from . import __version__
from .config import ConfigError, ScoringConfig
from .logger import get_logger, reset_logger
from .match_calculator import calculate_detailed_match
from .match_score import (
    calculate_match_score,
    describe_level,
    generate_match_score_text,
)
from .matching import find_best_matches, format_matches
from .note_matching import calculate_note_match_score
from .schema import validate_sensory_selections, validate_tasting_data
from .storage import list_match_scores, save_match_score

def _load_json(path_arg: str) -> Dict[str, Any]:
    input_path = Path(path_arg)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise SystemExit(f"Invalid JSON in {input_path}: {e}")


def _split(value: str) -> list:
    return [v.strip() for v in value.split(",") if v.strip()] if value else []


def _load_config() -> ScoringConfig:
    try:
        return ScoringConfig.from_env()
    except ConfigError as e:
        raise SystemExit(f"Invalid configuration: {e}")


def score_tasting(tasting: dict, config: ScoringConfig, store_path: Path = None) -> dict:
    logger = get_logger()
    errors = validate_tasting_data(tasting)
    if errors:
        return {"record_id": None, "status": "validation_error", "errors": errors}

    result = calculate_match_score(tasting, config)
    if result is None:
        logger.record_unscoreable()
        return {"record_id": tasting.get("id"), "status": "unscoreable", "match_score": None}

    logger.record_score(result.level.value)
    outcome = {"record_id": tasting.get("id"), "status": "scored", "match_score": result}

    if store_path is not None:
        if not tasting.get("id"):
            return {**outcome, "status": "scored", "errors": ["Record has no 'id'; not stored"]}
        outcome["status"] = save_match_score(store_path, tasting["id"], result)
        logger.info("Stored match score", record_id=tasting["id"], status=outcome["status"])

    return outcome


def cmd_score(args: argparse.Namespace) -> None:
    tasting = _load_json(args.input)
    config = _load_config()
    outcome = score_tasting(tasting, config, Path(args.store) if args.store else None)

    if outcome["status"] == "validation_error":
        print("Invalid:")
        for e in outcome["errors"]:
            print(f" - {e}")
        raise SystemExit(2)

    result = outcome["match_score"]
    if args.json:
        print(json.dumps(result.to_dict() if result else None, ensure_ascii=False, indent=2))
    else:
        if result is not None:
            print(f"Level: {describe_level(result.level)}")
        print(generate_match_score_text(result, config))
    for e in outcome.get("errors", []):
        print(f"[warn] {e}")
    if args.store and outcome["status"] not in ("scored", "unscoreable"):
        print(f"Status: {outcome['status']}")


def cmd_compare(args: argparse.Namespace) -> None:
    config = _load_config()
    user = _load_json(args.user)
    roaster = _load_json(args.roaster)

    errors = validate_sensory_selections(user, config.sensory_scale) + \
        validate_sensory_selections(roaster, config.sensory_scale)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)

    detail = calculate_detailed_match(user, roaster, config)
    print(f"Total: {detail.total_score}")
    print(f"  Flavor: {detail.flavor_score} (matched: {', '.join(detail.flavor_matches) or '-'})")
    print(f"  Sensory: {detail.sensory_score}")
    for attr, diff in detail.sensory_differences.items():
        print(f"    {attr}: {diff:+g}")


def cmd_match(args: argparse.Namespace) -> None:
    config = _load_config()
    threshold = args.threshold if args.threshold is not None else config.match_threshold
    if not 0.0 <= threshold <= 1.0:
        raise SystemExit("--threshold must be within [0, 1]")

    results = find_best_matches(_split(args.keywords), _split(args.selections), args.note or "", threshold)
    get_logger().record_matches(len(results))
    if args.json:
        print(json.dumps([r.to_dict() for r in results], ensure_ascii=False, indent=2))
        return
    print(format_matches(results))


def cmd_note_match(args: argparse.Namespace) -> None:
    config = _load_config()
    tasting = _load_json(args.input)
    errors = validate_tasting_data(tasting)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)

    expressions = [
        v for values in (tasting.get("sensory_expressions") or {}).values() for v in values
    ]
    result = calculate_note_match_score(
        tasting["selected_flavors"], expressions, tasting.get("roaster_notes") or "", config
    )
    print(result.message)
    print(f"Score: {result.final_score} (flavor {result.flavor_score}, sensory {result.sensory_score})")
    print(f"Confidence: {round(result.confidence * 100)}%")
    if result.matched_flavors:
        print(f"Matched flavors: {', '.join(result.matched_flavors)}")
    if result.matched_sensory:
        print(f"Matched sensory: {', '.join(result.matched_sensory)}")


def cmd_validate(args: argparse.Namespace) -> None:
    tasting = _load_json(args.input)
    errors = validate_tasting_data(tasting)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_list(args: argparse.Namespace) -> None:
    store_path = Path(args.store)
    if not store_path.exists():
        print(f"Store not found: {store_path}")
        return
    scores = list_match_scores(store_path)
    if not scores:
        print("No match scores in store.")
        return
    print(f"Found {len(scores)} match scores in {store_path}:\n")
    for record_id, result in scores:
        print(f"ID: {record_id}")
        print(f"  Level: {describe_level(result.level)}")
        print(f"  Score: {result.score}")
        print(f"  Flavor: {result.flavor_score}")
        print(f"  Sensory: {result.sensory_score if result.sensory_score is not None else '-'}")
        print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cupnote", description="CupNote: roaster note Match Score CLI")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    sc = subparsers.add_parser("score", help="Compute the Level 1 / Level 2 Match Score of a tasting JSON")
    sc.add_argument("--input", required=True, help="Path to tasting record JSON")
    sc.add_argument("--store", help="Optional SQLite file to persist the score (e.g. data/cupnote.db)")
    sc.add_argument("--json", action="store_true", help="Print the score as JSON")
    sc.set_defaults(func=cmd_score)

    cmp_ = subparsers.add_parser("compare", help="Compare numeric sensory ratings and flavor lists")
    cmp_.add_argument("--user", required=True, help="JSON with flavors, acidity, sweetness, body, aftertaste")
    cmp_.add_argument("--roaster", required=True, help="JSON with the roaster's values, same shape")
    cmp_.set_defaults(func=cmd_compare)

    mt = subparsers.add_parser("match", help="Fuzzy-match keywords against user selections")
    mt.add_argument("--keywords", required=True, help="Comma-separated keywords (e.g. roaster note terms)")
    mt.add_argument("--selections", required=True, help="Comma-separated user selections")
    mt.add_argument("--note", help="Roaster note used for the context bonus")
    mt.add_argument("--threshold", type=float, help="Minimum similarity (default: CUPNOTE_MATCH_THRESHOLD or 0.6)")
    mt.add_argument("--json", action="store_true", help="Print matches as JSON")
    mt.set_defaults(func=cmd_match)

    nm = subparsers.add_parser("note-match", help="Score a tasting JSON against roaster-note flavor/sensory profiles")
    nm.add_argument("--input", required=True, help="Path to tasting record JSON")
    nm.set_defaults(func=cmd_note_match)

    val = subparsers.add_parser("validate", help="Validate a tasting record JSON")
    val.add_argument("--input", required=True, help="Path to tasting record JSON")
    val.set_defaults(func=cmd_validate)

    lst = subparsers.add_parser("list", help="List stored match scores")
    lst.add_argument("--store", default="data/cupnote.db", help="Path to SQLite store (default: data/cupnote.db)")
    lst.set_defaults(func=cmd_list)

    return parser


def main(argv=None):
    # Load .env if present (CUPNOTE_* scoring settings, log level)
    load_env()
    reset_logger()
    logger = get_logger()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        logger.log_metrics_summary()
        return

    parser.print_help()


if __name__ == "__main__":
    main()
