"""CLI for Kiacha.

Provides commands:
- kiacha ask: Answer a query through the full cognition + fusion pipeline
- kiacha route: Show how a query is routed across domains
- kiacha personalities: List or compare personalities
- kiacha event: Apply an interaction event and show the resulting state
- kiacha config: Show/create configuration

Each invocation builds a fresh engine; nothing persists between runs.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Optional

from .cognition import CognitionEngine, DomainClassifier
from .config import KiachaConfig, load_config, save_config
from .heartcore import EmotionEngine, EventKind, PersonalityCatalog
from .logging_utils import setup_logging
from .schemas import InteractionEvent, SupremeQuery


def _load(args: argparse.Namespace) -> KiachaConfig:
    config = load_config(args.config)
    setup_logging(config.logging, level=args.log_level)
    return config


def cmd_ask(args: argparse.Namespace) -> int:
    """Answer a query."""
    engine = CognitionEngine.from_config(_load(args))

    if args.personality and not engine.switch_personality(args.personality):
        suggestion = engine.personalities.suggest(args.personality)
        hint = f" Did you mean '{suggestion}'?" if suggestion else ""
        print(f"Unknown personality: {args.personality}.{hint}", file=sys.stderr)
        return 1

    turn = engine.respond(SupremeQuery(text=args.query, user_id=args.user))

    if args.json:
        print(json.dumps(turn.model_dump(mode="json"), indent=2))
    else:
        print(turn.fused.fused)
        print()
        print(f"Domain: {turn.response.domain} ({turn.response.confidence:.0%})")
        print(f"Personality: {turn.fused.personality_impact}")
        print(f"Tone: {turn.fused.tone}   Mood: {turn.mood}")
        if turn.fused.emotional_parts:
            print(f"Style: {' '.join(turn.fused.emotional_parts)}")
        for warning in turn.response.warnings:
            print(warning)

    return 0


def cmd_route(args: argparse.Namespace) -> int:
    """Show routing for a query."""
    classifier = DomainClassifier.from_config(_load(args))
    result = classifier.route_query(args.query)

    if args.json:
        print(json.dumps(result.model_dump(mode="json"), indent=2))
        return 0

    print(f"Primary: {result.primary_domain} "
          f"({result.confidence:.0%}, {classifier.get_confidence_level(result.confidence)})")
    print(f"Reasoning: {result.reasoning}")
    if result.is_multi_domain:
        print("Multi-domain query")
    for match in result.matches:
        print(f"  {match.domain:<12} score={match.score} confidence={match.confidence:.2f}")

    return 0


def cmd_personalities(args: argparse.Namespace) -> int:
    """List or compare personalities."""
    _load(args)
    catalog = PersonalityCatalog()

    if args.compare:
        id1, id2 = args.compare
        comparison = catalog.compare(id1, id2)
        if comparison is None:
            print(f"Unknown personality in: {id1}, {id2}", file=sys.stderr)
            return 1
        if args.json:
            print(json.dumps(comparison, indent=2))
            return 0
        print(f"{comparison['personality1']} vs {comparison['personality2']}")
        for line in comparison["similarities"]:
            print(f"  = {line}")
        for line in comparison["differences"]:
            print(f"  ≠ {line}")
        return 0

    if args.json:
        print(json.dumps(catalog.export(), indent=2))
        return 0

    for profile in catalog.list_all():
        print(f"{profile.emoji} {profile.id:<12} {profile.name}: {profile.description}")
        if profile.strength_areas:
            print(f"    strengths: {', '.join(profile.strength_areas)}")

    return 0


def cmd_event(args: argparse.Namespace) -> int:
    """Apply one interaction event."""
    engine = EmotionEngine.from_config(_load(args))

    data = {"topic": args.topic} if args.topic else {}
    engine.process_event(InteractionEvent(kind=args.kind, user_id=args.user, data=data))

    if args.json:
        print(json.dumps(engine.get_emotional_summary(), indent=2, default=str))
        return 0

    print(f"Mood: {engine.describe_mood()}")
    for name, value in engine.get_emotional_state().to_dict().items():
        print(f"  {name:<14} {value:.2f}")

    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Show or create configuration."""
    config = _load(args)

    if args.create:
        path = save_config(KiachaConfig(), args.config)
        print(f"Created default config: {path}")
        return 0

    print(json.dumps(config.to_dict(), indent=2))
    return 0


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="kiacha",
        description="Kiacha affect-driven response CLI",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to a config YAML")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Override the configured log level")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Ask command
    ask_parser = subparsers.add_parser("ask", help="Answer a query")
    ask_parser.add_argument("query", help="Query text")
    ask_parser.add_argument("--user", type=str, default=None, help="User id")
    ask_parser.add_argument("--personality", type=str, default=None,
                            help="Personality to answer with")
    ask_parser.add_argument("--json", action="store_true", help="Output as JSON")
    ask_parser.set_defaults(func=cmd_ask)

    # Route command
    route_parser = subparsers.add_parser("route", help="Show domain routing for a query")
    route_parser.add_argument("query", help="Query text")
    route_parser.add_argument("--json", action="store_true", help="Output as JSON")
    route_parser.set_defaults(func=cmd_route)

    # Personalities command
    personalities_parser = subparsers.add_parser("personalities", help="List or compare personalities")
    personalities_parser.add_argument("--compare", nargs=2, metavar=("A", "B"),
                                      help="Compare two personalities")
    personalities_parser.add_argument("--json", action="store_true", help="Output as JSON")
    personalities_parser.set_defaults(func=cmd_personalities)

    # Event command
    event_parser = subparsers.add_parser("event", help="Apply an interaction event")
    event_parser.add_argument("kind", choices=[k.value for k in EventKind], help="Event kind")
    event_parser.add_argument("--user", type=str, default=None, help="User id")
    event_parser.add_argument("--topic", type=str, default=None, help="Topic payload")
    event_parser.add_argument("--json", action="store_true", help="Output as JSON")
    event_parser.set_defaults(func=cmd_event)

    # Config command
    config_parser = subparsers.add_parser("config", help="Show/create configuration")
    config_parser.add_argument("--create", action="store_true",
                               help="Create default config file")
    config_parser.set_defaults(func=cmd_config)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
