"""Command-line entry point.

    python -m trip_planner --destination Kyoto --start 2025-04-01 \\
        --end 2025-04-03 --budget 4500 --companions 2 \\
        --preferences "food and temples"

Prints the response as JSON. ``--offline`` skips the language model and
returns the canned plan.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from .config import LLMConfig, get_config
from .container import Container
from .domain.errors import ConfigurationError, InvalidTripRequestError, PipelineError
from .domain.models import TripRequest
from .logging_setup import configure_logging
from .services import TripPlannerService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trip_planner",
        description="Plan a multi-day trip with a language model.",
    )
    parser.add_argument(
        "--request",
        type=Path,
        help="JSON file with destination, startDate, endDate, budget, "
        "companions and preferences (overrides the field options)",
    )
    parser.add_argument("--destination")
    parser.add_argument("--start", dest="start_date", help="YYYY-MM-DD")
    parser.add_argument("--end", dest="end_date", help="YYYY-MM-DD")
    parser.add_argument("--budget", type=int)
    parser.add_argument("--companions", type=int, default=1)
    parser.add_argument("--preferences")
    parser.add_argument(
        "--offline",
        action="store_true",
        help="do not call a language model; return the canned plan",
    )
    parser.add_argument("--indent", type=int, default=2)
    return parser


def _load_payload(args: argparse.Namespace) -> dict[str, Any]:
    if args.request is not None:
        return json.loads(args.request.read_text(encoding="utf-8"))
    return {
        "destination": args.destination,
        "startDate": args.start_date,
        "endDate": args.end_date,
        "budget": args.budget,
        "companions": args.companions,
        "preferences": args.preferences,
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = get_config()
    if args.offline:
        config = config.model_copy(update={"llm": LLMConfig(provider="offline")})
    configure_logging(config.observability)

    container = Container.create_default(config)
    try:
        request = TripRequest.from_payload(_load_payload(args))
        planner: TripPlannerService = container.resolve(TripPlannerService)
        response = planner.plan_trip(request)
    except (InvalidTripRequestError, ConfigurationError, PipelineError) as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    finally:
        container.close()

    print(json.dumps(response.to_dict(), indent=args.indent, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
