#!/usr/bin/env python3
"""
Lead Scoring Script

Seeds the in-memory customer store, scores every customer and prints the
lead board with summary statistics. Optionally applies a new weight
configuration first (batch scoring).

Usage:
    python score_leads.py
    python score_leads.py --temperature warm --search tech
    python score_leads.py --weights 30,30,20,10,10 --restamp
    python score_leads.py --mode fixed --band high
    python score_leads.py --status lead
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import load_settings
from domain.customer import CustomerStatus
from domain.temperature import LeadTemperature
from domain.time import utc_now
from domain.weights import InvalidWeightConfiguration, parse_weight_list
from repositories.customer_repository import CustomerRepository
from repositories.seed_data import seed_repository
from services.lead_board_service import (
    LeadBoardFilters,
    ScoreBand,
    ScoredCustomer,
    build_lead_board,
    parse_status_filter,
    parse_temperature_filter,
    score_statistics,
)
from services.rescoring_service import apply_batch_scoring
from services.scoring_service import ScoringMode
from services.weight_service import ActiveWeightConfiguration

TEMPERATURE_ICONS = {
    LeadTemperature.HOT: "HOT ",
    LeadTemperature.WARM: "WARM",
    LeadTemperature.LUKEWARM: "LUKE",
    LeadTemperature.COLD: "COLD",
}


def parse_weight_argument(raw: str) -> List[int]:
    """Parse '25,25,20,15,15' into weights in factor order (validation happens later)."""

    try:
        return parse_weight_list(raw)
    except InvalidWeightConfiguration as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def print_board(rows: List[ScoredCustomer]) -> None:
    print(f"{'Score':>5}  {'Temp':<4}  {'Name':<20} {'Company':<22} {'Status':<9} Tasks")
    print("-" * 72)
    for row in rows:
        customer = row.customer
        print(
            f"{row.score:>5}  {TEMPERATURE_ICONS[row.temperature]:<4}  "
            f"{customer.name:<20} {customer.company:<22} {customer.status.value:<9} "
            f"{len(customer.tasks)}"
        )


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Score sample customers and print the lead board"
    )

    parser.add_argument(
        "--weights",
        "-w",
        type=parse_weight_argument,
        help="Batch-score with new weights: company_size,budget,timeline,industry,engagement (must sum to 100)"
    )

    parser.add_argument(
        "--restamp",
        action="store_true",
        help="With --weights, refresh every customer's last contact to now"
    )

    parser.add_argument(
        "--mode",
        "-m",
        choices=[mode.value for mode in ScoringMode],
        default=ScoringMode.WEIGHTED.value,
        help="Scoring variant (default: weighted)"
    )

    parser.add_argument(
        "--search",
        "-s",
        default="",
        help="Filter by name, company or email"
    )

    parser.add_argument(
        "--temperature",
        "-t",
        choices=["all"] + [temperature.value for temperature in LeadTemperature],
        default="all",
        help="Filter by lead temperature"
    )

    parser.add_argument(
        "--status",
        choices=["all"] + [status.value for status in CustomerStatus],
        default="all",
        help="Filter by customer status"
    )

    parser.add_argument(
        "--band",
        "-b",
        choices=[band.value for band in ScoreBand],
        default=ScoreBand.ALL.value,
        help="Filter by score band (high >= 80, medium 40-79, low < 40)"
    )

    args = parser.parse_args()

    try:
        settings = load_settings()
        logging.basicConfig(
            level=settings.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        now = utc_now()
        repository = CustomerRepository()
        if settings.seed_on_startup:
            seed_repository(repository, now)

        active = ActiveWeightConfiguration(settings.default_weights)

        if args.weights is not None:
            batch = apply_batch_scoring(
                repository.list(),
                args.weights,
                active,
                restamp=args.restamp,
                now=now,
            )
            if not batch.accepted:
                print(f"ERROR: weights rejected: {batch.validation.reason}", file=sys.stderr)
                return 2
            for note in batch.notifications:
                print(note.message)
            print()

        mode = ScoringMode(args.mode)
        filters = LeadBoardFilters(
            search_term=args.search,
            score_band=ScoreBand(args.band),
            temperature=parse_temperature_filter(args.temperature),
            status=parse_status_filter(args.status),
        )

        rows = build_lead_board(
            repository.list(),
            active.current,
            filters,
            as_of=now,
            mode=mode,
            include_deal_bonus=settings.weighted_deal_bonus,
        )
        stats = score_statistics(
            repository.list(),
            active.current,
            as_of=now,
            mode=mode,
            include_deal_bonus=settings.weighted_deal_bonus,
        )

        print_board(rows)

        print()
        print("=" * 60)
        print("SCORING SUMMARY")
        print("=" * 60)
        print(f"Weights:       {active.current.as_dict()}")
        print(f"Scoring mode:  {mode.value}")
        print(f"Total leads:   {stats.total}")
        print(f"Average score: {stats.average_score}")
        for temperature in LeadTemperature:
            print(f"  {temperature.value:<9} {stats.count(temperature)}")
        print("=" * 60)

        return 0

    except KeyboardInterrupt:
        print("\n\nScoring interrupted by user")
        return 130

    except Exception as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
