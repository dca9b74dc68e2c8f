#!/usr/bin/env python3
"""Simulate a learner working through daily plans.

Builds a synthetic deck, then for each simulated day:
1. Generates the learning plan
2. Answers every new item and due review right or wrong at random
3. Records the reviews and prints the day's summary

Finishes with a progress report and, optionally, an iCalendar export of the
upcoming reviews.

Run: python scripts/simulate_reviews.py --days 14 --items 40
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
import random
from zoneinfo import ZoneInfo

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
import simple_parsing as sp

from drill.calendar_export import generate_icalendar
from drill.config import Config
from drill.errors import ConfigurationError
from drill.models import KnowledgeItem, PerformanceRecord, UserProgress
from drill.scheduling.engine import SchedulingEngine
from drill.scheduling.session import ReviewSession
from drill.scheduling.sm2 import rating_from_performance


@dataclass
class Args:
    """Simulate spaced repetition reviews over several days."""

    days: int = 14  # Number of days to simulate
    items: int = 40  # Size of the synthetic deck
    seed: int = 0  # Random seed for ratings and response times
    skill: float = 0.75  # Probability the simulated learner recalls an item
    ics: Path | None = None  # Write upcoming reviews to this .ics file
    env_file: str | None = None  # Optional .env file with DRILL_* settings


console = Console()


def build_deck(engine: SchedulingEngine, size: int, start: datetime, rng: random.Random) -> list[KnowledgeItem]:
    topics = ["algebra", "biology", "history", "chemistry"]
    return [
        engine.create_item(
            question=f"Question {n}",
            answer=f"Answer {n}",
            tags={rng.choice(topics)},
            difficulty=rng.randint(1, 5),
            item_id=f"item-{n}",
            created=start,
        )
        for n in range(1, size + 1)
    ]


def simulate_answer(when: datetime, skill: float, rng: random.Random) -> PerformanceRecord:
    """Answer one item right or wrong and rate it from the outcome and speed."""
    correct = rng.random() < skill
    response_time = round(rng.uniform(1.0, 9.0), 1)
    return PerformanceRecord(
        date=when,
        rating=rating_from_performance(correct, response_time),
        response_time=response_time,
        difficulty=rng.randint(1, 5),
    )


def render_progress(progress: UserProgress) -> Panel:
    metrics = progress.performance_metrics
    last = progress.last_review_date.strftime("%Y-%m-%d") if progress.last_review_date else "never"
    return Panel.fit(
        f"Items: {progress.total_items} ({progress.mastered_items} mastered)\n"
        f"Average ease factor: {progress.average_ease_factor:.2f}\n"
        f"Average interval: {progress.average_interval:.1f} days\n"
        f"Daily streak: {progress.daily_streak}\n"
        f"Last review: {last}\n"
        f"Upcoming reviews: {len(progress.upcoming_reviews)}\n"
        f"\nAverage rating: {metrics.average_rating:.2f}\n"
        f"Average response time: {metrics.average_response_time:.1f}s\n"
        f"Average difficulty: {metrics.average_difficulty:.2f}\n"
        f"Success rate: {metrics.success_rate:.0%}",
        title="Progress",
    )


def main() -> None:
    args = sp.parse(Args)
    console.rule("[bold blue]Review Simulation")

    config = Config.from_env(args.env_file)
    try:
        parameters = config.algorithm_parameters()
    except ConfigurationError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        return

    tz = ZoneInfo(config.timezone)
    start = datetime.now(tz).replace(hour=9, minute=0, second=0, microsecond=0) - timedelta(days=args.days)
    rng = random.Random(args.seed)

    # Clock advances with the simulation so streaks and upcoming reviews line up
    today = start
    engine = SchedulingEngine(parameters, clock=lambda: today)

    deck = {item.id: item for item in build_deck(engine, args.items, start, rng)}

    table = Table(title="Daily plans")
    table.add_column("Day")
    table.add_column("New", justify="right")
    table.add_column("Reviews", justify="right")
    table.add_column("Minutes", justify="right")
    table.add_column("Easy", justify="right")
    table.add_column("Hard", justify="right")
    table.add_column("Avg difficulty", justify="right")

    session = ReviewSession()
    for _ in range(args.days):
        plan = engine.generate_learning_plan(deck.values())
        session.reset()

        item_ids = [item.id for item in plan.new_items] + [review.item_id for review in plan.reviews]
        for item_id in item_ids:
            performance = simulate_answer(today, args.skill, rng)
            deck[item_id] = engine.record_review(deck[item_id], performance)
            session.record(performance)

        table.add_row(
            today.strftime("%Y-%m-%d"),
            str(len(plan.new_items)),
            str(len(plan.reviews)),
            str(plan.estimated_duration),
            str(session.easy_responses),
            str(session.hard_responses),
            f"{session.average_difficulty:.2f}",
        )
        today += timedelta(days=1)

    console.print(table)

    progress = engine.calculate_user_progress(deck.values(), now=today - timedelta(days=1))
    console.print(render_progress(progress))

    if args.ics:
        args.ics.write_text(generate_icalendar(progress.upcoming_reviews, config.app_url), encoding="utf-8")
        console.print(f"[green]Wrote {len(progress.upcoming_reviews)} reviews to {args.ics}[/green]")


if __name__ == "__main__":
    main()
