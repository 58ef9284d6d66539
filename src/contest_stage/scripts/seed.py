"""Seed the configured database with contest categories and phases."""
from __future__ import annotations

import argparse
import sys

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from contest_stage.db.session import SessionLocal, create_tables
from contest_stage.models import Category, Phase
from contest_stage.models.catalog import PHASE_STATUS_ACTIVE, PHASE_STATUS_UPCOMING

DEFAULT_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("Music & Dance", "Showcase your musical and dance talents"),
    ("Comedy & Performing Arts", "Make us laugh and entertain"),
    ("Fashion & Lifestyle", "Share your style and lifestyle content"),
    ("Education & Learning", "Educate and inspire through your content"),
    ("Gospel Choirs", "Share gospel music and choir performances"),
)

DEFAULT_PHASES: tuple[tuple[str, str], ...] = (
    ("TOP 500", "Initial submissions"),
    ("TOP 100", "Strongest entries advance"),
    ("TOP 50", "Top performers advance"),
    ("TOP 10", "Final selections"),
    ("TOP 3", "Category winners"),
    ("GRAND FINALE", "Ultimate winner"),
)


def seed_catalog(db: Session) -> tuple[int, int]:
    """Insert any missing default categories and phases.

    The first phase starts active when no phase exists yet. Existing rows are
    left untouched, so running the seed twice is harmless.

    Returns:
        Number of categories and phases created.
    """
    existing_categories = set(db.scalars(select(Category.name)))
    created_categories = 0
    for name, description in DEFAULT_CATEGORIES:
        if name in existing_categories:
            continue
        db.add(Category(name=name, description=description))
        created_categories += 1

    existing_phases = set(db.scalars(select(Phase.name)))
    first_run = not existing_phases
    created_phases = 0
    for number, (name, description) in enumerate(DEFAULT_PHASES, start=1):
        if name in existing_phases:
            continue
        status = PHASE_STATUS_ACTIVE if first_run and number == 1 else PHASE_STATUS_UPCOMING
        db.add(Phase(name=name, description=description, number=number, status=status))
        created_phases += 1

    db.commit()
    return created_categories, created_phases


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed contest categories and phases")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding (development databases only).",
    )
    args = parser.parse_args()

    try:
        if args.create_tables:
            create_tables()
        with SessionLocal() as db:
            categories, phases = seed_catalog(db)
    except SQLAlchemyError as exc:
        print(f"[seed] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    print(f"[seed] created {categories} categories and {phases} phases")


if __name__ == "__main__":
    main()
