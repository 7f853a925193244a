#!/usr/bin/env python3
"""
Seed the movies table with a fixed catalog.

Features:
- Deterministic: same movies, same order, every run
- Idempotent: safe to run multiple times (clears before seeding)
- Goes through the CreateMovie use case, so every movie is validated

Usage:
    DATABASE_URL=postgresql+psycopg://... python scripts/seed_movies.py
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import delete

from reel_catalog.adapters.sql_movie_repository import SqlMovieRepository
from reel_catalog.infra.db.models.movie import MovieRow
from reel_catalog.infra.db.session import get_session
from reel_catalog.use_cases.create_movie import CreateMovie, CreateMovieRequest


# ==============================================================================
# Catalog
# ==============================================================================

# (title, year, runtime in minutes, genres)
MOVIES: list[tuple[str, int, int, list[str]]] = [
    ("Casablanca", 1942, 102, ["drama", "romance", "war"]),
    ("Seven Samurai", 1954, 207, ["action", "drama"]),
    ("Vertigo", 1958, 128, ["mystery", "thriller"]),
    ("2001: A Space Odyssey", 1968, 149, ["sci-fi", "adventure"]),
    ("The Godfather", 1972, 175, ["crime", "drama"]),
    ("Alien", 1979, 117, ["horror", "sci-fi"]),
    ("Blade Runner", 1982, 117, ["sci-fi", "thriller"]),
    ("Back to the Future", 1985, 116, ["adventure", "comedy", "sci-fi"]),
    ("Groundhog Day", 1993, 101, ["comedy", "fantasy", "romance"]),
    ("Pulp Fiction", 1994, 154, ["crime", "drama"]),
    ("Toy Story", 1995, 81, ["animation", "adventure", "comedy"]),
    ("The Matrix", 1999, 136, ["action", "sci-fi"]),
    ("Spirited Away", 2001, 125, ["animation", "fantasy"]),
    ("The Dark Knight", 2008, 152, ["action", "crime", "drama"]),
    ("Inception", 2010, 148, ["action", "sci-fi", "thriller"]),
    ("Mad Max: Fury Road", 2015, 120, ["action", "adventure", "sci-fi"]),
    ("Deadpool", 2016, 108, ["action", "comedy"]),
    ("Get Out", 2017, 104, ["horror", "mystery", "thriller"]),
    ("Parasite", 2019, 132, ["comedy", "drama", "thriller"]),
    ("Everything Everywhere All at Once", 2022, 139, ["action", "comedy", "sci-fi"]),
]


# ==============================================================================
# Seeding
# ==============================================================================


def seed_movies() -> None:
    print(f"🌱 Seeding database with {len(MOVIES)} movies...")

    with get_session() as session:
        # Step 1: Clear existing data (idempotent)
        print("🗑️  Clearing existing movies...")
        deleted_count = session.execute(delete(MovieRow)).rowcount
        print(f"   Deleted {deleted_count} existing movies")

        # Step 2: Insert through the use case so invariants are enforced
        create_movie = CreateMovie(movie_repository=SqlMovieRepository(session=session))
        created = [
            create_movie.execute(
                CreateMovieRequest(title=title, year=year, runtime=runtime, genres=genres)
            ).movie
            for title, year, runtime, genres in MOVIES
        ]

        print(f"✅ Successfully seeded {len(created)} movies!")

        print("\n📊 Sample movies:")
        for i, movie in enumerate(created[:5], 1):
            print(f"   {i}. {movie.title} ({movie.year}) - {movie.runtime} mins [{', '.join(movie.genres or [])}]")

        if len(created) > 5:
            print(f"   ... and {len(created) - 5} more")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_movies()
    except Exception as e:
        print(f"❌ Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
