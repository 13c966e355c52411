#!/usr/bin/env python3
"""
Seed script for the user directory.

Creates the users table if needed and inserts sample records, then
prints the first page and a sample search the way the API would see them.
"""

import argparse
import itertools
import random

from user_directory.config import get_settings
from user_directory.database import create_database_engine
from user_directory.entities import PageWindow
from user_directory.repositories import FileResponseCache, SqlUserRepository
from user_directory.services import QueryService

FIRST_NAMES = [
    "Ada", "Alan", "Barbara", "Claude", "Dennis", "Edsger", "Frances", "Grace",
    "Guido", "Hedy", "Ken", "Linus", "Margaret", "Niklaus", "Radia", "Tim",
]
LAST_NAMES = [
    "Allen", "Hamilton", "Hopper", "Kernighan", "Lamarr", "Liskov", "Lovelace",
    "Perlman", "Ritchie", "Rossum", "Shannon", "Thompson", "Torvalds", "Turing",
]
REVIEWS = [
    "Great to work with.",
    "Always ships on time.",
    "Writes clear documentation.",
    None,
]


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def build_users(count: int, seed: int) -> list[dict]:
    """Build ``count`` sample user rows."""
    rng = random.Random(seed)
    names = list(itertools.product(FIRST_NAMES, LAST_NAMES))
    rng.shuffle(names)

    users = []
    for index, (fname, lname) in enumerate(itertools.islice(itertools.cycle(names), count), start=1):
        users.append(
            {
                "fname": fname,
                "lname": lname,
                "email": f"{fname}.{lname}.{index}@example.com".lower(),
                "review": rng.choice(REVIEWS),
            }
        )
    return users


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the user directory database")
    parser.add_argument("--count", type=int, default=100, help="Number of users to insert")
    parser.add_argument("--seed", type=int, default=7, help="Random seed for sample data")
    parser.add_argument("--database-url", default=None, help="Override DATABASE_URL")
    args = parser.parse_args()

    settings = get_settings()
    engine = create_database_engine(args.database_url or settings.database_url)
    repository = SqlUserRepository.create(engine=engine)
    cache = FileResponseCache.create(cache_dir=settings.cache_dir, ttl=settings.cache_ttl)

    try:
        print_section("Seeding users")
        repository.initialize()
        inserted = repository.insert_users(build_users(args.count, args.seed))
        cache.invalidate_all()
        print(f"  Inserted {inserted} users, {repository.count_active()} active in total")

        queries = QueryService.create(store=repository, cache=cache)

        print_section("First page")
        page = queries.list_users(PageWindow(offset=0, limit=5)).body
        for user in page["users"]:
            print(f"  #{user['id']:<5} {user['fname']} {user['lname']} <{user['email']}>")
        print(f"  total={page['total']} hasMore={page['hasMore']}")

        print_section("Search: 'ada'")
        found = queries.search_users("ada").body
        for user in found["users"]:
            print(f"  #{user['id']:<5} {user['fname']} {user['lname']}")
        print(f"  showing {len(found['users'])} of {found['matchTotal']} matches")
    finally:
        cache.close()
        engine.dispose()


if __name__ == "__main__":
    main()
