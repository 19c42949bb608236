#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.db.session import AsyncSessionLocal
from app.services.friendships import delete_all_friendships_of_user

logger = logging.getLogger("purge_user_friendships")


@dataclass
class PurgeStats:
    users: int = 0
    missing_users: int = 0
    removed: int = 0


def _normalize_usernames(raw: list[str]) -> list[str]:
    out: list[str] = []
    seen: set[str] = set()
    for value in raw:
        for part in value.split(","):
            cleaned = part.strip()
            if not cleaned or cleaned in seen:
                continue
            seen.add(cleaned)
            out.append(cleaned)
    return out


async def run_purge(db: AsyncSession, *, usernames: list[str], apply: bool) -> PurgeStats:
    stats = PurgeStats()
    for username in usernames:
        try:
            removed = await delete_all_friendships_of_user(db, username)
        except ValueError as e:
            if str(e) != "user_not_found":
                raise
            stats.missing_users += 1
            logger.warning("skip unknown username=%r", username)
            continue

        stats.users += 1
        stats.removed += removed
        logger.info("username=%r friendships=%s", username, removed)

    if apply:
        try:
            await db.commit()
        except Exception:
            await db.rollback()
            raise
    else:
        await db.rollback()

    return stats


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Remove every friendship of the given users (account deletion cascade)."
    )
    parser.add_argument(
        "usernames",
        nargs="+",
        help="Usernames to purge. Comma-separated values are accepted too.",
    )
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Persist deletions. Without this flag, the script runs in dry-run mode.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log per-user actions.")
    return parser.parse_args(argv)


def _print_summary(*, apply: bool, stats: PurgeStats) -> None:
    mode = "apply" if apply else "dry-run"
    print("Friendship purge complete")
    print(f"mode: {mode}")
    print(f"users: {stats.users}")
    print(f"missing_users: {stats.missing_users}")
    print(f"removed: {stats.removed}")


async def _main_async(args: argparse.Namespace) -> PurgeStats:
    async with AsyncSessionLocal() as db:
        return await run_purge(
            db,
            usernames=_normalize_usernames(args.usernames),
            apply=args.apply,
        )


def main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    stats = asyncio.run(_main_async(args))
    _print_summary(apply=args.apply, stats=stats)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
