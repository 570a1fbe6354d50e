"""
Seed script to populate the store with reference data for development.
Run: python scripts/seed_data.py [--codes 5 --plan pro --expires-in-days 30]

Writes plans, categories and the class schedule, and optionally issues
contract codes. Uses Firestore when Firebase credentials are configured,
otherwise the LocalStore data directory.
"""

import argparse
import asyncio
import os
import secrets
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.config import get_settings  # noqa: E402
from app.models.catalog import (  # noqa: E402
    DEFAULT_CATEGORIES,
    DEFAULT_PLANS,
    DEFAULT_SCHEDULE,
)
from app.models.contract_code import ContractCodeStatus  # noqa: E402


def generate_code(prefix: str = "GYM") -> str:
    return f"{prefix}-{secrets.token_hex(3).upper()}"


def open_store():
    settings = get_settings()
    if settings.use_local_services:
        from app.services.local_store import LocalStore

        print(f"Firebase credentials not found, seeding {settings.local_data_dir}")
        return LocalStore(Path(settings.local_data_dir))

    from app.services.firebase.auth_service import get_firestore_client, initialize_firebase

    return get_firestore_client(initialize_firebase(settings))


async def seed(codes: int, plan_id: str, expires_in_days: int) -> None:
    db = open_store()

    print(f"Seeding {len(DEFAULT_PLANS)} plans...")
    for plan in DEFAULT_PLANS:
        db.collection("plans").document(plan.id).set(plan.model_dump(by_alias=True, exclude={"id"}))
        print(f"  + {plan.name} (${plan.price:g}/{plan.billing_period})")

    print(f"\nSeeding {len(DEFAULT_CATEGORIES)} categories...")
    for category in DEFAULT_CATEGORIES:
        db.collection("categories").document(category.id).set(category.model_dump(exclude={"id"}))
        print(f"  + {category.name}")

    print(f"\nSeeding {len(DEFAULT_SCHEDULE)} sessions...")
    for session in DEFAULT_SCHEDULE:
        db.collection("schedule").document(session.id).set(
            session.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)
        )
        print(f"  + {session.day_of_week} {session.start_time} {session.title}")

    if codes:
        expires_at = (
            datetime.now(timezone.utc) + timedelta(days=expires_in_days) if expires_in_days else None
        )
        print(f"\nIssuing {codes} contract codes for plan '{plan_id}'...")
        for _ in range(codes):
            code = generate_code()
            data = {"status": ContractCodeStatus.ACTIVE.value, "planId": plan_id}
            if expires_at:
                data["expiresAt"] = expires_at
            db.collection("contractCodes").document(code).set(data)
            print(f"  + {code}")

    print("\nSeed complete!")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed FitZone reference data")
    parser.add_argument("--codes", type=int, default=0, help="Number of contract codes to issue")
    parser.add_argument("--plan", default="pro", help="Plan ID granted by issued codes")
    parser.add_argument(
        "--expires-in-days", type=int, default=0, help="Code validity in days (0 = no expiry)"
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    print("=" * 50)
    print("FitZone Seed Data")
    print("=" * 50)
    print()
    asyncio.run(seed(args.codes, args.plan, args.expires_in_days))
