#!/usr/bin/env python3
"""
Seed script: creates users via the API (no direct DB) and soft-deletes a share of them.
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --users 100 --deactivate-every 5
"""

import argparse
import random

import httpx

API_BASE = "http://localhost:8000/api/v1"

FIRST_NAMES = [
    "Ana", "Bruno", "Carla", "Diego", "Elena", "Felipe", "Gabriela", "Hugo",
    "Isabel", "Joao", "Karina", "Lucas", "Marina", "Nicolas", "Olivia", "Pedro",
]
LAST_NAMES = ["Silva", "Souza", "Costa", "Santos", "Oliveira", "Pereira", "Lima", "Gomes"]


def random_name() -> str:
    return f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}"


def main():
    ap = argparse.ArgumentParser(description="Seed users via API")
    ap.add_argument("--users", type=int, default=30, help="Number of users to create")
    ap.add_argument("--deactivate-every", type=int, default=7, help="Deactivate every Nth user (0 = none)")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created_ids = []
    existing = 0
    deactivated = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        print(f"Creating {args.users} users...")
        for i in range(args.users):
            email = f"user{i+1}@example.com"
            try:
                r = client.post("/users", json={
                    "name": random_name(),
                    "email": email,
                    "password": "password123",
                })
                if r.status_code == 201:
                    created_ids.append(r.json()["id"])
                elif r.status_code == 409:
                    # Already seeded on a previous run
                    existing += 1
                else:
                    errors.append(f"Create {email}: {r.status_code} {r.text[:80]}")
            except httpx.HTTPError as e:
                errors.append(f"Create {email}: {e}")
            if (i + 1) % 10 == 0:
                print(f"  ... {i+1} users")

        if args.deactivate_every > 0:
            for user_id in created_ids[::args.deactivate_every]:
                try:
                    r = client.delete(f"/users/{user_id}")
                    if r.status_code == 204:
                        deactivated += 1
                    else:
                        errors.append(f"Deactivate {user_id}: {r.status_code}")
                except httpx.HTTPError as e:
                    errors.append(f"Deactivate {user_id}: {e}")

    print(f"\nDone. Created: {len(created_ids)}, already existing: {existing}, deactivated: {deactivated}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
