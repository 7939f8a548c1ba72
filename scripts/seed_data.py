#!/usr/bin/env python3
"""
Seed script: creates users through the API (no direct DB), then walks the pages back.
Run with the API up:
  python scripts/seed_data.py
  python scripts/seed_data.py --users 100 --base-url http://localhost:8000/api/v1
"""

import argparse
import json
import random

import httpx

API_BASE = "http://localhost:8000/api/v1"

FIRST_NAMES = ["John", "Jane", "Alex", "Maria", "Ivan", "Olga", "Sam", "Kim", "Lee", "Nora"]
LAST_NAMES = ["Doe", "Smith", "Petrov", "Garcia", "Ivanova", "Brown", "Park", "Novak"]


def random_user(i: int) -> dict:
    first = random.choice(FIRST_NAMES)
    last = random.choice(LAST_NAMES)
    # Logins must be letters/digits only
    return {"firstName": first, "lastName": last, "login": f"{first.lower()}{last.lower()}{i + 1}"}


def main():
    ap = argparse.ArgumentParser(description="Seed users via API")
    ap.add_argument("--users", type=int, default=30, help="Number of users to create")
    ap.add_argument("--page-size", type=int, default=20, help="Page size used to list users afterwards")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        print(f"Creating {args.users} users...")
        for i in range(args.users):
            body = random_user(i)
            try:
                r = client.post("/users", json=body)
                if r.status_code == 201:
                    created += 1
                else:
                    errors.append(f"Create {body['login']}: {r.status_code} {r.text[:80]}")
            except httpx.HTTPError as e:
                errors.append(f"Create {body['login']}: {e}")
            if (i + 1) % 10 == 0:
                print(f"  ... {i + 1} users")

        r = client.get("/users", params={"pageNumber": 1, "pageSize": args.page_size})
        pagination = json.loads(r.headers.get("X-Pagination", "{}"))
        print(f"Listing: {pagination.get('totalCount')} users over {pagination.get('totalPages')} page(s)")

    print(f"\nDone. Users created: {created}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
