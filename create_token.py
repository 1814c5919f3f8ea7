#!/usr/bin/env python3
"""
Mint a bearer token for an existing user of the Mentor Admin API.

The token subject is the user's email; the API resolves the role from
the database on every request, so the token of an administrator grants
access to the admin endpoints.

Usage:
    python create_token.py --email admin@example.com --days 365
"""

import argparse
import sys

from mentor_admin_api.app.core.db import get_connection
from mentor_admin_api.app.core.security import create_access_token


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Create a bearer token for a Mentor Admin API user.")
    ap.add_argument("--email", required=True, help="Email of the user the token is issued for")
    ap.add_argument("--days", type=int, default=1, help="Token lifetime in days (default: 1)")
    args = ap.parse_args(argv)

    conn = get_connection()
    try:
        row = conn.execute("SELECT id FROM users WHERE email = ?", (args.email,)).fetchone()
    finally:
        conn.close()
    if not row:
        print(f"[!] No user found with email: {args.email}", file=sys.stderr)
        return 2

    print(create_access_token({"sub": args.email}, expires_delta=args.days * 24 * 60 * 60))
    return 0


if __name__ == "__main__":
    sys.exit(main())
