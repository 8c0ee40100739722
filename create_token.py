#!/usr/bin/env python3
"""
Mint a long-lived bearer token for an existing user.

Useful for integrations that call the API without going through
``POST /api/users/login``.  The token is signed with ``SECRET_KEY``
from the environment, so run this with the same configuration as the
server.

Usage:
    python create_token.py --email admin@example.com --days 365
"""

import argparse

from survey_api.app.core.config import settings
from survey_api.app.core.security import create_access_token


def main() -> None:
    ap = argparse.ArgumentParser(description="Create a Survey API bearer token.")
    ap.add_argument("--email", required=True, help="Email of the user the token identifies")
    ap.add_argument("--days", type=int, default=365, help="Token lifetime in days")
    args = ap.parse_args()

    token = create_access_token({"sub": args.email.strip().lower()}, settings, expires_delta=args.days * 24 * 60 * 60)
    print(token)


if __name__ == "__main__":
    main()
