"""Mint an identity token for local development against the API."""
from __future__ import annotations

import argparse
from datetime import timedelta

from inkwell.core.security import create_identity_token


def main() -> None:
    parser = argparse.ArgumentParser(description="Print a signed identity token")
    parser.add_argument("subject", help="External identity id placed in the 'sub' claim")
    parser.add_argument("--name", default=None, help="Display name claim")
    parser.add_argument("--email", default=None, help="Email claim")
    parser.add_argument("--picture", default=None, help="Avatar URL claim")
    parser.add_argument(
        "--hours",
        type=int,
        default=12,
        help="Token lifetime in hours (default: 12)",
    )
    args = parser.parse_args()

    token = create_identity_token(
        args.subject,
        name=args.name,
        email=args.email,
        picture=args.picture,
        expires_in=timedelta(hours=args.hours),
    )
    print(token)


if __name__ == "__main__":
    main()
