"""Print a bearer token for a user id, signed with the configured SECRET_KEY.

Usage:
    python -m scripts.issue_dev_token <user_id> [expire_minutes]
Tokens are only for local development; the API trusts any token it can verify.
"""

import sys
from datetime import timedelta

from app.infrastructure.security.jwt import create_access_token


def main() -> None:
    if len(sys.argv) < 2:
        print(
            "Usage: python -m scripts.issue_dev_token <user_id> [expire_minutes]",
            file=sys.stderr,
        )
        sys.exit(1)
    expires = timedelta(minutes=int(sys.argv[2])) if len(sys.argv) > 2 else None
    print(create_access_token(sys.argv[1], expires_delta=expires))


if __name__ == "__main__":
    main()
