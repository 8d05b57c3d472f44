"""Print a bearer token for local development.

    python -m content_api.devtoken admin
    python -m content_api.devtoken someone --regions US JP

Known demo users: admin (US, JP, RU), editor (JP). Anyone else gets US.
"""

from __future__ import annotations

import argparse
from datetime import timedelta
from typing import List, Optional

from content_api.auth import create_access_token
from content_api.config import get_settings

DEMO_REGIONS = {
    "admin": ["US", "JP", "RU"],
    "editor": ["JP"],
}
DEMO_ROLES = {
    "admin": ["ROLE_ADMIN"],
    "editor": ["ROLE_EDITOR"],
}


def regions_for(username: str) -> List[str]:
    return list(DEMO_REGIONS.get(username, ["US"]))


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("username")
    parser.add_argument("--regions", nargs="+", help="override the demo region assignment")
    parser.add_argument("--minutes", type=int, default=60)
    args = parser.parse_args(argv)

    claims = {
        "regions": args.regions or regions_for(args.username),
        "roles": DEMO_ROLES.get(args.username, []),
    }
    token = create_access_token(
        args.username,
        claims,
        get_settings(),
        expires_delta=timedelta(minutes=args.minutes),
    )
    print(token)


if __name__ == "__main__":
    main()
