"""
Print a signed access token for an email address.

    python -m expense_tracker.scripts.issue_token you@example.com

Send it as the access_token cookie or an "Authorization: Bearer" header.
"""
import argparse

from expense_tracker.core.jwt_config import create_access_token


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("email")
    parser.add_argument("--minutes", type=int, default=None, help="lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES")
    args = parser.parse_args(argv)

    print(create_access_token({"sub": args.email}, expires_min=args.minutes))


if __name__ == "__main__":
    main()
