"""Grant a fixed number of tokens to every user that has challenge stats."""
import argparse

import config
from database import close_db, get_db
from logger import get_logger
from tokens import grant_tokens

logger = get_logger(__name__)


def add_tokens(amount):
    db = get_db()
    with db.session() as session:
        count = grant_tokens(session, amount)
    print(f"Added {amount:g} tokens to {count} users")
    return count


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--amount", type=float, default=config.TOKEN_GRANT_AMOUNT,
                        help="Tokens to add to each balance")
    args = parser.parse_args(argv)

    try:
        add_tokens(args.amount)
    except Exception as e:
        logger.error(f"Token grant failed: {e}", exc_info=True)
        return 1
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
