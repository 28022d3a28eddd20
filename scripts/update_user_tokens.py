"""Reset every active user's token balance, creating missing stats rows."""
import argparse

import config
from database import close_db, get_db
from logger import get_logger
from tokens import reset_tokens

logger = get_logger(__name__)


def update_user_tokens(amount):
    print("🔄 Updating user tokens...")
    db = get_db()
    with db.session() as session:
        users = reset_tokens(session, amount)
        print(f"📊 Found {len(users)} active users")
        for user in users:
            print(f"✅ User {user.name} updated with {amount:g} tokens")
    print("🎉 All users updated!")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--amount", type=float, default=config.TOKEN_GRANT_AMOUNT)
    args = parser.parse_args(argv)

    try:
        update_user_tokens(args.amount)
    except Exception as e:
        logger.error(f"Failed to update tokens: {e}", exc_info=True)
        return 1
    finally:
        close_db()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
