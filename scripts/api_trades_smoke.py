"""Call the backend's GET /api/trades with a bearer token and print the reply."""
import argparse

import requests

import config
from logger import get_logger

logger = get_logger(__name__)


def fetch_trades(base_url, token, timeout=10):
    url = f"{base_url.rstrip('/')}/api/trades"
    print(f"📊 GET {url}...")
    response = requests.get(
        url,
        headers={"Content-Type": "application/json", "Authorization": f"Bearer {token}"},
        timeout=timeout,
    )
    print("Status:", response.status_code)
    if response.ok:
        print("✅ Data received:", response.json())
    else:
        print("❌ Error:", response.text)
    return response


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--base-url", default=config.API_BASE_URL)
    parser.add_argument("--token", default=config.API_TOKEN, help="JWT for an existing user")
    args = parser.parse_args(argv)

    print("🔍 Testing trades API...")
    try:
        response = fetch_trades(args.base_url, args.token)
    except requests.RequestException as e:
        logger.error(f"Request to the trades API failed: {e}", exc_info=True)
        return 1
    return 0 if response.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
