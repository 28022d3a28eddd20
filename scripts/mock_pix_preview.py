"""Generate a simulated PIX code and poll the simulated confirmation."""
import argparse
import time

import payments
from logger import get_logger

logger = get_logger(__name__)


def preview_mock_pix(amount, attempts=5, delay=2.0, rng=None, sleep=time.sleep):
    print("🧪 Testing simulated PIX...")
    transaction_id = payments.new_pix_transaction_id(rng)

    print("\n1️⃣ Generating simulated PIX code...")
    code = payments.generate_mock_pix_code(amount, transaction_id)
    print(f"✅ PIX code: {code}")
    print(f"📊 Length: {len(code)} characters")
    print(f"💰 Amount: {amount:.2f} BRL")
    print(f"🆔 Transaction ID: {transaction_id}")

    print("\n2️⃣ Simulating status checks...")
    status = None
    for attempt in range(1, attempts + 1):
        status, message = payments.mock_pix_status(rng)
        print(f"   Attempt {attempt}: {status} - {message}")
        if status == "success":
            print("🎉 PAYMENT CONFIRMED!")
            print("✅ Plan activated automatically")
            break
        if attempt < attempts:
            sleep(delay)
    return code, status


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--amount", type=float, default=59.00, help="Amount in BRL")
    parser.add_argument("--attempts", type=int, default=5)
    parser.add_argument("--delay", type=float, default=2.0, help="Seconds between checks")
    args = parser.parse_args(argv)

    try:
        preview_mock_pix(args.amount, args.attempts, args.delay)
    except Exception as e:
        logger.error(f"Simulated PIX preview failed: {e}", exc_info=True)
        return 1

    print("\n📱 To try it in the frontend:")
    print("1. Open the payments tab")
    print("2. Pick a plan")
    print("3. Choose PIX")
    print('4. Click "Generate PIX payment"')
    print('5. Click "I already paid via Pix" until it confirms')
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
