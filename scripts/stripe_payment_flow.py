"""Run the card payment flow end to end against Stripe test mode.

Creates an intent for the annual ENTUSIASTA BLACK plan, confirms it with
Stripe's test Visa card and prints what the webhook would activate.
"""
from datetime import datetime

import payments
from logger import get_logger
from payments import PaymentIntentRequest

logger = get_logger(__name__)

PLAN_REQUEST = PaymentIntentRequest(
    amount=59.00, plan="ENTUSIASTA BLACK", billing_cycle="anual", user_id="test-user-123"
)


def run_payment_flow(client, request=PLAN_REQUEST, now=None):
    print("\n1️⃣ Creating payment intent...")
    intent = payments.create_payment_intent(client, request)
    print(f"✅ Payment intent created: {intent['id']}")

    print("\n2️⃣ Confirming with a test card...")
    confirmed = payments.confirm_payment_intent(client, intent["id"])
    if confirmed["status"] != "succeeded":
        print(f"❌ Payment was not confirmed: {confirmed['status']}")
        return False

    metadata = confirmed["metadata"]
    print("✅ Payment confirmed!")
    print(f"💰 Amount: {confirmed['amount'] / 100:.2f} BRL")
    print(f"📋 Plan: {metadata['plan']}")
    print(f"🔄 Cycle: {metadata['billingCycle']}")

    print("\n3️⃣ Simulating plan activation (webhook)...")
    expires = payments.plan_expires_at(metadata["billingCycle"], now or datetime.now())
    print(f"📧 User ID: {metadata['userId']}")
    print(f"🎯 Plan activated: {metadata['plan']}")
    print(f"📅 Valid until: {expires:%d/%m/%Y}")
    print("\n🎉 Payment flow works end to end!")
    return True


def main() -> int:
    print("🧪 Testing the full payment flow...")
    client = payments.get_stripe_client()
    if client is None:
        print("❌ STRIPE_SECRET_KEY is not set")
        return 1
    try:
        return 0 if run_payment_flow(client) else 1
    except Exception as e:
        logger.error(f"Payment flow failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
