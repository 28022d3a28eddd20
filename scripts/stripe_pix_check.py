"""Create a PIX payment intent and report whether Stripe returned a QR code."""
import json

import stripe

import payments
from logger import get_logger
from payments import PaymentIntentRequest

logger = get_logger(__name__)

PIX_REQUEST = PaymentIntentRequest(
    amount=59.00, plan="ENTUSIASTA BLACK", billing_cycle="anual", user_id="test-user-123"
)


def check_pix(client, request=PIX_REQUEST):
    print("\n1️⃣ Creating PIX payment intent...")
    intent = payments.create_payment_intent(client, request, pix=True)
    print(f"✅ PIX payment intent created: {intent['id']}")
    print(f"📊 Status: {intent['status']}")
    print(f"💰 Amount: {intent['amount'] / 100:.2f} BRL")

    qr = payments.pix_qr_code(intent)
    if qr:
        print("\n🎉 PIX generated!")
        print(f"📱 QR code URL: {qr.get('image_url_png')}")
        if qr.get("data"):
            print("📋 Copy-paste code available")
        return True

    print("\n❌ PIX was NOT generated")
    print(f"🔍 Full payment intent: {json.dumps(dict(intent), indent=2, default=str)}")
    print("\n💡 Possible causes:")
    print("   - PIX is not enabled on the Stripe account")
    print("   - The account is not configured for Brazil")
    print("   - PIX is still in preview for this account")
    return False


def main() -> int:
    print("🧪 Testing PIX generation...")
    client = payments.get_stripe_client()
    if client is None:
        print("❌ STRIPE_SECRET_KEY is not set")
        return 1
    try:
        return 0 if check_pix(client) else 1
    except stripe.InvalidRequestError as e:
        logger.error(f"Stripe rejected the PIX request: {e}")
        print("\n💡 To fix:")
        print("1. Open https://dashboard.stripe.com/settings/payment_methods")
        print("2. Find PIX and enable it")
        print("3. Check that the account is configured for Brazil")
        return 1
    except Exception as e:
        logger.error(f"PIX check failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
