"""Check the Stripe key: retrieve the account, then create a card and a PIX intent."""
import stripe

import payments
from logger import get_logger
from payments import PaymentIntentRequest

logger = get_logger(__name__)

TEST_AMOUNT = 10.00


def check_stripe_connection(client):
    account = client.Account.retrieve()
    print("✅ Connected to Stripe!")
    print(f"📧 Account email: {account.get('email')}")
    print(f"🌍 Country: {account.get('country')}")
    print(f"💰 Default currency: {account.get('default_currency')}")

    request = PaymentIntentRequest(amount=TEST_AMOUNT, plan="test", billing_cycle="test", user_id="test")

    print("\n🧪 Creating a card payment intent...")
    intent = payments.create_payment_intent(client, request)
    _print_intent(intent)

    print("\n🧪 Creating a PIX payment intent...")
    pix_intent = payments.create_payment_intent(client, request, pix=True)
    _print_intent(pix_intent)
    if payments.pix_qr_code(pix_intent):
        print("📱 PIX QR code available")

    print("\n🎉 All checks passed. Stripe is configured correctly.")


def _print_intent(intent):
    print(f"🆔 ID: {intent['id']}")
    print(f"💰 Amount: {intent['amount'] / 100:.2f} BRL")
    print(f"📊 Status: {intent['status']}")


def main() -> int:
    print("🔍 Testing Stripe connection...")
    client = payments.get_stripe_client()
    if client is None:
        print("❌ STRIPE_SECRET_KEY is not set in .env")
        return 1
    try:
        check_stripe_connection(client)
    except stripe.AuthenticationError as e:
        logger.error(f"Stripe rejected the key: {e}")
        print("💡 Check that STRIPE_SECRET_KEY is correct")
        return 1
    except stripe.InvalidRequestError as e:
        logger.error(f"Stripe rejected the request: {e}")
        print("💡 Check that the Stripe account is enabled for PIX")
        return 1
    except Exception as e:
        logger.error(f"Stripe check failed: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
