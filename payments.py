"""Stripe payment-intent helpers and the simulated PIX flow.

Card payments and PIX both go through Stripe payment intents in BRL. The
development build of the backend also serves a simulated PIX code whose
status is drawn at random; the same simulation lives here so it can be
previewed without the web server.
"""

import random
import string
import time
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional, Tuple

import stripe
from pydantic import BaseModel, Field

import config
from logger import get_logger

logger = get_logger(__name__)

# Placeholder CRC (6304ABCD); simulated codes are never validated by a bank
PIX_MOCK_TEMPLATE = (
    "00020101021226860014BR.GOV.BCB.PIX2550pix.engbot.com.br"
    "52040000530398654{amount}5802BR5913ENGBOT PAYMENT6009Sao Paulo"
    "61080550200562390511{txid}6304ABCD"
)

ANNUAL_CYCLE = "anual"


class PaymentIntentRequest(BaseModel):
    amount: float = Field(..., gt=0, description="Amount in BRL (e.g. 59.0)")
    plan: str = Field(..., min_length=1, description="Plan name, e.g. 'ENTUSIASTA BLACK'")
    billing_cycle: str = Field(..., min_length=1, description="'mensal' or 'anual'")
    user_id: str = Field(default="anonymous", description="Backend user id, if known")

    @property
    def amount_in_cents(self) -> int:
        return to_cents(self.amount)

    def metadata(self) -> Dict[str, str]:
        return {"plan": self.plan, "billingCycle": self.billing_cycle, "userId": self.user_id}


def to_cents(amount: float) -> int:
    """BRL amount to integer centavos, rounding half up."""
    return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def get_stripe_client():
    """Return the configured `stripe` module, or None in mock mode."""
    if not config.STRIPE_SECRET_KEY:
        logger.warning("STRIPE_SECRET_KEY is not set. Payment calls will run in mock mode.")
        return None
    stripe.api_key = config.STRIPE_SECRET_KEY
    stripe.api_version = config.STRIPE_API_VERSION
    return stripe


def create_payment_intent(client, request: PaymentIntentRequest, pix: bool = False):
    """Create a BRL payment intent; PIX intents only allow the pix method."""
    params: Dict[str, Any] = {
        "amount": request.amount_in_cents,
        "currency": config.PAYMENT_CURRENCY,
        "metadata": request.metadata(),
    }
    if pix:
        params["payment_method_types"] = ["pix"]
    else:
        params["automatic_payment_methods"] = {"enabled": True}
    intent = client.PaymentIntent.create(**params)
    logger.info(
        f"Created {'pix' if pix else 'card'} payment intent",
        extra={"context": {"payment_intent": intent["id"], "amount": params["amount"]}},
    )
    return intent


def confirm_payment_intent(client, intent_id: str, payment_method: str = "pm_card_visa"):
    return client.PaymentIntent.confirm(intent_id, payment_method=payment_method)


def pix_qr_code(intent) -> Optional[Dict[str, Any]]:
    """Return the `next_action.pix_display_qr_code` block, if Stripe sent one."""
    next_action = intent.get("next_action") or {}
    return next_action.get("pix_display_qr_code")


def generate_mock_pix_code(amount: float, transaction_id: str) -> str:
    """Build a copy-paste PIX payload in EMV layout for a simulated charge.

    The amount is written as zero-padded centavos rather than a decimal
    string, and the field lengths are fixed, matching byte for byte what
    the backend's simulated endpoint returns.
    """
    amount_str = f"{to_cents(amount):010d}"
    return PIX_MOCK_TEMPLATE.format(amount=amount_str, txid=transaction_id)


def new_pix_transaction_id(rng: Optional[random.Random] = None, now_ms: Optional[int] = None) -> str:
    rng = rng or random.Random()
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(rng.choice(string.digits + string.ascii_lowercase) for _ in range(9))
    return f"pix_{now_ms}_{suffix}"


def mock_pix_status(rng: Optional[random.Random] = None) -> Tuple[str, str]:
    """Simulated PIX confirmation: 30% success, 30% pending, 40% failed."""
    draw = (rng or random).random()
    if draw > 0.7:
        return "success", "Payment confirmed"
    if draw > 0.4:
        return "pending", "Waiting for confirmation..."
    return "failed", "Payment not confirmed"


def plan_expires_at(billing_cycle: str, now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now()
    if billing_cycle == ANNUAL_CYCLE:
        return now + timedelta(days=365)
    return now + timedelta(days=30)
