"""Mock transaction generator used until real data is imported"""

import random
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from fraud_monitor.domain.models import Channel, PaymentMode, Transaction

GATEWAYS = ["PayPal", "Stripe", "Square", "Adyen", "Chase"]


def generate_mock_transactions(
    count: int,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[Transaction]:
    """
    Generate plausible transactions from the last 30 days.

    Roughly 15% are predicted fraud; the reported flag agrees with the
    prediction 80% of the time.
    """
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    channels = list(Channel)
    payment_modes = list(PaymentMode)

    transactions = []
    for i in range(count):
        is_fraud_predicted = rng.random() < 0.15
        is_fraud_reported = is_fraud_predicted if rng.random() < 0.8 else not is_fraud_predicted

        transactions.append(
            Transaction(
                transaction_id=f"TXN-{100000 + i:06d}",
                amount=float(round(rng.random() * 9900 + 100)),  # $100 to $10,000
                timestamp=now - timedelta(days=rng.randrange(30)),
                payer_id=f"P-{rng.randrange(1000):04d}",
                payee_id=f"M-{rng.randrange(500):04d}",
                channel=rng.choice(channels),
                payment_mode=rng.choice(payment_modes),
                payment_gateway=rng.choice(GATEWAYS),
                is_fraud_predicted=is_fraud_predicted,
                is_fraud_reported=is_fraud_reported,
            )
        )

    return transactions
