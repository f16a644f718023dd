"""VAT estimation for invoices without a recognized VAT line."""
from vatledger.core.config import VAT_ESTIMATE_RATE


def estimate_vat(total: float, rate: float = VAT_ESTIMATE_RATE) -> float:
    """Approximate the VAT contained in a gross total.

    ``rate`` is a flat heuristic share of the gross amount (0.187 by default,
    roughly what a 23% rate leaves inside a gross figure). It is not a
    reverse calculation of any statutory rate and should be confirmed by a
    reviewer.
    """

    if total == 0:
        return 0.0
    return total * rate
