# renderer/stripes.py
from typing import List
from core.errors import ConfigurationError

STRIPE_COUNT = 10

def partition_columns(width: int, count: int = STRIPE_COUNT) -> List[range]:
    """
    Split image columns [0, width) into `count` contiguous stripes.

    Every stripe is width // count columns wide except the last one, which
    also takes the remainder, so each column belongs to exactly one stripe.
    When width < count the leading stripes are empty.
    """
    if width < 1:
        raise ConfigurationError(f"Cannot partition an image of width {width}")
    if count < 1:
        raise ConfigurationError(f"Stripe count must be at least 1, got {count}")
    step = width // count
    stripes = [range(i * step, (i + 1) * step) for i in range(count - 1)]
    stripes.append(range((count - 1) * step, width))
    return stripes
