"""
Booking price computation.
Nights are the calendar-day difference between check-in and check-out.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Union
from stayhub.config import settings
from stayhub.services.currency import round_half_up


class BookingQuote:
    """Price breakdown for a stay."""

    def __init__(self, nightly_price: Decimal, nights: int, subtotal: Decimal, service_fee: int, total: Decimal):
        self.nightly_price = nightly_price
        self.nights = nights
        self.subtotal = subtotal
        self.service_fee = service_fee
        self.total = total

    def __repr__(self) -> str:
        return f"<BookingQuote(nights={self.nights}, subtotal={self.subtotal}, total={self.total})>"


def count_nights(check_in: Optional[date], check_out: Optional[date]) -> int:
    """Calendar-day difference; zero until both dates are chosen."""
    if check_in is None or check_out is None:
        return 0
    return (check_out - check_in).days


def calculate_quote(
    nightly_price: Union[int, float, Decimal],
    check_in: Optional[date],
    check_out: Optional[date],
    service_fee_rate: Optional[float] = None
) -> BookingQuote:
    """
    Compute nights, subtotal, service fee and grand total.

    The fee is a flat share of the subtotal rounded to a whole amount. No
    proration and no availability check is done here.
    """
    price = nightly_price if isinstance(nightly_price, Decimal) else Decimal(str(nightly_price))
    fee_rate = Decimal(str(service_fee_rate if service_fee_rate is not None else settings.service_fee_rate))

    nights = count_nights(check_in, check_out)
    subtotal = price * nights
    service_fee = round_half_up(subtotal * fee_rate)

    return BookingQuote(
        nightly_price=price,
        nights=nights,
        subtotal=subtotal,
        service_fee=service_fee,
        total=subtotal + service_fee,
    )


def max_guests(bedrooms: int) -> int:
    """Two guests per bedroom."""
    return max(bedrooms, 0) * 2


def guest_options(bedrooms: int) -> List[int]:
    """Selectable guest counts, 1..bedrooms*2 inclusive."""
    return list(range(1, max_guests(bedrooms) + 1))
