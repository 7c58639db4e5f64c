"""
Price calculation for lawn-care bookings.

The price is a base fee per service type plus a rate for every 1000
square feet of lawn.  The result is rounded to cents.  This is the
only place prices are computed; client-supplied prices are ignored.
"""

from typing import Dict, Tuple, Union

from lawncare_api.app.schemas.booking import ServiceType


# service type -> (base price, price per 1000 sq ft)
RATE_TABLE: Dict[str, Tuple[float, float]] = {
    ServiceType.STANDARD.value: (50.0, 10.0),
    ServiceType.PREMIUM.value: (75.0, 15.0),
    ServiceType.COMPLETE.value: (100.0, 20.0),
}

# Used for a service type missing from the table.  Validation makes
# this unreachable for API input.
FALLBACK_RATE: Tuple[float, float] = (50.0, 0.0)


def calculate_price(service_type: Union[ServiceType, str], lawn_size: int) -> float:
    """Return the price for ``service_type`` on a lawn of ``lawn_size`` sq ft.

    >>> calculate_price("standard", 1000)
    60.0
    >>> calculate_price("complete", 500)
    110.0
    """
    key = service_type.value if isinstance(service_type, ServiceType) else str(service_type)
    base, rate = RATE_TABLE.get(key, FALLBACK_RATE)
    size_factor = lawn_size / 1000
    return round(base + size_factor * rate, 2)
