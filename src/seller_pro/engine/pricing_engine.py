"""
Pricing Engine - back-solves a marketplace listing price from a fee structure.

The listing price P must leave the seller with the target settlement after:
- Platform fee: P * platform%
- GST: (P - shipping) * gst%
- Fixed fee and shipping

The GST-on-fee interaction is folded into the divisor as
``gst * (1 + platform)`` instead of solving the exact linear system. Outputs
depend on that form, so it stays as is.
"""
import math
from typing import Any, Optional

from ..config.settings import get_settings, Settings
from .models import (
    FEE_FIELDS,
    FeeConfiguration,
    PriceComponent,
    PricingResult,
    ValidationResult,
)

# Below this divisor the listing price grows past 20x the inputs
LOW_DIVISOR_THRESHOLD = 0.05

OVERFLOW_WARNING = "Amounts are too large to price; the computed values are not meaningful."


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit, halves toward positive infinity."""
    return math.floor(value + 0.5)


def fee_divisor(config: FeeConfiguration) -> float:
    """Share of the listing price left after percentage-based deductions."""
    platform_decimal = config.platform_fee_percentage / 100
    gst_decimal = config.gst_percentage / 100
    return 1 - platform_decimal - gst_decimal * (1 + platform_decimal)


def compute_pricing(config: FeeConfiguration) -> PricingResult:
    """
    Compute the listing price and cost breakdown for a fee configuration.

    Never raises. A divisor <= 0 (fees eat the whole price) is not divided
    by; the listing price is clamped to 0 and a warning is attached. A price
    or amount too large to represent is treated the same way.
    Each output field is rounded independently, so the rounded parts need
    not add back up to the listing price.
    """
    platform_decimal = config.platform_fee_percentage / 100
    gst_decimal = config.gst_percentage / 100
    divisor = fee_divisor(config)
    numerator = config.target_net_settlement + config.shipping_charges + config.fixed_fee

    result = PricingResult(
        listing_price=0,
        gst_amount=0,
        total_fees=0,
        net_settlement=config.target_net_settlement,
    )
    result.add_trace("Divisor", "1 - platform - gst × (1 + platform)", f"{divisor:.4f}")
    result.add_trace("Numerator", "Settlement + shipping + fixed fee", f"{numerator:.2f}")

    if divisor <= 0:
        listing_price = 0.0
        result.add_trace("Degenerate", "Divisor is not positive; listing price set to 0", "0")
        result.add_warning(
            "Platform fee and GST consume the entire listing price; "
            "the computed price is not meaningful."
        )
    else:
        raw_price = numerator / divisor
        result.add_trace("Listing Price", "Numerator ÷ divisor", f"{raw_price:.2f}")
        if not math.isfinite(raw_price):
            listing_price = 0.0
            result.add_trace("Overflow", "Listing price is not a finite number; set to 0", "0")
            result.add_warning(OVERFLOW_WARNING)
        else:
            listing_price = max(0.0, raw_price)
            if raw_price < 0:
                result.add_trace("Clamp", "Negative price clamped to zero", "0")
                result.add_warning("Computed listing price was negative and has been clamped to zero.")

    platform_fee = listing_price * platform_decimal
    gst_on_price = _finite_amount(result, "GST", (listing_price - config.shipping_charges) * gst_decimal)
    total_fees = _finite_amount(result, "Fees", platform_fee + config.fixed_fee + config.shipping_charges)

    result.listing_price = round_half_up(listing_price)
    result.gst_amount = round_half_up(gst_on_price)
    result.total_fees = round_half_up(total_fees)

    result.add_trace("GST", "(Price - shipping) × gst", f"{gst_on_price:.2f}")
    result.add_trace("Fees", "Platform fee + fixed fee + shipping", f"{total_fees:.2f}")
    return result


def _finite_amount(result: PricingResult, label: str, value: float) -> float:
    """Replace an infinite or NaN amount with 0, noting it on the result."""
    if math.isfinite(value):
        return value
    result.add_trace("Overflow", f"{label} is not a finite number; set to 0", "0")
    result.add_warning(OVERFLOW_WARNING)
    return 0.0


def validate_configuration(config: FeeConfiguration) -> ValidationResult:
    """
    Check a configuration for economic sense before pricing it.

    compute_pricing() accepts anything; callers that must not show a
    meaningless price reject configurations that fail here.
    """
    errors = []
    warnings = []

    amounts = {
        'target_net_settlement': "Target net settlement",
        'shipping_charges': "Shipping charges",
        'fixed_fee': "Fixed fee",
    }
    for name, label in amounts.items():
        if getattr(config, name) < 0:
            errors.append(f"{label} cannot be negative")

    percentages = {
        'gst_percentage': "GST percentage",
        'platform_fee_percentage': "Platform fee percentage",
    }
    for name, label in percentages.items():
        value = getattr(config, name)
        if value < 0 or value >= 100:
            errors.append(f"{label} must be between 0 and 100 (got {value})")

    for name in FEE_FIELDS:
        if not math.isfinite(getattr(config, name)):
            errors.append(f"{name.replace('_', ' ').capitalize()} must be a finite number")

    divisor = fee_divisor(config)
    if divisor <= 0:
        errors.append("Platform fee and GST together leave nothing of the listing price")
    elif divisor < LOW_DIVISOR_THRESHOLD:
        warnings.append(
            f"Fees leave only {divisor * 100:.1f}% of the listing price; "
            "small input changes will swing the price heavily"
        )

    if OVERFLOW_WARNING in compute_pricing(config).warnings:
        errors.append("Amounts are too large to compute a listing price")

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def parse_amount(raw_value: Any) -> float:
    """Parse a form value; empty or unparsable input counts as 0."""
    try:
        value = float(raw_value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return value


class PricingEngine:
    """
    Listing price calculator bound to the application settings.

    Wraps compute_pricing() with the default form values and the
    price composition breakdown shown next to the result.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def default_configuration(self) -> FeeConfiguration:
        """Fee configuration the listing form starts from."""
        s = self.settings
        return FeeConfiguration(
            target_net_settlement=s.default_target_net_settlement,
            gst_percentage=s.default_gst_percentage,
            shipping_charges=s.default_shipping_charges,
            platform_fee_percentage=s.default_platform_fee_percentage,
            fixed_fee=s.default_fixed_fee,
        )

    def calculate(self, config: FeeConfiguration) -> PricingResult:
        return compute_pricing(config)

    def validate(self, config: FeeConfiguration) -> ValidationResult:
        return validate_configuration(config)

    def update_configuration(self, config: FeeConfiguration, name: str, raw_value: Any) -> FeeConfiguration:
        """Apply one form edit, returning the new configuration."""
        return config.with_value(name, parse_amount(raw_value))

    def price_composition(self, config: FeeConfiguration, result: PricingResult) -> list[PriceComponent]:
        """
        Split the listing price into settlement, shipping, fees and GST.

        Fees are taken from the rounded listing price.
        """
        fees = config.platform_fee_percentage / 100 * result.listing_price + config.fixed_fee
        fees = round_half_up(fees) if math.isfinite(fees) else 0
        return [
            PriceComponent(name="Settlement", value=result.net_settlement),
            PriceComponent(name="Shipping", value=config.shipping_charges),
            PriceComponent(name="Fees", value=fees),
            PriceComponent(name="GST", value=result.gst_amount),
        ]
