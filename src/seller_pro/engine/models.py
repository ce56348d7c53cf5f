"""
Data models for the pricing engine.

Uses dataclasses for structured, type-safe data representation.
"""
from dataclasses import dataclass, field, replace
from typing import Optional


# Form field names accepted by FeeConfiguration.with_value()
FEE_FIELDS = (
    'target_net_settlement',
    'gst_percentage',
    'shipping_charges',
    'platform_fee_percentage',
    'fixed_fee',
)


@dataclass
class TraceStep:
    """A single step in the pricing computation trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass(frozen=True)
class FeeConfiguration:
    """A seller's fee structure and the settlement they want to receive."""
    target_net_settlement: float
    gst_percentage: float
    shipping_charges: float
    platform_fee_percentage: float
    fixed_fee: float

    def with_value(self, name: str, value: float) -> 'FeeConfiguration':
        """Return a copy with one fee field replaced."""
        if name not in FEE_FIELDS:
            raise KeyError(f"Unknown fee field '{name}'")
        return replace(self, **{name: value})

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in FEE_FIELDS}


@dataclass
class PricingResult:
    """Complete result of a listing price computation."""
    listing_price: int
    gst_amount: int
    total_fees: int
    net_settlement: float
    warnings: list[str] = field(default_factory=list)
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the result trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def add_warning(self, warning: str):
        """Add a result-level warning."""
        if warning not in self.warnings:
            self.warnings.append(warning)

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)


@dataclass
class PriceComponent:
    """One slice of the listing price composition."""
    name: str
    value: float


@dataclass
class ValidationResult:
    """Result of checking a fee configuration before pricing."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
