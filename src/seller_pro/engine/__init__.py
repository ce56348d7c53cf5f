"""Engine subpackage - fee inversion and price breakdown."""
from .pricing_engine import PricingEngine, compute_pricing, validate_configuration
from .models import FeeConfiguration, PricingResult, PriceComponent, ValidationResult

__all__ = [
    'PricingEngine',
    'compute_pricing',
    'validate_configuration',
    'FeeConfiguration',
    'PricingResult',
    'PriceComponent',
    'ValidationResult',
]
