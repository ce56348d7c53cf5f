"""Shared service instances for the API routers."""
from ..config.settings import get_settings
from ..engine import PricingEngine
from ..services.content_service import ContentGenerator

settings = get_settings()
engine = PricingEngine(settings)
generator = ContentGenerator(settings)
