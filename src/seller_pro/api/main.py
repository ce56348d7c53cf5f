import logging
import sys
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

# Add src to path for internal imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from seller_pro import __version__
from seller_pro.engine import FeeConfiguration
from seller_pro.api import state
from seller_pro.services.content_service import (
    ContentGenerationError,
    GeneratedContent,
    GenerationInProgressError,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SellerPro API",
    description="Listing price calculator and AI listing copy generator",
    version=__version__
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class FeeConfigRequest(BaseModel):
    target_net_settlement: float
    gst_percentage: float
    shipping_charges: float
    platform_fee_percentage: float
    fixed_fee: float

    def to_config(self) -> FeeConfiguration:
        return FeeConfiguration(**self.model_dump())


class ContentRequest(BaseModel):
    description: str


@app.get("/")
async def root():
    return {"status": "online", "message": "SellerPro API Active"}


@app.get("/pricing/defaults")
async def get_defaults():
    return state.engine.default_configuration().to_dict()


@app.post("/pricing/calculate")
async def calculate_pricing(req: FeeConfigRequest):
    config = req.to_config()
    result = state.engine.calculate(config)
    return jsonable_encoder({
        "result": result,
        "composition": state.engine.price_composition(config, result),
        "validation": state.engine.validate(config),
    })


@app.post("/pricing/validate")
async def validate_pricing(req: FeeConfigRequest):
    return jsonable_encoder(state.engine.validate(req.to_config()))


@app.post("/content/generate", response_model=GeneratedContent, response_model_by_alias=True)
def generate_content(req: ContentRequest):
    if not req.description.strip():
        raise HTTPException(status_code=400, detail="Product description is required")
    if not state.generator.configured:
        raise HTTPException(status_code=503, detail="Content generation is not configured")
    try:
        return state.generator.generate(req.description)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except GenerationInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ContentGenerationError as e:
        logger.warning(f"Content generation failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))


@app.get("/system/status")
async def get_status():
    return {
        "engine_active": True,
        "content_configured": state.generator.configured,
        "content_in_progress": state.generator.in_progress,
        "model": state.settings.openai_model,
        "version": __version__,
    }
