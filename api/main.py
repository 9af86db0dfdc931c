"""
PromoScanner API - Price Comparison Endpoints
Matches posted vendor listings on the fly; nothing is stored.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Union

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from matching.config import load_config
from matching.groups import BEST_DEALS_LIMIT
from matching.pipeline import ProductMatcher
from standardization.category_classifier import CategoryClassifier, get_category_name
from standardization.schema import ProductRecord

logger = logging.getLogger(__name__)

app = FastAPI(title="PromoScanner API", version="0.3.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Overrides come from $PROMOSCANNER_CONFIG when set
config = load_config()


class RecordIn(BaseModel):
    vendor: str
    name: str
    price: Optional[Union[Decimal, str]] = None
    currency: str = "TRY"
    url: str = ""
    min_order_qty: int = 1
    requires_quote: bool = False
    category: str = ""

    def to_record(self) -> ProductRecord:
        return ProductRecord.from_dict(self.model_dump())


class CompareRequest(BaseModel):
    records: List[RecordIn]
    best_deals: int = Field(default=BEST_DEALS_LIMIT, ge=0, le=500)


@app.get("/api/health")
async def health():
    return {"status": "ok"}


@app.get("/api/categories")
async def get_categories():
    """Product types in matching order, with display names and thresholds."""
    return [
        {
            "tag": tag,
            "name": get_category_name(tag),
            "threshold": config.threshold_for(tag),
        }
        for tag in CategoryClassifier().tags
    ]


@app.post("/api/compare")
def compare(request: CompareRequest):
    """Match the posted records across vendors."""
    records = [r.to_record() for r in request.records]
    result = ProductMatcher(config).run(records)
    logger.info(f"/api/compare: {len(records)} records → {len(result.groups)} groups")

    return {
        "stats": result.stats,
        "groups": [g.to_dict() for g in result.groups],
        "best_deals": [g.to_dict() for g in result.best_deals(request.best_deals)],
    }


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%H:%M:%S'
    )
    uvicorn.run(app, host="0.0.0.0", port=8000)
