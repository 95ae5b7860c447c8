"""
FastAPI wrapper for the keyword density toolkit - Vercel Serverless Function.

This module exposes density analysis, optimization and validation as a
REST API for deployment on Vercel.
"""

from typing import Literal, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from keyword_density import __version__
from keyword_density.analyzer import DensityAnalyzer
from keyword_density.config import DEFAULT_LANGUAGE
from keyword_density.models import DensityRange, Keyword
from keyword_density.optimizer import DensityOptimizer
from keyword_density.page_config import (
    PAGE_KEYWORD_CONFIGS,
    PAGE_OPTIMIZATION_STRATEGIES,
    generate_keyword_list,
    get_distribution_rule,
    get_keyword_competition_data,
    get_page_optimization_strategy,
    get_tier_weight,
    validate_keyword_config,
)
from keyword_density.validator import DensityValidator

app = FastAPI(
    title="Keyword Density API",
    description="Keyword density analysis, optimization and validation for troubleshooting content",
    version=__version__,
)

# Enable CORS for all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

validator = DensityValidator()

Language = Literal["zh", "en"]


class DensityRangeInput(BaseModel):
    """Inclusive density range in percent."""
    min: float = Field(3.0, ge=0)
    max: float = Field(5.0, ge=0)


class KeywordInput(BaseModel):
    """Single keyword with an optional own range."""
    phrase: str
    min_density: Optional[float] = None
    max_density: Optional[float] = None


class DensityRequest(BaseModel):
    """Request model for analysis and optimization."""
    content: str = Field(..., description="Text to analyze, may contain HTML")
    keywords: list[KeywordInput] = Field(
        default_factory=list,
        description="Keywords to track. Defaults to the built-in keyword list.",
    )
    page_type: Optional[str] = Field(None, description="Track a page type's configured keyword plan")
    language: Language = Field(DEFAULT_LANGUAGE, description="Phrase variant of the page keyword plan")
    target_density: DensityRangeInput = Field(default_factory=DensityRangeInput)


class ValidateRequest(BaseModel):
    """Request model for the primary keyword gate."""
    category: str
    content: str


class BatchValidateRequest(BaseModel):
    """Request model for batch validation."""
    pages: list[ValidateRequest]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


def _to_range(min_density: float, max_density: float) -> DensityRange:
    try:
        return DensityRange(min=min_density, max=max_density)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


def _tracked_keywords(request: DensityRequest) -> list[Keyword]:
    keywords = []
    for item in request.keywords:
        target = None
        if item.min_density is not None and item.max_density is not None:
            target = _to_range(item.min_density, item.max_density)
        keywords.append(Keyword(phrase=item.phrase, target_density=target))
    if request.page_type:
        keywords.extend(generate_keyword_list(request.page_type, request.language))
    return keywords


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@app.post("/api/analyze")
async def analyze(request: DensityRequest):
    """Analyze keyword density of the submitted content."""
    target = _to_range(request.target_density.min, request.target_density.max)
    analyzer = DensityAnalyzer(_tracked_keywords(request), target)
    return analyzer.analyze(request.content).to_dict()


@app.post("/api/optimize")
async def optimize(request: DensityRequest):
    """Optimize keyword density of the submitted content."""
    target = _to_range(request.target_density.min, request.target_density.max)
    optimizer = DensityOptimizer(_tracked_keywords(request), target)
    return optimizer.optimize(request.content).to_dict()


@app.post("/api/validate")
async def validate(request: ValidateRequest):
    """Validate the primary keyword density of a category's content."""
    result = validator.validate(request.category, request.content)
    payload = result.to_dict()
    payload["report"] = validator.generate_report(result)
    return payload


@app.post("/api/validate/batch")
async def validate_batch(request: BatchValidateRequest):
    """Validate several pages at once."""
    results = validator.validate_many(page.model_dump() for page in request.pages)
    return {
        "results": [r.to_dict() for r in results],
        "valid_count": sum(1 for r in results if r.is_valid),
        "total": len(results),
    }


@app.get("/api/pages/{page_type}/keywords")
async def page_keywords(page_type: str, language: Language = Query(DEFAULT_LANGUAGE)):
    """List the keyword plan configured for a page type."""
    if page_type not in PAGE_KEYWORD_CONFIGS:
        raise HTTPException(status_code=404, detail=f"Unknown page type: {page_type}")
    validation = validate_keyword_config(page_type)
    return {
        "page_type": page_type,
        "language": language,
        "keywords": [
            {
                "phrase": kw.phrase,
                "tier": kw.tier.value if kw.tier else None,
                "importance": kw.importance,
                "weight": get_tier_weight(kw.tier) if kw.tier else None,
                "target_density": kw.target_density.to_dict() if kw.target_density else None,
            }
            for kw in generate_keyword_list(page_type, language)
        ],
        "distribution": get_distribution_rule(page_type),
        "is_valid": validation.is_valid,
        "errors": validation.errors,
        "warnings": validation.warnings,
    }


@app.get("/api/pages/{page_type}/strategy")
async def page_strategy(page_type: str):
    """Show the title and content optimization strategy for a page type."""
    if page_type not in PAGE_OPTIMIZATION_STRATEGIES:
        raise HTTPException(status_code=404, detail=f"Unknown page type: {page_type}")
    return {"page_type": page_type, **get_page_optimization_strategy(page_type)}


@app.get("/api/keywords/{keyword}/competition")
async def keyword_competition(keyword: str):
    """Show search competition data for a keyword."""
    return {"keyword": keyword, **get_keyword_competition_data(keyword)}


@app.get("/api/info")
async def api_info():
    """API information endpoint."""
    return {
        "name": "Keyword Density API",
        "version": __version__,
        "endpoints": {
            "POST /api/analyze": "Analyze keyword density",
            "POST /api/optimize": "Move keyword densities into range",
            "POST /api/validate": "Check a category's primary keyword against the 3-5% band",
            "POST /api/validate/batch": "Validate several pages",
            "GET /api/pages/{page_type}/keywords": "Show a page type's keyword plan",
            "GET /api/pages/{page_type}/strategy": "Show a page type's optimization strategy",
            "GET /api/keywords/{keyword}/competition": "Show search competition data for a keyword",
            "GET /api/health": "Health check",
        },
        "page_types": sorted(PAGE_KEYWORD_CONFIGS),
        "categories": sorted(validator.primary_keywords),
    }
