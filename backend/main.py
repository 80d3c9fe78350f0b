"""
FastAPI backend for PSL scoring: score a landmark scan, browse the routine catalog.
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from typing import Dict, List

# Ensure project root is on path so config and psl_scorer resolve
_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from psl_scorer.analyzer import FaceAnalyzer
from psl_scorer.body import BMI_CATEGORY_COLORS, BodyStats, Gender
from psl_scorer.errors import MissingLandmarksError, UnknownRoutineError
from psl_scorer.keypoints import regions_from_dict

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


class PointBody(BaseModel):
    x: float
    y: float


class BodyStatsBody(BaseModel):
    height_cm: float = Field(..., gt=0)
    weight_kg: float = Field(..., gt=0)
    waist_cm: float = Field(..., gt=0)
    shoulder_cm: float = Field(..., gt=0)
    gender: Gender = Gender.MALE
    age: int | None = None
    neck_cm: float | None = None


class ScanBody(BaseModel):
    landmarks: Dict[str, List[PointBody]]
    body: BodyStatsBody


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Catalog is immutable, so one analyzer serves every request
    app.state.analyzer = FaceAnalyzer()
    logger.info("Loaded %d routines", len(app.state.analyzer.catalog))
    yield


def get_analyzer(request: Request) -> FaceAnalyzer:
    return request.app.state.analyzer


app = FastAPI(title="PSL Scoring API", lifespan=lifespan)

# CORS: allow common dev origins (Vite default 5173, preview/serve often 8080, etc.)
_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:8080",
    "http://127.0.0.1:8080",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Health (verify this server is running) ---

@app.get("/api/health")
def api_health(analyzer: FaceAnalyzer = Depends(get_analyzer)):
    return {"status": "ok", "service": "psl-scoring-api", "routines": len(analyzer.catalog)}


# --- Scan ---

@app.post("/api/scan")
def api_scan(payload: ScanBody, analyzer: FaceAnalyzer = Depends(get_analyzer)):
    regions = regions_from_dict(
        {name: [(p.x, p.y) for p in points] for name, points in payload.landmarks.items()}
    )
    b = payload.body
    body = BodyStats(
        height_cm=b.height_cm,
        weight_kg=b.weight_kg,
        waist_cm=b.waist_cm,
        shoulder_cm=b.shoulder_cm,
        gender=b.gender,
        age=b.age,
        neck_cm=b.neck_cm,
    )
    try:
        report = analyzer.analyze(regions, body)
    except MissingLandmarksError as e:
        logger.info("Rejected scan: %s", e)
        raise HTTPException(
            status_code=422,
            detail={"message": str(e), "missing": e.missing},
        ) from e
    out = report.to_dict()
    out["body"] = {
        "bmi": body.bmi,
        "bmi_category": body.bmi_category.value,
        "bmi_category_color": BMI_CATEGORY_COLORS[body.bmi_category],
        "waist_to_shoulder_ratio": body.waist_to_shoulder_ratio,
    }
    return out


# --- Routines ---

@app.get("/api/routines")
def api_list_routines(analyzer: FaceAnalyzer = Depends(get_analyzer)):
    return [entry.to_dict() for entry in analyzer.catalog]


@app.get("/api/routines/{title}")
def api_get_routine(title: str, analyzer: FaceAnalyzer = Depends(get_analyzer)):
    try:
        return analyzer.catalog[title].to_dict()
    except UnknownRoutineError:
        raise HTTPException(status_code=404, detail="Routine not found") from None
