import logging
import time
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from habla.application.config import resolve_config
from habla.application.factory import build_quiz_service
from habla.application.matching.matcher import FuzzyMatcher
from habla.application.quiz_service import EmptyAnswerError, QuizService
from habla.consts import VERSION
from habla.domain.models import Phrase, ProgressRecord, ReviewStats

logger = logging.getLogger("habla.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"habla server v{VERSION} starting up...")
    yield
    logger.info("habla server shutting down...")


app = FastAPI(
    title="habla server",
    description="Review scheduling and answer checking for the habla browser extension.",
    version=VERSION,
    lifespan=lifespan,
)

start_time = time.time()


@lru_cache
def get_quiz_service() -> QuizService:
    return build_quiz_service(resolve_config())


ServiceDep = Annotated[QuizService, Depends(get_quiz_service)]


# ---------- Models ----------


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


class PhraseResponse(BaseModel):
    id: int
    text: str
    english: str | None = None
    category: str | None = None
    emoji: str | None = None
    image: str | None = None

    @classmethod
    def from_phrase(cls, phrase: Phrase) -> "PhraseResponse":
        return cls(
            id=phrase.id,
            text=phrase.text,
            english=phrase.english,
            category=phrase.category,
            emoji=phrase.emoji,
            image=phrase.image,
        )


class ProgressResponse(BaseModel):
    phrase_id: int
    ease_factor: float
    interval: int
    repetitions: int
    next_review: int
    last_review: int | None
    total_reviews: int
    correct_reviews: int

    @classmethod
    def from_record(cls, record: ProgressRecord) -> "ProgressResponse":
        return cls(**record.to_dict())


class FeedbackResponse(BaseModel):
    type: str
    message: str


class CheckRequest(BaseModel):
    answer: str
    expected: str
    max_distance: int | None = Field(default=None, ge=0)
    # Unset thresholds fall back to the resolved configuration
    min_similarity: float | None = Field(default=None, ge=0.0, le=1.0)
    strict_accents: bool | None = None


class CheckResponse(BaseModel):
    matches: bool
    similarity: float
    exact: bool
    distance: int | None
    feedback: FeedbackResponse


class ReviewRequest(BaseModel):
    phrase_id: int
    correct: bool
    skipped: bool = False


class SubmitRequest(BaseModel):
    phrase_id: int
    answer: str


class SubmitResponse(BaseModel):
    matches: bool
    similarity: float
    expected: str
    feedback: FeedbackResponse
    progress: ProgressResponse


class StatsResponse(BaseModel):
    total_phrases: int
    learned: int
    mastered: int
    due_now: int
    due_today: int
    average_ease: float
    total_reviews: int
    accuracy: float

    @classmethod
    def from_stats(cls, stats: ReviewStats) -> "StatsResponse":
        return cls(**vars(stats))


# ---------- Routes ----------


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


@app.get("/phrases/next", response_model=PhraseResponse)
async def next_phrase(service: ServiceDep):
    phrase = await service.next_phrase()
    if phrase is None:
        raise HTTPException(status_code=404, detail="No phrases available")
    return PhraseResponse.from_phrase(phrase)


@app.post("/answers/check", response_model=CheckResponse)
async def check_answer(req: CheckRequest):
    """Match an answer without recording a review."""
    config = resolve_config(
        {
            "max_distance": req.max_distance,
            "min_similarity": req.min_similarity,
            "strict_accents": req.strict_accents,
        }
    )
    matcher = FuzzyMatcher(config.match_options())
    result = matcher.match(req.answer, req.expected)
    feedback = matcher.feedback(req.answer, req.expected)
    return CheckResponse(
        matches=result.matches,
        similarity=result.similarity,
        exact=result.exact,
        distance=result.distance,
        feedback=FeedbackResponse(type=feedback.type.value, message=feedback.message),
    )


@app.post("/reviews", response_model=ProgressResponse)
async def record_review(req: ReviewRequest, service: ServiceDep):
    if service.catalog.get(req.phrase_id) is None:
        raise HTTPException(status_code=404, detail=f"Unknown phrase {req.phrase_id}")

    try:
        record = await service.scheduler.record_review(req.phrase_id, req.correct, req.skipped)
    except Exception as e:
        logger.error(f"Recording review failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e
    return ProgressResponse.from_record(record)


@app.post("/quiz/submit", response_model=SubmitResponse)
async def submit_answer(req: SubmitRequest, service: ServiceDep):
    try:
        result = await service.submit(req.phrase_id, req.answer)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=f"Unknown phrase {req.phrase_id}") from e
    except EmptyAnswerError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Submitting answer failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    return SubmitResponse(
        matches=result.match.matches,
        similarity=result.match.similarity,
        expected=result.phrase.text,
        feedback=FeedbackResponse(type=result.feedback.type.value, message=result.feedback.message),
        progress=ProgressResponse.from_record(result.progress),
    )


@app.get("/stats", response_model=StatsResponse)
async def get_stats(service: ServiceDep):
    stats = await service.scheduler.get_stats()
    return StatsResponse.from_stats(stats)
