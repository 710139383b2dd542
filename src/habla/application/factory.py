"""
Service Factory
Centralizes the wiring of stores, catalog and services from configuration.
"""

import logging

from habla.application.config import AppConfig
from habla.application.matching.matcher import FuzzyMatcher
from habla.application.phrases import PhraseCatalog
from habla.application.quiz_service import QuizService
from habla.application.review_service import ReviewScheduler
from habla.domain.ports import ProgressStore
from habla.infrastructure.stores.json_store import JsonProgressStore
from habla.infrastructure.stores.memory import InMemoryProgressStore

logger = logging.getLogger(__name__)


def get_progress_store(config: AppConfig) -> ProgressStore:
    """
    Returns the ProgressStore implementation selected by config.
    """
    if config.store_backend == "memory":
        return InMemoryProgressStore()

    return JsonProgressStore(config.progress_file)


def load_catalog(config: AppConfig) -> PhraseCatalog:
    if config.phrases_file is None:
        raise ValueError("No phrases file configured")
    return PhraseCatalog.from_file(config.phrases_file)


def build_quiz_service(
    config: AppConfig,
    store: ProgressStore | None = None,
    catalog: PhraseCatalog | None = None,
) -> QuizService:
    catalog = catalog or load_catalog(config)
    store = store or get_progress_store(config)
    logger.debug(f"Using {type(store).__name__} with {len(catalog)} phrases")

    scheduler = ReviewScheduler(store, catalog.phrases, params=config.schedule_parameters())
    return QuizService(scheduler, catalog, FuzzyMatcher(config.match_options()))
