import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from src.modules.announcement.exceptions import AnnouncementError
from src.modules.catalog.models import Category

logger = logging.getLogger(__name__)

FetchStep = Callable[[Category], Awaitable[Sequence]]


@dataclass(frozen=True)
class FetchSuccess:
    source: str
    articles: list


@dataclass(frozen=True)
class FetchFailure:
    source: str
    error: AnnouncementError


FetchOutcome = FetchSuccess | FetchFailure


class FallbackComposer:
    """Runs an ordered chain of article sources until one succeeds.

    Only pipeline failures (``AnnouncementError``) move on to the next source;
    any other exception is a bug and propagates without a fallback hop.
    """

    def __init__(self) -> None:
        self._steps: list[tuple[str, FetchStep]] = []

    def add_step(self, name: str, step: FetchStep) -> None:
        self._steps.append((name, step))

    @property
    def step_names(self) -> list[str]:
        return [name for name, _ in self._steps]

    @staticmethod
    async def attempt(name: str, step: FetchStep, category: Category) -> FetchOutcome:
        try:
            articles = await step(category)
        except AnnouncementError as exc:
            return FetchFailure(source=name, error=exc)
        return FetchSuccess(source=name, articles=list(articles))

    async def run(self, category: Category) -> FetchSuccess:
        if not self._steps:
            raise RuntimeError("FallbackComposer has no steps")

        failures: list[FetchFailure] = []
        for name, step in self._steps:
            outcome = await self.attempt(name, step, category)
            if isinstance(outcome, FetchSuccess):
                logger.info(
                    "Source '%s' returned %d articles for %s (catalog %d)",
                    name, len(outcome.articles), category.key, category.catalog_id,
                )
                return outcome
            logger.error(
                "Source '%s' failed for %s (catalog %d): %s",
                name, category.key, category.catalog_id, outcome.error,
            )
            failures.append(outcome)

        last = failures[-1]
        for earlier in failures[:-1]:
            last.error.add_note(f"after '{earlier.source}' failed: {earlier.error}")
        raise last.error
