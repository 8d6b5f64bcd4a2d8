"""Question source: remote question set with a built-in fallback."""
import asyncio
import logging

import aiohttp

from quiz_bot.exceptions import QuestionSourceError
from quiz_bot.models import QuestionSet, ResolvedQuestions
from quiz_bot.services.fallback_questions import FALLBACK_QUESTIONS
from quiz_bot.services.question_parser import parse_questions

logger = logging.getLogger(__name__)


class QuestionSource:
    """Resolves the question set for one session.

    Single attempt per call, no retries and no timeout of its own; the caller
    retries by calling resolve() again and applies its own timeout if it wants one.
    Holds no state between calls.
    """

    def __init__(self, url: str, fallback: QuestionSet = FALLBACK_QUESTIONS):
        self.url = url
        self._fallback = fallback

    async def resolve(self) -> ResolvedQuestions:
        """
        Fetch the question set from the remote source.

        Never raises for remote problems: transport errors, non-2xx statuses,
        undecodable bodies and invalid payloads all resolve to the fallback set.
        """
        try:
            data = await self._fetch_payload()
            questions = parse_questions(data)
        except QuestionSourceError as e:
            return self.fallback(str(e))

        logger.info("Loaded %d questions from %s", len(questions), self.url)
        return ResolvedQuestions(questions=questions)

    def fallback(self, reason: str) -> ResolvedQuestions:
        """Resolution made of the built-in questions."""
        logger.warning("Using offline questions: %s", reason)
        return ResolvedQuestions(questions=self._fallback, from_fallback=True, reason=reason)

    async def _fetch_payload(self):
        """GET the endpoint and decode its JSON body."""
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(self.url) as response:
                    if not 200 <= response.status < 300:
                        raise QuestionSourceError(
                            f"{self.url} answered with HTTP {response.status}"
                        )
                    # content_type=None: tunnels and JSP backends often send text/plain
                    return await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise QuestionSourceError(f"request to {self.url} failed: {e!r}") from e
        except ValueError as e:
            raise QuestionSourceError(f"{self.url} returned a body that is not JSON: {e}") from e
