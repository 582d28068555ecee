"""
Pipeline Stage 2c: Topic tip matching.

Scores every static topic against the question, the extracted entity
values and the garden profile:

  +1  for each topic term found in the lower-cased question
  +2  more when that term also appears in an entity value
  +3  once, when a profile relevance rule fires for the topic

The first topic with the strictly highest score wins.  At or above the
threshold exactly one tip is returned (refreshed from the tip store,
falling back to the static title/slug).  Below it, a keyword search over
published tips is the fallback.
"""

from __future__ import annotations

from typing import Any, Mapping

from gardenchat.core.exceptions import TipSearchError
from gardenchat.pipeline.catalog import PipelineCatalog, ProfileRelevanceRule
from gardenchat.schemas.garden import GardenProfile
from gardenchat.schemas.retrieval import TipRecord, TopicEntry
from gardenchat.services.tip_store import SqlTipStore
from gardenchat.utils.logging import get_logger
from gardenchat.utils.text import question_keywords, string_values, unique

logger = get_logger("gardenchat.pipeline.tip_matcher")

PROFILE_BONUS = 3
ENTITY_BONUS = 2


def _rule_applies(rule: ProfileRelevanceRule, topic_key: str, profile: GardenProfile) -> bool:
    if rule.topic_fragment not in topic_key:
        return False
    for attribute in rule.attributes:
        values = getattr(profile, attribute, None) or []
        if rule.needle is None:
            if values:
                return True
        elif any(isinstance(v, str) and rule.needle in v.lower() for v in values):
            return True
    return False


class TopicTipMatcher:
    def __init__(
        self,
        store: SqlTipStore,
        catalog: PipelineCatalog,
        *,
        threshold: int = 2,
        search_limit: int = 6,
    ):
        self.store = store
        self.catalog = catalog
        self.threshold = threshold
        self.search_limit = search_limit

    # ── Scoring (pure) ──────────────────────────────────────────────
    def score(
        self,
        topic: TopicEntry,
        question: str,
        entities: Mapping[str, Any] | None = None,
        profile: GardenProfile | None = None,
    ) -> int:
        question_lc = question.lower()
        entity_values = [v.lower() for v in string_values(entities)]

        score = 0
        for term in topic.terms:
            if term in question_lc:
                score += 1
                if any(term in value for value in entity_values):
                    score += ENTITY_BONUS

        if profile is not None and any(
            _rule_applies(rule, topic.topic_key, profile) for rule in self.catalog.relevance_rules
        ):
            score += PROFILE_BONUS
        return score

    def best_topic(
        self,
        question: str,
        entities: Mapping[str, Any] | None = None,
        profile: GardenProfile | None = None,
    ) -> tuple[TopicEntry | None, int]:
        best: TopicEntry | None = None
        best_score = 0
        for topic in self.catalog.topics:
            score = self.score(topic, question, entities, profile)
            if score > best_score:
                best, best_score = topic, score
        return best, best_score

    def fallback_terms(self, question: str, entities: Mapping[str, Any] | None = None) -> list[str]:
        """Entity values first, then question keywords; de-duplicated."""
        entity_terms = [v.strip().lower() for v in string_values(entities) if v.strip()]
        return unique(entity_terms + question_keywords(question, self.catalog.stop_words))

    # ── Lookup ──────────────────────────────────────────────────────
    async def match(
        self,
        question: str,
        entities: Mapping[str, Any] | None = None,
        profile: GardenProfile | None = None,
    ) -> list[TipRecord]:
        topic, score = self.best_topic(question, entities, profile)

        try:
            if topic is not None and score >= self.threshold:
                logger.info("[TIPS] Topic '%s' matched (score=%d)", topic.topic_key, score)
                stored = await self.store.get_by_slug_async(topic.tip.slug)
                if stored is not None:
                    return [stored]
                return [TipRecord(title=topic.tip.title, slug=topic.tip.slug)]

            terms = self.fallback_terms(question, entities)
            if not terms:
                logger.info("[TIPS] No topic match and no search terms")
                return []

            tips = await self.store.search_async(terms, self.search_limit)
        except Exception as e:
            logger.error("[TIPS] Tip lookup failed: %s", e)
            raise TipSearchError(details=str(e)) from e

        logger.info("[TIPS] Keyword search (%d term(s)) -> %d tip(s)", len(terms), len(tips))
        return tips
