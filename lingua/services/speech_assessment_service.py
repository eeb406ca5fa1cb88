"""Score a spoken-response transcript against the expected phrase."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from lingua.schemas.assessment_schema import FeedbackTier, SpeechAssessment
from lingua.schemas.lesson_schema import SpeakingRubric
from lingua.utils.text_similarity import normalize_text, similarity

logger = logging.getLogger(__name__)

EXCELLENT_THRESHOLD = 0.85
GOOD_THRESHOLD = 0.65
CALIBRATION_OFFSET = 0.05

TIER_MESSAGES = {
    FeedbackTier.EXCELLENT: "Excellent! Your pronunciation was very clear.",
    FeedbackTier.GOOD: "Good attempt. The overall phrase was understandable.",
    FeedbackTier.NEEDS_WORK: "Keep practicing. The phrase needs more work.",
}
SLOW_DOWN_SUGGESTION = "Try speaking more slowly and clearly."
REPLAY_SUGGESTION = "Listen to the model answer below, then try again."


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def feedback_tier(raw_score: float) -> FeedbackTier:
    if raw_score >= EXCELLENT_THRESHOLD:
        return FeedbackTier.EXCELLENT
    if raw_score >= GOOD_THRESHOLD:
        return FeedbackTier.GOOD
    return FeedbackTier.NEEDS_WORK


def _element_feedback(
    normalized_transcript: str, expected_elements: Iterable[str]
) -> Tuple[List[str], List[str]]:
    confirmations: List[str] = []
    suggestions: List[str] = []
    for element in expected_elements:
        needle = normalize_text(element)
        if not needle:
            logger.debug("[SPEECH] expected element %r is empty once normalised, skipped", element)
            continue
        if needle in normalized_transcript:
            confirmations.append(f'"{element}" was recognized correctly.')
        else:
            suggestions.append(f'Try emphasising "{element}", it was not clearly detected.')
    return confirmations, suggestions


def assess(
    transcript: Optional[str],
    expected_text: str,
    expected_elements: Iterable[str] = (),
) -> SpeechAssessment:
    """Compare a transcript with ``expected_text`` and check required elements.

    One similarity measurement feeds both scores: the reported match score is
    nudged up by the calibration offset and intelligibility nudged down, each
    clamped to ``[0, 1]`` and rounded to two decimals. An empty or missing
    transcript is a regular input and scores as a complete mismatch.
    """

    spoken = transcript or ""
    raw_score = similarity(spoken, expected_text)
    tier = feedback_tier(raw_score)

    confirmations, suggestions = _element_feedback(normalize_text(spoken), expected_elements)
    feedback = [TIER_MESSAGES[tier], *confirmations]
    if raw_score < EXCELLENT_THRESHOLD:
        suggestions.extend([SLOW_DOWN_SUGGESTION, REPLAY_SUGGESTION])

    logger.debug(
        "[SPEECH] similarity=%.3f tier=%s recognized_elements=%s",
        raw_score,
        tier.value,
        len(confirmations),
    )

    return SpeechAssessment(
        transcript=spoken,
        expected=expected_text,
        match_score=round(_clamp(raw_score + CALIBRATION_OFFSET), 2),
        intelligibility_score=round(_clamp(raw_score - CALIBRATION_OFFSET), 2),
        tier=tier,
        feedback=feedback,
        suggestions=suggestions,
    )


def expected_phrase(rubric: SpeakingRubric) -> str:
    """The model answer of a rubric, falling back to its prompt."""

    if rubric.sample_response is not None and rubric.sample_response.text:
        return rubric.sample_response.text
    return rubric.prompt


def assess_rubric(transcript: Optional[str], rubric: SpeakingRubric) -> SpeechAssessment:
    return assess(transcript, expected_phrase(rubric), rubric.expected_elements)
