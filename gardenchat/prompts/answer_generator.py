"""
Prompt templates for Stage 3: answer generation.

The system message fixes tone; the user message carries the question,
the parsed intents, the trimmed plant results, related tips and, when a
garden profile is known, the personalisation block.
"""

from __future__ import annotations

import json
from typing import Any

SYSTEM_PROMPT = """You are an experienced gardener chatting with a neighbour about their garden.

Answer the question directly, then add the details that help.

Guidelines:
1. Sound like a conversation, not a blog post. Use contractions and everyday words.
2. Lead with the answer; skip introductions and summaries.
3. Be definite and use the active voice.
4. Give concrete amounts and timing ("water once a week", "feed in early April"), never "regularly".
5. Phrase advice as what to do rather than what to avoid.
6. Use the related articles for facts but do not mention them.
7. Do not sign off ("Happy gardening!", "Good luck!"); the conversation may continue.
8. When garden information is provided, open with one sentence tying the answer to that garden
   (zone, soil, sunlight, themes) and prefer plants that suit it.
9. If the garden's conditions work against what the user asks about, say so plainly and offer alternatives."""

_FERTILIZER_GUIDANCE = """If you're discussing fertilizers, include:
- NPK ratios
- product types that work well (organic, slow-release, liquid)
- application rates
- timing tied to the calendar or the plant ("early April", "after first bloom")
- signs on the plant that it needs feeding"""

_CARE_GUIDANCE = """If you're discussing plant care, include:
- step-by-step instructions
- common problems and how to fix them
- regional considerations when known"""


def _join(values: Any) -> str:
    if isinstance(values, list):
        return ", ".join(str(v) for v in values) or "Not specified"
    return str(values) if values not in (None, "") else "Not specified"


def build_profile_section(summary: dict[str, Any]) -> str:
    """Personalisation block for a known garden."""
    return f"""
IMPORTANT - USER'S GARDEN INFORMATION:
{json.dumps(summary, indent=2)}

PERSONALIZATION REQUIREMENTS:
1. Personalize the answer using the garden information above.
2. Begin with a short statement that references their garden conditions.
3. Explain how each recommendation fits their garden.

Key Garden Considerations:
- USDA Zones: {_join(summary.get("zones"))}
- Region: {_join(summary.get("regions"))}
- Sunlight: {_join(summary.get("sunlight"))}
- Soil Type: {_join(summary.get("soilTexture"))}
- Soil pH: {_join(summary.get("soilPh"))}
- Drainage: {_join(summary.get("soilDrainage"))}
- Garden Themes: {_join(summary.get("gardenThemes"))}
- Wildlife Interests: {_join(summary.get("wildlifeAttraction"))}
- Challenges to Address: {_join(summary.get("resistanceChallenges"))}
- Preferred Plant Types: {_join(summary.get("plantTypes"))}
"""


def build_answer_prompt(
    question: str,
    intents: list[dict[str, Any]],
    plants: list[dict[str, Any]],
    tips: list[dict[str, Any]],
    profile_summary: dict[str, Any] | None = None,
) -> str:
    """
    Full user message for answer generation.

    ``plants`` are already trimmed and camel-cased; ``tips`` are
    ``{title, slug}`` pairs.
    """
    sections = [
        f"Question: {question}",
        f"Parsed Intents:\n{json.dumps(intents, indent=2)}",
        f"Plant Database Results ({len(plants)} results):\n{json.dumps(plants, indent=2)}",
        f"Related Blog Posts:\n{json.dumps(tips, indent=2)}",
    ]
    if profile_summary is not None:
        sections.append(build_profile_section(profile_summary))

    sections.append(
        "Give a practical answer based on the information above. "
        "Focus on advice a gardener can act on right away."
    )
    if profile_summary is not None:
        sections.append(
            "When recommending plants, prefer those that match the user's soil, sunlight "
            "and zone, and their preferences for flower colors, themes and wildlife."
        )
    sections.append(_FERTILIZER_GUIDANCE)
    sections.append(_CARE_GUIDANCE)
    sections.append(
        "If information is missing, fall back on general gardening knowledge. "
        "Write in a friendly, direct style."
    )
    return "\n\n".join(sections)
