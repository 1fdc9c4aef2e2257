"""Keyword rule engine for behavioral tags.

Matching is plain substring containment on lowercased text. A keyword can
therefore hit inside a longer unrelated word ("reset" in "preset"); that is
accepted rather than tokenizing, since trigger phrases are multi-word and
punctuation-sensitive.
"""

from tradejournal.analysis.catalog import CATALOG, TagDefinition
from tradejournal.models.journal import DetectedTag

# A tag is emitted only when its best trigger group beats this.
CONFIDENCE_THRESHOLD = 0.5


def _match_tag(content_lower: str, definition: TagDefinition) -> DetectedTag | None:
    max_confidence = 0.0
    matched: list[str] = []

    for group in definition.triggers:
        for keyword in group.keywords:
            if keyword.lower() in content_lower:
                max_confidence = max(max_confidence, group.confidence)
                matched.append(keyword)

    if max_confidence <= CONFIDENCE_THRESHOLD:
        return None

    return DetectedTag(
        tag=definition.name,
        severity=definition.severity,
        confidence=max_confidence,
        matched_phrases=list(dict.fromkeys(matched)),
    )


def detect_tags(content: str) -> list[DetectedTag]:
    """Detect catalog tags in journal text.

    Confidence per tag is the maximum over its matching trigger groups,
    not a sum.

    Args:
        content: Raw entry text.

    Returns:
        At most one DetectedTag per tag name, in catalog order.
    """
    content_lower = content.lower()
    tags = []
    for definition in CATALOG.values():
        detected = _match_tag(content_lower, definition)
        if detected is not None:
            tags.append(detected)
    return tags


def merge_tags(
    classifier_tags: list[DetectedTag],
    rule_tags: list[DetectedTag],
) -> list[DetectedTag]:
    """Merge classifier tags with rule-engine tags.

    Classifier tags win per tag name; rule tags fill in the rest.
    """
    merged = []
    seen = set()
    for tag in classifier_tags:
        if tag.tag not in seen:
            merged.append(tag)
            seen.add(tag.tag)
    for tag in rule_tags:
        if tag.tag not in seen:
            merged.append(tag)
            seen.add(tag.tag)
    return merged
