"""
Completion Reply Reconciler

Merges an untrusted, possibly malformed completion reply with the role
template, one field at a time. Valid fields from the reply are kept, anything
missing or of the wrong shape is taken from the template. A partially valid
reply is blended rather than discarded, and reconcile() never raises.

Reply shape (labels as requested in the prompt):
    {
        "Tools Used": {"High Probability": [...], "Medium Probability": [...], ...},
        "Biggest Pain Points": {"High Probability": [...], ...},
        "Attribute Ranges": {"Pattern Recognition": "High", ...},
        "Education Level & Learning Approach": "..."
    }
"""

from collections.abc import Mapping
from typing import Any, NamedTuple, Optional

from profile_graph.agents.templates import select_template
from profile_graph.models.knowledge_graph import (
    ATTRIBUTE_FIELDS,
    ATTRIBUTE_LEVELS,
    PAIN_POINTS_TIER_CAP,
    TIER_FIELDS,
    TOOLS_TIER_CAP,
    KnowledgeGraph,
)
from profile_graph.models.profile import ProfileInput
from profile_graph.utils.logger import get_logger

EDUCATION_LABEL = "Education Level & Learning Approach"
ATTRIBUTES_LABEL = "Attribute Ranges"
MIN_EDUCATION_LENGTH = 11


class TierSection(NamedTuple):
    """A tiered list section of the graph and where it sits in the reply."""

    field: str
    label: str
    cap: int


TIER_SECTIONS = (
    TierSection("tools_used", "Tools Used", TOOLS_TIER_CAP),
    TierSection("biggest_pain_points", "Biggest Pain Points", PAIN_POINTS_TIER_CAP),
)


def _section(raw: Any, label: str) -> Mapping[str, Any]:
    """Return raw[label] if it is a mapping, else an empty mapping."""
    if not isinstance(raw, Mapping):
        return {}
    value = raw.get(label)
    return value if isinstance(value, Mapping) else {}


def _valid_tier(value: Any) -> bool:
    return isinstance(value, list)


def _valid_level(value: Any) -> bool:
    return isinstance(value, str) and value in ATTRIBUTE_LEVELS


def _valid_education(value: Any) -> bool:
    return isinstance(value, str) and len(value) >= MIN_EDUCATION_LENGTH


def reconcile(
    raw: Any, profile: ProfileInput, correlation_id: Optional[str] = None
) -> KnowledgeGraph:
    """Reconcile a parsed completion reply against the profile's template.

    Args:
        raw: Parsed JSON reply of any shape (dict, list, None, str, ...)
        profile: Profile the reply was generated for; its title picks the template
        correlation_id: Optional correlation ID for logging

    Returns:
        Fully populated KnowledgeGraph
    """
    logger: Any = get_logger(
        correlation_id=correlation_id,
        phase="generation",
        component="reconciler",
    )
    template = select_template(profile.title)
    defaulted: list[str] = []

    graph_data: dict[str, Any] = {}

    for section in TIER_SECTIONS:
        raw_section = _section(raw, section.label)
        template_section = getattr(template, section.field)
        tiers: dict[str, list[str]] = {}
        for tier_field, tier_label in TIER_FIELDS.items():
            value = raw_section.get(tier_label)
            if _valid_tier(value):
                # Non-string items (null, numbers, objects) are dropped
                items = [item for item in value if isinstance(item, str)]
                tiers[tier_field] = items[: section.cap]
            else:
                tiers[tier_field] = list(getattr(template_section, tier_field))
                defaulted.append(f"{section.label}.{tier_label}")
        graph_data[section.field] = tiers

    raw_attributes = _section(raw, ATTRIBUTES_LABEL)
    attributes: dict[str, str] = {}
    for attribute_field, attribute_label in ATTRIBUTE_FIELDS.items():
        value = raw_attributes.get(attribute_label)
        if value is None:
            # "Cognitive Control (Inhibition)" may come back as "Cognitive Control"
            value = raw_attributes.get(attribute_label.split(" (")[0])
        if _valid_level(value):
            attributes[attribute_field] = value
        else:
            attributes[attribute_field] = getattr(
                template.attribute_ranges, attribute_field
            )
            defaulted.append(f"{ATTRIBUTES_LABEL}.{attribute_label}")
    graph_data["attribute_ranges"] = attributes

    education = raw.get(EDUCATION_LABEL) if isinstance(raw, Mapping) else None
    if _valid_education(education):
        graph_data["education_level_and_learning"] = education
    else:
        graph_data["education_level_and_learning"] = (
            template.education_level_and_learning
        )
        defaulted.append(EDUCATION_LABEL)

    if defaulted:
        logger.debug(
            "Fields taken from template",
            title=profile.title,
            defaulted_count=len(defaulted),
            defaulted_fields=defaulted,
        )

    return KnowledgeGraph.model_validate(graph_data)


def knowledge_graph_to_raw(graph: KnowledgeGraph) -> dict[str, Any]:
    """Render a KnowledgeGraph in the labelled shape a completion reply uses."""
    raw: dict[str, Any] = {}
    for section in TIER_SECTIONS:
        tiers = getattr(graph, section.field)
        raw[section.label] = {
            tier_label: list(getattr(tiers, tier_field))
            for tier_field, tier_label in TIER_FIELDS.items()
        }
    raw[ATTRIBUTES_LABEL] = {
        attribute_label: getattr(graph.attribute_ranges, attribute_field)
        for attribute_field, attribute_label in ATTRIBUTE_FIELDS.items()
    }
    raw[EDUCATION_LABEL] = graph.education_level_and_learning
    return raw
