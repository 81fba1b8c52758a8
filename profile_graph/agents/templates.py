"""
Role Templates

Precomputed knowledge graphs for the role categories the generator knows
about. A template is returned verbatim when no completion endpoint is usable,
and supplies per-field defaults when a completion reply is partly malformed.
"""

from enum import Enum

from profile_graph.models.knowledge_graph import (
    AttributeRanges,
    KnowledgeGraph,
    PainPointTiers,
    ToolTiers,
)


class RoleCategory(Enum):
    """Role categories, in title-matching priority order."""

    PRODUCT_MANAGER = "product_manager"
    ENGINEER = "engineer"
    SALES = "sales"
    GENERIC = "generic"


# Checked in order; the first category with a matching keyword wins
_TITLE_KEYWORDS: list[tuple[RoleCategory, tuple[str, ...]]] = [
    (RoleCategory.PRODUCT_MANAGER, ("product manager",)),
    (RoleCategory.ENGINEER, ("software engineer", "developer")),
    (RoleCategory.SALES, ("sales",)),
]


PRODUCT_MANAGER_TEMPLATE = KnowledgeGraph(
    tools_used=ToolTiers(
        high_probability=["JIRA", "Confluence", "Figma", "Google Analytics", "Slack"],
        medium_probability=["Amplitude", "Trello", "Asana", "Miro", "Notion"],
        low_probability=["Productboard", "Pendo", "Hotjar", "Optimizely", "FullStory"],
    ),
    biggest_pain_points=PainPointTiers(
        high_probability=[
            "Balancing stakeholder needs and expectations",
            "Prioritizing features with limited resources",
            "Getting accurate customer feedback",
        ],
        medium_probability=[
            "Aligning engineering and design teams",
            "Meeting tight deadlines",
            "Managing technical debt",
        ],
        low_probability=[
            "Defining clear success metrics",
            "Handling changing market conditions",
            "Maintaining product documentation",
        ],
    ),
    attribute_ranges=AttributeRanges(
        pattern_recognition="High",
        associative_memory="Medium",
        emotional_influence="High",
        heuristic_processing="High",
        parallel_processing="High",
        implicit_learning="Medium",
        reflexive_responses="Medium",
        cognitive_biases="Medium",
        logical_reasoning="High",
        abstract_thinking="High",
        deliberative_decision_making="High",
        sequential_processing="Medium",
        cognitive_control="High",
        goal_oriented_planning="High",
        meta_cognition="High",
    ),
    education_level_and_learning=(
        "Bachelor's or Master's degree in Business, Computer Science, or related "
        "field. Continuous learning through industry events, product communities, "
        "and online courses."
    ),
)

ENGINEER_TEMPLATE = KnowledgeGraph(
    tools_used=ToolTiers(
        high_probability=["Git", "VS Code", "Stack Overflow", "JIRA", "Docker"],
        medium_probability=["Jenkins", "Kubernetes", "Postman", "Figma", "Slack"],
        low_probability=["TypeScript", "GraphQL", "MongoDB", "Redis", "Terraform"],
    ),
    biggest_pain_points=PainPointTiers(
        high_probability=[
            "Debugging complex issues",
            "Meeting project deadlines",
            "Technical debt management",
        ],
        medium_probability=[
            "Unclear requirements",
            "Balancing new features vs. maintenance",
            "Context switching between projects",
        ],
        low_probability=[
            "Knowledge sharing across teams",
            "Keeping up with new technologies",
            "Documentation maintenance",
        ],
    ),
    attribute_ranges=AttributeRanges(
        pattern_recognition="High",
        associative_memory="Medium",
        emotional_influence="Low",
        heuristic_processing="High",
        parallel_processing="Medium",
        implicit_learning="Medium",
        reflexive_responses="Low",
        cognitive_biases="Medium",
        logical_reasoning="High",
        abstract_thinking="High",
        deliberative_decision_making="Medium",
        sequential_processing="High",
        cognitive_control="High",
        goal_oriented_planning="Medium",
        meta_cognition="High",
    ),
    education_level_and_learning=(
        "Bachelor's or Master's degree in Computer Science, Software Engineering, "
        "or related field. Continuous learning through documentation, Stack "
        "Overflow, GitHub, technical blogs, and online courses."
    ),
)

SALES_TEMPLATE = KnowledgeGraph(
    tools_used=ToolTiers(
        high_probability=[
            "Salesforce",
            "LinkedIn Sales Navigator",
            "Outreach",
            "ZoomInfo",
            "Slack",
        ],
        medium_probability=["HubSpot", "Gong", "Calendly", "DocuSign", "Zoom"],
        low_probability=["Salesloft", "6sense", "Clearbit", "Pandadoc", "Chorus.ai"],
    ),
    biggest_pain_points=PainPointTiers(
        high_probability=[
            "Meeting sales quotas",
            "Lead quality and quantity",
            "Long sales cycles",
        ],
        medium_probability=[
            "CRM data management",
            "Competitive differentiation",
            "Internal communication barriers",
        ],
        low_probability=[
            "Product knowledge gaps",
            "Price negotiation constraints",
            "Post-sales handoff problems",
        ],
    ),
    attribute_ranges=AttributeRanges(
        pattern_recognition="Medium",
        associative_memory="High",
        emotional_influence="High",
        heuristic_processing="High",
        parallel_processing="Medium",
        implicit_learning="High",
        reflexive_responses="High",
        cognitive_biases="Medium",
        logical_reasoning="Medium",
        abstract_thinking="Medium",
        deliberative_decision_making="Medium",
        sequential_processing="Low",
        cognitive_control="Medium",
        goal_oriented_planning="High",
        meta_cognition="Medium",
    ),
    education_level_and_learning=(
        "Bachelor's degree in Business, Marketing, or related field. Learning "
        "through sales training programs, industry events, and competitor research."
    ),
)

# Every attribute stays at the AttributeRanges default of Medium
GENERIC_TEMPLATE = KnowledgeGraph(
    tools_used=ToolTiers(
        high_probability=[
            "Microsoft Office Suite",
            "Slack",
            "Zoom",
            "Google Workspace",
            "LinkedIn",
        ],
        medium_probability=["Asana", "Trello", "Notion", "Teams", "Salesforce"],
        low_probability=["Tableau", "PowerBI", "Airtable", "Monday.com", "Miro"],
    ),
    biggest_pain_points=PainPointTiers(
        high_probability=[
            "Work-life balance",
            "Communication challenges",
            "Time management",
        ],
        medium_probability=[
            "Information overload",
            "Meeting efficiency",
            "Remote collaboration",
        ],
        low_probability=[
            "Career development",
            "Tool fragmentation",
            "Process inefficiencies",
        ],
    ),
    attribute_ranges=AttributeRanges(),
    education_level_and_learning=(
        "Bachelor's degree with continuous professional development"
    ),
)

TEMPLATES: dict[RoleCategory, KnowledgeGraph] = {
    RoleCategory.PRODUCT_MANAGER: PRODUCT_MANAGER_TEMPLATE,
    RoleCategory.ENGINEER: ENGINEER_TEMPLATE,
    RoleCategory.SALES: SALES_TEMPLATE,
    RoleCategory.GENERIC: GENERIC_TEMPLATE,
}


def resolve_role_category(title: str) -> RoleCategory:
    """Map a free-text job title to its role category.

    Case-insensitive substring match, first match wins:
    product manager > software engineer/developer > sales > generic.
    """
    lowered = title.lower()
    for category, keywords in _TITLE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return RoleCategory.GENERIC


def select_template(title: str) -> KnowledgeGraph:
    """Return the precomputed knowledge graph for a job title.

    Args:
        title: Free-text job title (e.g., "Senior Product Manager")

    Returns:
        Copy of the template KnowledgeGraph for the title's role category
    """
    # Deep copy so callers can never alter the shared template lists
    return TEMPLATES[resolve_role_category(title)].model_copy(deep=True)
