"""
Knowledge Graph Models

Pydantic models for the generated profile knowledge graph: probability tiers of
tools and pain points, the fixed set of cognitive attribute ratings, and the
education/learning summary. Models are frozen; a graph is never mutated after
it is built.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

AttributeLevel = Literal["Low", "Medium", "High"]

ATTRIBUTE_LEVELS: tuple[str, ...] = ("Low", "Medium", "High")

TOOLS_TIER_CAP = 5
PAIN_POINTS_TIER_CAP = 4

# Field name -> label used in prompts and in completion replies
ATTRIBUTE_FIELDS: dict[str, str] = {
    "pattern_recognition": "Pattern Recognition",
    "associative_memory": "Associative Memory",
    "emotional_influence": "Emotional Influence",
    "heuristic_processing": "Heuristic Processing",
    "parallel_processing": "Parallel Processing",
    "implicit_learning": "Implicit Learning",
    "reflexive_responses": "Reflexive Responses",
    "cognitive_biases": "Cognitive Biases",
    "logical_reasoning": "Logical Reasoning",
    "abstract_thinking": "Abstract Thinking",
    "deliberative_decision_making": "Deliberative Decision-Making",
    "sequential_processing": "Sequential Processing",
    "cognitive_control": "Cognitive Control (Inhibition)",
    "goal_oriented_planning": "Goal-Oriented Planning",
    "meta_cognition": "Meta-Cognition",
}

# Field name -> label of each probability tier
TIER_FIELDS: dict[str, str] = {
    "high_probability": "High Probability",
    "medium_probability": "Medium Probability",
    "low_probability": "Low Probability",
}


class _GraphModel(BaseModel):
    """Base for graph models: immutable, camelCase on the wire, closed key set."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ToolTiers(_GraphModel):
    """Tools grouped by how likely someone in the role is to use them."""

    high_probability: list[str] = Field(max_length=TOOLS_TIER_CAP)
    medium_probability: list[str] = Field(max_length=TOOLS_TIER_CAP)
    low_probability: list[str] = Field(max_length=TOOLS_TIER_CAP)


class PainPointTiers(_GraphModel):
    """Pain points grouped by how likely someone in the role is to face them."""

    high_probability: list[str] = Field(max_length=PAIN_POINTS_TIER_CAP)
    medium_probability: list[str] = Field(max_length=PAIN_POINTS_TIER_CAP)
    low_probability: list[str] = Field(max_length=PAIN_POINTS_TIER_CAP)


class AttributeRanges(_GraphModel):
    """Cognitive attribute ratings, one level per attribute."""

    pattern_recognition: AttributeLevel = "Medium"
    associative_memory: AttributeLevel = "Medium"
    emotional_influence: AttributeLevel = "Medium"
    heuristic_processing: AttributeLevel = "Medium"
    parallel_processing: AttributeLevel = "Medium"
    implicit_learning: AttributeLevel = "Medium"
    reflexive_responses: AttributeLevel = "Medium"
    cognitive_biases: AttributeLevel = "Medium"
    logical_reasoning: AttributeLevel = "Medium"
    abstract_thinking: AttributeLevel = "Medium"
    deliberative_decision_making: AttributeLevel = "Medium"
    sequential_processing: AttributeLevel = "Medium"
    cognitive_control: AttributeLevel = "Medium"
    goal_oriented_planning: AttributeLevel = "Medium"
    meta_cognition: AttributeLevel = "Medium"


class KnowledgeGraph(_GraphModel):
    """Knowledge graph generated for a professional profile.

    Attributes:
        tools_used: Likely tools per probability tier (max 5 per tier)
        biggest_pain_points: Likely pain points per probability tier (max 4 per tier)
        attribute_ranges: Low/Medium/High rating for each cognitive attribute
        education_level_and_learning: Typical education and learning approach
    """

    tools_used: ToolTiers
    biggest_pain_points: PainPointTiers
    attribute_ranges: AttributeRanges
    education_level_and_learning: str

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize with the camelCase keys consumers expect."""
        return self.model_dump_json(by_alias=True, indent=indent)
