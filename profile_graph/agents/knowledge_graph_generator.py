"""
Knowledge Graph Generator Agent

Turns a professional profile plus scraped source text into a KnowledgeGraph
through a single chat-completion call. With no usable API key, or on any
failure along the way, the role template for the profile's title is returned
instead; generate() never raises.
"""

import json
import uuid
from typing import Any, Optional

import httpx

from profile_graph.agents.reconciler import reconcile
from profile_graph.agents.templates import resolve_role_category, select_template
from profile_graph.models.config import CompletionSettings
from profile_graph.models.knowledge_graph import ATTRIBUTE_FIELDS, KnowledgeGraph
from profile_graph.models.profile import ProfileInput
from profile_graph.utils.llm_helpers import (
    CompletionError,
    call_completion,
    parse_json_reply,
)
from profile_graph.utils.logger import get_logger
from profile_graph.utils.prompt_loader import PromptLoader, get_default_loader


class KnowledgeGraphGenerator:
    """Generates knowledge graphs for professional profiles."""

    def __init__(
        self,
        settings: CompletionSettings,
        client: Optional[httpx.AsyncClient] = None,
        prompt_loader: Optional[PromptLoader] = None,
    ):
        """
        Initialize the generator.

        Args:
            settings: Completion endpoint configuration
            client: Optional shared AsyncClient for completion calls
            prompt_loader: Optional loader for the prompt templates
        """
        self.settings = settings
        self.client = client
        self.prompt_loader = prompt_loader or get_default_loader()

    def combine_sources(self, source_texts: list[str]) -> str:
        """Join source texts with spaces and cut to max_source_chars.

        The cut is a plain character count and may fall mid-word.
        """
        return " ".join(source_texts)[: self.settings.max_source_chars]

    def build_prompts(
        self,
        profile: ProfileInput,
        source_text: str,
        correlation_id: Optional[str] = None,
    ) -> tuple[str, str]:
        """Render the (system, user) prompt pair for a profile."""
        system_prompt = self.prompt_loader.render(
            "knowledge_graph/system.j2", correlation_id=correlation_id
        )
        user_prompt = self.prompt_loader.render(
            "knowledge_graph/profile.j2",
            correlation_id=correlation_id,
            profile=profile,
            source_text=source_text,
            attribute_labels=list(ATTRIBUTE_FIELDS.values()),
        )
        return system_prompt, user_prompt

    async def generate(
        self,
        profile: ProfileInput,
        source_texts: list[str],
        correlation_id: Optional[str] = None,
    ) -> KnowledgeGraph:
        """
        Generate a knowledge graph for a profile.

        Args:
            profile: Validated professional profile
            source_texts: Scraped text per source (empty strings for failed sources)
            correlation_id: Optional correlation ID for logging

        Returns:
            KnowledgeGraph from the completion reply reconciled with the role
            template, or the template itself on any failure
        """
        if correlation_id is None:
            correlation_id = f"kg-{uuid.uuid4().hex[:8]}"

        logger: Any = get_logger(
            correlation_id=correlation_id,
            phase="generation",
            component="knowledge_graph_generator",
        )

        if not self.settings.has_valid_api_key:
            logger.warning(
                "API key not configured, using template",
                title=profile.title,
                role_category=resolve_role_category(profile.title).value,
            )
            return select_template(profile.title)

        logger.info(
            "Generating knowledge graph",
            title=profile.title,
            company=profile.company,
        )

        try:
            combined_text = self.combine_sources(source_texts)
            logger.info(
                "Prepared scraped data for analysis",
                source_count=len(source_texts),
                combined_length=len(combined_text),
            )

            system_prompt, user_prompt = self.build_prompts(
                profile, combined_text, correlation_id=correlation_id
            )
            reply = await call_completion(
                self.settings,
                system_prompt,
                user_prompt,
                client=self.client,
                correlation_id=correlation_id,
            )
            parsed = parse_json_reply(reply)
            graph = reconcile(parsed, profile, correlation_id=correlation_id)

        except json.JSONDecodeError as e:
            logger.error(
                "Failed to parse JSON from completion reply, using template",
                error=str(e),
            )
            return select_template(profile.title)

        except CompletionError as e:
            logger.error(
                "Completion call failed, using template",
                error=str(e),
                status_code=e.status_code,
            )
            return select_template(profile.title)

        except Exception as e:
            logger.error(
                "Knowledge graph generation failed, using template",
                error_type=type(e).__name__,
                error=str(e),
            )
            return select_template(profile.title)

        logger.info("Knowledge graph generated", title=profile.title)
        return graph
