"""Natural-language sales report generation."""

import logging

from app.llm.service import generate_answer
from app.prompting.prompt_builder import REPORT_SYSTEM_PROMPT, build_report_prompt


logger = logging.getLogger(__name__)


async def generate_report(insights) -> str:
    """Ask the LLM for a report on `insights` and return its reply unmodified.

    Raises:
        LLMRequestError: Propagated from the LLM client.
    """
    logger.info("Generating report")
    return await generate_answer(REPORT_SYSTEM_PROMPT, build_report_prompt(insights))
