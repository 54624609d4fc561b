"""Prompts for grounded answering."""

from docs_rag.prompts.grounded_answer import (
    INSTRUCTION_FRAME,
    PROMPT_VERSION,
    GroundedPrompt,
    build_prompt,
)

__all__ = ["INSTRUCTION_FRAME", "PROMPT_VERSION", "GroundedPrompt", "build_prompt"]
