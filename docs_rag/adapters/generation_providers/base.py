from __future__ import annotations
from typing import Protocol


class GenerationProvider(Protocol):
    """(instruction frame, evidence block, question) -> raw model text."""
    async def generate(self, instruction_frame: str, evidence_block: str, question: str) -> str:
        ...
