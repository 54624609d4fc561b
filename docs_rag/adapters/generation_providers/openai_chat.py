from __future__ import annotations
import logging
import httpx

from docs_rag.core.config import settings
from docs_rag.core.errors import CollaboratorUnavailableError
from docs_rag.prompts.grounded_answer import GroundedPrompt

logger = logging.getLogger(__name__)

SERVICE = "openai chat"


class OpenAIChatProvider:
    """
    Chat completions over httpx.
    The instruction frame is the only system message; evidence and question
    travel together in the user message.
    """
    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.model = model or settings.OPENAI_CHAT_MODEL
        self.base_url = (base_url or settings.OPENAI_BASE_URL).rstrip("/")
        self._transport = transport

    async def generate(self, instruction_frame: str, evidence_block: str, question: str) -> str:
        if not self.api_key:
            raise CollaboratorUnavailableError(SERVICE, "OPENAI_API_KEY not configured")

        user = GroundedPrompt(instruction_frame, evidence_block, question).user_message
        try:
            async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS, transport=self._transport) as client:
                r = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json={
                        "model": self.model,
                        "temperature": 0,
                        "response_format": {"type": "json_object"},
                        "messages": [
                            {"role": "system", "content": instruction_frame},
                            {"role": "user", "content": user},
                        ],
                    },
                )
                r.raise_for_status()
                content = r.json()["choices"][0]["message"]["content"]
        except httpx.HTTPStatusError as e:
            logger.error(f"{SERVICE} returned HTTP {e.response.status_code}")
            raise CollaboratorUnavailableError(SERVICE, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"{SERVICE} request failed: {e}")
            raise CollaboratorUnavailableError(SERVICE, str(e) or type(e).__name__) from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise CollaboratorUnavailableError(SERVICE, "malformed response") from e

        # null content (e.g. refusal) is treated as an empty payload, not a failure
        return content or ""
