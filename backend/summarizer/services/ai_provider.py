# summarizer/services/ai_provider.py
import logging
from typing import Optional

import httpx
import openai
from openai import OpenAI

from summarizer.core.result import Err, ErrorKind, Ok, Result

logger = logging.getLogger(__name__)

MAX_OUTPUT_TOKENS = 500
TEMPERATURE = 0.7
NO_RESPONSE = "No response generated"
AI_FAILED = "Failed to get AI response"
KEY_MISSING = "OpenAI API key not configured"


def build_message(prompt_text: str, url: str, scraped_text: str) -> str:
    return f"{prompt_text}\n\nWebsite URL: {url}\nContent: {scraped_text}"


def first_choice_text(resp) -> str:
    """Content of the first choice, or the placeholder when there is none."""
    choices = getattr(resp, "choices", None) or []
    if not choices:
        return NO_RESPONSE
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content or NO_RESPONSE


class LLM:
    model: str

    def complete(self, prompt_text: str, url: str, scraped_text: str) -> Result[str]:
        raise NotImplementedError


class OpenAILLM(LLM):
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-3.5-turbo",
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url or None
        self.http_client = http_client
        self._client: Optional[OpenAI] = None

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                http_client=self.http_client,
                max_retries=0,
            )
        return self._client

    def complete(self, prompt_text: str, url: str, scraped_text: str) -> Result[str]:
        if not self.api_key:
            logger.error("OpenAI API key is missing")
            return Err(ErrorKind.COMPLETION, KEY_MISSING)

        logger.info("Sending to %s with prompt: %s...", self.model, prompt_text[:100])
        try:
            resp = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": build_message(prompt_text, url, scraped_text)}],
                max_tokens=MAX_OUTPUT_TOKENS,
                temperature=TEMPERATURE,
            )
        except openai.APIStatusError as e:
            logger.error("ChatGPT API error: %s", e.status_code)
            return Err(ErrorKind.COMPLETION, AI_FAILED, f"ChatGPT API error: {e.status_code} - {e.response.text}")
        except openai.OpenAIError as e:
            logger.error("ChatGPT API call failed: %s", e)
            return Err(ErrorKind.COMPLETION, AI_FAILED, str(e) or e.__class__.__name__)
        except (ValueError, TypeError) as e:
            # body that is not a chat completion
            logger.error("Could not decode ChatGPT response: %s", e)
            return Err(ErrorKind.COMPLETION, AI_FAILED, f"Invalid response from completion API: {e}")

        if isinstance(resp, str):
            # the SDK hands back raw text when the body is not JSON
            logger.error("ChatGPT response was not JSON")
            return Err(ErrorKind.COMPLETION, AI_FAILED, f"Invalid response from completion API: {resp[:200]}")

        return Ok(first_choice_text(resp))


def get_llm(settings) -> LLM:
    return OpenAILLM(
        api_key=settings.openai_api_key,
        model=settings.openai_chat_model,
        base_url=settings.openai_base_url,
    )
