"""
Streaming chat client for health advice.
"""
import os
import json
from typing import Any, Dict, Iterator, Optional

import requests

from period_tracker.services.exceptions import AdviceServiceError
from period_tracker.utils.logging import logger

DEFAULT_API_URL = "https://api.siliconflow.cn/v1/chat/completions"
DEFAULT_MODEL = "deepseek-ai/DeepSeek-R1-0528-Qwen3-8B"
DEFAULT_TIMEOUT = 30

SYSTEM_PROMPT = (
    "You are a women's health assistant focused on menstrual cycles, ovulation "
    "and conception questions. Answer gently and professionally with science-based "
    "advice in 50 to 100 words. Your advice is for reference only and does not "
    "replace a doctor's diagnosis."
)

SSE_DATA_PREFIX = "data: "
SSE_DONE = "[DONE]"

def _extract_content(payload: Dict[str, Any]) -> Optional[str]:
    """Pull the streamed text delta out of a completion chunk."""
    choices = payload.get("choices") or []
    if not choices:
        return None
    delta = choices[0].get("delta") or {}
    return delta.get("content") or None

class AdviceClient:
    """Client for a streaming chat-completions API."""

    def __init__(self):
        self.api_key = os.environ["ADVICE_API_KEY"]
        self.api_url = os.environ.get("ADVICE_API_URL", DEFAULT_API_URL)
        self.model = os.environ.get("ADVICE_MODEL", DEFAULT_MODEL)
        self.timeout = float(os.environ.get("ADVICE_TIMEOUT", DEFAULT_TIMEOUT))

    def stream_reply(self, message: str) -> Iterator[str]:
        """
        Ask a question and yield the reply as it streams in.

        Closing the iterator early (for example when the user leaves the
        chat screen) closes the HTTP response; partial text is left to the
        caller and the request is not retried.

        Args:
            message: User question

        Yields:
            Text chunks in arrival order

        Raises:
            AdviceServiceError: If the request fails or no text is received

        Example:
            >>> client = AdviceClient()
            >>> reply = "".join(client.stream_reply("Is a 35 day cycle normal?"))
        """
        data = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": message}
            ],
            "stream": True
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}"
        }

        logger.info("Sending advice request", extra={"model": self.model, "length": len(message)})
        received = False
        try:
            with requests.post(
                self.api_url,
                json=data,
                headers=headers,
                stream=True,
                timeout=self.timeout
            ) as response:
                response.raise_for_status()
                for raw_line in response.iter_lines():
                    line = raw_line.decode("utf-8", errors="replace")
                    if not line.startswith(SSE_DATA_PREFIX):
                        continue
                    payload = line[len(SSE_DATA_PREFIX):].strip()
                    if payload == SSE_DONE:
                        continue
                    try:
                        content = _extract_content(json.loads(payload))
                    except json.JSONDecodeError:
                        logger.debug("Skipping unparsable stream line", extra={"line": payload[:100]})
                        continue
                    if content:
                        received = True
                        yield content
        except requests.RequestException as e:
            logger.exception("Advice request failed")
            raise AdviceServiceError(f"Advice service unavailable: {e}") from e

        if not received:
            raise AdviceServiceError("No reply received from advice service")
