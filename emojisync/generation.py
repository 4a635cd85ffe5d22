"""Text generation over the OpenAI chat completion API.

Two generators share one chat model: ``TextGenerator`` returns free text,
``ListGenerator`` asks for a JSON object and decodes it into a list of
strings.
"""
import json
from typing import Dict, List, Optional, Protocol

from openai import OpenAI

from emojisync.exceptions import GenerationError, StructuredOutputError
from emojisync.logging import get_logger
from emojisync.models import Message

logger = get_logger(__name__)

JSON_RESPONSE_FORMAT = {"type": "json_object"}

# Prompt trick: ask for a simple JSON object and show exactly one sample.
LIST_INSTRUCTION = """Write the emoji. It must precisely follow the sample. Only respond with valid JSON object containing a valid JSON array named 'list', in this format:
{"list":["😭: sobbing face", "🍎: red apple"]}
"""

LIST_FIELD = "list"


class ChatModel(Protocol):
    """Anything that can run a chat completion.

    The response must expose ``choices[0].message.content``.
    """

    def invoke(self, messages: List[Dict[str, str]], response_format: Optional[Dict] = None): ...


class OpenAIChatModel:
    """Chat model backed by ``openai.OpenAI().chat.completions``."""

    def __init__(self, client: Optional[OpenAI], model_name: str, temperature: float = 0.2):
        self.client = client
        self.model_name = model_name
        self.temperature = temperature

    def invoke(self, messages: List[Dict[str, str]], response_format: Optional[Dict] = None):
        if self.client is None:
            raise GenerationError("OpenAI client is not configured (OPENAI_API_KEY not set)")

        kwargs = {
            "model": self.model_name,
            "messages": messages,
            "temperature": self.temperature,
        }
        if response_format is not None:
            kwargs["response_format"] = response_format

        logger.debug(f"Invoking {self.model_name} with {len(messages)} messages")
        return self.client.chat.completions.create(**kwargs)


def _exchange(instruction: str, prompt: str) -> List[Dict[str, str]]:
    return [
        Message(role="system", content=instruction).model_dump(),
        Message(role="user", content=prompt).model_dump(),
    ]


def _first_choice_text(response) -> str:
    # content is None when the model returns no text (refusals, tool calls)
    return (response.choices[0].message.content or "").strip()


class TextGenerator:
    """Single instruction + prompt completion."""

    def __init__(self, chat_model: ChatModel):
        self.chat_model = chat_model

    def generate(self, instruction: str, prompt: str) -> str:
        """Return the trimmed content of the first choice."""
        response = self.chat_model.invoke(_exchange(instruction, prompt))
        return _first_choice_text(response)


def parse_list_response(raw: str) -> List[str]:
    """Decode ``{"list": [...]}`` into its list of strings.

    Raises:
        StructuredOutputError: the text is not JSON, is not an object, lacks
            the list field, or the field is not an array of strings.
    """
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise StructuredOutputError(f"Generated text is not valid JSON: {e}", raw) from e

    if not isinstance(payload, dict):
        raise StructuredOutputError("Generated JSON is not an object", raw)
    if LIST_FIELD not in payload:
        raise StructuredOutputError(f"Generated JSON has no '{LIST_FIELD}' field", raw)

    items = payload[LIST_FIELD]
    if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
        raise StructuredOutputError(f"'{LIST_FIELD}' is not an array of strings", raw)
    return items


class ListGenerator:
    """JSON-constrained completion that yields an ordered list of strings."""

    def __init__(self, chat_model: ChatModel, instruction: str = LIST_INSTRUCTION):
        self.chat_model = chat_model
        self.instruction = instruction

    def generate_list(self, seed_text: str) -> List[str]:
        response = self.chat_model.invoke(
            _exchange(self.instruction, seed_text),
            response_format=JSON_RESPONSE_FORMAT,
        )
        items = parse_list_response(_first_choice_text(response))
        logger.debug(f"Generated {len(items)} entries for seed '{seed_text[:40]}'")
        return items
