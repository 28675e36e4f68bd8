import json
import logging
from typing import Any, Protocol

from openai import OpenAI, OpenAIError

from domain.exceptions.conversion import ClassifierError, ConfigurationError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a bot parsing bank statements imported as a string in CSV format to extract "
    "column IDs for each specified column type. You will return the IDs (in 0-index array "
    "format) of each desired column."
)


class ColumnClassifier(Protocol):
    def find_columns(self, elements: dict[str, str], content: str) -> dict[str, int]:
        """Map each requested element name to the index of the column holding it."""
        ...


def build_column_schema(elements: dict[str, str]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            name: {"type": "integer", "description": description}
            for name, description in elements.items()
        },
        "required": list(elements),
        "additionalProperties": False,
    }


class OpenAIColumnClassifier:
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-2024-11-20",
        base_url: str | None = None,
        client: OpenAI | None = None,
    ):
        if client is None and not api_key:
            raise ConfigurationError("failed to instantiate OpenAI classifier: API key not provided")
        self.model = model
        self._client = client or OpenAI(api_key=api_key, base_url=base_url or None)

    def find_columns(self, elements: dict[str, str], content: str) -> dict[str, int]:
        schema = {
            "name": "indices",
            "description": "Indices of requested columns",
            "schema": build_column_schema(elements),
            "strict": True,
        }
        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": "CSV Content:"},
                    {"role": "user", "content": content},
                    {"role": "user", "content": "Elements to extract:"},
                    {"role": "user", "content": ",".join(elements)},
                ],
                response_format={"type": "json_schema", "json_schema": schema},
            )
        except OpenAIError as e:
            logger.error(f"Column classification call failed: {e}")
            raise ClassifierError(f"column classification failed: {e}") from e

        try:
            indices = json.loads(completion.choices[0].message.content or "")
        except (IndexError, ValueError) as e:
            raise ClassifierError(f"failed to parse column indices: {e}") from e

        if not isinstance(indices, dict):
            raise ClassifierError(f"unexpected column indices response: {indices!r}")

        missing = [name for name in elements if type(indices.get(name)) is not int]
        if missing:
            raise ClassifierError(f"classifier did not return column indices for {missing}")

        logger.info(f"Classified statement columns: {indices}")
        return {name: indices[name] for name in elements}
