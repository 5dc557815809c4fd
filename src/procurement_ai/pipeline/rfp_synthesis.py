"""
RFP synthesis service.

Turns a free-text purchasing request into a structured RfpDraft via the
model gateway, then applies domain-level field checks.
"""

from typing import Any

from pydantic import ValidationError

from ..errors import GenerationFailed, InvalidInput, ModelError
from ..gateway import ModelGateway
from ..logging import get_logger
from ..models.rfp import RfpDraft
from ..parsing import find_missing_fields, validation_error_fields
from ..prompts.generate_rfp import RFP_REQUIRED_FIELDS, build_rfp_prompt

logger = get_logger(__name__)


class RfpSynthesizer:
    """
    Generates RFP drafts from natural language.

    Either returns a fully valid RfpDraft or raises; never a partial draft.
    """

    def __init__(self, gateway: ModelGateway):
        """
        Initialize the synthesizer.

        Args:
            gateway: Model gateway used for the generation call
        """
        self.gateway = gateway

    async def synthesize(self, user_text: str) -> RfpDraft:
        """
        Generate a structured RFP from free text.

        Args:
            user_text: The user's description of what they want to buy

        Returns:
            Validated RfpDraft

        Raises:
            InvalidInput: user_text is blank or not a string
            GenerationFailed: the model call failed or its output is invalid
        """
        if not isinstance(user_text, str) or not user_text.strip():
            raise InvalidInput('User text is required and must be a non-empty string')

        log = logger.bind(text_chars=len(user_text))
        prompt = build_rfp_prompt(user_text)

        try:
            result = await self.gateway.invoke(prompt)
        except ModelError as exc:
            log.error('rfp_synthesis.model_failed', kind=exc.kind.value, error=exc.message)
            raise GenerationFailed(
                f"Failed to generate RFP: {exc.message}",
                context={'cause_kind': exc.kind.value},
            ) from exc

        draft = self._validate(result)
        log.info(
            'rfp_synthesis.completed',
            title=draft.title,
            item_count=len(draft.items),
        )
        return draft

    def _validate(self, result: dict[str, Any]) -> RfpDraft:
        """Apply required-field, item and schema checks to the model output."""
        missing = find_missing_fields(result, RFP_REQUIRED_FIELDS)
        if missing:
            raise GenerationFailed(
                f"Failed to generate RFP: missing required fields in AI response: "
                f"{', '.join(missing)}",
                context={'missing_fields': missing},
            )

        items = result['items']
        if not isinstance(items, list):
            raise GenerationFailed(
                'Failed to generate RFP: items must be an array',
                context={'invalid_fields': ['items']},
            )

        invalid = []
        for idx, item in enumerate(items):
            if not isinstance(item, dict):
                invalid.append(f'items.{idx}')
                continue
            name = item.get('name')
            if not isinstance(name, str) or not name.strip():
                invalid.append(f'items.{idx}.name')
            if not item.get('quantity'):
                invalid.append(f'items.{idx}.quantity')
        if invalid:
            raise GenerationFailed(
                f"Failed to generate RFP: each item must have name and quantity "
                f"({', '.join(invalid)})",
                context={'invalid_fields': invalid},
            )

        try:
            return RfpDraft.model_validate(result)
        except ValidationError as exc:
            fields = validation_error_fields(exc)
            raise GenerationFailed(
                f"Failed to generate RFP: invalid fields in AI response: {', '.join(fields)}",
                context={'invalid_fields': fields},
            ) from exc
