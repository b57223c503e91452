import re
from typing import Optional

from exceptions import InvalidInputException
from models.inputs import Modality, ValidationInput

class InputValidator:

    REQUIRED_MESSAGES = {
        Modality.TEXT: ("text", "Text input is required"),
        Modality.IMAGE: ("imageUrl", "Image URL is required"),
        Modality.VIDEO: ("videoUrl", "Video URL is required"),
        Modality.URL: ("url", "URL is required"),
    }

    CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')

    @staticmethod
    def require_content(modality: Modality, value: Optional[str]) -> ValidationInput:
        """Reject missing or whitespace-only input before any rule runs.

        The value is returned untouched: text rules score the submission as written.
        """
        field, message = InputValidator.REQUIRED_MESSAGES[modality]
        if value is None or not value.strip():
            raise InvalidInputException(field, message)
        return ValidationInput(modality=modality, value=value)

    @staticmethod
    def sanitize_for_log(value: str, max_length: int = 80) -> str:
        if not value:
            return ""

        value = InputValidator.CONTROL_CHARS_PATTERN.sub('', str(value).strip())

        if len(value) > max_length:
            value = value[:max_length] + "..."

        return value
