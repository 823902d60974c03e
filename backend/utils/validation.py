import re
from typing import Optional

from exceptions import ValidationException

class InputValidator:

    CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]')

    MAX_TEXT_LENGTH = 20000

    @staticmethod
    def require_non_blank(value: str, field: str) -> str:
        if value is None or not str(value).strip():
            raise ValidationException(field, "must not be blank")
        return str(value).strip()

    @staticmethod
    def sanitize_text(text: Optional[str]) -> Optional[str]:
        if text is None:
            return None

        text = InputValidator.CONTROL_CHARS_PATTERN.sub('', text)

        if len(text) > InputValidator.MAX_TEXT_LENGTH:
            text = text[:InputValidator.MAX_TEXT_LENGTH]

        return text
