import re
from typing import Optional

class TextValidator:
    """Cleans free-text fields before they reach the catalog.

    Records are stored one field per line, so a value must never contain a
    line break.
    """

    @staticmethod
    def sanitize_text(text: Optional[str]) -> str:
        if text is None:
            return ""
        cleaned = re.sub(r"[\r\n]+", " ", text)
        return cleaned.strip()
