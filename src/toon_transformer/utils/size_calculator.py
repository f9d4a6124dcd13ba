"""Size comparison between JSON and TOON renderings."""

import json
import logging
from typing import Any, Optional

from ..types import TokenSavings


class SizeCalculator:
    """
    Utility class for comparing the size of a value tree as JSON and as TOON.

    Sizes are character counts; JSON is measured pretty-printed with the
    given indentation, which is how it is usually handed to a model.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the size calculator.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def calculate_json_length(self, data: Any, indent: Optional[int] = 2) -> int:
        """
        Count the characters of data serialized as JSON.

        Args:
            data: Value tree
            indent: JSON indentation, or None for compact output

        Returns:
            Length in characters

        Raises:
            ValueError: If data is not JSON serializable
        """
        try:
            if indent is None:
                json_string = json.dumps(data, ensure_ascii=False, separators=(",", ":"))
            else:
                json_string = json.dumps(data, ensure_ascii=False, indent=indent)
        except (TypeError, ValueError, RecursionError) as e:
            raise ValueError(f"Data is not JSON serializable: {str(e)}")
        return len(json_string)

    def estimate_savings(self, data: Any, toon_text: str, json_indent: int = 2) -> TokenSavings:
        """
        Compare the JSON and TOON renderings of the same data.

        Args:
            data: Value tree
            toon_text: TOON rendering of data
            json_indent: Indentation used for the JSON rendering

        Returns:
            TokenSavings with both lengths and the relative saving
        """
        json_length = self.calculate_json_length(data, json_indent)
        toon_length = len(toon_text)
        saved = json_length - toon_length
        percent = (saved / json_length) * 100 if json_length > 0 else 0.0

        self.logger.debug(f"JSON {json_length} chars vs TOON {toon_length} chars")
        return TokenSavings(
            json_length=json_length,
            toon_length=toon_length,
            saved_chars=saved,
            savings_percent=percent
        )
