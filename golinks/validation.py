import re
from typing import Any, Pattern, Union

from .config import DEFAULT_GOLINK_PATTERN


class LinkNameValidator:
    """Checks short link syntax against a single configurable pattern."""

    def __init__(self, pattern: Union[str, Pattern[str]] = DEFAULT_GOLINK_PATTERN):
        self.regex = re.compile(pattern) if isinstance(pattern, str) else pattern

    @property
    def pattern(self) -> str:
        return self.regex.pattern

    def validate(self, name: Any) -> bool:
        if not isinstance(name, str):
            return False
        return self.regex.fullmatch(name) is not None
