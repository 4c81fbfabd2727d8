"""RawJSON column type — opaque JSON documents stored verbatim as TEXT."""

import json
import logging
from typing import Any

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator

logger = logging.getLogger(__name__)


class RawJSON(TypeDecorator):
    """Serialize on write, parse on read, degrade to an empty container.

    ``shape`` is the container the column must hold (``dict`` or ``list``).
    A NULL column, a value that fails to parse, or a value of the wrong
    container type is read back as an empty ``shape()`` instead of raising.
    """

    impl = Text
    cache_ok = True

    def __init__(self, shape: type = dict, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.shape = shape

    def process_bind_param(self, value: Any, dialect) -> str | None:
        if value is None:
            return None
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)

    def process_result_value(self, value: str | None, dialect) -> Any:
        if value is None:
            return self.shape()
        try:
            parsed = json.loads(value)
        except ValueError as exc:
            logger.warning("Stored JSON column failed to parse, using empty %s: %s",
                           self.shape.__name__, exc)
            return self.shape()
        if not isinstance(parsed, self.shape):
            logger.warning("Stored JSON column is %s, expected %s",
                           type(parsed).__name__, self.shape.__name__)
            return self.shape()
        return parsed
