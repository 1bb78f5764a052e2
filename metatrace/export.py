"""JSON export of traces, provenance records and leaderboards."""
from typing import Any

import structlog
from pydantic import BaseModel, TypeAdapter
from pydantic_core import PydanticSerializationError

from .config import EXPORT_INDENT
from .errors import SerializationError

logger = structlog.get_logger()


def model_to_json(model: BaseModel, indent: int | None = None) -> str:
    """Pretty-print a single record."""
    try:
        return model.model_dump_json(indent=EXPORT_INDENT if indent is None else indent)
    except PydanticSerializationError as e:
        logger.error("export_failed", kind=type(model).__name__, error=str(e))
        raise SerializationError(f"Cannot serialize {type(model).__name__}: {e}") from e


def models_to_json(models: list[Any], item_type: type[BaseModel], indent: int | None = None) -> str:
    """Pretty-print an ordered list of records as a JSON array."""
    adapter = TypeAdapter(list[item_type])
    try:
        data = adapter.dump_json(models, indent=EXPORT_INDENT if indent is None else indent)
    except PydanticSerializationError as e:
        logger.error("export_failed", kind=item_type.__name__, count=len(models), error=str(e))
        raise SerializationError(f"Cannot serialize {item_type.__name__} list: {e}") from e
    return data.decode("utf-8")
