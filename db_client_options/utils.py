from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from .logger import get_logger

if TYPE_CHECKING:
    from pydantic import BaseModel

T = TypeVar("T", bound="BaseModel")

logger = get_logger("db_client_options.utils")


# Helper methods for moving pydantic models in and out of documents
def pydantic_serialize(model: BaseModel, **kwargs: Any) -> str:
    return model.model_dump_json(**kwargs)


def pydantic_parse(model: type[T], data: dict[str, Any], **kwargs: Any) -> T:
    logger.debug(f"Using pydantic to parse: {data}")
    parsed_data = model.model_validate(data, **kwargs)
    logger.debug(f"Pydantic parsed data: {parsed_data}")
    return parsed_data
