"""Base pydantic model for camelCase wire and storage payloads."""

from pydantic import BaseModel, ConfigDict


def _to_camel(string: str) -> str:
    parts = string.split("_")
    if len(parts) == 1:
        return string
    head, *tail = parts
    return head + "".join(word.capitalize() for word in tail)


class CamelModel(BaseModel):
    """Model serialised with camelCase keys; accepts snake_case on input too."""

    model_config = ConfigDict(
        alias_generator=_to_camel, populate_by_name=True, extra="ignore", coerce_numbers_to_str=True
    )
