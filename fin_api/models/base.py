from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Range of a SQLite INTEGER column
MAX_INTEGER = 2**63 - 1
MIN_INTEGER = -(2**63)


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def strip_required(value: str) -> str:
    """Strip surrounding whitespace, rejecting values that end up empty"""
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value
