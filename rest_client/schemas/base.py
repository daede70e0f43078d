"""
Shared base for schemas exchanged with the browser client.

Fields are declared in snake_case and serialized in camelCase.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema accepting either field names or camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
