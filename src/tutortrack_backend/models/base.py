'''
Shared Pydantic configuration for all API models.
'''
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base model for the API layer.
    Python attributes are snake_case, the JSON the frontend sends and
    receives is camelCase (e.g. hourly_rate <-> hourlyRate).
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
