# backend/schooldb/schemas.py

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StoredModel(BaseModel):
    """
    Base for records kept in the JSON collections.

    Stored and served with camelCase keys (`minQuantity`, `requestQty`);
    Python code uses the snake_case field names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
