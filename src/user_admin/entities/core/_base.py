from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField


class Entity(BaseModel):
    """Base entity class with a store-assigned integer identifier.

    Entities are frozen: a stored value is never mutated in place, changes
    always produce a new instance.
    """

    model_config = ConfigDict(frozen=True)

    id: int = PydanticField(ge=1, description="Unique identifier for the entity")
