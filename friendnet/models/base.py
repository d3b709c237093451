# friendnet/models/base.py
# schema 共用設定：JSON 一律 camelCase，ORM 物件可以直接轉

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from friendnet.db.base_class import Base  # noqa: F401


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
