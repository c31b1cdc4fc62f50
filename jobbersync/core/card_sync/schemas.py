from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CustomFieldItem(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id_custom_field: str | None = Field(default=None, alias="idCustomField")
    value: dict[str, Any] | None = None

    @property
    def text(self) -> str | None:
        if not self.value:
            return None
        return self.value.get("text")


class Card(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str = ""
    desc: str | None = ""
    custom_field_items: list[CustomFieldItem] = Field(default_factory=list, alias="customFieldItems")


class JobberEvent(BaseModel):
    deal_id: str
    note: str
    topic: str | None = None


class SyncResult(BaseModel):
    matched: bool
    card_id: str | None = None
    card_name: str | None = None
    description: str | None = None
