# app/schemas/fiber.py
from pydantic import BaseModel, field_validator, model_validator
from typing import Optional

class FiberQuery(BaseModel):
    address: Optional[str] = None
    city: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None

    @field_validator("address", "city", "street", "number", mode="before")
    @classmethod
    def _as_clean_str(cls, v):
        if v is None:
            return None
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        if isinstance(v, str):
            return v.strip() or None
        return v

    @model_validator(mode="after")
    def _address_or_city(self):
        if not self.address and not self.city:
            raise ValueError("Address or city is required")
        return self

class FiberResult(BaseModel):
    available: bool = False
    speed: str = ""
    message: str = ""
    link: str = ""
    checked: bool = False
