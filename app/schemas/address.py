# app/schemas/address.py
from pydantic import BaseModel, ConfigDict, Field

class CoordinatesQuery(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

class AddressResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    street: str = ""
    number: str = ""
    city: str = ""
    zip: str = ""
    full_address: str = Field(default="", alias="fullAddress")

    def composed_full_address(self) -> str:
        """'street number, city' using only the parts we have."""
        line = " ".join(p for p in (self.street, self.number) if p)
        return ", ".join(p for p in (line, self.city) if p)
