from pydantic import BaseModel
from typing import Any

class ErrorBody(BaseModel):
    error: str
    details: Any = None
