# tlscore/schemas/responses.py

from typing import Optional
from pydantic import BaseModel

class ErrorReport(BaseModel):
    type: str
    error: str
    details: Optional[str] = None
