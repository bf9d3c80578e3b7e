# app/schemas/ocr_schemas.py

from typing import Optional
from pydantic import BaseModel


class OcrRequest(BaseModel):
    base64Image: Optional[str] = None
