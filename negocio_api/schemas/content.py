"""
Text Generation Schemas
"""
from pydantic import BaseModel


class TextGenerationRequest(BaseModel):
    tipo: str
    prompt: str = ""


class TextGenerationResponse(BaseModel):
    texto: str
