"""
Content Generation Endpoint

Suggests copy for the about/mission/vision blocks.
"""
from fastapi import APIRouter, Depends

from negocio_api.schemas.content import TextGenerationRequest, TextGenerationResponse
from negocio_api.api.deps import get_text_generator
from negocio_api.services.text_generation import TextGenerator

router = APIRouter(prefix="/ia", tags=["content"])


@router.post("/generar-texto", response_model=TextGenerationResponse)
async def generar_texto(
    request: TextGenerationRequest,
    generator: TextGenerator = Depends(get_text_generator)
):
    return TextGenerationResponse(texto=generator.generate(request.tipo, request.prompt))
