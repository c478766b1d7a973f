"""Public theme catalog: vibe presets and the block types the renderer knows."""

from fastapi import APIRouter

from storefront.schemas.theme import VibePresetResponse
from storefront.theme.blocks import block_registry
from storefront.theme.presets import VIBE_PRESETS

router = APIRouter()


@router.get("/vibes", response_model=list[VibePresetResponse])
async def list_vibes():
    return [
        VibePresetResponse(
            id=p.id,
            name=p.name,
            description=p.description,
            preview=p.preview,
            tokens=p.tokens,
        )
        for p in VIBE_PRESETS
    ]


@router.get("/blocks")
async def list_block_types() -> list[dict]:
    """Registered block types with the JSON schema of their props (for the editor palette)."""
    return [
        {
            "type": block_type,
            "props_schema": block_registry.spec(block_type).props_model.model_json_schema(
                by_alias=True
            ),
        }
        for block_type in block_registry.types()
    ]
