"""Owner-side theme edits and write-time validation.

Every operation takes a ThemeConfig and returns a new one; nothing here
touches storage. Edits target the home layout, the one the editor exposes.
"""

import uuid
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from storefront.core.exceptions import BlockNotFoundError, ThemeValidationError
from storefront.theme.blocks import block_registry
from storefront.theme.config import PAGE_KINDS, Block, ThemeConfig, ThemeTokens, default_theme
from storefront.theme.registry import BlockRegistry


def _block_errors(block: Block, where: str, registry: BlockRegistry) -> list[dict]:
    spec = registry.spec(block.type)
    if spec is None:
        return [
            {
                "loc": [where, block.id, "type"],
                "msg": f"Unknown block type '{block.type}'",
                "type": "unknown_block_type",
            }
        ]
    try:
        spec.props_model.model_validate(block.props)
    except ValidationError as exc:
        return [
            {
                "loc": [where, block.id, "props", *err["loc"]],
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
    return []


def validate_theme(theme: ThemeConfig, registry: BlockRegistry = block_registry) -> ThemeConfig:
    """Reject unknown block types, invalid props, and missing or duplicate block ids.

    The renderer tolerates all of these; storage does not accept them.
    """
    errors: list[dict] = []
    for page in PAGE_KINDS:
        layout = getattr(theme, f"layout_{page}")
        if layout is None:
            continue
        where = f"layout_{page}"
        seen: set[str] = set()
        for block in layout:
            if not block.id:
                errors.append({"loc": [where], "msg": "Block id is required", "type": "missing"})
            elif block.id in seen:
                errors.append(
                    {
                        "loc": [where, block.id],
                        "msg": f"Duplicate block id '{block.id}'",
                        "type": "duplicate_block_id",
                    }
                )
            seen.add(block.id)
            errors.extend(_block_errors(block, where, registry))
    if errors:
        raise ThemeValidationError(errors)
    return theme


def _find(layout: list[Block], block_id: str) -> int:
    for index, block in enumerate(layout):
        if block.id == block_id:
            return index
    raise BlockNotFoundError(block_id)


def _with_home(theme: ThemeConfig, layout: list[Block]) -> ThemeConfig:
    return theme.model_copy(update={"layout_home": layout}, deep=True)


def new_block_id(block_type: str) -> str:
    return f"{block_type}-{uuid.uuid4().hex[:8]}"


def add_block(
    theme: ThemeConfig,
    block_type: str,
    props: Mapping[str, Any] | None = None,
    *,
    block_id: str | None = None,
    position: int | None = None,
    registry: BlockRegistry = block_registry,
) -> ThemeConfig:
    """Insert a block at ``position`` (append when ``None``)."""
    block = Block(id=block_id or new_block_id(block_type), type=block_type, props=dict(props or {}))
    layout = list(theme.layout_home)
    if position is None:
        layout.append(block)
    else:
        layout.insert(position, block)
    return validate_theme(_with_home(theme, layout), registry)


def update_block_props(
    theme: ThemeConfig,
    block_id: str,
    props: Mapping[str, Any],
    registry: BlockRegistry = block_registry,
) -> ThemeConfig:
    """Shallow-merge ``props`` into the block's existing props."""
    layout = list(theme.layout_home)
    index = _find(layout, block_id)
    block = layout[index]
    layout[index] = block.model_copy(update={"props": {**block.props, **props}})
    return validate_theme(_with_home(theme, layout), registry)


def remove_block(theme: ThemeConfig, block_id: str) -> ThemeConfig:
    layout = list(theme.layout_home)
    del layout[_find(layout, block_id)]
    return _with_home(theme, layout)


def reorder_blocks(theme: ThemeConfig, from_index: int, to_index: int) -> ThemeConfig:
    """Move the block at ``from_index`` so it ends up at ``to_index``."""
    layout = list(theme.layout_home)
    for name, index in (("from_index", from_index), ("to_index", to_index)):
        if not 0 <= index < len(layout):
            raise ThemeValidationError(
                [
                    {
                        "loc": [name],
                        "msg": f"Index {index} out of range for {len(layout)} blocks",
                        "type": "index_out_of_range",
                    }
                ]
            )
    layout.insert(to_index, layout.pop(from_index))
    return _with_home(theme, layout)


def update_tokens(theme: ThemeConfig, tokens: Mapping[str, Any]) -> ThemeConfig:
    """Merge a partial token map (field names or camelCase keys) into the theme."""
    aliases = {info.alias: name for name, info in ThemeTokens.model_fields.items() if info.alias}
    merged = {**theme.tokens.model_dump(), **{aliases.get(k, k): v for k, v in tokens.items()}}
    try:
        new_tokens = ThemeTokens.model_validate(merged)
    except ValidationError as exc:
        errors = [
            {"loc": ["tokens", *err["loc"]], "msg": err["msg"], "type": err["type"]}
            for err in exc.errors()
        ]
        raise ThemeValidationError(errors) from exc
    return theme.model_copy(update={"tokens": new_tokens}, deep=True)


def reset_theme() -> ThemeConfig:
    return default_theme()
