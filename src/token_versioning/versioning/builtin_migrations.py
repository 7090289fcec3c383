"""
Predefined migrations for the design-system token layout.

1.0.0 -> 2.0.0  semantic color names (reversible)
2.0.0 -> 2.1.0  accessibility tokens
2.1.0 -> 3.0.0  4px spacing scale
3.0.0 -> 3.1.0  animation tokens
3.1.0 -> 4.0.0  flat typography keys (reversible)

Transforms never mutate their input.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..utils.objects import TokenTree, deep_clone, get_path, is_mapping
from .migrations import MigrationRegistry, TokenMigration

LEGACY_TO_SEMANTIC_COLORS = {
    "blue": "primary",
    "green": "success",
    "red": "danger",
    "yellow": "warning",
    "gray": "neutral",
}
SEMANTIC_TO_LEGACY_COLORS = {new: old for old, new in LEGACY_TO_SEMANTIC_COLORS.items()}

# Color groups every 2.x token tree carries
REQUIRED_SEMANTIC_COLORS = ("primary", "neutral")

NAMED_SPACING = {
    "xs": "0.25rem",
    "sm": "0.5rem",
    "md": "1rem",
    "lg": "1.5rem",
    "xl": "2rem",
    "2xl": "3rem",
    "3xl": "4rem",
}

TYPOGRAPHY_STYLE_PREFIXES = ("heading", "body", "caption", "label")


def _semantic_colors(tokens: TokenTree) -> TokenTree:
    result = dict(tokens)
    old_colors = tokens.get("colors")
    if not is_mapping(old_colors):
        return result

    colors: Dict[str, Any] = {name: {} for name in REQUIRED_SEMANTIC_COLORS}
    for old_name, new_name in LEGACY_TO_SEMANTIC_COLORS.items():
        if old_colors.get(old_name):
            colors[new_name] = deep_clone(old_colors[old_name])
    for name, value in old_colors.items():
        if name not in LEGACY_TO_SEMANTIC_COLORS:
            colors[name] = deep_clone(value)

    result["colors"] = colors
    return result


def _legacy_colors(tokens: TokenTree) -> TokenTree:
    result = dict(tokens)
    new_colors = tokens.get("colors")
    if not is_mapping(new_colors):
        return result

    colors: Dict[str, Any] = {}
    for new_name, old_name in SEMANTIC_TO_LEGACY_COLORS.items():
        value = new_colors.get(new_name)
        # Empty groups are the placeholders seeded by the forward migration
        if value:
            colors[old_name] = deep_clone(value)
    for name, value in new_colors.items():
        if name not in SEMANTIC_TO_LEGACY_COLORS:
            colors[name] = deep_clone(value)

    result["colors"] = colors
    return result


def _add_accessibility(tokens: TokenTree) -> TokenTree:
    result = dict(tokens)
    if "accessibility" not in result:
        result["accessibility"] = {
            "wcagLevel": "AA",
            "focusRingWidth": "2px",
            "focusRingOffset": "2px",
            "focusRingColor": get_path(tokens, "colors.primary.500") or "#0066cc",
            "minimumTouchTarget": "44px",
            "contrastRatios": {"normal": 4.5, "large": 3, "nonText": 3},
        }
    return result


def _four_point_spacing(tokens: TokenTree) -> TokenTree:
    result = dict(tokens)
    old_spacing = tokens.get("spacing")
    if not is_mapping(old_spacing):
        return result

    spacing: Dict[str, Any] = {str(step): f"{step * 0.25:g}rem" for step in range(21)}
    for name, value in NAMED_SPACING.items():
        if old_spacing.get(name):
            spacing[name] = value

    result["spacing"] = spacing
    return result


def _identity(tokens: TokenTree) -> TokenTree:
    return tokens


def _add_animation(tokens: TokenTree) -> TokenTree:
    result = dict(tokens)
    if "animation" not in result:
        result["animation"] = {
            "duration": {
                "instant": "0ms",
                "fast": "150ms",
                "normal": "300ms",
                "slow": "500ms",
                "slower": "1000ms",
            },
            "easing": {
                "linear": "linear",
                "easeIn": "cubic-bezier(0.4, 0, 1, 1)",
                "easeOut": "cubic-bezier(0, 0, 0.2, 1)",
                "easeInOut": "cubic-bezier(0.4, 0, 0.2, 1)",
                "bounce": "cubic-bezier(0.68, -0.55, 0.265, 1.55)",
            },
        }
    return result


def _flatten_typography(tokens: TokenTree) -> TokenTree:
    result = dict(tokens)
    typography = tokens.get("typography")
    if not is_mapping(typography) or not is_mapping(typography.get("styles")):
        return result

    flat = {key: deep_clone(value) for key, value in typography.items() if key != "styles"}
    for style_name, style in typography["styles"].items():
        if not is_mapping(style):
            continue
        for prop, value in style.items():
            flat[f"{style_name}{prop[:1].upper()}{prop[1:]}"] = deep_clone(value)

    result["typography"] = flat
    return result


def _nest_typography(tokens: TokenTree) -> TokenTree:
    result = dict(tokens)
    typography = tokens.get("typography")
    if not is_mapping(typography):
        return result

    remaining = {key: deep_clone(value) for key, value in typography.items()}
    styles: Dict[str, Dict[str, Any]] = {}
    for prefix in TYPOGRAPHY_STYLE_PREFIXES:
        for key in list(remaining):
            suffix = key[len(prefix):]
            if key.lower().startswith(prefix) and suffix:
                prop = f"{suffix[:1].lower()}{suffix[1:]}"
                styles.setdefault(prefix, {})[prop] = remaining.pop(key)

    if styles:
        remaining["styles"] = styles
    result["typography"] = remaining
    return result


BUILTIN_MIGRATIONS: List[TokenMigration] = [
    TokenMigration(
        from_version="1.0.0",
        to_version="2.0.0",
        description="Restructure color tokens to use semantic naming",
        breaking=True,
        migrate=_semantic_colors,
        rollback=_legacy_colors,
    ),
    TokenMigration(
        from_version="2.0.0",
        to_version="2.1.0",
        description="Add accessibility tokens for WCAG compliance",
        migrate=_add_accessibility,
    ),
    TokenMigration(
        from_version="2.1.0",
        to_version="3.0.0",
        description="Update spacing scale to use 4px base unit",
        breaking=True,
        migrate=_four_point_spacing,
        # Previous spacing values are not recoverable from the new scale
        rollback=_identity,
    ),
    TokenMigration(
        from_version="3.0.0",
        to_version="3.1.0",
        description="Add animation and transition tokens",
        migrate=_add_animation,
    ),
    TokenMigration(
        from_version="3.1.0",
        to_version="4.0.0",
        description="Flatten typography structure for better composition",
        breaking=True,
        migrate=_flatten_typography,
        rollback=_nest_typography,
    ),
]


def default_registry() -> MigrationRegistry:
    """Registry preloaded with the built-in migrations."""
    return MigrationRegistry(BUILTIN_MIGRATIONS)
