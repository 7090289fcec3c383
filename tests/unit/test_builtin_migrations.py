"""Tests for the predefined design-system migrations."""

import copy

import pytest

from token_versioning.versioning import BUILTIN_MIGRATIONS, MigrationRunner, default_registry


def _migration(from_version):
    return next(m for m in BUILTIN_MIGRATIONS if m.from_version == from_version)


@pytest.fixture
def legacy_tokens():
    """A 1.0.0-era token tree."""
    return {
        "colors": {
            "blue": {"500": "#2563eb"},
            "red": {"500": "#dc2626"},
            "brand": "#ff00aa",
        },
        "spacing": {"sm": "4px", "md": "8px", "huge": "96px"},
        "typography": {
            "fontFamily": "Inter",
            "styles": {
                "heading": {"size": "2rem", "weight": 700},
                "body": {"size": "1rem", "lineHeight": 1.5},
            },
        },
    }


class TestRegistry:
    """Test cases for the default registry."""

    def test_chain_covers_all_versions(self):
        registry = default_registry()
        path = registry.get_migration_path("1.0.0", "4.0.0")
        assert [m.to_version for m in path] == ["2.0.0", "2.1.0", "3.0.0", "3.1.0", "4.0.0"]

    def test_breaking_flags(self):
        assert [m.breaking for m in BUILTIN_MIGRATIONS] == [True, False, True, False, True]

    def test_reversible_flags(self):
        assert [m.reversible for m in BUILTIN_MIGRATIONS] == [True, False, True, False, True]


class TestSemanticColors:
    """Test cases for the 1.0.0 -> 2.0.0 color migration."""

    def test_renames_legacy_colors(self, legacy_tokens):
        result = _migration("1.0.0").migrate(legacy_tokens)

        assert result["colors"] == {
            "primary": {"500": "#2563eb"},
            "danger": {"500": "#dc2626"},
            "brand": "#ff00aa",
            "neutral": {},
        }

    def test_required_groups_lead_key_order(self, legacy_tokens):
        result = _migration("1.0.0").migrate(legacy_tokens)
        assert list(result["colors"]) == ["primary", "neutral", "danger", "brand"]

    def test_does_not_mutate_input(self, legacy_tokens):
        original = copy.deepcopy(legacy_tokens)
        _migration("1.0.0").migrate(legacy_tokens)
        assert legacy_tokens == original

    def test_rollback_restores_legacy_names(self):
        tokens = {"colors": {"blue": "#00f", "red": "#f00"}}
        migration = _migration("1.0.0")

        assert migration.rollback(migration.migrate(tokens)) == tokens

    def test_tree_without_colors_untouched(self):
        assert _migration("1.0.0").migrate({"spacing": {}}) == {"spacing": {}}


class TestAccessibility:
    """Test cases for the 2.0.0 -> 2.1.0 accessibility migration."""

    def test_focus_ring_uses_primary(self):
        result = _migration("2.0.0").migrate({"colors": {"primary": {"500": "#123456"}}})
        assert result["accessibility"]["focusRingColor"] == "#123456"
        assert result["accessibility"]["wcagLevel"] == "AA"

    def test_focus_ring_fallback(self):
        result = _migration("2.0.0").migrate({})
        assert result["accessibility"]["focusRingColor"] == "#0066cc"

    def test_existing_accessibility_kept(self):
        tokens = {"accessibility": {"wcagLevel": "AAA"}}
        assert _migration("2.0.0").migrate(tokens) == tokens


class TestSpacing:
    """Test cases for the 2.1.0 -> 3.0.0 spacing migration."""

    def test_four_point_scale(self, legacy_tokens):
        spacing = _migration("2.1.0").migrate(legacy_tokens)["spacing"]

        assert spacing["0"] == "0rem"
        assert spacing["1"] == "0.25rem"
        assert spacing["4"] == "1rem"
        assert spacing["20"] == "5rem"
        assert spacing["sm"] == "0.5rem"
        assert spacing["md"] == "1rem"
        assert "xs" not in spacing
        assert "huge" not in spacing

    def test_rollback_is_identity(self, legacy_tokens):
        migrated = _migration("2.1.0").migrate(legacy_tokens)
        assert _migration("2.1.0").rollback(migrated) == migrated


class TestAnimation:
    """Test cases for the 3.0.0 -> 3.1.0 animation migration."""

    def test_adds_animation_tokens(self):
        animation = _migration("3.0.0").migrate({})["animation"]
        assert animation["duration"]["fast"] == "150ms"
        assert animation["easing"]["linear"] == "linear"


class TestTypography:
    """Test cases for the 3.1.0 -> 4.0.0 typography migration."""

    def test_flattens_styles(self, legacy_tokens):
        typography = _migration("3.1.0").migrate(legacy_tokens)["typography"]

        assert typography == {
            "fontFamily": "Inter",
            "headingSize": "2rem",
            "headingWeight": 700,
            "bodySize": "1rem",
            "bodyLineHeight": 1.5,
        }

    def test_round_trip(self, legacy_tokens):
        migration = _migration("3.1.0")
        assert migration.rollback(migration.migrate(legacy_tokens)) == legacy_tokens


class TestFullChain:
    """Test cases for running the whole built-in chain."""

    @pytest.mark.asyncio
    async def test_upgrade_to_latest(self, legacy_tokens):
        result = await MigrationRunner(default_registry()).migrate(
            legacy_tokens, "1.0.0", "4.0.0"
        )

        assert "primary" in result["colors"]
        assert result["accessibility"]["focusRingColor"] == "#2563eb"
        assert result["spacing"]["sm"] == "0.5rem"
        assert "animation" in result
        assert result["typography"]["headingSize"] == "2rem"

    @pytest.mark.asyncio
    async def test_strict_upgrade_matches_permissive(self, legacy_tokens):
        registry = default_registry()
        permissive = await MigrationRunner(registry).migrate(legacy_tokens, "1.0.0", "4.0.0")
        strict = await MigrationRunner(registry, strict_chain=True).migrate(
            legacy_tokens, "1.0.0", "4.0.0"
        )
        assert strict == permissive

    @pytest.mark.asyncio
    async def test_downgrade_from_latest(self, legacy_tokens):
        registry = default_registry()
        runner = MigrationRunner(registry)
        latest = await runner.migrate(legacy_tokens, "1.0.0", "4.0.0")

        result = await runner.migrate(latest, "4.0.0", "1.0.0")

        assert result["colors"]["blue"] == {"500": "#2563eb"}
        assert result["typography"]["styles"]["heading"] == {"size": "2rem", "weight": 700}
