"""
Token migrations: registry, path resolution and the sequential runner.

Single responsibility: Move a token tree between two versions by applying
registered forward transforms or their rollbacks in order.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from ..exceptions import CircularPathError, NoPathError, ValidationError
from ..logging import get_logger
from ..utils.objects import TokenTree, deep_clone
from .semver import SemanticVersion, same_version, version_sort_key

logger = get_logger(__name__)

Transform = Callable[[TokenTree], Union[TokenTree, Awaitable[TokenTree]]]


@dataclass(frozen=True)
class TokenMigration:
    """A directional transform between two specific versions."""

    from_version: str
    to_version: str
    migrate: Transform
    rollback: Optional[Transform] = None
    description: Optional[str] = None
    breaking: bool = False

    def __post_init__(self) -> None:
        # Raises ParseError for malformed versions
        SemanticVersion.parse(self.from_version)
        SemanticVersion.parse(self.to_version)
        if not callable(self.migrate):
            raise ValidationError(
                "Migration transform must be callable",
                field_errors={"migrate": repr(self.migrate)},
            )
        if self.rollback is not None and not callable(self.rollback):
            raise ValidationError(
                "Rollback transform must be callable",
                field_errors={"rollback": repr(self.rollback)},
            )

    @property
    def reversible(self) -> bool:
        return self.rollback is not None

    def describe(self) -> dict:
        return {
            "fromVersion": self.from_version,
            "toVersion": self.to_version,
            "description": self.description,
            "breaking": self.breaking,
        }


class MigrationRegistry:
    """
    Ordered set of migrations, ascending by ``from_version``.

    Append-only; duplicate ``(from, to)`` pairs are kept in registration order.
    """

    def __init__(self, migrations: Optional[Iterable[TokenMigration]] = None):
        self._migrations: List[TokenMigration] = []
        if migrations:
            self.add_migrations(migrations)

    def add_migration(self, migration: TokenMigration) -> None:
        if not isinstance(migration, TokenMigration):
            raise ValidationError(
                "Only TokenMigration instances can be registered",
                field_errors={"migration": type(migration).__name__},
            )
        self._migrations.append(migration)
        self._migrations.sort(key=lambda m: version_sort_key(m.from_version))
        logger.debug(
            "migration_registered",
            from_version=migration.from_version,
            to_version=migration.to_version,
            breaking=migration.breaking,
        )

    def add_migrations(self, migrations: Iterable[TokenMigration]) -> None:
        for migration in migrations:
            self.add_migration(migration)

    @property
    def migrations(self) -> Tuple[TokenMigration, ...]:
        return tuple(self._migrations)

    def __len__(self) -> int:
        return len(self._migrations)

    def __iter__(self) -> Iterator[TokenMigration]:
        return iter(tuple(self._migrations))

    def get_migration_path(self, from_version: str, to_version: str) -> List[TokenMigration]:
        """
        Follow the chain of migrations starting at ``from_version``.

        At each step the first registered migration starting at the cursor is
        taken.

        Raises:
            NoPathError: No migration starts at the cursor
            CircularPathError: The chain is longer than the registry
        """
        SemanticVersion.parse(from_version)
        SemanticVersion.parse(to_version)

        path: List[TokenMigration] = []
        cursor = from_version
        while not same_version(cursor, to_version):
            step = next(
                (m for m in self._migrations if same_version(m.from_version, cursor)),
                None,
            )
            if step is None:
                raise NoPathError(
                    f"No migration path found from {cursor} to {to_version}",
                    from_version=from_version,
                    to_version=to_version,
                )

            path.append(step)
            cursor = step.to_version

            if len(path) > len(self._migrations):
                raise CircularPathError(
                    from_version=from_version, to_version=to_version
                )

        return path

    def can_migrate(self, from_version: str, to_version: str) -> bool:
        try:
            self.get_migration_path(from_version, to_version)
        except (NoPathError, CircularPathError):
            return False
        return True


class MigrationRunner:
    """
    Applies migrations to a token tree, one step at a time.

    Transforms may return a tree or an awaitable; each step is awaited
    before the next one starts. A failing transform propagates unchanged and
    completed steps are not undone.
    """

    def __init__(self, registry: MigrationRegistry, strict_chain: bool = False):
        """
        Initialize the runner.

        Args:
            registry: Migrations to draw from
            strict_chain: Only follow contiguous from->to chains; otherwise every
                migration whose range lies in the requested window is applied
        """
        self.registry = registry
        self.strict_chain = strict_chain

    async def migrate(
        self, tokens: Mapping[str, Any], from_version: str, to_version: str
    ) -> TokenTree:
        """
        Transport ``tokens`` from ``from_version`` to ``to_version``.

        Returns:
            The migrated tree; the input itself when both versions are equal

        Raises:
            ParseError: Malformed version strings
            NoPathError: Strict mode only, when no complete chain exists
        """
        source = SemanticVersion.parse(from_version)
        target = SemanticVersion.parse(to_version)

        direction = source.compare(target)
        if direction == 0:
            return tokens  # type: ignore[return-value]

        if direction < 0:
            steps = self._upgrade_steps(from_version, to_version)
        else:
            steps = self._downgrade_steps(from_version, to_version)

        current = deep_clone(tokens)
        for migration, transform, step_from, step_to in steps:
            current = await _apply(transform, current)
            logger.info(
                "migration_step_applied",
                from_version=step_from,
                to_version=step_to,
                description=migration.description,
            )

        logger.info(
            "migration_completed",
            from_version=from_version,
            to_version=to_version,
            steps=len(steps),
            strict=self.strict_chain,
        )
        return current

    def _upgrade_steps(self, from_version: str, to_version: str) -> List[tuple]:
        if self.strict_chain:
            path = self.registry.get_migration_path(from_version, to_version)
            return [(m, m.migrate, m.from_version, m.to_version) for m in path]

        steps = []
        cursor = from_version
        for migration in self.registry:
            if (
                SemanticVersion.parse(migration.from_version).compare(cursor) >= 0
                and SemanticVersion.parse(migration.to_version).compare(to_version) <= 0
            ):
                steps.append(
                    (migration, migration.migrate, migration.from_version, migration.to_version)
                )
                cursor = migration.to_version
        return steps

    def _downgrade_steps(self, from_version: str, to_version: str) -> List[tuple]:
        if self.strict_chain:
            path = self.registry.get_migration_path(to_version, from_version)
            missing = [m for m in path if m.rollback is None]
            if missing:
                raise NoPathError(
                    f"Migration {missing[0].from_version} -> {missing[0].to_version} "
                    "has no rollback",
                    from_version=from_version,
                    to_version=to_version,
                )
            return [
                (m, m.rollback, m.to_version, m.from_version) for m in reversed(path)
            ]

        steps = []
        cursor = from_version
        for migration in reversed(self.registry.migrations):
            if migration.rollback is None:
                continue
            if (
                SemanticVersion.parse(migration.to_version).compare(cursor) <= 0
                and SemanticVersion.parse(migration.from_version).compare(to_version) >= 0
            ):
                steps.append(
                    (migration, migration.rollback, migration.to_version, migration.from_version)
                )
                cursor = migration.from_version
        return steps


async def _apply(transform: Transform, tokens: TokenTree) -> TokenTree:
    result = transform(tokens)
    if inspect.isawaitable(result):
        result = await result
    return result
