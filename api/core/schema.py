"""
Explicit relational schema for the admin API.

Every table the API touches is declared here: qualified name, columns with
their SQL types, primary key and foreign keys with their ON DELETE rule.
Nothing is inferred at runtime; `core/query.py` builds SQL from these objects
and `core/migrate.py` renders DDL from them.

Cascade policy lives in the foreign keys:
- attachments and link rows follow their parent (CASCADE)
- references to `storage.files` from content rows are nulled (SET NULL);
  the stored blob itself is reconciled out of band
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

SYSTEM_COLUMNS = frozenset({"id", "created_at", "updated_at"})

CASCADE = "CASCADE"
SET_NULL = "SET NULL"
RESTRICT = "RESTRICT"


@dataclass(frozen=True)
class Column:
    name: str
    sql_type: str = "text"
    nullable: bool = True
    default: str | None = None

    @property
    def is_json(self) -> bool:
        return self.sql_type == "jsonb"


@dataclass(frozen=True)
class ForeignKey:
    column: str
    references: str
    on_delete: str = RESTRICT


@dataclass(frozen=True)
class Table:
    name: str
    label: str
    columns: tuple[Column, ...]
    primary_key: tuple[str, ...] = ("id",)
    foreign_keys: tuple[ForeignKey, ...] = ()
    _by_name: dict[str, Column] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_name", {c.name: c for c in self.columns})

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    @property
    def has_identity(self) -> bool:
        return "id" in self._by_name

    @property
    def has_updated_at(self) -> bool:
        return "updated_at" in self._by_name

    def column(self, name: str) -> Column:
        try:
            return self._by_name[name]
        except KeyError:
            raise ValueError(f"Unknown column {name!r} for table {self.name}.") from None

    def has_column(self, name: str) -> bool:
        return name in self._by_name

    def writable(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """
        Return the caller-mutable subset of `values`.

        System columns are dropped silently whatever the caller sent.
        Unknown names raise ValueError: column names end up in SQL text.
        """
        out: dict[str, Any] = {}
        for name, value in values.items():
            if name in SYSTEM_COLUMNS:
                continue
            self.column(name)
            out[name] = value
        return out


@dataclass(frozen=True)
class Association:
    """
    Many-to-many link set owned by `parent`.

    Link rows are pure (parent_column, child_column) pairs with no identity.
    """

    name: str
    link_table: Table
    parent: Table
    parent_column: str
    child: Table
    child_column: str


@dataclass(frozen=True)
class OrderedCollection:
    """
    Parent-owned attachments that point at external assets, kept in display order.
    """

    table: Table
    parent: Table
    parent_column: str
    asset: Table
    asset_column: str
    order_column: str = "display_order"


def _id() -> Column:
    return Column("id", "bigserial", nullable=False)


def _timestamps() -> tuple[Column, Column]:
    return (
        Column("created_at", "timestamptz", nullable=False, default="now()"),
        Column("updated_at", "timestamptz", nullable=False, default="now()"),
    )


def _display_order() -> Column:
    return Column("display_order", "integer", nullable=False, default="0")


FILES = Table(
    name="storage.files",
    label="file",
    columns=(
        _id(),
        Column("s3_key", nullable=False),
        Column("s3_bucket", nullable=False),
        Column("file_name", nullable=False),
        Column("file_size", "bigint", nullable=False, default="0"),
        Column("mime_type"),
        Column("file_type", nullable=False),
        *_timestamps(),
    ),
)

PROFILE = Table(
    name="portfolio.profile",
    label="profile",
    columns=(
        _id(),
        Column("full_name", nullable=False),
        Column("title"),
        Column("bio"),
        Column("email"),
        Column("phone"),
        Column("location"),
        Column("avatar_file_id", "bigint"),
        Column("resume_file_id", "bigint"),
        *_timestamps(),
    ),
    foreign_keys=(
        ForeignKey("avatar_file_id", FILES.name, SET_NULL),
        ForeignKey("resume_file_id", FILES.name, SET_NULL),
    ),
)

# The profile is a single row addressed by this key.
PROFILE_ID = 1

WORK_EXPERIENCE = Table(
    name="portfolio.work_experience",
    label="work experience",
    columns=(
        _id(),
        Column("company", nullable=False),
        Column("position", nullable=False),
        Column("description"),
        Column("start_date", "date", nullable=False),
        Column("end_date", "date"),
        Column("is_current", "boolean", nullable=False, default="false"),
        _display_order(),
        *_timestamps(),
    ),
)

CERTIFICATIONS = Table(
    name="portfolio.certifications",
    label="certification",
    columns=(
        _id(),
        Column("name", nullable=False),
        Column("issuer", nullable=False),
        Column("issue_date", "date", nullable=False),
        Column("expiry_date", "date"),
        Column("credential_id"),
        Column("credential_url"),
        *_timestamps(),
    ),
)

SKILL_TYPES = Table(
    name="portfolio.cl_skill_types",
    label="skill type",
    columns=(
        _id(),
        Column("name", nullable=False),
        Column("description"),
        _display_order(),
        *_timestamps(),
    ),
)

SKILLS = Table(
    name="portfolio.skills",
    label="skill",
    columns=(
        _id(),
        Column("skill", nullable=False),
        Column("skill_type_id", "bigint", nullable=False),
        Column("is_visible", "boolean", nullable=False, default="true"),
        _display_order(),
        *_timestamps(),
    ),
    foreign_keys=(ForeignKey("skill_type_id", SKILL_TYPES.name, RESTRICT),),
)

PORTFOLIO_PROJECTS = Table(
    name="portfolio.portfolio_projects",
    label="portfolio project",
    columns=(
        _id(),
        Column("title", nullable=False),
        Column("category"),
        Column("description"),
        Column("long_description"),
        Column("image_file_id", "bigint"),
        Column("github_url"),
        Column("live_url"),
        Column("start_date", "date"),
        Column("end_date", "date"),
        Column("is_ongoing", "boolean", nullable=False, default="false"),
        Column("team_size", "integer"),
        Column("role"),
        Column("featured", "boolean", nullable=False, default="false"),
        Column("features", "jsonb"),
        Column("challenges", "jsonb"),
        Column("learnings", "jsonb"),
        _display_order(),
        *_timestamps(),
    ),
    foreign_keys=(ForeignKey("image_file_id", FILES.name, SET_NULL),),
)

PROJECT_TECHNOLOGIES = Table(
    name="portfolio.project_technologies",
    label="project technology",
    columns=(
        Column("project_id", "bigint", nullable=False),
        Column("skill_id", "bigint", nullable=False),
    ),
    primary_key=("project_id", "skill_id"),
    foreign_keys=(
        ForeignKey("project_id", PORTFOLIO_PROJECTS.name, CASCADE),
        ForeignKey("skill_id", SKILLS.name, CASCADE),
    ),
)

MINIATURE_THEMES = Table(
    name="miniatures.miniature_themes",
    label="miniature theme",
    columns=(
        _id(),
        Column("name", nullable=False),
        Column("description"),
        Column("cover_image_id", "bigint"),
        _display_order(),
        *_timestamps(),
    ),
    foreign_keys=(ForeignKey("cover_image_id", FILES.name, SET_NULL),),
)

MINIATURE_PROJECTS = Table(
    name="miniatures.miniature_projects",
    label="miniature project",
    columns=(
        _id(),
        Column("title", nullable=False),
        Column("description"),
        Column("completed_date", "date"),
        Column("theme_id", "bigint"),
        Column("scale"),
        Column("manufacturer"),
        Column("time_spent", "numeric"),
        Column("difficulty"),
        _display_order(),
        *_timestamps(),
    ),
    foreign_keys=(ForeignKey("theme_id", MINIATURE_THEMES.name, SET_NULL),),
)

MINIATURE_FILES = Table(
    name="miniatures.miniature_files",
    label="miniature image",
    columns=(
        _id(),
        Column("miniature_project_id", "bigint", nullable=False),
        Column("file_id", "bigint", nullable=False),
        Column("caption"),
        _display_order(),
        Column("created_at", "timestamptz", nullable=False, default="now()"),
    ),
    foreign_keys=(
        ForeignKey("miniature_project_id", MINIATURE_PROJECTS.name, CASCADE),
        ForeignKey("file_id", FILES.name, CASCADE),
    ),
)

TECHNIQUES = Table(
    name="miniatures.techniques",
    label="technique",
    columns=(
        _id(),
        Column("name", nullable=False),
        Column("slug", nullable=False),
        Column("description"),
        Column("difficulty"),
        _display_order(),
        *_timestamps(),
    ),
)

MINIATURE_PAINTS = Table(
    name="miniatures.miniature_paints",
    label="miniature paint",
    columns=(
        _id(),
        Column("name", nullable=False),
        Column("manufacturer", nullable=False),
        Column("color_hex"),
        Column("paint_type"),
        *_timestamps(),
    ),
)

MINIATURE_PROJECT_TECHNIQUES = Table(
    name="miniatures.miniature_project_techniques",
    label="project technique",
    columns=(
        Column("miniature_project_id", "bigint", nullable=False),
        Column("technique_id", "bigint", nullable=False),
    ),
    primary_key=("miniature_project_id", "technique_id"),
    foreign_keys=(
        ForeignKey("miniature_project_id", MINIATURE_PROJECTS.name, CASCADE),
        ForeignKey("technique_id", TECHNIQUES.name, CASCADE),
    ),
)

MINIATURE_PROJECT_PAINTS = Table(
    name="miniatures.miniature_project_paints",
    label="project paint",
    columns=(
        Column("miniature_project_id", "bigint", nullable=False),
        Column("paint_id", "bigint", nullable=False),
    ),
    primary_key=("miniature_project_id", "paint_id"),
    foreign_keys=(
        ForeignKey("miniature_project_id", MINIATURE_PROJECTS.name, CASCADE),
        ForeignKey("paint_id", MINIATURE_PAINTS.name, CASCADE),
    ),
)

# Creation order: referenced tables come first.
TABLES: tuple[Table, ...] = (
    FILES,
    PROFILE,
    WORK_EXPERIENCE,
    CERTIFICATIONS,
    SKILL_TYPES,
    SKILLS,
    PORTFOLIO_PROJECTS,
    PROJECT_TECHNOLOGIES,
    MINIATURE_THEMES,
    MINIATURE_PROJECTS,
    MINIATURE_FILES,
    TECHNIQUES,
    MINIATURE_PAINTS,
    MINIATURE_PROJECT_TECHNIQUES,
    MINIATURE_PROJECT_PAINTS,
)

PROJECT_TECHNOLOGY_LINKS = Association(
    name="technologies",
    link_table=PROJECT_TECHNOLOGIES,
    parent=PORTFOLIO_PROJECTS,
    parent_column="project_id",
    child=SKILLS,
    child_column="skill_id",
)

MINIATURE_TECHNIQUE_LINKS = Association(
    name="techniques",
    link_table=MINIATURE_PROJECT_TECHNIQUES,
    parent=MINIATURE_PROJECTS,
    parent_column="miniature_project_id",
    child=TECHNIQUES,
    child_column="technique_id",
)

MINIATURE_PAINT_LINKS = Association(
    name="paints",
    link_table=MINIATURE_PROJECT_PAINTS,
    parent=MINIATURE_PROJECTS,
    parent_column="miniature_project_id",
    child=MINIATURE_PAINTS,
    child_column="paint_id",
)

MINIATURE_IMAGES = OrderedCollection(
    table=MINIATURE_FILES,
    parent=MINIATURE_PROJECTS,
    parent_column="miniature_project_id",
    asset=FILES,
    asset_column="file_id",
)


def table_by_name(name: str) -> Table:
    for table in TABLES:
        if table.name == name:
            return table
    raise ValueError(f"Unknown table {name!r}.")


def _column_ddl(column: Column) -> str:
    parts = [column.name, column.sql_type]
    if not column.nullable:
        parts.append("NOT NULL")
    if column.default is not None:
        parts.append(f"DEFAULT {column.default}")
    return " ".join(parts)


def create_table_sql(table: Table) -> str:
    lines = [_column_ddl(c) for c in table.columns]
    lines.append(f"PRIMARY KEY ({', '.join(table.primary_key)})")
    for fk in table.foreign_keys:
        lines.append(
            f"FOREIGN KEY ({fk.column}) REFERENCES {fk.references} (id) ON DELETE {fk.on_delete}"
        )
    body = ",\n  ".join(lines)
    return f"CREATE TABLE IF NOT EXISTS {table.name} (\n  {body}\n)"


def create_statements(tables: tuple[Table, ...] = TABLES) -> list[str]:
    schemas = sorted({t.name.split(".", 1)[0] for t in tables if "." in t.name})
    statements = [f"CREATE SCHEMA IF NOT EXISTS {s}" for s in schemas]
    statements.extend(create_table_sql(t) for t in tables)
    return statements
