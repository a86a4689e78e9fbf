"""
Workspace snapshot — typed, immutable input of the analysis engine.

The stored entities keep their nested structures (owns, does_not_own,
oversees_stage_ids, tensions, growth_activity_ids, ...) as untyped JSON.
This module turns them into frozen records exactly once, at the boundary,
so the analysers never cast or re-check shapes.

Accepted keys:
    Both snake_case (ORM ``to_dict`` output) and camelCase (browser / AI
    client payloads) are accepted for every field, e.g. ``job_title`` or
    ``jobTitle``.

Validation scope:
    Only *shape* is validated here (types of fields, required ids).
    Referential consistency — every stage_id in an assignment existing in
    the stages list — is deliberately not checked: the analysers treat an
    unresolved reference as unknown and skip it.

Usage:
    snapshot = WorkspaceSnapshot.from_dict(request.get_json())
    detect_ownership_overlaps(snapshot.roles)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from orgforge.core.exceptions import ValidationError

_CAMEL_RE = re.compile(r"_([a-z])")


def _camel(name: str) -> str:
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), name)


def _get(data: dict, name: str, default: Any = None) -> Any:
    """Read ``name`` in snake_case, falling back to its camelCase spelling."""
    if name in data:
        return data[name]
    return data.get(_camel(name), default)


# ── Field readers (raise ValidationError with a field path) ─────────────────


def _require_id(data: dict, name: str, path: str) -> str:
    value = _get(data, name)
    if value is None or isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValidationError(
            f"{path}.{name} is required",
            details={f"{path}.{name}": "required string or integer id"},
        )
    value = str(value)
    if not value.strip():
        raise ValidationError(
            f"{path}.{name} is required",
            details={f"{path}.{name}": "must not be empty"},
        )
    return value


def _optional_id(data: dict, name: str, path: str) -> str | None:
    if _get(data, name) is None:
        return None
    return _require_id(data, name, path)


def _optional_str(data: dict, name: str, path: str) -> str | None:
    value = _get(data, name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(
            f"{path}.{name} must be a string",
            details={f"{path}.{name}": "must be a string or null"},
        )
    return value


def _str_list(value: Any, path: str) -> tuple[str, ...]:
    """Normalise a JSON list of strings; ``None`` becomes an empty tuple."""
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{path} must be a list", details={path: "must be a list of strings"})
    for idx, item in enumerate(value):
        if not isinstance(item, str):
            raise ValidationError(
                f"{path}[{idx}] must be a string",
                details={f"{path}[{idx}]": "must be a string"},
            )
    return tuple(value)


def _id_list(value: Any, path: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{path} must be a list", details={path: "must be a list of ids"})
    ids = []
    for idx, item in enumerate(value):
        if isinstance(item, bool) or not isinstance(item, (str, int)):
            raise ValidationError(
                f"{path}[{idx}] must be an id",
                details={f"{path}[{idx}]": "must be a string or integer id"},
            )
        ids.append(str(item))
    return tuple(ids)


def _require_object(data: Any, path: str) -> dict:
    if not isinstance(data, dict):
        raise ValidationError(f"{path} must be an object", details={path: "must be an object"})
    return data


# ═════════════════════════════════════════════════════════════════════════════
# Records
# ═════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class OwnershipCategory:
    """A named group of owned items, e.g. ``{"title": "Finance", "items": [...]}``."""
    title: str
    items: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any, path: str = "owns") -> "OwnershipCategory":
        data = _require_object(data, path)
        title = _optional_str(data, "title", path) or ""
        return cls(title=title, items=_str_list(data.get("items"), f"{path}.items"))

    def to_dict(self) -> dict:
        return {"title": self.title, "items": list(self.items)}


@dataclass(frozen=True)
class Role:
    id: str
    job_title: str | None = None
    owns: tuple[OwnershipCategory, ...] = ()
    does_not_own: tuple[str, ...] = ()
    belbin_primary: str | None = None
    belbin_secondary: str | None = None
    oversees_stage_ids: tuple[str, ...] = ()

    @property
    def is_oversight(self) -> bool:
        """Leadership role: oversees at least one stage."""
        return len(self.oversees_stage_ids) > 0

    @property
    def title(self) -> str:
        """Display title used in findings."""
        return self.job_title if self.job_title is not None else "Unknown"

    @classmethod
    def from_dict(cls, data: Any, path: str = "role") -> "Role":
        data = _require_object(data, path)
        owns_raw = _get(data, "owns")
        if owns_raw is None:
            owns: tuple[OwnershipCategory, ...] = ()
        elif isinstance(owns_raw, (list, tuple)):
            owns = tuple(
                OwnershipCategory.from_dict(cat, f"{path}.owns[{idx}]")
                for idx, cat in enumerate(owns_raw)
            )
        else:
            raise ValidationError(
                f"{path}.owns must be a list",
                details={f"{path}.owns": "must be a list of {title, items} objects"},
            )
        return cls(
            id=_require_id(data, "id", path),
            job_title=_optional_str(data, "job_title", path),
            owns=owns,
            does_not_own=_str_list(_get(data, "does_not_own"), f"{path}.does_not_own"),
            belbin_primary=_optional_str(data, "belbin_primary", path),
            belbin_secondary=_optional_str(data, "belbin_secondary", path),
            oversees_stage_ids=_id_list(_get(data, "oversees_stage_ids"), f"{path}.oversees_stage_ids"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "job_title": self.job_title,
            "owns": [c.to_dict() for c in self.owns],
            "does_not_own": list(self.does_not_own),
            "belbin_primary": self.belbin_primary,
            "belbin_secondary": self.belbin_secondary,
            "oversees_stage_ids": list(self.oversees_stage_ids),
        }


@dataclass(frozen=True)
class Stage:
    id: str
    name: str
    sort_order: int = 0

    @classmethod
    def from_dict(cls, data: Any, path: str = "stage") -> "Stage":
        data = _require_object(data, path)
        sort_order = _get(data, "sort_order", 0)
        if sort_order is None:
            sort_order = 0
        if isinstance(sort_order, bool) or not isinstance(sort_order, int):
            raise ValidationError(
                f"{path}.sort_order must be an integer",
                details={f"{path}.sort_order": "must be an integer"},
            )
        return cls(
            id=_require_id(data, "id", path),
            name=_optional_str(data, "name", path) or "",
            sort_order=sort_order,
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "sort_order": self.sort_order}


@dataclass(frozen=True)
class StageRoleAssignment:
    stage_id: str
    role_id: str

    @classmethod
    def from_dict(cls, data: Any, path: str = "stage_assignment") -> "StageRoleAssignment":
        data = _require_object(data, path)
        return cls(
            stage_id=_require_id(data, "stage_id", path),
            role_id=_require_id(data, "role_id", path),
        )

    def to_dict(self) -> dict:
        return {"stage_id": self.stage_id, "role_id": self.role_id}


@dataclass(frozen=True)
class Handoff:
    id: str
    from_stage_id: str
    to_stage_id: str
    sla: str | None = None
    tensions: tuple[str, ...] = ()
    notes: str | None = None
    sla_owner: str | None = None

    @property
    def has_sla(self) -> bool:
        return bool(self.sla and self.sla.strip())

    @classmethod
    def from_dict(cls, data: Any, path: str = "handoff") -> "Handoff":
        data = _require_object(data, path)
        return cls(
            id=_require_id(data, "id", path),
            from_stage_id=_require_id(data, "from_stage_id", path),
            to_stage_id=_require_id(data, "to_stage_id", path),
            sla=_optional_str(data, "sla", path),
            tensions=_str_list(_get(data, "tensions"), f"{path}.tensions"),
            notes=_optional_str(data, "notes", path),
            sla_owner=_optional_str(data, "sla_owner", path),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "from_stage_id": self.from_stage_id,
            "to_stage_id": self.to_stage_id,
            "sla": self.sla,
            "tensions": list(self.tensions),
            "notes": self.notes,
            "sla_owner": self.sla_owner,
        }


@dataclass(frozen=True)
class ActivityCategory:
    id: str
    name: str
    belbin_ideal: tuple[str, ...] = ()
    belbin_fit_reason: str | None = None

    @classmethod
    def from_dict(cls, data: Any, path: str = "category") -> "ActivityCategory":
        data = _require_object(data, path)
        return cls(
            id=_require_id(data, "id", path),
            name=_optional_str(data, "name", path) or "",
            belbin_ideal=_str_list(_get(data, "belbin_ideal"), f"{path}.belbin_ideal"),
            belbin_fit_reason=_optional_str(data, "belbin_fit_reason", path),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "belbin_ideal": list(self.belbin_ideal),
            "belbin_fit_reason": self.belbin_fit_reason,
        }


@dataclass(frozen=True)
class Activity:
    id: str
    name: str
    category_id: str | None = None
    stage_id: str | None = None

    @classmethod
    def from_dict(cls, data: Any, path: str = "activity") -> "Activity":
        data = _require_object(data, path)
        return cls(
            id=_require_id(data, "id", path),
            name=_optional_str(data, "name", path) or "",
            category_id=_optional_id(data, "category_id", path),
            stage_id=_optional_id(data, "stage_id", path),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category_id": self.category_id,
            "stage_id": self.stage_id,
        }


@dataclass(frozen=True)
class ActivityAssignment:
    activity_id: str
    role_id: str

    @classmethod
    def from_dict(cls, data: Any, path: str = "activity_assignment") -> "ActivityAssignment":
        data = _require_object(data, path)
        return cls(
            activity_id=_require_id(data, "activity_id", path),
            role_id=_require_id(data, "role_id", path),
        )

    def to_dict(self) -> dict:
        return {"activity_id": self.activity_id, "role_id": self.role_id}


@dataclass(frozen=True)
class RoleProgression:
    role_id: str
    tier: str | None = None
    growth_track: str | None = None
    growth_activity_ids: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any, path: str = "progression") -> "RoleProgression":
        data = _require_object(data, path)
        return cls(
            role_id=_require_id(data, "role_id", path),
            tier=_optional_str(data, "tier", path),
            growth_track=_optional_str(data, "growth_track", path),
            growth_activity_ids=_id_list(
                _get(data, "growth_activity_ids"), f"{path}.growth_activity_ids",
            ),
        )

    def to_dict(self) -> dict:
        return {
            "role_id": self.role_id,
            "tier": self.tier,
            "growth_track": self.growth_track,
            "growth_activity_ids": list(self.growth_activity_ids),
        }


# ═════════════════════════════════════════════════════════════════════════════
# Snapshot
# ═════════════════════════════════════════════════════════════════════════════

# collection name -> record type; order is the order errors are reported in
_COLLECTIONS: dict[str, type] = {
    "roles": Role,
    "stages": Stage,
    "stage_assignments": StageRoleAssignment,
    "handoffs": Handoff,
    "categories": ActivityCategory,
    "activities": Activity,
    "activity_assignments": ActivityAssignment,
    "progressions": RoleProgression,
}


@dataclass(frozen=True)
class WorkspaceSnapshot:
    """Complete, consistent read of one workspace. Collection order is snapshot order."""
    roles: tuple[Role, ...] = ()
    stages: tuple[Stage, ...] = ()
    stage_assignments: tuple[StageRoleAssignment, ...] = ()
    handoffs: tuple[Handoff, ...] = ()
    categories: tuple[ActivityCategory, ...] = ()
    activities: tuple[Activity, ...] = ()
    activity_assignments: tuple[ActivityAssignment, ...] = ()
    progressions: tuple[RoleProgression, ...] = ()
    workspace_id: str | None = field(default=None, compare=False)

    @classmethod
    def from_dict(cls, payload: Any) -> "WorkspaceSnapshot":
        """Build a snapshot from a JSON-like payload.

        Every entry of every collection is checked; all shape errors are
        collected and raised together as one ValidationError whose
        ``details`` maps field paths to messages.
        """
        payload = _require_object(payload, "snapshot")
        errors: dict[str, str] = {}
        collections: dict[str, tuple] = {}

        for name, record_type in _COLLECTIONS.items():
            raw = _get(payload, name)
            if raw is None:
                collections[name] = ()
                continue
            if not isinstance(raw, (list, tuple)):
                errors[name] = "must be a list"
                continue
            records = []
            for idx, entry in enumerate(raw):
                try:
                    records.append(record_type.from_dict(entry, f"{name}[{idx}]"))
                except ValidationError as exc:
                    errors.update(exc.details or {f"{name}[{idx}]": str(exc)})
            collections[name] = tuple(records)

        if errors:
            raise ValidationError("Invalid workspace snapshot", details=errors)

        workspace_id = _get(payload, "workspace_id")
        return cls(
            workspace_id=str(workspace_id) if workspace_id is not None else None,
            **collections,
        )

    def to_dict(self) -> dict:
        result = {
            name: [record.to_dict() for record in getattr(self, name)]
            for name in _COLLECTIONS
        }
        result["workspace_id"] = self.workspace_id
        return result
