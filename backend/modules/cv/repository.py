"""
CV data repository.

Loads every section of a CV from Supabase. Child rows (strengths,
responsibilities, evidence) are fetched in one ``in`` query per level
and grouped in Python rather than one query per parent.
"""

from typing import Any, Optional

from shared.repository import BaseRepository

# (key in cvData, table, ordering as (column, descending))
SECTIONS: list[tuple[str, str, list[tuple[str, bool]]]] = [
    ("work_experience", "work_experience", [("sort_order", False), ("start_date", True)]),
    ("education", "education", [("start_date", True)]),
    ("skills", "skills", [("category", False), ("name", False)]),
    ("projects", "projects", [("start_date", True)]),
    ("certifications", "certifications", [("date_obtained", True)]),
    ("memberships", "professional_memberships", [("start_date", True)]),
    ("interests", "interests", [("name", False)]),
    (
        "qualification_equivalence",
        "professional_qualification_equivalence",
        [("level", False)],
    ),
]

SORT_ORDER = [("sort_order", False)]

MASTER_OWNER = "profile_id"
VARIANT_OWNER = "cv_variant_id"


def _group_by(rows: list[dict[str, Any]], key: str) -> dict[Any, list[dict[str, Any]]]:
    grouped: dict[Any, list[dict[str, Any]]] = {}
    for row in rows:
        grouped.setdefault(row.get(key), []).append(row)
    return grouped


class CvRepository(BaseRepository[dict]):
    """
    Repository for CV sections.

    Note: This repository does NOT perform authorization checks.
    Callers pass the verified user's ID.
    """

    def load_cv_data(self, user_id: str) -> dict[str, Any]:
        data = self._load_sections(MASTER_OWNER, user_id)
        data["profile"] = self._profile(user_id)
        return data

    def get_variant(self, variant_id: str, user_id: str) -> Optional[dict[str, Any]]:
        result = self._execute(
            "cv_variants.get",
            self._db.table("cv_variants")
            .select("*")
            .eq("id", variant_id)
            .eq("user_id", user_id)
            .limit(1),
        )
        if not result.data:
            return None
        return result.data[0]

    def load_variant_data(self, variant: dict[str, Any]) -> dict[str, Any]:
        data = self._load_sections(VARIANT_OWNER, variant["id"])
        data["variant"] = variant
        data["profile"] = self._profile(variant["user_id"])
        return data

    def get_profile_id_by_username(self, username: str) -> Optional[str]:
        result = self._execute(
            "profiles.get_by_username",
            self._db.table("profiles").select("id").eq("username", username).limit(1),
        )
        return result.data[0]["id"] if result.data else None

    def _profile(self, user_id: str) -> Optional[dict[str, Any]]:
        result = self._execute(
            "profiles.get",
            self._db.table("profiles").select("*").eq("id", user_id).limit(1),
        )
        return result.data[0] if result.data else None

    def _load_sections(self, owner_column: str, owner_id: str) -> dict[str, Any]:
        data: dict[str, Any] = {"profile": None, "professional_summary": None}
        data["professional_summary"] = self._summary(owner_column, owner_id)

        for key, table, ordering in SECTIONS:
            data[key] = self._rows(table, owner_column, [owner_id], ordering)

        self._attach_responsibilities(data["work_experience"])
        self._attach_children(
            data["qualification_equivalence"],
            table="supporting_evidence",
            parent_column="qualification_equivalence_id",
            attach_as="evidence",
        )
        return data

    def _summary(self, owner_column: str, owner_id: str) -> Optional[dict[str, Any]]:
        rows = self._rows("professional_summary", owner_column, [owner_id], [])
        if not rows:
            return None
        summary = dict(rows[0])
        summary["strengths"] = self._rows(
            "professional_summary_strengths",
            "professional_summary_id",
            [summary["id"]],
            SORT_ORDER,
        )
        return summary

    def _attach_responsibilities(self, work_items: list[dict[str, Any]]) -> None:
        categories = self._attach_children(
            work_items,
            table="responsibility_categories",
            parent_column="work_experience_id",
            attach_as="responsibility_categories",
        )
        self._attach_children(
            categories,
            table="responsibility_items",
            parent_column="category_id",
            attach_as="items",
        )

    def _attach_children(
        self,
        parents: list[dict[str, Any]],
        table: str,
        parent_column: str,
        attach_as: str,
    ) -> list[dict[str, Any]]:
        """Fetch children of every parent in one query; returns the children."""
        if not parents:
            return []
        children = self._rows(table, parent_column, [p["id"] for p in parents], SORT_ORDER)
        grouped = _group_by(children, parent_column)
        for parent in parents:
            parent[attach_as] = grouped.get(parent["id"], [])
        return children

    def _rows(
        self,
        table: str,
        column: str,
        values: list[Any],
        ordering: list[tuple[str, bool]],
    ) -> list[dict[str, Any]]:
        query = self._db.table(table).select("*")
        query = query.eq(column, values[0]) if len(values) == 1 else query.in_(column, values)
        for order_column, descending in ordering:
            query = query.order(order_column, desc=descending)
        result = self._execute(f"{table}.list", query)
        return [dict(row) for row in result.data or []]
