"""
Belbin Team Roles — reference data.

Nine behavioural team-role types from Meredith Belbin's published work,
three in each of the Action, People and Thinking categories. Roles and
activity categories refer to these types by key.

Usage:
    from orgforge.frameworks.belbin import BELBIN_ROLES, BELBIN_CATEGORIES
    BELBIN_ROLES["plant"].label   # -> "Plant"
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Literal

BelbinCategory = Literal["Action", "People", "Thinking"]

BELBIN_CATEGORIES: tuple[BelbinCategory, ...] = ("Action", "People", "Thinking")


@dataclass(frozen=True)
class BelbinRole:
    """One Belbin team-role type."""
    key: str
    label: str
    category: BelbinCategory
    strength: str
    allowable_weakness: str

    def to_dict(self) -> dict:
        return asdict(self)


# ── Reference table (insertion order = display order) ───────────────────────

BELBIN_ROLES: dict[str, BelbinRole] = {
    # Action-oriented
    "shaper": BelbinRole(
        key="shaper",
        label="Shaper",
        category="Action",
        strength="Challenging, dynamic, thrives on pressure. Drives momentum and overcomes obstacles.",
        allowable_weakness="Can be provocative and impatient. May hurt feelings.",
    ),
    "implementer": BelbinRole(
        key="implementer",
        label="Implementer",
        category="Action",
        strength="Disciplined, reliable, efficient. Turns ideas into practical actions.",
        allowable_weakness="Can be inflexible. Slow to respond to new possibilities.",
    ),
    "completer_finisher": BelbinRole(
        key="completer_finisher",
        label="Completer Finisher",
        category="Action",
        strength="Painstaking, conscientious. Finds errors. Polishes and perfects.",
        allowable_weakness="Can be a worrier. Reluctant to delegate.",
    ),
    # People-oriented
    "coordinator": BelbinRole(
        key="coordinator",
        label="Coordinator",
        category="People",
        strength="Mature, confident, trusting. Clarifies goals, delegates well, promotes decision-making.",
        allowable_weakness="Can be seen as manipulative. Delegates personal work.",
    ),
    "teamworker": BelbinRole(
        key="teamworker",
        label="Teamworker",
        category="People",
        strength="Co-operative, perceptive, diplomatic. Listens, builds, averts friction.",
        allowable_weakness="Can be indecisive in crunch situations. Avoids confrontation.",
    ),
    "resource_investigator": BelbinRole(
        key="resource_investigator",
        label="Resource Investigator",
        category="People",
        strength="Outgoing, enthusiastic, communicative. Explores opportunities and develops contacts.",
        allowable_weakness="Can be over-optimistic. Loses interest once initial enthusiasm passes.",
    ),
    # Thinking-oriented
    "plant": BelbinRole(
        key="plant",
        label="Plant",
        category="Thinking",
        strength="Creative, imaginative, free-thinking. Generates ideas and solves difficult problems.",
        allowable_weakness="Ignores incidentals. Too preoccupied to communicate effectively.",
    ),
    "monitor_evaluator": BelbinRole(
        key="monitor_evaluator",
        label="Monitor Evaluator",
        category="Thinking",
        strength="Sober, strategic, discerning. Sees all options and judges accurately.",
        allowable_weakness="Can lack drive and ability to inspire others. Overly critical.",
    ),
    "specialist": BelbinRole(
        key="specialist",
        label="Specialist",
        category="Thinking",
        strength="Single-minded, self-starting, dedicated. Provides knowledge in a narrow area.",
        allowable_weakness="Contributes on a narrow front only. Dwells on technicalities.",
    ),
}

BELBIN_BY_CATEGORY: dict[str, list[BelbinRole]] = {
    category: [r for r in BELBIN_ROLES.values() if r.category == category]
    for category in BELBIN_CATEGORIES
}


def reference_table() -> list[dict]:
    """Serialisable reference table, grouped by category."""
    return [
        {"category": category, "roles": [r.to_dict() for r in BELBIN_BY_CATEGORY[category]]}
        for category in BELBIN_CATEGORIES
    ]
