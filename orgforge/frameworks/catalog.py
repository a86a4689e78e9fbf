"""
Management frameworks behind the diagnostics.

Six published frameworks. Each one explains the idea it contributes and how
workspaces apply it: Belbin drives team composition, Radical Candor the
growth tracks, Drive and the Job Characteristics Model role design, RAPID
decision rights, Working Genius energy mapping.

Usage:
    from orgforge.frameworks.catalog import FRAMEWORKS
    FRAMEWORKS["rapid"].author   # -> "Bain & Company"
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Framework:
    key: str
    name: str
    author: str
    core_concept: str
    description: str
    how_used: str

    def to_dict(self) -> dict:
        return asdict(self)


# ── Catalogue (insertion order = display order) ─────────────────────────────

FRAMEWORKS: dict[str, Framework] = {
    "belbin": Framework(
        key="belbin",
        name="Belbin Team Roles",
        author="Meredith Belbin",
        core_concept="9 behavioural types across Action / People / Thinking",
        description=(
            "People adopt one of nine behavioural roles in a team. Balanced teams need "
            "coverage across all three categories. Imbalance causes dysfunction."
        ),
        how_used=(
            "Assigned to each role as primary + secondary. Used to check team composition "
            "balance and activity-to-person fit."
        ),
    ),
    "radical-candor": Framework(
        key="radical-candor",
        name="Radical Candor",
        author="Kim Scott",
        core_concept="Rock Stars (steady mastery) vs Superstars (steep growth)",
        description=(
            "Not everyone should climb. 'Rock Stars' deepen mastery and are the backbone. "
            "'Superstars' need challenge and will leave without it. Both tracks are valuable."
        ),
        how_used=(
            "Each role progression declares a growth track. Prevents the mistake of pushing "
            "everyone to climb when some should deepen."
        ),
    ),
    "drive": Framework(
        key="drive",
        name="Drive",
        author="Daniel Pink",
        core_concept="Autonomy, Mastery, Purpose",
        description=(
            "Three intrinsic motivators that predict engagement. If any is missing, the role "
            "will struggle to retain good people."
        ),
        how_used="Three dimensions scored per role. If any is absent or weak, the role needs redesigning.",
    ),
    "job-characteristics": Framework(
        key="job-characteristics",
        name="Job Characteristics Model",
        author="Hackman & Oldham",
        core_concept="5 core job design dimensions",
        description=(
            "Skill Variety, Task Identity, Task Significance, Autonomy, and Feedback are the "
            "five dimensions that predict job satisfaction and performance."
        ),
        how_used=(
            "Scores each role on all five dimensions. Low scores signal a need to redesign "
            "the job, not replace the person."
        ),
    ),
    "rapid": Framework(
        key="rapid",
        name="RAPID",
        author="Bain & Company",
        core_concept="Decision rights: Decide, Recommend, Input, Perform",
        description=(
            "Most team friction comes from ambiguous decision rights. RAPID clarifies who "
            "has the final call vs who proposes vs who executes."
        ),
        how_used=(
            "Each role lists what it Decides, Recommends, provides Input on, and Performs. "
            "Overlaps and gaps surface friction."
        ),
    ),
    "working-genius": Framework(
        key="working-genius",
        name="Working Genius",
        author="Patrick Lencioni",
        core_concept="Energy mapping: what energises vs drains",
        description=(
            "Persistent mismatch between what someone does daily and what gives them energy "
            "leads to burnout. This framework makes that mismatch visible."
        ),
        how_used=(
            "Each role lists energisers and drainers. When someone is doing mostly draining "
            "work, something needs to change."
        ),
    ),
}


def catalogue() -> list[dict]:
    return [f.to_dict() for f in FRAMEWORKS.values()]
