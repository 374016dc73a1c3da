"""
Catalog of evaluation test identifiers.

Maps the identifiers the data-collection wizard submits in ``tests`` to a
display name, a report category, the trial-result kind used to normalize
its data, and the default posture/duration logged in the Test Results
sit/stand columns.
"""

from __future__ import annotations

from dataclasses import dataclass

# Category order is the order categories appear in the Test Results table.
EXTREMITY_STRENGTH = "Extremity Strength"
OCCUPATIONAL_TASKS = "Occupational Tasks"
SPINE_ROM = "Range of Motion (Spine)"
EXTREMITY_ROM = "Range of Motion (Extremity)"
WHOLE_BODY_STRENGTH = "Whole Body Strength"
CARDIOVASCULAR = "Cardiovascular"
OTHER = "Other Tests"

CATEGORY_ORDER = [
    EXTREMITY_STRENGTH,
    OCCUPATIONAL_TASKS,
    SPINE_ROM,
    EXTREMITY_ROM,
    WHOLE_BODY_STRENGTH,
    CARDIOVASCULAR,
    OTHER,
]


@dataclass(frozen=True)
class CatalogEntry:
    test_id: str
    name: str
    category: str
    kind: str
    posture: str = "stand"   # which time column the duration is logged in
    duration_min: float = 5


def _entries(category: str, kind: str, posture: str, items: list[tuple[str, str]]):
    return {tid: CatalogEntry(tid, name, category, kind, posture) for tid, name in items}


TEST_CATALOG: dict[str, CatalogEntry] = {
    **_entries(EXTREMITY_STRENGTH, "bilateral", "sit", [
        ("hand-strength-standard", "Hand Grip Standard, Position 2"),
        ("hand-strength-rapid-exchange", "Hand Grip Rapid Exchange"),
        ("hand-strength-mve", "Hand Grip MVE"),
        ("hand-strength-mmve", "Hand Grip MMVE"),
        ("pinch-strength-key", "Pinch Key"),
        ("pinch-strength-tip", "Pinch Tip"),
        ("pinch-strength-palmar", "Pinch Palmar"),
        ("pinch-strength-grasp", "Pinch Grasp"),
        ("shoulder-muscle-flexion", "Shoulder Flexion Strength"),
        ("elbow-muscle-flexion", "Elbow Flexion Strength"),
        ("wrist-muscle-extension", "Wrist Extension Strength"),
        ("knee-muscle-extension", "Knee Extension Strength"),
    ]),
    **_entries(OCCUPATIONAL_TASKS, "industrial_standard", "stand", [
        ("balance", "Balance"),
        ("walk", "Walk"),
        ("bi-manual-handling", "Bi-Manual Handling"),
        ("bi-manual-fingering", "Bi-Manual Fingering"),
        ("fingering", "Fingering"),
        ("handling", "Handling"),
        ("carry", "Carry"),
        ("climb-stairs", "Stair Climb"),
        ("climb-ladder", "Ladder Climb"),
        ("crawl", "Crawl"),
        ("crouch", "Crouch"),
        ("kneel", "Kneel"),
        ("stoop", "Stoop"),
        ("push-pull-cart", "Push/Pull Cart"),
        ("reach-immediate", "Reach, Immediate"),
        ("reach-overhead", "Reach, Overhead"),
        ("reach-with-weight", "Reach with Weight"),
    ]),
    **_entries(SPINE_ROM, "range_of_motion", "stand", [
        ("lumbar-spine-flexion-extension", "Lumbar Flexion/Extension"),
        ("lumbar-spine-lateral-flexion", "Lumbar Lateral Flexion"),
        ("lumbar-spine-straight-leg-raise", "Straight Leg Raise"),
        ("cervical-spine-flexion-extension", "Cervical Flexion/Extension"),
        ("cervical-spine-lateral-flexion", "Cervical Lateral Flexion"),
        ("cervical-spine-rotation", "Cervical Rotation"),
        ("thoracic-spine-flexion", "Thoracic Flexion"),
        ("thoracic-spine-rotation", "Thoracic Rotation"),
    ]),
    **_entries(EXTREMITY_ROM, "range_of_motion", "stand", [
        ("shoulder-rom-flexion-extension", "Shoulder Flexion/Extension"),
        ("shoulder-rom-abduction-adduction", "Shoulder Abduction/Adduction"),
        ("elbow-rom-flexion-extension", "Elbow Flexion/Extension"),
        ("wrist-rom-flexion-extension", "Wrist Flexion/Extension"),
        ("hip-rom-flexion-extension", "Hip Flexion/Extension"),
        ("knee-rom-flexion-extension", "Knee Flexion/Extension"),
        ("ankle-rom-dorsi-plantar-flexion", "Ankle Dorsi/Plantar Flexion"),
    ]),
    **_entries(WHOLE_BODY_STRENGTH, "weight", "stand", [
        ("static-lift-low", "Static Low Lift"),
        ("static-lift-mid", "Static Mid Lift"),
        ("static-lift-high", "Static High Lift"),
        ("dynamic-lift-low", "Dynamic Lift, Low"),
        ("dynamic-lift-mid", "Dynamic Lift, Medium"),
        ("dynamic-lift-high", "Dynamic Lift, High"),
        ("dynamic-lift-overhead", "Dynamic Lift, Overhead"),
        ("dynamic-lift-frequent", "Dynamic Lift, Frequent"),
    ]),
    **_entries(CARDIOVASCULAR, "cardio", "stand", [
        ("bruce-treadmill-test", "Bruce Treadmill Test"),
        ("mcaft-step-test", "mCAFT Step Test"),
        ("kasch-step-test", "Kasch Step Test"),
    ]),
}


def humanize_test_id(test_id: str) -> str:
    """``"foo-bar-test"`` → ``"Foo Bar Test"``."""
    words = [w for w in (test_id or "").replace("_", "-").split("-") if w]
    return " ".join(w.capitalize() for w in words) or "Unnamed Test"


def lookup_test(test_id: str) -> CatalogEntry:
    """Catalog entry for ``test_id``; unknown ids land in ``Other Tests``."""
    entry = TEST_CATALOG.get(test_id)
    if entry is not None:
        return entry
    return CatalogEntry(test_id, humanize_test_id(test_id), OTHER, "generic")


def kind_for(test_id: str) -> str:
    return lookup_test(test_id).kind
