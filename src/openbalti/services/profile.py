"""Profile completion scoring for the settings page progress bar."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from openbalti.services.numbers import round_half_up


@dataclass(frozen=True)
class ProfileField:
    name: str
    weight: int
    completed: Callable[[Mapping[str, Any]], bool]
    hint: str | None = None


def _filled(key: str, min_len: int = 1) -> Callable[[Mapping[str, Any]], bool]:
    def check(user: Mapping[str, Any]) -> bool:
        value = user.get(key)
        return isinstance(value, str) and len(value) >= min_len

    return check


PROFILE_FIELDS: tuple[ProfileField, ...] = (
    ProfileField(
        "Profile Picture",
        15,
        lambda u: bool(u.get("image")),
        "Add a profile picture to help others recognize you",
    ),
    ProfileField("Name", 10, _filled("name", 2)),
    ProfileField(
        "Bio",
        25,
        _filled("bio", 30),
        "Write a short bio about yourself and your interest in the Balti language",
    ),
    ProfileField(
        "Location",
        15,
        _filled("location"),
        "Share your location to connect with others in your area",
    ),
    ProfileField(
        "Website",
        15,
        _filled("website"),
        "Add your personal website or social media profiles",
    ),
    # any explicit choice counts, including False
    ProfileField(
        "Public Profile",
        10,
        lambda u: u.get("isPublic") is not None,
        "Choose whether to make your profile public or private",
    ),
    ProfileField(
        "Email Verified",
        10,
        lambda u: bool(u.get("emailVerified")),
        "Verify your email address to secure your account",
    ),
)


def calculate_profile_completion(user: Mapping[str, Any] | None) -> dict:
    if not user:
        return {"percentage": 0, "completedFields": [], "incompleteFields": [], "nextSteps": []}

    completed, incomplete, next_steps = [], [], []
    total = done = 0
    for field in PROFILE_FIELDS:
        total += field.weight
        if field.completed(user):
            completed.append(field.name)
            done += field.weight
        else:
            incomplete.append(field.name)
            next_steps.append(
                {"field": field.name, "description": field.hint or f"Add your {field.name.lower()}"}
            )

    return {
        "percentage": round_half_up(done / total * 100),
        "completedFields": completed,
        "incompleteFields": incomplete,
        "nextSteps": next_steps,
    }
