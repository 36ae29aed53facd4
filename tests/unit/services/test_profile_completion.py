from __future__ import annotations

from openbalti.services.profile import PROFILE_FIELDS, calculate_profile_completion


def test_weights_sum_to_one_hundred():
    assert sum(f.weight for f in PROFILE_FIELDS) == 100


def test_missing_user_is_empty():
    assert calculate_profile_completion(None) == {
        "percentage": 0,
        "completedFields": [],
        "incompleteFields": [],
        "nextSteps": [],
    }


def test_complete_profile():
    user = {
        "image": "https://img.example/a.png",
        "name": "Amina",
        "bio": "I collect Balti words from my grandmother in Skardu.",
        "location": "Skardu",
        "website": "https://amina.example",
        "isPublic": True,
        "emailVerified": True,
    }
    result = calculate_profile_completion(user)
    assert result["percentage"] == 100
    assert result["incompleteFields"] == []
    assert result["nextSteps"] == []


def test_partial_profile_scores_and_hints():
    # name (10) + public flag (10) only
    result = calculate_profile_completion({"name": "Al", "isPublic": False, "bio": "too short"})
    assert result["percentage"] == 20
    assert result["completedFields"] == ["Name", "Public Profile"]
    assert "Bio" in result["incompleteFields"]
    bio_step = next(s for s in result["nextSteps"] if s["field"] == "Bio")
    assert "Balti language" in bio_step["description"]


def test_one_letter_name_gets_generic_step():
    result = calculate_profile_completion({"name": "A"})
    assert {"field": "Name", "description": "Add your name"} in result["nextSteps"]
