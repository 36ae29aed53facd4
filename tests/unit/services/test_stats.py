from __future__ import annotations

from datetime import timedelta

import pytest

from openbalti.db import collections as c
from openbalti.db.nosql.documents import utcnow
from openbalti.services.activity import log_activity
from openbalti.services.stats import (
    community_stats,
    dashboard_stats,
    quick_stats,
    rebuild_contribution_stats,
    system_health,
)
from tests.helpers import insert, make_user, make_word


@pytest.mark.parametrize(
    "pending,flagged,expected",
    [(0, 0, "good"), (50, 0, "good"), (51, 0, "warning"), (101, 0, "critical"), (0, 21, "critical")],
)
def test_system_health_thresholds(pending, flagged, expected):
    assert system_health(pending, flagged) == expected


@pytest.mark.asyncio
async def test_dashboard_counts(db, user):
    await make_word(db, feedbackStats={"needsReviewCount": 2})
    await make_word(db, reviewStatus="flagged")
    await make_word(db, createdAt=utcnow() - timedelta(days=3))

    stats = await dashboard_stats(db)
    assert stats["totalUsers"] == 1
    assert stats["totalWords"] == 3
    assert stats["pendingReviews"] == 1
    assert stats["flaggedContent"] == 1
    assert stats["newUsersToday"] == 1
    assert stats["wordsAddedToday"] == 2
    assert stats["systemHealth"] == "good"


@pytest.mark.asyncio
async def test_community_and_quick_stats(db, user):
    word = await make_word(db, dialect="Skardu")
    await make_word(db, dialect="  ")
    await make_word(db, dialect="Khaplu", createdAt=utcnow() - timedelta(days=30))
    await insert(db, c.WORD_FEEDBACK, wordId=word["_id"], userId=user["_id"], comment="nice")
    await insert(db, c.WORD_FEEDBACK, wordId=word["_id"], userId=word["_id"], comment="")

    community = await community_stats(db)
    assert community == {"totalUsers": 1, "totalFeedback": 2, "totalComments": 1}

    quick = await quick_stats(db)
    assert quick["totalWords"] == 3
    assert quick["totalContributors"] == 1
    assert quick["recentlyAdded"] == 2
    assert quick["dialects"] == 2


@pytest.mark.asyncio
async def test_log_activity_updates_counters_and_history(db, user):
    word = await make_word(db)
    await log_activity(db, user, "create", word=word)
    await log_activity(db, user, "review", word=word, details="ok")
    await log_activity(db, user, "create", target_type="blog", target_id=word["_id"])

    refreshed = await db[c.USERS].find_one({"_id": user["_id"]})
    assert refreshed["contributionStats"]["wordsAdded"] == 1
    assert refreshed["contributionStats"]["wordsReviewed"] == 1
    assert await db[c.ACTIVITY_LOGS].count_documents({}) == 3
    # review is not a history action
    assert await db[c.WORD_HISTORY].count_documents({"wordId": word["_id"]}) == 1


@pytest.mark.asyncio
async def test_log_activity_without_user_is_noop(db):
    await log_activity(db, None, "create")
    assert await db[c.ACTIVITY_LOGS].count_documents({}) == 0


@pytest.mark.asyncio
async def test_rebuild_contribution_stats(db, user):
    other = await make_user(db, name="Other", email="other@example.com")
    word = await make_word(db)
    for action in ("create", "create", "update", "review"):
        await insert(db, c.ACTIVITY_LOGS, user=user["_id"], action=action, targetType="word", wordId=word["_id"])
    # legacy entry without targetType still counts, blog entries do not
    await insert(db, c.ACTIVITY_LOGS, user=user["_id"], action="update")
    await insert(db, c.ACTIVITY_LOGS, user=user["_id"], action="create", targetType="blog")

    assert await rebuild_contribution_stats(db) == 2

    refreshed = await db[c.USERS].find_one({"_id": user["_id"]})
    assert refreshed["contributionStats"] == {"wordsAdded": 2, "wordsEdited": 2, "wordsReviewed": 1}
    untouched = await db[c.USERS].find_one({"_id": other["_id"]})
    assert untouched["contributionStats"] == {"wordsAdded": 0, "wordsEdited": 0, "wordsReviewed": 0}
