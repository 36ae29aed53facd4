from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, TypeVar

import typer
from motor.motor_asyncio import AsyncIOMotorDatabase

from openbalti.app.core.logging import setup_logging
from openbalti.cli.sample_words import SAMPLE_WORDS
from openbalti.db import collections as c
from openbalti.db.health import mongo_healthcheck
from openbalti.db.nosql.indexes import ensure_indexes
from openbalti.db.nosql.mongo.client import dispose_mongo, get_mongo_db, initialize_mongo
from openbalti.db.nosql.repository import NoSqlRepository
from openbalti.services.owner import promote_to_owner
from openbalti.services.stats import rebuild_contribution_stats

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, add_completion=False, help="OpenBalti dictionary management")

words = NoSqlRepository(collection_name=c.WORDS)


@app.callback()
def main(log_level: str = typer.Option("WARNING", envvar="LOG_LEVEL", help="Logging level")):
    setup_logging(level=log_level)


def _run(job: Callable[[AsyncIOMotorDatabase], Awaitable[T]]) -> T:
    async def _with_db() -> T:
        await initialize_mongo()
        try:
            return await job(get_mongo_db())
        finally:
            await dispose_mongo()

    return asyncio.run(_with_db())


@app.command("ping")
def ping():
    """Connect to MongoDB and list its collections."""

    async def _ping(db: AsyncIOMotorDatabase) -> list[str] | None:
        if not await mongo_healthcheck(db):
            return None
        return sorted(await db.list_collection_names())

    names = _run(_ping)
    if names is None:
        typer.echo("Could not reach MongoDB", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Connected. {len(names)} collections:")
    for name in names:
        typer.echo(f"- {name}")


@app.command("seed-words")
def seed_words(force: bool = typer.Option(False, "--force", help="Insert even if words already exist")):
    """Insert the sample Balti/English word pairs."""

    async def _seed(db: AsyncIOMotorDatabase) -> tuple[int, int]:
        existing = await words.count(db)
        if existing and not force:
            return existing, 0
        for balti, english in SAMPLE_WORDS:
            await words.create(db, {"balti": balti, "english": english, "status": "approved", "reviewStatus": None})
        return existing, len(SAMPLE_WORDS)

    existing, added = _run(_seed)
    if not added:
        typer.echo(f"Database already contains {existing} words. Use --force to add sample data anyway.")
        return
    typer.echo(f"Added {added} sample words.")
    for balti, english in SAMPLE_WORDS[:5]:
        typer.echo(f"- {balti} : {english}")


@app.command("set-owner")
def set_owner(email: str = typer.Argument(..., help="Email of the account to promote")):
    """Mark a user as the verified founder/owner."""

    async def _promote(db: AsyncIOMotorDatabase) -> dict[str, Any] | None:
        return await promote_to_owner(db, {"email": email.strip().lower()})

    user = _run(_promote)
    if user is None:
        typer.echo(f"No user found with email {email}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{user.get('name')} <{user.get('email')}> is now the owner")


@app.command("rebuild-stats")
def rebuild_stats():
    """Recompute every user's contribution statistics from the activity log."""
    count = _run(rebuild_contribution_stats)
    typer.echo(f"Updated statistics for {count} users")


@app.command("ensure-indexes")
def create_indexes():
    """Create the MongoDB indexes the API relies on."""
    created = _run(ensure_indexes)
    for collection, names in created.items():
        typer.echo(f"{collection}: {', '.join(names)}")


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("openbalti.main:app", host=host, port=port, reload=reload, log_config=None)
