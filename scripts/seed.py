#!/usr/bin/env python
"""
Generate demo/seed data for development.

Scenarios:
    default  one team with an owner account
    demo     the default team plus a member, taxonomy and sample articles
"""

import argparse
import asyncio
import sys

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth.backend import hash_password
from app.core.database import async_session_factory
from app.modules.articles.models import ArticleStatus
from app.modules.articles.repos import ArticleRepository
from app.modules.articles.schemas import ArticleCreate
from app.modules.taxonomy.repos import CategoryRepository, TagRepository
from app.modules.teams.models import Team, TeamRole
from app.modules.teams.repos import TeamRepository
from app.modules.users.models import User


OWNER_EMAIL = "owner@example.com"
MEMBER_EMAIL = "member@example.com"
DEMO_PASSWORD = "password123"
DEMO_TEAM_NAME = "Demo Team"


async def _get_or_create_user(session: AsyncSession, email: str, name: str) -> User:
    result = await session.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()
    if user:
        print(f"User already exists: {email}")
        return user

    user = User(email=email, name=name, password_hash=hash_password(DEMO_PASSWORD))
    session.add(user)
    await session.flush()
    print(f"Created user: {email} (password: {DEMO_PASSWORD})")
    return user


async def _ensure_owner_team(session: AsyncSession) -> tuple[Team, User]:
    teams = TeamRepository(session)
    owner = await _get_or_create_user(session, OWNER_EMAIL, "Demo Owner")

    team = await teams.get_team_for_user(owner.id)
    if team:
        print(f"Team already exists: {team.name}")
        return team, owner

    team = await teams.create(Team(name=DEMO_TEAM_NAME))
    await teams.add_member(team.id, owner.id, TeamRole.OWNER)
    print(f"Created team: {team.name} ({team.id})")
    return team, owner


async def seed_default() -> None:
    """Create one team owned by the demo owner."""
    async with async_session_factory() as session:
        await _ensure_owner_team(session)
        await session.commit()


async def seed_demo() -> None:
    """Create the default team plus a member, taxonomy and articles."""
    async with async_session_factory() as session:
        team, owner = await _ensure_owner_team(session)
        teams = TeamRepository(session)

        member = await _get_or_create_user(session, MEMBER_EMAIL, "Demo Member")
        if await teams.get_membership(member.id, team.id) is None:
            await teams.add_member(team.id, member.id, TeamRole.MEMBER)
            print(f"Added member: {member.email}")

        articles = ArticleRepository(session)
        if await articles.list_for_team(team.id):
            print("Articles already exist, skipping content")
            await session.commit()
            return

        news = await CategoryRepository(session).create("News", team.id)
        guides = await CategoryRepository(session).create("Guides", team.id)
        python_tag = await TagRepository(session).create("Python", team.id)
        release_tag = await TagRepository(session).create("Release Notes", team.id)

        samples = [
            (
                owner,
                ArticleCreate(
                    title="Welcome to the team blog",
                    content="This is the first published post of the demo team.",
                    status=ArticleStatus.PUBLISHED,
                    category_ids=[news.id],
                    tag_ids=[release_tag.id],
                    team_id=team.id,
                ),
            ),
            (
                member,
                ArticleCreate(
                    title="Getting started guide",
                    content="A draft walkthrough written by a regular member.",
                    category_ids=[guides.id],
                    tag_ids=[python_tag.id],
                    team_id=team.id,
                ),
            ),
            (
                owner,
                ArticleCreate(
                    title="Retired announcement",
                    content="An article that was taken down after publishing.",
                    status=ArticleStatus.UNPUBLISHED,
                    team_id=team.id,
                ),
            ),
        ]
        for author, data in samples:
            article = await articles.create(data, author_id=author.id, team_id=team.id)
            print(f"Created article: {article.title} [{article.status}]")

        await session.commit()


async def main(scenario: str) -> None:
    """Run the seeding based on scenario."""
    if scenario == "default":
        await seed_default()
    elif scenario == "demo":
        await seed_demo()
    else:
        print(f"Unknown scenario: {scenario}")
        print("Available scenarios: default, demo")
        sys.exit(1)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed database with demo data")
    parser.add_argument(
        "--scenario",
        "-s",
        default="default",
        help="Seed scenario to run (default, demo)",
    )
    args = parser.parse_args()

    asyncio.run(main(args.scenario))
