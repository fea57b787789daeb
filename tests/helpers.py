"""Helpers shared by integration tests."""

from dataclasses import dataclass
from uuid import UUID

from httpx import AsyncClient

from src.taskflow.core.security import create_access_token


@dataclass
class TestAccount:
    __test__ = False

    id: UUID
    email: str
    password: str
    headers: dict[str, str]


def auth_headers(user_id: UUID) -> dict[str, str]:
    """Bearer headers for a user, bypassing the login endpoint."""
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


async def create_project(client: AsyncClient, account: TestAccount, **fields) -> dict:
    response = await client.post(
        "/api/v1/projects", json={"name": "Website", **fields}, headers=account.headers
    )
    assert response.status_code == 201, response.text
    return response.json()


async def create_task(
    client: AsyncClient, account: TestAccount, project_id: str, **fields
) -> dict:
    response = await client.post(
        "/api/v1/tasks",
        json={"project_id": project_id, "title": "Build landing page", **fields},
        headers=account.headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


async def create_project_with_task(client: AsyncClient, account: TestAccount) -> tuple[dict, dict]:
    project = await create_project(client, account)
    task = await create_task(client, account, project["id"])
    return project, task
