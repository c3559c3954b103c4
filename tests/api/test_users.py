"""Users API: admin state transitions and deletion."""

from fakes import RecordingEventSink, Store
from httpx import AsyncClient

USERS = "/api/v1/users"


async def test_admin_suspends_user_and_both_audiences_are_notified(
    client: AsyncClient,
    seeded: dict[str, str],
    auth_headers,
    event_sink: RecordingEventSink,
) -> None:
    client_id = seeded["client"]
    response = await client.patch(
        f"{USERS}/{client_id}/status",
        json={"status": "suspended"},
        headers=auth_headers("admin"),
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "suspended"
    payload = {"id": client_id, "status": "suspended"}
    assert event_sink.events == [
        ("userStatusUpdated", payload, "admin"),
        ("userStatusUpdated", payload, client_id),
    ]


async def test_invalid_status_is_rejected(
    client: AsyncClient, seeded: dict[str, str], auth_headers
) -> None:
    response = await client.patch(
        f"{USERS}/{seeded['client']}/status",
        json={"status": "banished"},
        headers=auth_headers("admin"),
    )
    assert response.status_code == 400


async def test_non_admin_cannot_change_status(
    client: AsyncClient, seeded: dict[str, str], auth_headers
) -> None:
    response = await client.patch(
        f"{USERS}/{seeded['freelancer']}/status",
        json={"status": "inactive"},
        headers=auth_headers("client"),
    )
    assert response.status_code == 403


async def test_admin_approves_freelancer(
    client: AsyncClient,
    store: Store,
    seeded: dict[str, str],
    auth_headers,
    event_sink: RecordingEventSink,
) -> None:
    freelancer_id = seeded["freelancer"]
    response = await client.patch(
        f"{USERS}/{freelancer_id}/freelancer-status",
        json={"status": "approved", "admin_comment": "Portfolio checked"},
        headers=auth_headers("admin"),
    )
    assert response.status_code == 200
    assert response.json()["data"]["freelancer_status"] == "approved"
    assert store.users[freelancer_id]["approved_by"] == seeded["admin"]
    assert event_sink.names() == ["freelancerStatusUpdated", "freelancerStatusUpdated"]
    assert {audience for _, _, audience in event_sink.events} == {"admin", freelancer_id}


async def test_freelancer_status_on_client_is_rejected(
    client: AsyncClient, seeded: dict[str, str], auth_headers
) -> None:
    response = await client.patch(
        f"{USERS}/{seeded['client']}/freelancer-status",
        json={"status": "approved"},
        headers=auth_headers("admin"),
    )
    assert response.status_code == 400
    assert response.json()["message"] == "User is not a freelancer"


async def test_admin_deletes_user(
    client: AsyncClient,
    store: Store,
    seeded: dict[str, str],
    auth_headers,
    event_sink: RecordingEventSink,
) -> None:
    response = await client.delete(
        f"{USERS}/{seeded['client']}", headers=auth_headers("admin")
    )
    assert response.status_code == 200
    assert seeded["client"] not in store.users
    assert event_sink.events == [("userDeleted", {"id": seeded["client"]}, "admin")]


async def test_deleting_missing_user_is_404(
    client: AsyncClient, seeded: dict[str, str], auth_headers
) -> None:
    response = await client.delete(f"{USERS}/ghost", headers=auth_headers("admin"))
    assert response.status_code == 404
