import pytest
from sqlalchemy.orm import Session

from app.db.models.team import Team as TeamModel
from app.db.models.user import User as UserModel
from app.db.transaction import transaction
from app.errors import ConflictOnCreateError
from app.services.team import create_manager_team


def _team_count(db: Session, manager_id: int) -> int:
    return db.query(TeamModel).filter(TeamModel.manager_id == manager_id).count()


@pytest.fixture
def manager(client, make_user_payload) -> dict:
    response = client.post(
        "/api/v1/users",
        json=make_user_payload(
            first_name="Jo",
            last_name="Doe",
            email="jo@x.com",
            phone_number="5511999990010",
            roles=["MANAGER"],
        ),
    )
    assert response.status_code == 201
    return response.json()


# ============================================================================
# MANAGER TEAM TESTS
# ============================================================================


def test_manager_team_starts_without_members(client, manager):
    response = client.get(f"/api/v1/teams/{manager['team_id']}")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Jo Doe"
    assert data["manager_id"] == manager["id"]
    assert data["members"] == []


def test_second_team_for_same_manager_conflicts(client, db: Session, manager):
    """Test the unique manager constraint rejects a second team and nothing is kept."""
    user = db.query(UserModel).filter(UserModel.id == manager["id"]).one()

    with pytest.raises(ConflictOnCreateError):
        with transaction(db):
            create_manager_team(db, user)

    assert _team_count(db, manager["id"]) == 1


def test_promotion_on_update_creates_one_team(client, db: Session, seller_user: UserModel):
    response = client.put(
        f"/api/v1/users/{seller_user.id}", json={"roles": ["SELLER", "MANAGER"]}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["roles"] == ["MANAGER", "SELLER"]
    assert data["team_id"] is not None
    assert _team_count(db, seller_user.id) == 1

    # Updating an existing manager again must not create another team.
    response = client.put(f"/api/v1/users/{seller_user.id}", json={"first_name": "Sammy"})

    assert response.status_code == 200
    assert response.json()["team_id"] == data["team_id"]
    assert _team_count(db, seller_user.id) == 1


def test_get_all_teams(client, manager):
    response = client.get("/api/v1/teams")

    assert response.status_code == 200
    assert [team["name"] for team in response.json()] == ["Jo Doe"]


def test_get_team_not_found(client, db: Session):
    response = client.get("/api/v1/teams/99999")

    assert response.status_code == 404


# ============================================================================
# MEMBERSHIP TESTS
# ============================================================================


def test_assign_member(client, manager, seller_user: UserModel):
    team_id = manager["team_id"]

    response = client.put(f"/api/v1/teams/{team_id}/members/{seller_user.id}")

    assert response.status_code == 200
    assert [member["id"] for member in response.json()["members"]] == [seller_user.id]
    assert client.get(f"/api/v1/users/{seller_user.id}").json()["team_id"] == team_id


def test_teammates_and_managed_users(client, manager, seller_user: UserModel):
    team_id = manager["team_id"]
    client.put(f"/api/v1/teams/{team_id}/members/{seller_user.id}")

    teammates = client.get(f"/api/v1/users/{seller_user.id}/teammates")
    managed = client.get(f"/api/v1/users/{manager['id']}/managed-users")

    assert teammates.status_code == 200
    assert {user["id"] for user in teammates.json()} == {manager["id"], seller_user.id}
    assert managed.status_code == 200
    assert {user["id"] for user in managed.json()} == {manager["id"], seller_user.id}


def test_teammates_without_team(client, seller_user: UserModel):
    response = client.get(f"/api/v1/users/{seller_user.id}/teammates")

    assert response.status_code == 404
    assert response.json()["detail"] == "User does not belong to a team"


def test_managed_users_of_non_manager(client, seller_user: UserModel):
    response = client.get(f"/api/v1/users/{seller_user.id}/managed-users")

    assert response.status_code == 404
    assert response.json()["detail"] == "Team not found"


def test_remove_member(client, manager, seller_user: UserModel):
    team_id = manager["team_id"]
    client.put(f"/api/v1/teams/{team_id}/members/{seller_user.id}")

    response = client.delete(f"/api/v1/teams/{team_id}/members/{seller_user.id}")

    assert response.status_code == 200
    assert response.json()["members"] == []
    assert client.get(f"/api/v1/users/{seller_user.id}").json()["team_id"] is None


def test_remove_non_member(client, manager, seller_user: UserModel):
    response = client.delete(
        f"/api/v1/teams/{manager['team_id']}/members/{seller_user.id}"
    )

    assert response.status_code == 404


def test_manager_cannot_be_removed_from_own_team(client, manager):
    response = client.delete(
        f"/api/v1/teams/{manager['team_id']}/members/{manager['id']}"
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_manager_cannot_join_another_team(client, manager, make_user_payload):
    other = client.post(
        "/api/v1/users",
        json=make_user_payload(
            first_name="Lee",
            last_name="Park",
            email="lee@example.com",
            phone_number="5511999990011",
            roles=["MANAGER"],
        ),
    ).json()

    response = client.put(f"/api/v1/teams/{manager['team_id']}/members/{other['id']}")

    assert response.status_code == 400


def test_deleted_member_is_not_listed(client, db: Session, manager, seller_user: UserModel):
    team_id = manager["team_id"]
    client.put(f"/api/v1/teams/{team_id}/members/{seller_user.id}")
    client.delete(f"/api/v1/users/{seller_user.id}")

    response = client.get(f"/api/v1/teams/{team_id}")

    assert response.json()["members"] == []
    assert db.query(TeamModel).count() == 1
