"""
Tests for creating, joining and listing communities.
"""
import string

import pytest

from services.community_service import CODE_ALPHABET, CommunityService, generate_community_code
from services.exceptions import Conflict, NotFound
from services.identity_service import IdentityService


@pytest.mark.unit
class TestCommunityCode:
    def test_code_shape(self):
        for _ in range(50):
            code = generate_community_code()
            assert len(code) == 6
            assert set(code) <= set(CODE_ALPHABET)
            assert code == code.upper()

    def test_alphabet_is_uppercase_alphanumeric(self):
        assert set(CODE_ALPHABET) == set(string.ascii_uppercase + string.digits)


@pytest.mark.integration
class TestCreateCommunity:
    def test_creator_is_admin_and_member(self, client, make_user, make_community):
        headers = make_user("asha@example.com", "Asha")
        community = make_community(headers)
        assert len(community["community_code"]) == 6

        response = client.get("/api/communities/mine", headers=headers)
        assert response.status_code == 200
        [mine] = response.json()
        assert mine["id"] == community["id"]
        assert mine["role"] == "admin"
        assert mine["member_count"] == 1
        assert mine["community_code"] == community["community_code"]

    def test_second_community_rejected(self, client, make_user, make_community):
        headers = make_user("asha@example.com")
        make_community(headers, name="First Street")
        response = client.post(
            "/api/communities",
            json={"name": "Second Street", "zip_code": "600002"},
            headers=headers,
        )
        assert response.status_code == 409
        assert "First Street" in response.json()["detail"]

    @pytest.mark.parametrize("payload", [
        {"name": "AB", "zip_code": "600001"},
        {"name": "Green Meadows", "zip_code": "60001"},
        {"name": "   ", "zip_code": "600001"},
    ])
    def test_invalid_input(self, client, make_user, payload):
        headers = make_user("asha@example.com")
        response = client.post("/api/communities", json=payload, headers=headers)
        assert response.status_code == 422

    def test_requires_sign_in(self, client):
        response = client.post("/api/communities", json={"name": "Green Meadows", "zip_code": "600001"})
        assert response.status_code == 401


@pytest.mark.integration
class TestJoinCommunity:
    def test_join_with_lowercase_code(self, client, make_user, make_community):
        community = make_community(make_user("asha@example.com"))
        member = make_user("ravi@example.com", "Ravi")

        response = client.post(
            "/api/communities/join",
            json={"community_code": community["community_code"].lower()},
            headers=member,
        )
        assert response.status_code == 200
        assert response.json()["community"]["id"] == community["id"]

        [mine] = client.get("/api/communities/mine", headers=member).json()
        assert mine["role"] == "member"
        assert mine["member_count"] == 2
        assert mine["community_code"] is None

    def test_invalid_code_is_not_found(self, client, make_user):
        member = make_user("ravi@example.com")
        response = client.post("/api/communities/join", json={"community_code": "ZZZZZZ"}, headers=member)
        assert response.status_code == 404
        assert "invalid" in response.json()["detail"]

    def test_rejoining_own_community(self, client, make_user, make_community):
        admin = make_user("asha@example.com")
        community = make_community(admin)
        response = client.post(
            "/api/communities/join",
            json={"community_code": community["community_code"]},
            headers=admin,
        )
        assert response.status_code == 409
        assert response.json()["detail"] == f"You are already a member of {community['name']}."

    def test_member_of_another_community(self, client, make_user, make_community):
        first = make_community(make_user("asha@example.com"), name="First Street")
        second = make_community(make_user("bala@example.com"), name="Second Street")
        member = make_user("ravi@example.com")
        client.post("/api/communities/join", json={"community_code": first["community_code"]}, headers=member)

        response = client.post(
            "/api/communities/join",
            json={"community_code": second["community_code"]},
            headers=member,
        )
        assert response.status_code == 409
        assert "First Street" in response.json()["detail"]

    def test_code_must_be_six_characters(self, client, make_user):
        member = make_user("ravi@example.com")
        response = client.post("/api/communities/join", json={"community_code": "ABC"}, headers=member)
        assert response.status_code == 422


@pytest.mark.integration
class TestMembershipCheck:
    def test_no_community(self, client, make_user):
        headers = make_user("ravi@example.com")
        response = client.get("/api/communities/membership", headers=headers)
        assert response.json() == {"has_community": False, "community": None}

    def test_admin_membership(self, client, make_user, make_community):
        headers = make_user("asha@example.com")
        community = make_community(headers)
        body = client.get("/api/communities/membership", headers=headers).json()
        assert body["has_community"] is True
        assert body["community"] == {
            "community_id": community["id"],
            "name": community["name"],
            "role": "admin",
        }


@pytest.mark.unit
class TestCommunityService:
    def _user(self, db, email):
        return IdentityService(db).sign_up(email, "sunshine42", "Someone", "9876543210")

    def test_create_writes_community_and_membership(self, db):
        user = self._user(db, "asha@example.com")
        community = CommunityService.create_community(db, user.id, "Green Meadows", "600001")
        assert CommunityService.member_counts(db, [community.id]) == {community.id: 1}
        assert CommunityService.user_community_ids(db, user.id) == [community.id]

    def test_join_unknown_code(self, db):
        user = self._user(db, "ravi@example.com")
        with pytest.raises(NotFound):
            CommunityService.join_community(db, user.id, "nope12")

    def test_one_community_per_user(self, db):
        admin = self._user(db, "asha@example.com")
        CommunityService.create_community(db, admin.id, "Green Meadows", "600001")
        with pytest.raises(Conflict):
            CommunityService.create_community(db, admin.id, "Blue Meadows", "600002")
