"""Tests for the profile editor and public profile endpoints."""


class TestMyProfile:

    def test_no_profile_yet(self, client, alice):
        response = client.get("/api/profiles/me", headers=alice["headers"])
        assert response.status_code == 200
        assert response.json() is None

    def test_create_profile(self, client, alice, save_profile):
        data = save_profile(
            alice,
            location="Koramangala, Bangalore",
            occupation="Designer",
            budget=18000,
            lifestyle=["Clean", "Non-smoker"],
        )
        assert data["user_id"] == alice["id"]
        # Defaults come from the account
        assert data["name"] == "Alice"
        assert data["email"] == "alice@example.com"
        assert data["room_type"] == "Single room"
        assert data["lifestyle"] == ["Clean", "Non-smoker"]
        assert data["interests"] == []

    def test_update_keeps_unsent_fields(self, client, alice, save_profile):
        save_profile(alice, location="Pune", budget=12000)
        data = save_profile(alice, bio="Quiet reader")

        assert data["location"] == "Pune"
        assert data["budget"] == 12000
        assert data["bio"] == "Quiet reader"

        fetched = client.get("/api/profiles/me", headers=alice["headers"]).json()
        assert fetched["id"] == data["id"]

    def test_unknown_lifestyle_option(self, client, alice):
        response = client.put(
            "/api/profiles/me",
            headers=alice["headers"],
            json={"lifestyle": ["Clean", "Loud"]}
        )
        assert response.status_code == 400

    def test_age_out_of_range(self, client, alice):
        response = client.put("/api/profiles/me", headers=alice["headers"], json={"age": 12})
        assert response.status_code == 422


class TestTagToggle:

    def test_toggle_twice_restores_tags(self, client, alice, save_profile):
        save_profile(alice, interests=["Reading", "Yoga"])

        added = client.post(
            "/api/profiles/me/toggle",
            headers=alice["headers"],
            json={"field": "interests", "value": "Hiking"}
        )
        assert added.status_code == 200
        assert added.json()["interests"] == ["Reading", "Yoga", "Hiking"]

        removed = client.post(
            "/api/profiles/me/toggle",
            headers=alice["headers"],
            json={"field": "interests", "value": "Hiking"}
        )
        assert removed.json()["interests"] == ["Reading", "Yoga"]

    def test_toggle_without_profile(self, client, alice):
        response = client.post(
            "/api/profiles/me/toggle",
            headers=alice["headers"],
            json={"field": "lifestyle", "value": "Clean"}
        )
        assert response.status_code == 404

    def test_toggle_unknown_field(self, client, alice, save_profile):
        save_profile(alice, location="Pune")
        response = client.post(
            "/api/profiles/me/toggle",
            headers=alice["headers"],
            json={"field": "budget", "value": "Clean"}
        )
        assert response.status_code == 422


class TestPublicProfiles:

    def test_get_other_profile(self, client, alice, bob, save_profile):
        save_profile(bob, location="Mumbai", occupation="Chef")
        response = client.get(f"/api/profiles/{bob['id']}", headers=alice["headers"])
        assert response.status_code == 200
        assert response.json()["occupation"] == "Chef"

    def test_missing_profile(self, client, alice, bob):
        response = client.get(f"/api/profiles/{bob['id']}", headers=alice["headers"])
        assert response.status_code == 404

    def test_users_by_location(self, client, alice, bob, carol, save_profile):
        save_profile(alice, location="HSR Layout, Bangalore")
        save_profile(bob, location="Koramangala, Bangalore")
        save_profile(carol, location="Andheri, Mumbai")

        response = client.get("/api/profiles/", headers=alice["headers"], params={"location": "bangalore"})
        assert response.status_code == 200
        # Caller excluded, substring match ignores case
        assert [card["user_id"] for card in response.json()] == [bob["id"]]

    def test_users_by_location_newest_first(self, client, alice, bob, carol, save_profile):
        save_profile(bob, location="Pune")
        save_profile(carol, location="Wakad, Pune")

        cards = client.get("/api/profiles/", headers=alice["headers"], params={"location": "Pune"}).json()
        assert [card["user_id"] for card in cards] == [carol["id"], bob["id"]]
