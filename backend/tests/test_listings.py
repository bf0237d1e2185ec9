"""Tests for room listing endpoints."""


class TestCreateListing:

    def test_create_listing(self, client, alice, create_listing):
        data = create_listing(
            alice,
            title="Bright room in Koramangala",
            rent=18000,
            deposit="36000",
            amenities=["wifi", "ac"],
        )
        assert data["user_id"] == alice["id"]
        assert data["city_name"] == "Bangalore"
        assert data["rent"] == 18000
        assert data["deposit"] == 36000
        assert data["is_active"] is True
        assert data["views"] == 0
        assert data["inquiries"] == 0

    def test_non_numeric_rent_becomes_zero(self, client, alice, create_listing):
        data = create_listing(alice, rent="negotiable", deposit="")
        assert data["rent"] == 0
        assert data["deposit"] == 0

    def test_fractional_amounts_keep_integer_part(self, client, alice, create_listing):
        data = create_listing(alice, rent="12000.5", deposit="5000/-")
        assert data["rent"] == 12000
        assert data["deposit"] == 5000

        data = create_listing(alice, rent=12000.5)
        assert data["rent"] == 12000

    def test_too_many_images(self, client, alice):
        response = client.post(
            "/api/listings/",
            headers=alice["headers"],
            json={"title": "Gallery", "image_urls": [f"/api/uploads/{i}.png" for i in range(11)]}
        )
        assert response.status_code == 422

    def test_unknown_amenity(self, client, alice):
        response = client.post(
            "/api/listings/",
            headers=alice["headers"],
            json={"title": "Room", "amenities": ["helipad"]}
        )
        assert response.status_code == 400

    def test_title_required(self, client, alice):
        response = client.post("/api/listings/", headers=alice["headers"], json={"rent": 100})
        assert response.status_code == 422


class TestBrowseListings:

    def test_only_active_newest_first(self, client, alice, bob, create_listing):
        first = create_listing(alice, title="First room")
        second = create_listing(bob, title="Second room")
        create_listing(bob, title="Hidden room", is_active=False)

        data = client.get("/api/listings/", headers=alice["headers"]).json()
        assert [listing["id"] for listing in data] == [second["id"], first["id"]]

    def test_filters(self, client, alice, create_listing):
        cheap = create_listing(alice, title="Budget room", rent=9000, amenities=["wifi"])
        create_listing(alice, title="Premium suite", rent=40000, amenities=["wifi", "gym"])
        create_listing(alice, title="Mumbai room", city_id="mumbai", rent=9000)

        by_rent = client.get(
            "/api/listings/",
            headers=alice["headers"],
            params={"city_id": "bangalore", "max_rent": 10000}
        ).json()
        assert [listing["id"] for listing in by_rent] == [cheap["id"]]

        by_amenities = client.get(
            "/api/listings/",
            headers=alice["headers"],
            params=[("amenities", "wifi"), ("amenities", "gym")]
        ).json()
        assert [listing["title"] for listing in by_amenities] == ["Premium suite"]

        by_text = client.get("/api/listings/", headers=alice["headers"], params={"q": "suite"}).json()
        assert [listing["title"] for listing in by_text] == ["Premium suite"]

    def test_search_text_is_literal(self, client, alice, create_listing):
        create_listing(alice, title="Sunny room")
        discounted = create_listing(alice, title="Room at 10% off")

        underscore = client.get("/api/listings/", headers=alice["headers"], params={"q": "_"}).json()
        assert underscore == []

        percent = client.get("/api/listings/", headers=alice["headers"], params={"q": "10%"}).json()
        assert [listing["id"] for listing in percent] == [discounted["id"]]

    def test_sort_by_rent(self, client, alice, create_listing):
        create_listing(alice, title="Mid", rent=20000)
        create_listing(alice, title="Low", rent=10000)
        create_listing(alice, title="High", rent=30000)

        data = client.get("/api/listings/", headers=alice["headers"], params={"sort": "budget-low"}).json()
        assert [listing["title"] for listing in data] == ["Low", "Mid", "High"]


class TestManageListings:

    def test_my_listings_and_stats(self, client, alice, bob, create_listing):
        active = create_listing(alice, title="Active room")
        create_listing(alice, title="Paused room", is_active=False)
        create_listing(bob, title="Bob's room")

        mine = client.get("/api/listings/mine", headers=alice["headers"]).json()
        assert {listing["title"] for listing in mine} == {"Active room", "Paused room"}

        client.post(f"/api/listings/{active['id']}/view", headers=bob["headers"])
        client.post(f"/api/listings/{active['id']}/view", headers=bob["headers"])

        stats = client.get("/api/listings/mine/stats", headers=alice["headers"]).json()
        assert stats == {
            "total_listings": 2,
            "active_listings": 1,
            "total_views": 2,
            "total_inquiries": 0,
        }

    def test_partial_update(self, client, alice, create_listing):
        listing = create_listing(alice, title="Old title", rent=10000, amenities=["wifi"])
        response = client.patch(
            f"/api/listings/{listing['id']}",
            headers=alice["headers"],
            json={"title": "New title"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "New title"
        assert data["rent"] == 10000
        assert data["amenities"] == ["wifi"]

    def test_update_rejects_blank_title(self, client, alice, create_listing):
        listing = create_listing(alice, title="Old title")
        response = client.patch(
            f"/api/listings/{listing['id']}",
            headers=alice["headers"],
            json={"title": "     "}
        )
        assert response.status_code == 422

        response = client.patch(
            f"/api/listings/{listing['id']}",
            headers=alice["headers"],
            json={"title": "  Trimmed title  "}
        )
        assert response.json()["title"] == "Trimmed title"

    def test_inactive_listing_hidden_from_others(self, client, alice, bob, create_listing):
        listing = create_listing(alice, is_active=False)
        url = f"/api/listings/{listing['id']}"

        assert client.get(url, headers=bob["headers"]).status_code == 404
        assert client.post(f"{url}/view", headers=bob["headers"]).status_code == 404
        assert client.post(f"{url}/inquire", headers=bob["headers"]).status_code == 404

        own = client.get(url, headers=alice["headers"])
        assert own.status_code == 200
        assert own.json()["views"] == 0

    def test_only_owner_can_modify(self, client, alice, bob, create_listing):
        listing = create_listing(alice)
        assert client.patch(
            f"/api/listings/{listing['id']}", headers=bob["headers"], json={"title": "Mine now"}
        ).status_code == 403
        assert client.delete(f"/api/listings/{listing['id']}", headers=bob["headers"]).status_code == 403
        assert client.post(
            f"/api/listings/{listing['id']}/toggle-active", headers=bob["headers"]
        ).status_code == 403

    def test_toggle_active(self, client, alice, create_listing):
        listing = create_listing(alice)
        response = client.post(f"/api/listings/{listing['id']}/toggle-active", headers=alice["headers"])
        assert response.json()["is_active"] is False
        response = client.post(f"/api/listings/{listing['id']}/toggle-active", headers=alice["headers"])
        assert response.json()["is_active"] is True

    def test_delete(self, client, alice, create_listing):
        listing = create_listing(alice)
        assert client.delete(f"/api/listings/{listing['id']}", headers=alice["headers"]).status_code == 204
        assert client.get(f"/api/listings/{listing['id']}", headers=alice["headers"]).status_code == 404


class TestInquire:

    def test_inquiry_opens_conversation(self, client, alice, bob, create_listing):
        listing = create_listing(bob, title="Room with balcony")

        response = client.post(f"/api/listings/{listing['id']}/inquire", headers=alice["headers"])
        assert response.status_code == 200
        conversation = response.json()
        assert conversation["other_user_id"] == bob["id"]

        # A second inquiry reuses the conversation
        again = client.post(f"/api/listings/{listing['id']}/inquire", headers=alice["headers"]).json()
        assert again["id"] == conversation["id"]

        refreshed = client.get(f"/api/listings/{listing['id']}", headers=alice["headers"]).json()
        assert refreshed["inquiries"] == 2

    def test_cannot_inquire_about_own_listing(self, client, bob, create_listing):
        listing = create_listing(bob)
        response = client.post(f"/api/listings/{listing['id']}/inquire", headers=bob["headers"])
        assert response.status_code == 400

    def test_unknown_listing(self, client, alice):
        assert client.post("/api/listings/99999/inquire", headers=alice["headers"]).status_code == 404
