"""Tests for conversation endpoints: dedup, listing, unread counts."""


class TestConversationCreation:
    """Test starting conversations."""

    def test_create_conversation(self, client, alice, bob, conversation):
        assert conversation["other_user_id"] == bob["id"]
        assert conversation["other_user_name"] == "Bob"
        assert conversation["user1_id"] < conversation["user2_id"]
        assert {conversation["user1_id"], conversation["user2_id"]} == {alice["id"], bob["id"]}
        assert conversation["last_message"] is None
        assert conversation["unread_count"] == 0

    def test_same_pair_reuses_conversation(self, client, alice, bob, conversation):
        """Either user starting the chat gets the one existing conversation."""
        again = client.post(
            "/api/conversations/",
            headers=alice["headers"],
            json={"other_user_id": bob["id"]}
        )
        reverse = client.post(
            "/api/conversations/",
            headers=bob["headers"],
            json={"other_user_id": alice["id"]}
        )
        assert again.status_code == 201
        assert reverse.status_code == 201
        assert again.json()["id"] == conversation["id"]
        assert reverse.json()["id"] == conversation["id"]
        assert reverse.json()["other_user_id"] == alice["id"]

        listed = client.get("/api/conversations/", headers=alice["headers"]).json()
        assert [conv["id"] for conv in listed] == [conversation["id"]]

    def test_cannot_message_yourself(self, client, alice):
        response = client.post(
            "/api/conversations/",
            headers=alice["headers"],
            json={"other_user_id": alice["id"]}
        )
        assert response.status_code == 400

    def test_unknown_user(self, client, alice):
        response = client.post(
            "/api/conversations/",
            headers=alice["headers"],
            json={"other_user_id": 99999}
        )
        assert response.status_code == 404

    def test_requires_authentication(self, client, bob):
        response = client.post("/api/conversations/", json={"other_user_id": bob["id"]})
        assert response.status_code in (401, 403)


class TestConversationList:
    """Test the messaging panel list."""

    def _send(self, client, user, conversation_id, content):
        response = client.post(
            f"/api/conversations/{conversation_id}/messages",
            headers=user["headers"],
            json={"content": content}
        )
        assert response.status_code == 201, response.text
        return response.json()

    def test_profile_name_and_photo_preferred(self, client, alice, bob, save_profile, conversation):
        save_profile(bob, name="Bobby", profile_photo="/api/uploads/bob.png")
        listed = client.get("/api/conversations/", headers=alice["headers"]).json()
        assert listed[0]["other_user_name"] == "Bobby"
        assert listed[0]["other_user_photo"] == "/api/uploads/bob.png"

    def test_unknown_name_fallback(self, client, register, alice):
        nameless = register("nameless@example.com")
        response = client.post(
            "/api/conversations/",
            headers=alice["headers"],
            json={"other_user_id": nameless["id"]}
        )
        assert response.json()["other_user_name"] == "Unknown"

    def test_last_message_and_unread_count(self, client, alice, bob, conversation):
        self._send(client, bob, conversation["id"], "Hi Alice")
        self._send(client, bob, conversation["id"], "Is the room still free?")

        mine = client.get("/api/conversations/", headers=alice["headers"]).json()[0]
        assert mine["unread_count"] == 2
        assert mine["last_message"]["content"] == "Is the room still free?"
        assert mine["last_message_time"] == "Just now"

        # Own messages never count as unread
        theirs = client.get("/api/conversations/", headers=bob["headers"]).json()[0]
        assert theirs["unread_count"] == 0

    def test_mark_read_clears_unread(self, client, alice, bob, conversation):
        self._send(client, bob, conversation["id"], "Hello")
        self._send(client, alice, conversation["id"], "Hey")

        response = client.post(f"/api/conversations/{conversation['id']}/read", headers=alice["headers"])
        assert response.status_code == 200
        assert response.json()["marked_read"] == 1

        assert client.get("/api/conversations/", headers=alice["headers"]).json()[0]["unread_count"] == 0
        # Alice's reply is still unread for Bob
        assert client.get("/api/conversations/", headers=bob["headers"]).json()[0]["unread_count"] == 1

    def test_most_recent_activity_first(self, client, alice, bob, carol, conversation):
        with_carol = client.post(
            "/api/conversations/",
            headers=alice["headers"],
            json={"other_user_id": carol["id"]}
        ).json()

        listed = client.get("/api/conversations/", headers=alice["headers"]).json()
        assert [conv["id"] for conv in listed] == [with_carol["id"], conversation["id"]]

        self._send(client, bob, conversation["id"], "bump")
        listed = client.get("/api/conversations/", headers=alice["headers"]).json()
        assert [conv["id"] for conv in listed] == [conversation["id"], with_carol["id"]]

    def test_search_by_other_user_name(self, client, alice, carol, conversation):
        client.post("/api/conversations/", headers=alice["headers"], json={"other_user_id": carol["id"]})

        listed = client.get("/api/conversations/", headers=alice["headers"], params={"q": "car"}).json()
        assert [conv["other_user_name"] for conv in listed] == ["Carol"]

    def test_get_conversation_participants_only(self, client, alice, carol, conversation):
        assert client.get(f"/api/conversations/{conversation['id']}", headers=alice["headers"]).status_code == 200
        assert client.get(f"/api/conversations/{conversation['id']}", headers=carol["headers"]).status_code == 403
        assert client.get("/api/conversations/99999", headers=alice["headers"]).status_code == 404
