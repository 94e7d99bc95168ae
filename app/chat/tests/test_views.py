"""
Tests for chat API views.

Covers the HTTP surface of the chat app:
- Chat list and open-chat (get or create)
- Message history pages, cursors and request validation
- Sending messages
- One-view tracking, editing, reactions and deletion endpoints
- Authentication and participant checks
"""

from datetime import timedelta

import pytest
from rest_framework import status

from chat.models import Chat, Message, MessageType
from chat.services import MessageService
from chat.tests.factories import ChatFactory, MessageFactory

CHATS_URL = "/api/v1/chat/chats/"


def messages_url(chat_id):
    return f"{CHATS_URL}{chat_id}/messages/"


def message_url(message_id, suffix=""):
    return f"/api/v1/chat/messages/{message_id}/{suffix}"


# =============================================================================
# Chats
# =============================================================================


class TestChatList:
    def test_lists_own_active_chats(self, chat, alice_client, bob, outsider):
        ChatFactory(participants=[bob, outsider])

        response = alice_client.get(CHATS_URL)

        assert response.status_code == status.HTTP_200_OK
        assert [c["id"] for c in response.data] == [chat.id]

    def test_includes_partner_and_last_message(self, chat, alice, bob, alice_client):
        MessageService.send_message(chat, bob, content="hey")

        response = alice_client.get(CHATS_URL)

        data = response.data[0]
        assert data["partner"]["id"] == bob.id
        assert data["last_message"]["content"] == "hey"

    def test_requires_authentication(self, api_client):
        response = api_client.get(CHATS_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_retrieve_other_users_chat_is_404(self, chat, outsider_client):
        response = outsider_client.get(f"{CHATS_URL}{chat.id}/")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestOpenChat:
    def test_creates_chat_with_201(self, alice, outsider, alice_client):
        response = alice_client.post(CHATS_URL, {"partner_id": outsider.id}, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["partner"]["id"] == outsider.id
        assert Chat.objects.for_user(alice).count() == 1

    def test_existing_chat_returns_200(self, chat, bob, alice_client):
        response = alice_client.post(CHATS_URL, {"partner_id": bob.id}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["id"] == chat.id

    def test_unknown_partner_is_404(self, alice_client):
        response = alice_client.post(CHATS_URL, {"partner_id": "a" * 24}, format="json")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_malformed_partner_id_is_400(self, alice_client):
        response = alice_client.post(CHATS_URL, {"partner_id": "nope"}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_self_chat_is_400(self, alice, alice_client):
        response = alice_client.post(CHATS_URL, {"partner_id": alice.id}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "SAME_USER"


# =============================================================================
# Message History
# =============================================================================


class TestMessageHistory:
    def test_first_page_envelope(self, chat_with_history, alice_client):
        chat, messages = chat_with_history

        response = alice_client.get(messages_url(chat.id), {"page_size": 2})

        assert response.status_code == status.HTTP_200_OK
        assert set(response.data) == {"results", "next_cursor", "has_more"}
        assert [m["id"] for m in response.data["results"]] == [
            messages[4].id,
            messages[3].id,
        ]
        assert response.data["has_more"] is True
        assert response.data["next_cursor"]

    def test_walk_with_cursor(self, chat_with_history, bob_client):
        chat, messages = chat_with_history
        seen = []
        params = {"page_size": 2}

        while True:
            response = bob_client.get(messages_url(chat.id), params)
            assert response.status_code == status.HTTP_200_OK
            seen.extend(m["id"] for m in response.data["results"])
            if not response.data["has_more"]:
                assert response.data["next_cursor"] is None
                break
            params = {"page_size": 2, "cursor": response.data["next_cursor"]}

        assert seen == [m.id for m in reversed(messages)]

    def test_default_page_size_from_settings(self, chat_with_history, alice_client, settings):
        settings.CHAT_MESSAGE_PAGE_SIZE = 3
        chat, _ = chat_with_history

        response = alice_client.get(messages_url(chat.id))

        assert len(response.data["results"]) == 3
        assert response.data["has_more"] is True

    def test_newer_direction(self, chat_with_history, alice_client):
        chat, messages = chat_with_history
        first = alice_client.get(messages_url(chat.id), {"page_size": 4})

        response = alice_client.get(
            messages_url(chat.id),
            {"page_size": 4, "cursor": first.data["next_cursor"], "direction": "newer"},
        )

        # The anchor (messages[1]) is excluded; only strictly newer records follow
        assert [m["id"] for m in response.data["results"]] == [
            messages[2].id,
            messages[3].id,
            messages[4].id,
        ]
        assert response.data["has_more"] is False
        assert response.data["next_cursor"] is None

    def test_invalid_cursor_is_400(self, chat_with_history, alice_client):
        chat, _ = chat_with_history

        response = alice_client.get(messages_url(chat.id), {"cursor": "not-base-anything"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {"error": "Invalid cursor", "error_code": "INVALID_CURSOR"}

    def test_cursor_with_one_edited_character_is_400(self, chat_with_history, alice_client):
        chat, _ = chat_with_history
        token = alice_client.get(messages_url(chat.id), {"page_size": 2}).data["next_cursor"]
        tampered = token[:-1] + ("A" if token[-1] != "A" else "B")

        response = alice_client.get(messages_url(chat.id), {"cursor": tampered})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "INVALID_CURSOR"

    @pytest.mark.parametrize("page_size", ["0", "101", "abc", "-1"])
    def test_invalid_page_size_is_400(self, chat_with_history, alice_client, page_size):
        chat, _ = chat_with_history

        response = alice_client.get(messages_url(chat.id), {"page_size": page_size})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "INVALID_PAGE_SIZE"

    def test_invalid_direction_is_400(self, chat_with_history, alice_client):
        chat, _ = chat_with_history

        response = alice_client.get(messages_url(chat.id), {"direction": "sideways"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "INVALID_DIRECTION"

    def test_deleted_message_shows_as_tombstone_in_both_histories(
        self, chat_with_history, alice, alice_client, bob_client
    ):
        chat, messages = chat_with_history
        MessageService.delete_for_everyone(messages[4], alice)

        for client in (alice_client, bob_client):
            newest = client.get(messages_url(chat.id)).data["results"][0]
            assert newest["id"] == messages[4].id
            assert newest["content"] == "This message was deleted."
            assert newest["is_deleted_for_everyone"] is True

    def test_outsider_gets_404(self, chat_with_history, outsider_client):
        chat, _ = chat_with_history

        response = outsider_client.get(messages_url(chat.id))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_requires_authentication(self, chat, api_client):
        response = api_client.get(messages_url(chat.id))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


# =============================================================================
# Sending
# =============================================================================


class TestSendMessage:
    def test_send_text(self, chat, alice, alice_client):
        response = alice_client.post(
            messages_url(chat.id), {"content": "Hello!"}, format="json"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["content"] == "Hello!"
        assert response.data["sender"]["id"] == alice.id
        chat.refresh_from_db()
        assert chat.last_message_id == response.data["id"]

    def test_send_image(self, chat, alice_client):
        response = alice_client.post(
            messages_url(chat.id),
            {
                "message_type": MessageType.IMAGE,
                "file_url": "https://files.example.com/pic.jpg",
                "file_name": "pic.jpg",
                "file_size": 1024,
                "mime_type": "image/jpeg",
                "is_one_view": True,
            },
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["is_one_view"] is True
        assert response.data["file_name"] == "pic.jpg"

    def test_empty_content_is_400(self, chat, alice_client):
        response = alice_client.post(messages_url(chat.id), {"content": ""}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_reply_to_foreign_message_is_400(self, chat, alice, outsider, alice_client):
        other = ChatFactory(participants=[alice, outsider])
        foreign = MessageFactory(chat=other, sender=outsider)

        response = alice_client.post(
            messages_url(chat.id),
            {"content": "re", "reply_to_id": foreign.id},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "INVALID_REPLY"

    def test_outsider_cannot_send(self, chat, outsider_client):
        response = outsider_client.post(messages_url(chat.id), {"content": "hi"}, format="json")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert not Message.objects.exists()


# =============================================================================
# Message Actions
# =============================================================================


class TestMessageActions:
    @pytest.fixture
    def one_view(self, chat, alice):
        return MessageFactory(
            chat=chat,
            sender=alice,
            content="",
            message_type=MessageType.IMAGE,
            file_url="https://files.example.com/once.jpg",
            is_one_view=True,
        )

    def test_view_then_status(self, one_view, bob, alice_client, bob_client):
        response = bob_client.post(message_url(one_view.id, "view/"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"view_count": 1, "viewed_by_count": 1}

        status_response = alice_client.get(message_url(one_view.id, "view-status/"))

        assert status_response.status_code == status.HTTP_200_OK
        assert status_response.data["view_count"] == 1
        assert [u["id"] for u in status_response.data["viewed_by"]] == [bob.id]

    def test_outsider_cannot_view(self, one_view, outsider_client):
        response = outsider_client.post(message_url(one_view.id, "view/"))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_hide_for_me(self, chat, bob, alice, alice_client, bob_client, base_time):
        message = MessageFactory(chat=chat, sender=bob, created_at=base_time)

        response = alice_client.post(message_url(message.id, "hide/"))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        alice_ids = [m["id"] for m in alice_client.get(messages_url(chat.id)).data["results"]]
        bob_ids = [m["id"] for m in bob_client.get(messages_url(chat.id)).data["results"]]
        assert message.id not in alice_ids
        assert message.id in bob_ids

    def test_delete_for_everyone(self, chat, alice, alice_client):
        message = MessageFactory(chat=chat, sender=alice)

        response = alice_client.delete(message_url(message.id))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert Message.objects.get(pk=message.pk).is_deleted_for_everyone

    def test_partner_cannot_delete_for_everyone(self, chat, alice, bob_client):
        message = MessageFactory(chat=chat, sender=alice)

        response = bob_client.delete(message_url(message.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "NOT_SENDER"

    def test_second_delete_reports_already_deleted(self, chat, alice, alice_client):
        message = MessageFactory(chat=chat, sender=alice)
        alice_client.delete(message_url(message.id))

        response = alice_client.delete(message_url(message.id))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "ALREADY_DELETED"

    def test_cursor_still_works_after_anchor_removed(self, chat_with_history, alice_client):
        chat, messages = chat_with_history
        first = alice_client.get(messages_url(chat.id), {"page_size": 2})
        messages[3].soft_delete()

        response = alice_client.get(
            messages_url(chat.id),
            {"page_size": 2, "cursor": first.data["next_cursor"]},
        )

        assert response.status_code == status.HTTP_200_OK
        assert [m["id"] for m in response.data["results"]] == [
            messages[2].id,
            messages[1].id,
        ]

    def test_timestamps_serialize_with_milliseconds(self, chat, alice, alice_client, base_time):
        MessageFactory(
            chat=chat, sender=alice, created_at=base_time + timedelta(milliseconds=7)
        )

        response = alice_client.get(messages_url(chat.id))

        assert response.data["results"][0]["created_at"].startswith("2024-01-01T00:00:00.007")


# =============================================================================
# Editing and Reactions
# =============================================================================


class TestEditMessage:
    def test_sender_edits(self, chat, alice, alice_client):
        message = MessageFactory(chat=chat, sender=alice, content="helo")

        response = alice_client.patch(
            message_url(message.id), {"content": "hello"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["content"] == "hello"
        assert response.data["is_edited"] is True
        assert response.data["edited_at"] is not None

    def test_partner_gets_403(self, chat, alice, bob_client):
        message = MessageFactory(chat=chat, sender=alice, content="mine")

        response = bob_client.patch(
            message_url(message.id), {"content": "theirs"}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "NOT_SENDER"

    def test_media_message_is_400(self, chat, alice, alice_client):
        message = MessageFactory(
            chat=chat,
            sender=alice,
            content="",
            message_type=MessageType.IMAGE,
            file_url="https://files.example.com/a.png",
        )

        response = alice_client.patch(
            message_url(message.id), {"content": "caption"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "NOT_EDITABLE"

    def test_outsider_gets_404(self, chat, alice, outsider_client):
        message = MessageFactory(chat=chat, sender=alice)

        response = outsider_client.patch(
            message_url(message.id), {"content": "x"}, format="json"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestReactions:
    def test_toggle_reaction(self, chat, alice, bob, bob_client):
        message = MessageFactory(chat=chat, sender=alice)

        added = bob_client.post(message_url(message.id, "react/"), {"emoji": "👍"}, format="json")
        removed = bob_client.post(
            message_url(message.id, "react/"), {"emoji": "👍"}, format="json"
        )

        assert added.status_code == status.HTTP_200_OK
        assert [(r["user_id"], r["emoji"]) for r in added.data] == [(bob.id, "👍")]
        assert removed.data == []

    def test_reactions_appear_in_history(self, chat, alice, bob, alice_client, bob_client):
        message = MessageFactory(chat=chat, sender=alice)
        bob_client.post(message_url(message.id, "react/"), {"emoji": "❤️"}, format="json")

        result = alice_client.get(messages_url(chat.id)).data["results"][0]

        assert [(r["user_id"], r["emoji"]) for r in result["reactions"]] == [(bob.id, "❤️")]

    @pytest.mark.parametrize(
        "payload,error_code",
        [({}, "EMOJI_REQUIRED"), ({"emoji": "🍕"}, "EMOJI_NOT_ALLOWED")],
    )
    def test_rejected_emoji_is_400(self, chat, alice, bob_client, payload, error_code):
        message = MessageFactory(chat=chat, sender=alice)

        response = bob_client.post(message_url(message.id, "react/"), payload, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == error_code

    def test_outsider_gets_404(self, chat, alice, outsider_client):
        message = MessageFactory(chat=chat, sender=alice)

        response = outsider_client.post(
            message_url(message.id, "react/"), {"emoji": "👍"}, format="json"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
