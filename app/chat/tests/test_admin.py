"""
Tests for the chat admin.

The add form must reject a participant list that is not exactly two
users before anything reaches the m2m guard.
"""

import pytest
from django.contrib.admin.sites import AdminSite

from authentication.tests.factories import UserFactory
from chat.admin import ChatAdmin, ChatAdminForm
from chat.models import Chat


class TestChatAdminForm:
    @pytest.mark.parametrize("count", [1, 3])
    def test_wrong_participant_count_is_form_error(self, db, count):
        users = [UserFactory() for _ in range(count)]

        form = ChatAdminForm(data={"participants": [u.pk for u in users], "is_active": True})

        assert not form.is_valid()
        assert "participants" in form.errors
        assert not Chat.objects.exists()

    def test_two_participants_create_chat(self, db, alice, bob):
        form = ChatAdminForm(data={"participants": [alice.pk, bob.pk], "is_active": True})

        assert form.is_valid(), form.errors
        chat = form.save()

        assert set(chat.participants.values_list("pk", flat=True)) == {alice.pk, bob.pk}


class TestChatAdmin:
    def test_participants_read_only_after_creation(self, chat, rf):
        admin = ChatAdmin(Chat, AdminSite())
        request = rf.get("/")

        assert "participants" in admin.get_readonly_fields(request, chat)
        assert "participants" not in admin.get_readonly_fields(request, None)
