"""
Factory Boy factories for chat models.

Provides test data generation for:
- Chat: Two-participant chat
- Message: Text and media messages

Usage:
    from chat.tests.factories import ChatFactory, MessageFactory

    # Chat between two new users
    chat = ChatFactory()

    # Chat between given users
    chat = ChatFactory(participants=[alice, bob])

    # Message from one of the participants
    message = MessageFactory(chat=chat, sender=alice)
"""

import factory

from authentication.tests.factories import UserFactory
from chat.models import Chat, Message, MessageType


class ChatFactory(factory.django.DjangoModelFactory):
    """
    Factory for Chat model.

    Participants default to two freshly created users; pass
    participants=[user_a, user_b] to choose them.
    """

    class Meta:
        model = Chat
        skip_postgeneration_save = True

    is_active = True

    @factory.post_generation
    def participants(self, create, extracted, **kwargs):
        if not create:
            return
        users = extracted if extracted is not None else [UserFactory(), UserFactory()]
        self.set_participants(users)


class MessageFactory(factory.django.DjangoModelFactory):
    """
    Factory for Message model.

    The sender defaults to the first participant of the chat.

    Examples:
        message = MessageFactory(chat=chat)
        image = MessageFactory(
            chat=chat,
            message_type=MessageType.IMAGE,
            content="",
            file_url="https://files.example.com/a.png",
        )
    """

    class Meta:
        model = Message

    chat = factory.SubFactory(ChatFactory)
    sender = factory.LazyAttribute(lambda o: o.chat.participants.order_by("id").first())
    content = factory.Sequence(lambda n: f"Message {n}")
    message_type = MessageType.TEXT
