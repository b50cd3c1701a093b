"""Sender directory: distinct message senders in first-seen order."""

from typing import Dict, Iterable, List

from ..models.message import Message, User


def compute_sender_directory(messages: Iterable[Message]) -> List[User]:
    """
    Collect the distinct senders of a message collection.

    Senders are deduplicated by ID; the first occurrence wins and
    determines the position in the returned list.

    Args:
        messages: Messages in feed order

    Returns:
        Senders ordered by first appearance
    """
    directory: Dict[str, User] = {}
    for message in messages:
        if message.sender.id not in directory:
            directory[message.sender.id] = message.sender
    return list(directory.values())
