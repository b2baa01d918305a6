"""Domain events emitted by the accounts app."""

from django.dispatch import Signal

# Sent after commit with ``account`` (the deactivated Seller) and ``user_ids``
account_deactivated = Signal()
