"""
API resources

Each resource maps its methods one-to-one onto upstream endpoints and shares
the ApiCaller of the client that created it.
"""

from .contacts import Contacts
from .messages import Messages, BulkSendResult, RecipientOutcome
from .shortlinks import Shortlinks
from .tags import Tags

__all__ = [
    'Contacts',
    'Messages',
    'BulkSendResult',
    'RecipientOutcome',
    'Shortlinks',
    'Tags',
]
