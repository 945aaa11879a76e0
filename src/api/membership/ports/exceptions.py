"""Exceptions for the membership bounded context.

These exceptions represent errors the application layer raises while
handling external facts or running actions. Gateway failures are not
listed here; they live in ``shared_kernel.integrations.exceptions`` and
propagate untouched through the membership code.
"""


class CustomerNotFoundError(Exception):
    """Raised when an action or lookup targets an unknown customer."""

    def __init__(self, customer_id: int):
        self.customer_id = customer_id
        super().__init__(f"Customer {customer_id} not found")


class ChatAccountNotLinkedError(Exception):
    """Raised when a chat action needs a slack id the customer does not have.

    The entry is retried by the reactor worker, so linking the account
    upstream lets a later attempt succeed.
    """

    def __init__(self, customer_id: int):
        self.customer_id = customer_id
        super().__init__(f"Customer {customer_id} has no linked chat account")


class UnsupportedEventError(Exception):
    """Raised when a webhook topic or stored event type is not understood."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unsupported event: {name}")


class UnresolvableRecipientError(Exception):
    """Raised when a message recipient is neither a chat id nor a customer."""

    def __init__(self, recipient: str):
        self.recipient = recipient
        super().__init__(f"Cannot resolve message recipient {recipient!r}")
