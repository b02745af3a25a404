"""
Peer Clients

HTTP clients for the services the order service depends on.
"""

from bookstore.clients.peers import (
    PeerServiceClient,
    AccountServiceClient,
    CatalogServiceClient,
    fetch_with_default,
)

__all__ = [
    "PeerServiceClient",
    "AccountServiceClient",
    "CatalogServiceClient",
    "fetch_with_default",
]
