# Clients package init
from app.clients.paste_client import ClientSession, PasteClient, PasteClientError

__all__ = ["ClientSession", "PasteClient", "PasteClientError"]
