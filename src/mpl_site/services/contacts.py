"""Organizer contacts, read-only."""

from dataclasses import dataclass

from mpl_site.domain.contacts import Contact
from mpl_site.services.resources import ResourceClient

DEFAULT_WHATSAPP_NUMBER = "9347490073"


@dataclass
class ContactsClient(ResourceClient[Contact]):
    """Organizer list; falls back to the built-in organizers."""

    resource_name = "contacts"
    load_failed_message = "Failed to load contacts"

    def record_id(self, record: Contact) -> str:
        return record.phone

    async def _fetch(self) -> list[Contact]:
        return await self.api_client.list_contacts()
