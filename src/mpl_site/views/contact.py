"""Contact page: organizer phone numbers."""

from dataclasses import dataclass

from mpl_site.domain.contacts import Contact
from mpl_site.services.contacts import DEFAULT_WHATSAPP_NUMBER, ContactsClient
from mpl_site.services.notifications import Notifier


@dataclass
class ContactView:
    """Organizer list with WhatsApp and phone links."""

    contacts: ContactsClient
    notifier: Notifier
    whatsapp_number: str = DEFAULT_WHATSAPP_NUMBER
    loading: bool = False

    @property
    def organizers(self) -> list[Contact]:
        return self.contacts.items

    async def load(self) -> None:
        self.loading = True
        try:
            await self.contacts.fetch_all()
        finally:
            self.loading = False

    def whatsapp_link(self, phone: str | None = None) -> str:
        self.notifier.info("Opening WhatsApp...")
        return Contact(name="", phone=phone or self.whatsapp_number).whatsapp_url
