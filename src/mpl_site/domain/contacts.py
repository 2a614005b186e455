"""Domain models for organizer contacts."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Contact:
    """Organizer reachable by phone or WhatsApp."""

    name: str
    phone: str

    @property
    def whatsapp_url(self) -> str:
        """Return the wa.me deep link for this contact."""
        return f"https://wa.me/91{self.phone}"

    @property
    def tel_url(self) -> str:
        """Return the tel: link for this contact."""
        return f"tel:{self.phone}"
