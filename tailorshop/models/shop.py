"""Shop-wide singleton and user preferences."""
import enum

from tailorshop.models.base import DomainModel


class Language(str, enum.Enum):
    """Interface language."""
    EN = 'en'
    HI = 'hi'
    MR = 'mr'


class Theme(str, enum.Enum):
    """Interface color theme."""
    LIGHT = 'light'
    DARK = 'dark'


class ShopInfo(DomainModel):
    """Shop details printed on invoices and statements."""

    name: str
    tagline: str = ''
    address: str = ''
    phone: str = ''
