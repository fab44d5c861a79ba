"""
Credential Generation

Negocio IDs, admin usernames and PINs handed out when the super-admin
creates a negocio.
"""
from datetime import datetime
from typing import Optional
import re
import secrets
import unicodedata

NEGOCIO_ID_PREFIX = "neg_"
USERNAME_BASE_MAX_LENGTH = 20
DEFAULT_USERNAME_BASE = "negocio"


def generate_negocio_id() -> str:
    """Opaque random ID, e.g. neg_3f9a0c1d2b4e5f60. Collisions are not checked."""
    return NEGOCIO_ID_PREFIX + secrets.token_hex(8)


def strip_accents(text: str) -> str:
    """
    Remove diacritics: "Café Ñandú" -> "Cafe Nandu".

    NFD splits accented characters into base + combining mark (category Mn),
    the marks are then dropped.
    """
    normalized = unicodedata.normalize("NFD", text)
    return "".join(char for char in normalized if unicodedata.category(char) != "Mn")


def slugify_name(nombre_negocio: str) -> str:
    """Lowercase ASCII slug of a business name, capped in length."""
    base = strip_accents(nombre_negocio).lower()
    base = re.sub(r"[^a-z0-9]+", "-", base).strip("-")
    base = base[:USERNAME_BASE_MAX_LENGTH].strip("-")
    return base or DEFAULT_USERNAME_BASE


def generate_username(nombre_negocio: str, year: Optional[int] = None) -> str:
    """
    Admin username derived from the business name and creation year.

    "Café Luna" -> "cafe-luna-2026"
    """
    year = year or datetime.utcnow().year
    return f"{slugify_name(nombre_negocio)}-{year}"


def generate_pin() -> str:
    """Uniform random 4-digit PIN in 1000-9999."""
    return str(1000 + secrets.randbelow(9000))
