"""
Short public identifiers for quiz play URLs
"""
import logging
import secrets
import string
from typing import Callable

logger = logging.getLogger(__name__)

SLUG_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
SLUG_LENGTH = 8


def generate_slug(length: int = SLUG_LENGTH) -> str:
    """Random URL-safe slug drawn from the 62 character alphanumeric alphabet"""
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(length))


def generate_unique_slug(
    is_taken: Callable[[str], bool],
    generator: Callable[[], str] = generate_slug
) -> str:
    """
    Generate slugs until one is not taken

    Retries without a cap or backoff.

    Args:
        is_taken: Predicate checking a candidate against persisted slugs
        generator: Candidate source

    Returns:
        A slug for which `is_taken` returned False
    """
    slug = generator()
    while is_taken(slug):
        logger.info(f"Slug collision on {slug}, regenerating")
        slug = generator()
    return slug
