"""
Short code generation for the link store.
Uses Strategy Pattern so the store does not care where codes come from.
"""

import logging
import random
import secrets
import string
import time
from abc import ABC, abstractmethod

from shortlink_app.config import settings

logger = logging.getLogger(__name__)

# a-z, A-Z, 0-9: 62 symbols
ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


def is_valid_short_code(code: str, length: int = 6) -> bool:
    """True if code has exactly `length` characters, all from ALPHABET"""
    return len(code) == length and all(char in ALPHABET for char in code)


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""
    
    @abstractmethod
    def generate(self) -> str:
        """
        Generate a candidate short code.
        
        Candidates are not guaranteed to be unused; the link store
        checks them and asks for another on collision.
        
        Returns:
            A short code string
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Uniform random codes from the OS CSPRNG.
    
    With 6 characters there are 62^6 (about 56.8 billion) codes, so
    collisions stay rare until the table is very large.
    
    If the OS entropy source is unavailable the code is drawn from a
    time-seeded PRNG instead. Callers never see the difference.
    """
    
    def __init__(self, length: int = 6):
        self.length = length
        self.characters = ALPHABET
        self._fallback_rng = None
    
    def generate(self) -> str:
        try:
            return ''.join(secrets.choice(self.characters) for _ in range(self.length))
        except (NotImplementedError, OSError) as e:
            logger.warning("System entropy source unavailable (%s); using time-seeded fallback", e)
            return self._generate_fallback()
    
    def _generate_fallback(self) -> str:
        """Time-seeded PRNG; still uniform over the alphabet, never one repeated value"""
        # Seeded once so back-to-back calls keep drawing from the same stream
        if self._fallback_rng is None:
            self._fallback_rng = random.Random(time.time_ns())
        return "".join(self._fallback_rng.choice(self.characters) for _ in range(self.length))


def create_short_code_strategy() -> ShortCodeStrategy:
    """Build the generator configured in settings"""
    return RandomShortCodeStrategy(length=settings.short_code_length)
