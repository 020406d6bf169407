"""
Tests for short code generation.
"""
import string

from shortlink_app.services import short_code_strategies
from shortlink_app.services.short_code_strategies import (
    ALPHABET,
    RandomShortCodeStrategy,
    ShortCodeStrategy,
    create_short_code_strategy,
    is_valid_short_code,
)


class TestRandomStrategy:
    """Test the random short code strategy"""

    def test_generates_six_alphanumeric_characters(self):
        """Every code is exactly 6 characters from a-z, A-Z, 0-9"""
        strategy = RandomShortCodeStrategy(length=6)

        for _ in range(1000):
            code = strategy.generate()
            assert len(code) == 6
            assert all(char in ALPHABET for char in code)

    def test_alphabet_has_62_symbols(self):
        assert len(ALPHABET) == 62
        assert set(ALPHABET) == set(string.ascii_letters + string.digits)

    def test_no_collisions_in_succession(self):
        """10,000 codes out of 62^6 should practically never repeat"""
        strategy = RandomShortCodeStrategy(length=6)

        codes = {strategy.generate() for _ in range(10000)}

        assert len(codes) == 10000

    def test_uses_whole_alphabet(self):
        """Lowercase, uppercase and digits all show up"""
        strategy = RandomShortCodeStrategy(length=6)

        seen = set("".join(strategy.generate() for _ in range(2000)))

        assert seen & set(string.ascii_lowercase)
        assert seen & set(string.ascii_uppercase)
        assert seen & set(string.digits)

    def test_fallback_when_entropy_source_fails(self, monkeypatch):
        """A broken OS entropy source still yields valid, varied codes"""
        def broken_choice(seq):
            raise OSError("no entropy")

        monkeypatch.setattr(short_code_strategies.secrets, "choice", broken_choice)
        strategy = RandomShortCodeStrategy(length=6)

        codes = [strategy.generate() for _ in range(50)]

        for code in codes:
            assert is_valid_short_code(code)
            # Not a degenerate repeated character
            assert len(set(code)) > 1
        assert len(set(codes)) > 1


class TestShortCodeValidation:
    """Test short code format checks used by the redirect route"""

    def test_accepts_valid_codes(self):
        assert is_valid_short_code("aZ09bY")
        assert is_valid_short_code("nosuch")

    def test_rejects_wrong_length(self):
        assert not is_valid_short_code("abc")
        assert not is_valid_short_code("abcdefg")
        assert not is_valid_short_code("")

    def test_rejects_non_alphanumeric(self):
        assert not is_valid_short_code("abc-12")
        assert not is_valid_short_code("abc 12")
        assert not is_valid_short_code("abcdé1")

    def test_custom_length(self):
        assert is_valid_short_code("abcdefgh", length=8)


class TestStrategyFactory:
    """Test building the configured strategy"""

    def test_creates_random_strategy_from_settings(self):
        strategy = create_short_code_strategy()

        assert isinstance(strategy, ShortCodeStrategy)
        assert isinstance(strategy, RandomShortCodeStrategy)
        assert strategy.length == 6
