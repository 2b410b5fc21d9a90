"""Short code generation utilities."""

import random
import string
from typing import Optional


class CodeGenerator:
    """Generate random short codes from a fixed alphabet."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62 = string.ascii_letters + string.digits  # a-zA-Z0-9

    # Base62 plus the URL-safe unreserved punctuation
    EXTENDED = BASE62 + "-_~"

    ALPHABETS = {
        "base62": BASE62,
        "extended": EXTENDED,
    }

    def __init__(
        self,
        default_length: int = 6,
        alphabet: str = BASE62,
        seed: Optional[int] = None,
    ):
        """Initialize code generator.

        The generator owns its own ``random.Random`` instance, seeded once
        here. Create one generator per process and reuse it.

        Args:
            default_length: Default length for generated codes
            alphabet: Characters codes are drawn from
            seed: Optional seed for reproducible sequences
        """
        if default_length < 1:
            raise ValueError("default_length must be positive")
        if len(set(alphabet)) != len(alphabet) or not alphabet:
            raise ValueError("alphabet must be non-empty with unique characters")

        self.default_length = default_length
        self.alphabet = alphabet
        self._random = random.Random(seed)

    @classmethod
    def from_name(cls, name: str, default_length: int = 6, seed: Optional[int] = None) -> "CodeGenerator":
        """Build a generator from a named alphabet ('base62' or 'extended')."""
        try:
            alphabet = cls.ALPHABETS[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown code alphabet: {name!r}") from None
        return cls(default_length=default_length, alphabet=alphabet, seed=seed)

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Each character is drawn independently and uniformly from the alphabet.
        Uniqueness is not guaranteed here; the store's conditional write
        decides that.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(self._random.choices(self.alphabet, k=length))

    def is_valid_format(self, code: str) -> bool:
        """Check if every character of code belongs to this alphabet."""
        return bool(code) and all(c in self.alphabet for c in code)
