"""
Short Encoder Module

Renders composed DUIDs as short opaque strings keyed by a salt.

The salt seeds a deterministic shuffle of the base62 alphabet plus one offset
per digit position. Digits are written least significant first and each output
digit is chained with the previous one, so neighbouring IDs differ in more than
their last character. The mapping is a bijection per string length, which keeps
it collision-free and decodable. Base62 never needs more digits than base10, so
an encoded ID is never longer than its decimal form.
"""

import hashlib
import random

BASE62 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
# 62 ** 11 > 2 ** 64, enough offsets for any 64-bit DUID; longer inputs reuse them
KEY_POSITIONS = 11


class ShortEncoder:
    """Salt-keyed base62 encoder.

    Attributes:
        alphabet: The salt-permuted base62 alphabet.
    """

    def __init__(self, salt: str):
        seed = int.from_bytes(hashlib.sha256(salt.encode("utf-8")).digest(), "big")
        rnd = random.Random(seed)

        chars = list(BASE62)
        rnd.shuffle(chars)
        self.alphabet = "".join(chars)
        self._keys = [rnd.randrange(len(BASE62)) for _ in range(KEY_POSITIONS)]
        self._index = {char: i for i, char in enumerate(self.alphabet)}

    def encode(self, number: int) -> str:
        """Encodes a non-negative integer.

        Args:
            number: The integer to encode, typically a composed DUID.

        Returns:
            The short string form.

        Raises:
            ValueError: If the number is negative.
        """
        if number < 0:
            raise ValueError(f"Cannot encode negative number {number}")

        base = len(self.alphabet)
        chars = []
        previous = 0
        position = 0
        while True:
            number, digit = divmod(number, base)
            previous = (digit + self._keys[position % KEY_POSITIONS] + previous) % base
            chars.append(self.alphabet[previous])
            position += 1
            if number == 0:
                break

        return "".join(reversed(chars))

    def decode(self, encoded: str) -> int:
        """Decodes a string produced by ``encode`` with the same salt.

        Raises:
            ValueError: If the string is empty or has characters outside the alphabet.
        """
        if not encoded:
            raise ValueError("Cannot decode an empty string")

        base = len(self.alphabet)
        number = 0
        previous = 0
        for position, char in enumerate(reversed(encoded)):
            try:
                value = self._index[char]
            except KeyError:
                raise ValueError(f"Invalid character {char!r} in {encoded!r}") from None
            digit = (value - self._keys[position % KEY_POSITIONS] - previous) % base
            number += digit * base**position
            previous = value

        return number
