from __future__ import annotations

from .errors import InvalidShortTokenError

BASE62_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
INT64_MAX = 2**63 - 1
# 19 decimal digits fit in 26 base-62 symbols.
MAX_TOKEN_LENGTH = 26


class ShortLinkCodec:
    """
    Reversible short tokens for recommendation ids.

    The id is written out in decimal and those ASCII bytes, read as one
    big-endian number, are re-encoded in base 62. ``encode(10)`` is therefore
    ``"3h6"`` rather than ``"a"``; existing links depend on this exact shape.
    """

    def __init__(self, alphabet: str = BASE62_ALPHABET) -> None:
        if len(alphabet) != 62 or len(set(alphabet)) != 62:
            raise ValueError("alphabet must hold 62 distinct symbols")
        self._alphabet = alphabet
        self._index = {symbol: position for position, symbol in enumerate(alphabet)}

    def encode(self, recommendation_id: int) -> str:
        if isinstance(recommendation_id, bool) or not isinstance(recommendation_id, int):
            raise TypeError(f"expected an int id, got {type(recommendation_id).__name__}")
        if not 0 <= recommendation_id <= INT64_MAX:
            raise ValueError(f"id out of range: {recommendation_id}")

        # Decimal digits are 0x30-0x39, so the number is never zero.
        number = int.from_bytes(str(recommendation_id).encode("ascii"), "big")
        symbols = []
        while number > 0:
            number, remainder = divmod(number, 62)
            symbols.append(self._alphabet[remainder])
        return "".join(reversed(symbols))

    def decode(self, token: str) -> int:
        if not token:
            raise InvalidShortTokenError("empty token")
        if len(token) > MAX_TOKEN_LENGTH:
            raise InvalidShortTokenError(f"token longer than {MAX_TOKEN_LENGTH} symbols")
        if token[0] == self._alphabet[0]:
            raise InvalidShortTokenError(f"non-canonical token {token!r}")

        number = 0
        for symbol in token:
            position = self._index.get(symbol)
            if position is None:
                raise InvalidShortTokenError(f"unexpected character {symbol!r} in token")
            number = number * 62 + position

        raw = number.to_bytes((number.bit_length() + 7) // 8, "big")
        try:
            digits = raw.decode("ascii")
        except UnicodeDecodeError as exc:
            raise InvalidShortTokenError(f"token {token!r} does not hold a decimal id") from exc
        if not digits.isdigit() or (len(digits) > 1 and digits[0] == "0"):
            raise InvalidShortTokenError(f"token {token!r} does not hold a decimal id")

        value = int(digits)
        if value > INT64_MAX:
            raise InvalidShortTokenError(f"token {token!r} exceeds the id range")
        return value
