import logging

import bcrypt

logger = logging.getLogger(__name__)


class PasswordHasher:
    """
    One-way password hashing with bcrypt.

    verify() fails closed: a malformed or missing digest is a non-match,
    never an error and never a match.
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        # Used to keep login timing flat when the account does not exist
        self._dummy_hash = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(rounds))

    def hash(self, plaintext: str) -> str:
        digest = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(self.rounds))
        return digest.decode("utf-8")

    def verify(self, plaintext: str, digest: str) -> bool:
        if not plaintext or not digest:
            return False
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), digest.encode("utf-8"))
        except (ValueError, TypeError):
            logger.warning("Password verification against malformed hash")
            return False

    def dummy_verify(self, plaintext: str) -> None:
        bcrypt.checkpw((plaintext or "").encode("utf-8")[:72], self._dummy_hash)
