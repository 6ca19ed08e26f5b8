import bcrypt

from session_gate.app.services.password_hasher import IPasswordHasher


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt with a configurable cost factor (12 in production)"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self.timing_hash = self.hash("timing-equalizer-password")

    def hash(self, plaintext: str) -> str:
        hashed = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(self.rounds))
        return hashed.decode("utf-8")

    def matches(self, plaintext: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False
