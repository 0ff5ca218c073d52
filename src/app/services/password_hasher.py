import bcrypt


class PasswordHasher:
    """bcrypt hashing with a fresh salt per call"""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        return bcrypt.hashpw(plaintext.encode(), bcrypt.gensalt(self.rounds)).decode()

    def verify(self, plaintext: str, password_hash: str) -> bool:
        """
        Check plaintext against a stored hash.

        Returns False on mismatch and on a malformed stored hash; never raises.
        """
        try:
            return bcrypt.checkpw(plaintext.encode(), password_hash.encode())
        except ValueError:
            return False

    def dummy_verify(self) -> None:
        """Burn one bcrypt check so unknown-email logins take as long as real ones"""
        bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(self.rounds))
