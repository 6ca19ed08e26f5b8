from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """One-way password hashing with verification"""

    # Hash of a throwaway password, compared against when no user matches
    # so that unknown emails cost the same as wrong passwords.
    timing_hash: str

    @abstractmethod
    def hash(self, plaintext: str) -> str:
        pass

    @abstractmethod
    def matches(self, plaintext: str, hashed: str) -> bool:
        pass
