from abc import ABC, abstractmethod


class SessionStorePort(ABC):
    @abstractmethod
    def get_credential(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def get_user_id(self) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def save(self, credential: str, user_id: str | None = None) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        """Forget the credential, e.g. after the backend answered 401."""
        raise NotImplementedError
