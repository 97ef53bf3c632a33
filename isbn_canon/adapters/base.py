from abc import ABC, abstractmethod
from ..core.models import ProductRecord


class UpcResolver(ABC):
    """Looks up the products a UPC barcode is registered to."""

    name: str

    @abstractmethod
    def resolve_upc(self, code: str) -> list[ProductRecord]:
        raise NotImplementedError

    def close(self) -> None:
        pass
