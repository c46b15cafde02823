from .dto import CategoryOut, ProductOut
from .service import ProductService

__all__ = ["CategoryOut", "ProductOut", "ProductService"]
