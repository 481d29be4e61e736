# ==============================================================================
# REPOSITORIO DE INVENTARIO
# ==============================================================================
# Catálogo de ítems y conteo de stock del sistema de inventario externo.
# ==============================================================================

import logging
from typing import Dict, Optional

from pos_register.models import Basket, CollaboratorUnavailable, Item, UnknownItem
from pos_register.repositories.base import DictRepository

logger = logging.getLogger(__name__)


class InventoryRepository(DictRepository[Item]):
    """
    Repositorio del inventario externo.

    Guarda el catálogo {item_id: Item} y el stock {item_id: cantidad}.
    Puede marcarse como no disponible para simular una caída del sistema.
    """

    COLLABORATOR = 'inventario'

    def __init__(self, catalog: Optional[Dict[str, Item]] = None):
        super().__init__(catalog)
        self._stock: Dict[str, int] = {}
        self.available = True

    def add_item(self, item: Item, stock: int = 0) -> None:
        """Registra un ítem en el catálogo con su stock inicial."""
        self.update(item.item_id, item)
        self._stock[item.item_id] = self._stock.get(item.item_id, 0) + stock

    def get_item(self, item_id: str) -> Item:
        """
        Busca un ítem por su identificador.

        Raises:
            CollaboratorUnavailable: Si el inventario no responde
            UnknownItem: Si el ítem no existe
        """
        if not self.available:
            raise CollaboratorUnavailable(self.COLLABORATOR, f'consultando {item_id}')
        item = self.get_by_id(item_id)
        if item is None:
            raise UnknownItem(item_id)
        return item

    def get_stock(self, item_id: str) -> int:
        return self._stock.get(item_id, 0)

    def apply_basket_to_stock(self, basket: Basket) -> None:
        """Descuenta del stock las cantidades vendidas."""
        for item, quantity in basket.items():
            remaining = self._stock.get(item.item_id, 0) - quantity
            self._stock[item.item_id] = remaining
            if remaining < 0:
                logger.warning(
                    "Stock negativo para %s (%s): %d", item.item_id, item.name, remaining
                )
