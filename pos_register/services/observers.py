# ==============================================================================
# OBSERVADORES
# ==============================================================================
# Interfaces de los observadores que el motor notifica y el registro
# ordenado, sin duplicados, que usan Payment y TransactionFinalizer.
#
# Un observador que falla se aísla: se reporta en el log y los demás
# siguen recibiendo la notificación.
# ==============================================================================

import logging
from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, Iterator, List, Tuple, TypeVar

from pos_register.models import Money, TransactionRecord

logger = logging.getLogger(__name__)


class PaymentObserver(ABC):
    """Se notifica una vez por cada pago completado."""

    @abstractmethod
    def on_payment_finalized(self, realized_revenue: Money) -> None:
        """
        Args:
            realized_revenue: Total efectivo cobrado (con descuento si lo hubo)
        """


class FinalizationObserver(ABC):
    """Se notifica una vez por cada venta agregada al registro de ventas."""

    @abstractmethod
    def on_transaction_finalized(self, record: TransactionRecord) -> None:
        """
        Args:
            record: Registro tal como quedó en el registro de ventas
        """


O = TypeVar('O')


class ObserverRegistry(Generic[O]):
    """
    Colección de observadores en orden de registro, sin duplicados.

    Agregar un observador ya registrado no tiene efecto.
    """

    def __init__(self, event_name: str):
        self.event_name = event_name
        self._observers: List[O] = []

    def add(self, observer: O) -> bool:
        """Registra un observador. Retorna False si ya estaba registrado."""
        if observer in self._observers:
            return False
        self._observers.append(observer)
        return True

    def add_all(self, observers: Iterable[O]) -> None:
        for observer in observers:
            self.add(observer)

    def notify(self, deliver: Callable[[O], None]) -> List[Tuple[O, Exception]]:
        """
        Entrega la notificación a cada observador en orden de registro.

        Args:
            deliver: Función que notifica a un observador

        Returns:
            Lista de (observador, excepción) de los que fallaron
        """
        failures = []
        for observer in list(self._observers):
            try:
                deliver(observer)
            except Exception as exc:
                logger.exception(
                    "Observador %r falló al recibir '%s'", observer, self.event_name
                )
                failures.append((observer, exc))
        return failures

    def __len__(self) -> int:
        return len(self._observers)

    def __iter__(self) -> Iterator[O]:
        return iter(list(self._observers))
