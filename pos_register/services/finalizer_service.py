# ==============================================================================
# FINALIZADOR DE TRANSACCIONES
# ==============================================================================
# Fachada de los sistemas externos. Recibe la venta pagada y ejecuta el
# protocolo de finalización EN ESTE ORDEN:
#
#   1. Caja: registrar dinero recibido y vuelto
#   2. Impresora: imprimir la boleta
#   3. Logs: inventario (stock), contabilidad, registro de ventas
#      El inventario es de mejor esfuerzo: si falla se reporta en el log
#      y la venta continúa
#   4. Notificar a los observadores con el ÚLTIMO registro del registro de
#      ventas (la vista canónica), no con el registro recibido
#
# El paso 4 asume una sola caja: con varias cajas concurrentes, agregar y
# leer el último registro tendría que ser una única operación atómica.
# ==============================================================================

import logging
from typing import Any, Callable, Iterable, List, Optional, Tuple

from pos_register.models import (
    CollaboratorUnavailable,
    Customer,
    DiscountRuleSet,
    FinalizationError,
    Item,
    TransactionRecord,
)
from pos_register.repositories.interfaces import (
    IAccountingSystem,
    ICashRegister,
    ICustomerRegistry,
    IDiscountRuleSource,
    IInventorySystem,
    IReceiptPrinter,
    ISaleLog,
)
from pos_register.services.observers import FinalizationObserver, ObserverRegistry

logger = logging.getLogger(__name__)


class TransactionFinalizer:
    """
    Manejador de sistemas externos y del registro de ventas.

    Los colaboradores se inyectan en el constructor; el ciclo de vida lo
    gestiona el contenedor de la aplicación.
    """

    def __init__(
        self,
        inventory: IInventorySystem,
        accounting: IAccountingSystem,
        cash_register: ICashRegister,
        receipt_printer: IReceiptPrinter,
        sale_log: ISaleLog,
        discount_source: Optional[IDiscountRuleSource] = None,
        customer_registry: Optional[ICustomerRegistry] = None
    ):
        self.inventory = inventory
        self.accounting = accounting
        self.cash_register = cash_register
        self.receipt_printer = receipt_printer
        self.sale_log = sale_log
        self.discount_source = discount_source
        self.customer_registry = customer_registry
        self._observers: ObserverRegistry[FinalizationObserver] = ObserverRegistry(
            'venta finalizada'
        )

    # =========================================================================
    # CONSULTAS A SISTEMAS EXTERNOS
    # =========================================================================

    def fetch_item(self, item_id: str) -> Item:
        """
        Obtiene un ítem del inventario externo.

        Raises:
            UnknownItem: Si el identificador no existe
            CollaboratorUnavailable: Si el inventario no responde
        """
        return self.inventory.get_item(item_id)

    def fetch_customer(self, customer_id: str) -> Customer:
        """
        Raises:
            UnknownCustomer: Si el cliente no está registrado
        """
        if self.customer_registry is None:
            raise CollaboratorUnavailable('clientes')
        return self.customer_registry.get_customer(customer_id)

    def fetch_discounts(self, customer_id: Optional[str] = None) -> DiscountRuleSet:
        """Instantánea de reglas de descuento para el cliente."""
        if self.discount_source is None:
            return DiscountRuleSet(customer_id=customer_id)
        return self.discount_source.get_rules(customer_id)

    def next_receipt_number(self) -> str:
        return self.sale_log.next_receipt_number()

    # =========================================================================
    # PROTOCOLO DE FINALIZACIÓN
    # =========================================================================

    def register_transaction(self, record: TransactionRecord) -> TransactionRecord:
        """
        Registra la venta en caja, impresora y logs, y notifica.

        Args:
            record: Venta completa y pagada

        Returns:
            El registro canónico tal como quedó en el registro de ventas

        Raises:
            FinalizationError: Si falla un paso (indica cuál)
        """
        payment = record.payment
        self._run_step(
            'caja', record,
            lambda: self.cash_register.record_cash_movement(payment.amount_paid, payment.change)
        )
        self._run_step('impresora', record, lambda: self.receipt_printer.print_receipt(record))
        self._update_logs(record)

        logged = self._run_step('leer registro', record, self.sale_log.last_appended)
        logger.info(
            "Venta %s finalizada: total %s, pagado %s, vuelto %s",
            logged.receipt, payment.effective_total, payment.amount_paid, payment.change
        )
        self._notify_observers(logged)
        return logged

    def _update_logs(self, record: TransactionRecord) -> None:
        self._update_inventory(record)
        self._run_step('contabilidad', record, lambda: self.accounting.record_payment(record))
        self._run_step('registro de ventas', record, lambda: self.sale_log.append(record))

    def _update_inventory(self, record: TransactionRecord) -> None:
        """El stock es de mejor esfuerzo: un fallo se reporta y la venta sigue."""
        logger.debug("Finalizando %s: paso 'inventario'", record.receipt)
        try:
            self.inventory.apply_basket_to_stock(record.basket)
        except Exception:
            logger.exception(
                "No se pudo actualizar el stock de la venta %s", record.receipt
            )

    def _run_step(
        self,
        step: str,
        record: TransactionRecord,
        action: Callable[[], Any]
    ) -> Any:
        logger.debug("Finalizando %s: paso '%s'", record.receipt, step)
        try:
            return action()
        except Exception as exc:
            raise FinalizationError(step, record.receipt) from exc

    def _notify_observers(self, record: TransactionRecord) -> List[Tuple[FinalizationObserver, Exception]]:
        return self._observers.notify(
            lambda observer: observer.on_transaction_finalized(record)
        )

    # =========================================================================
    # OBSERVADORES
    # =========================================================================

    def add_observers(self, observers: Iterable[FinalizationObserver]) -> None:
        """Agrega todos los observadores que no estén ya registrados."""
        self._observers.add_all(observers)

    def add_observer(self, observer: FinalizationObserver) -> None:
        """Agrega el observador si no está ya registrado."""
        self._observers.add(observer)
