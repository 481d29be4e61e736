# ==============================================================================
# SERVICIO DE VENTAS
# ==============================================================================
# Orquesta el ciclo de vida de una venta en la caja:
#
#   start_sale → register_item* → end_sale → [request_discount] → pay
#
# Una venta se puede abandonar en cualquier momento antes de que `pay`
# termine bien. Solo hay una venta activa a la vez (una caja).
# ==============================================================================

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from pos_register.models import (
    Basket,
    Money,
    NoActiveSale,
    TransactionRecord,
)
from pos_register.services.discount_service import DiscountPolicy
from pos_register.services.finalizer_service import TransactionFinalizer
from pos_register.services.observers import ObserverRegistry, PaymentObserver
from pos_register.services.payment_service import Payment

logger = logging.getLogger(__name__)


class SaleService:
    """
    Controlador de la venta en curso.

    Responsabilidades:
    - Registrar ítems en la canasta
    - Calcular totales y pedir descuentos
    - Cobrar y entregar la venta al finalizador

    Los observadores de pago registrados aquí se conectan al Payment de
    cada venta nueva.
    """

    def __init__(
        self,
        finalizer: TransactionFinalizer,
        discount_policy: DiscountPolicy = None
    ):
        """
        Args:
            finalizer: Fachada de sistemas externos
            discount_policy: Política de descuento (opcional)
        """
        self.finalizer = finalizer
        self.discount_policy = discount_policy or DiscountPolicy()
        self._payment_observers: ObserverRegistry[PaymentObserver] = ObserverRegistry(
            'pago finalizado'
        )
        self.basket: Optional[Basket] = None
        self.payment: Optional[Payment] = None
        self.customer_id: Optional[str] = None

    def add_payment_observer(self, observer: PaymentObserver) -> None:
        self._payment_observers.add(observer)
        if self.payment is not None:
            self.payment.add_observer(observer)

    def add_payment_observers(self, observers: Iterable[PaymentObserver]) -> None:
        for observer in observers:
            self.add_payment_observer(observer)

    @property
    def has_active_sale(self) -> bool:
        return self.basket is not None

    # =========================================================================
    # CICLO DE VIDA DE LA VENTA
    # =========================================================================

    def start_sale(self, customer_id: Optional[str] = None) -> None:
        """
        Inicia una venta nueva (descarta la anterior si no se pagó).

        Args:
            customer_id: Cliente identificado al inicio (opcional)

        Raises:
            UnknownCustomer: Si el cliente no está registrado
        """
        if customer_id:
            self.finalizer.fetch_customer(customer_id)
        if self.has_active_sale:
            logger.info("Venta en curso descartada al iniciar una nueva")
        self.basket = Basket()
        self.payment = self._new_payment()
        self.customer_id = customer_id or None

    def register_item(self, item_id: str, quantity: int = 1) -> Dict[str, Any]:
        """
        Agrega un ítem a la canasta.

        Si la venta ya tenía totales calculados, se descartan y hay que
        volver a llamar end_sale.

        Returns:
            Dict con item, quantity (acumulada), running_total, running_vat

        Raises:
            NoActiveSale: Si no hay venta iniciada
            InvalidQuantity: Si la cantidad no es un entero >= 1
            UnknownItem / CollaboratorUnavailable: Errores del inventario
        """
        basket = self._require_sale('register_item')
        item = self.finalizer.fetch_item(item_id)
        total_quantity = basket.add(item, quantity)

        if self.payment.is_priced:
            self.payment = self._new_payment()

        return {
            'item': item,
            'quantity': total_quantity,
            'running_total': basket.subtotal(),
            'running_vat': basket.vat_total(),
        }

    def end_sale(self) -> Tuple[Money, Money]:
        """
        Cierra la canasta y calcula total e IVA.

        Returns:
            Tupla (total, iva)
        """
        basket = self._require_sale('end_sale')
        return self.payment.price_basket(basket)

    def request_discount(self, customer_id: Optional[str] = None) -> Money:
        """
        Busca las reglas de descuento del cliente y las aplica.

        Args:
            customer_id: Cliente (si no se indica, el de start_sale)

        Returns:
            Monto descontado (cero si ninguna regla aplica)

        Raises:
            UnknownCustomer: Si el cliente no está registrado
            NotPriced: Si no se llamó end_sale antes
        """
        basket = self._require_sale('request_discount')
        customer_id = customer_id or self.customer_id
        if customer_id:
            self.finalizer.fetch_customer(customer_id)
            self.customer_id = customer_id
        rules = self.finalizer.fetch_discounts(customer_id)
        return self.payment.apply_discount(rules, basket)

    def pay(self, amount_paid: Money) -> TransactionRecord:
        """
        Cobra la venta y la finaliza.

        Args:
            amount_paid: Monto entregado por el cliente

        Returns:
            Registro canónico de la venta en el registro de ventas

        Raises:
            InsufficientPayment: Sin efectos; corregir el monto o abandonar
            FinalizationError: Si falla un sistema externo al finalizar
        """
        basket = self._require_sale('pay')
        payment_record = self.payment.finalize_payment(amount_paid)

        record = TransactionRecord(
            receipt=self.finalizer.next_receipt_number(),
            lines=tuple(basket.items()),
            payment=payment_record,
            customer_id=self.customer_id,
        )
        self._clear_sale()
        return self.finalizer.register_transaction(record)

    def abandon_sale(self) -> None:
        """Descarta la venta en curso sin efectos en sistemas externos."""
        self._require_sale('abandon_sale')
        self._clear_sale()

    # =========================================================================
    # AUXILIARES
    # =========================================================================

    def _new_payment(self) -> Payment:
        return Payment(self.discount_policy, observers=self._payment_observers)

    def _require_sale(self, step: str) -> Basket:
        if self.basket is None:
            raise NoActiveSale(step)
        return self.basket

    def _clear_sale(self) -> None:
        self.basket = None
        self.payment = None
        self.customer_id = None
