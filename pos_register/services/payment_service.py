# ==============================================================================
# SERVICIO DE PAGO
# ==============================================================================
# Calcula total e IVA de la canasta, aplica el descuento, calcula el vuelto,
# construye el PaymentRecord y notifica a los observadores de pago.
#
# ORDEN OBLIGATORIO:
#   price_basket → [apply_discount] → finalize_payment
# ==============================================================================

import logging
from typing import Iterable, List, Optional, Tuple

from pos_register.models import (
    Basket,
    DiscountRuleSet,
    InsufficientPayment,
    Money,
    NotPriced,
    PaymentAlreadyFinalized,
    PaymentRecord,
)
from pos_register.services.discount_service import DiscountPolicy
from pos_register.services.observers import ObserverRegistry, PaymentObserver

logger = logging.getLogger(__name__)


class Payment:
    """
    Pago de una venta.

    Una instancia por venta. El PaymentRecord se crea una sola vez y es
    inmutable; después de finalizar no se aceptan más cambios.
    """

    def __init__(
        self,
        discount_policy: DiscountPolicy = None,
        observers: Iterable[PaymentObserver] = ()
    ):
        """
        Inicializa el pago.

        Args:
            discount_policy: Política de descuento (por defecto DiscountPolicy)
            observers: Observadores de pago iniciales
        """
        self.discount_policy = discount_policy or DiscountPolicy()
        self._observers: ObserverRegistry[PaymentObserver] = ObserverRegistry('pago finalizado')
        self._observers.add_all(observers)

        self.total_price: Optional[Money] = None
        self.total_vat: Optional[Money] = None
        self.discount: Optional[Money] = None
        self.total_price_after_discount: Optional[Money] = None
        self.total_vat_after_discount: Optional[Money] = None
        self.payment_record: Optional[PaymentRecord] = None

    # =========================================================================
    # OBSERVADORES
    # =========================================================================

    def add_observer(self, observer: PaymentObserver) -> None:
        self._observers.add(observer)

    def add_observers(self, observers: Iterable[PaymentObserver]) -> None:
        self._observers.add_all(observers)

    # =========================================================================
    # CÁLCULOS
    # =========================================================================

    @property
    def is_priced(self) -> bool:
        return self.total_price is not None

    @property
    def has_discount(self) -> bool:
        return self.discount is not None

    @property
    def effective_total(self) -> Money:
        """Total a cobrar: con descuento si se aplicó uno."""
        self._require_priced('effective_total')
        if self.has_discount:
            return self.total_price_after_discount
        return self.total_price

    def price_basket(self, basket: Basket) -> Tuple[Money, Money]:
        """
        Calcula total e IVA antes de descuento.

        Args:
            basket: Canasta de la venta

        Returns:
            Tupla (total, iva)
        """
        self._require_open('price_basket')
        self.total_price = basket.subtotal()
        self.total_vat = basket.vat_total()
        return self.total_price, self.total_vat

    def apply_discount(self, rules: Optional[DiscountRuleSet], basket: Basket) -> Money:
        """
        Aplica la política de descuento. Una nueva llamada reemplaza el
        descuento anterior.

        Un descuento cero se trata igual que no haber pedido descuento:
        el PaymentRecord no llevará los campos de descuento.

        Returns:
            Monto descontado

        Raises:
            NotPriced: Si no se llamó price_basket antes
        """
        self._require_open('apply_discount')
        self._require_priced('apply_discount')

        policy = self.discount_policy
        discount = policy.compute_discount(rules, basket, self.total_price)
        if discount.is_zero():
            self._clear_discount()
            return discount

        self.discount = discount
        self.total_price_after_discount = policy.compute_total_after_discount(
            self.total_price, discount
        )
        self.total_vat_after_discount = policy.compute_vat_after_discount(
            self.total_price_after_discount, self.total_price, self.total_vat
        )
        return discount

    def finalize_payment(self, amount_paid: Money) -> PaymentRecord:
        """
        Registra el monto entregado, calcula el vuelto y notifica.

        Args:
            amount_paid: Monto entregado por el cliente

        Returns:
            PaymentRecord inmutable

        Raises:
            NotPriced: Si no se llamó price_basket antes
            InsufficientPayment: Si el monto no cubre el total (sin efectos)
        """
        self._require_open('finalize_payment')
        self._require_priced('finalize_payment')

        effective_total = self.effective_total
        change = amount_paid.minus(effective_total)
        if change.is_negative():
            raise InsufficientPayment(amount_paid, effective_total)

        self.payment_record = PaymentRecord(
            total_price=self.total_price,
            total_vat=self.total_vat,
            amount_paid=amount_paid,
            change=change,
            discount=self.discount,
            total_price_after_discount=self.total_price_after_discount,
            total_vat_after_discount=self.total_vat_after_discount,
        )
        logger.debug("Pago finalizado: total %s, vuelto %s", effective_total, change)

        self._notify_observers(effective_total)
        return self.payment_record

    # =========================================================================
    # AUXILIARES
    # =========================================================================

    def _notify_observers(self, realized_revenue: Money) -> List:
        return self._observers.notify(
            lambda observer: observer.on_payment_finalized(realized_revenue)
        )

    def _clear_discount(self) -> None:
        self.discount = None
        self.total_price_after_discount = None
        self.total_vat_after_discount = None

    def _require_priced(self, step: str) -> None:
        if not self.is_priced:
            raise NotPriced(step)

    def _require_open(self, step: str) -> None:
        if self.payment_record is not None:
            raise PaymentAlreadyFinalized(step)
