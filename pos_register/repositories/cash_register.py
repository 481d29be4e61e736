# ==============================================================================
# CAJA REGISTRADORA
# ==============================================================================
# Estado del cajón de dinero: saldo inicial al abrir caja más los
# movimientos de cada venta (entra lo pagado, sale el vuelto).
# ==============================================================================

from typing import List, Tuple

from pos_register.models import Money


class CashRegister:
    """
    Cajón de dinero.

    Attributes:
        initial_balance: Saldo al abrir la caja
        movements: Historial de (pagado, vuelto)
    """

    def __init__(self, initial_balance: Money):
        self.initial_balance = initial_balance
        self._balance = initial_balance
        self.movements: List[Tuple[Money, Money]] = []

    @property
    def balance(self) -> Money:
        return self._balance

    def record_cash_movement(self, amount_paid: Money, change: Money) -> None:
        """Suma lo pagado y resta el vuelto entregado."""
        self._balance = self._balance.plus(amount_paid).minus(change)
        self.movements.append((amount_paid, change))
