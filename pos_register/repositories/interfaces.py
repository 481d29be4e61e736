# ==============================================================================
# INTERFACES DE COLABORADORES EXTERNOS
# ==============================================================================
#
# Contratos (protocolos) de los sistemas externos que consume el motor de
# caja. Los servicios dependen de estas interfaces, NO de implementaciones
# concretas:
#
# 1. INDEPENDENCIA DE ALMACENAMIENTO
#    - Inventario, contabilidad, impresora, etc. pueden ser reales o simulados
#
# 2. TESTING
#    - Fácil crear dobles de prueba que cumplan estas interfaces
#
# ==============================================================================

from typing import List, Optional, Protocol, runtime_checkable

from pos_register.models import (
    Basket,
    Customer,
    DiscountRuleSet,
    Item,
    Money,
    TransactionRecord,
)


@runtime_checkable
class IInventorySystem(Protocol):
    """Inventario externo: consulta de ítems y actualización de stock."""

    def get_item(self, item_id: str) -> Item:
        """Obtiene un ítem. Lanza UnknownItem o CollaboratorUnavailable."""
        ...

    def apply_basket_to_stock(self, basket: Basket) -> None:
        """Descuenta del stock lo vendido (mejor esfuerzo)."""
        ...


@runtime_checkable
class IAccountingSystem(Protocol):
    """Contabilidad externa."""

    def record_payment(self, record: TransactionRecord) -> None:
        """Agrega el registro de pago al libro contable."""
        ...


@runtime_checkable
class ICashRegister(Protocol):
    """Cajón de dinero con saldo inicial al abrir caja."""

    def record_cash_movement(self, amount_paid: Money, change: Money) -> None:
        """Registra el dinero recibido y el vuelto entregado."""
        ...

    @property
    def balance(self) -> Money:
        ...


@runtime_checkable
class IReceiptPrinter(Protocol):
    """Impresora de boletas."""

    def print_receipt(self, record: TransactionRecord) -> None:
        ...


@runtime_checkable
class ISaleLog(Protocol):
    """Registro de ventas: fuente de verdad, solo agregar, ordenado."""

    def append(self, record: TransactionRecord) -> None:
        ...

    def last_appended(self) -> TransactionRecord:
        """Último registro agregado."""
        ...

    def get_all(self) -> List[TransactionRecord]:
        ...

    def next_receipt_number(self) -> str:
        ...


@runtime_checkable
class IDiscountRuleSource(Protocol):
    """Base de datos de descuentos."""

    def get_rules(self, customer_id: Optional[str] = None) -> DiscountRuleSet:
        ...


@runtime_checkable
class ICustomerRegistry(Protocol):
    """Base de datos de clientes."""

    def get_customer(self, customer_id: str) -> Customer:
        """Obtiene un cliente. Lanza UnknownCustomer si no existe."""
        ...
