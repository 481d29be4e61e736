# ==============================================================================
# CAPA DE REPOSITORIOS - Colaboradores externos
# ==============================================================================
# Implementaciones en memoria de los sistemas externos que consume el motor
# de caja. Los servicios dependen de las interfaces (interfaces.py); estas
# clases pueden reemplazarse por clientes reales sin tocar los servicios.
#
# ESTRUCTURA:
# ├── interfaces.py            → Protocolos (contratos)
# ├── base.py                  → DictRepository, ListRepository
# ├── inventory_repository.py  → Catálogo y stock
# ├── customer_repository.py   → Clientes registrados
# ├── discount_repository.py   → Reglas de descuento
# ├── accounting_repository.py → Libro contable
# ├── cash_register.py         → Cajón de dinero
# ├── sales_repository.py      → Registro de ventas (fuente de verdad)
# └── audit_repository.py      → Log de auditoría
# ==============================================================================

from .interfaces import (
    IInventorySystem,
    IAccountingSystem,
    ICashRegister,
    IReceiptPrinter,
    ISaleLog,
    IDiscountRuleSource,
    ICustomerRegistry,
)

from .base import DictRepository, ListRepository
from .inventory_repository import InventoryRepository
from .customer_repository import CustomerRepository
from .discount_repository import DiscountRepository
from .accounting_repository import AccountingRepository
from .cash_register import CashRegister
from .sales_repository import SalesRepository
from .audit_repository import AuditRepository

__all__ = [
    # Interfaces
    'IInventorySystem',
    'IAccountingSystem',
    'ICashRegister',
    'IReceiptPrinter',
    'ISaleLog',
    'IDiscountRuleSource',
    'ICustomerRegistry',

    # Clases base
    'DictRepository',
    'ListRepository',

    # Implementaciones en memoria
    'InventoryRepository',
    'CustomerRepository',
    'DiscountRepository',
    'AccountingRepository',
    'CashRegister',
    'SalesRepository',
    'AuditRepository',
]
