# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# Esta capa contiene TODA la lógica de negocio de la caja.
#
# PRINCIPIOS:
# 1. Los servicios orquestan operaciones entre colaboradores externos
# 2. Aplican reglas de negocio y validaciones
# 3. Las rutas (Flask) solo llaman a servicios
# 4. Los servicios dependen de interfaces, no de implementaciones
#
# ESTRUCTURA:
# ├── observers.py          → Interfaces de observadores y registro ordenado
# ├── discount_service.py   → Política de descuento
# ├── payment_service.py    → Totales, descuento, vuelto, PaymentRecord
# ├── finalizer_service.py  → Protocolo de finalización (caja, boleta, logs)
# ├── sale_service.py       → Ciclo de vida de la venta
# ├── receipt_service.py    → Impresora de boletas
# ├── revenue_service.py    → Observadores de ingresos
# └── audit_service.py      → Log de auditoría
# ==============================================================================

from pos_register.services.observers import (
    FinalizationObserver,
    ObserverRegistry,
    PaymentObserver,
)
from pos_register.services.discount_service import DiscountPolicy
from pos_register.services.payment_service import Payment
from pos_register.services.finalizer_service import TransactionFinalizer
from pos_register.services.sale_service import SaleService
from pos_register.services.receipt_service import ReceiptPrinter
from pos_register.services.revenue_service import TotalRevenueFileOutput, TotalRevenueView
from pos_register.services.audit_service import AuditService

__all__ = [
    'FinalizationObserver',
    'ObserverRegistry',
    'PaymentObserver',
    'DiscountPolicy',
    'Payment',
    'TransactionFinalizer',
    'SaleService',
    'ReceiptPrinter',
    'TotalRevenueFileOutput',
    'TotalRevenueView',
    'AuditService',
]
