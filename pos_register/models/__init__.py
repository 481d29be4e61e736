# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema de caja
# ==============================================================================
# Entidades inmutables (dataclasses) y taxonomía de errores del dominio.
# Independientes de Flask y de cualquier mecanismo de persistencia.
# ==============================================================================

from .entities import (
    # Dinero
    Money,
    MINOR_UNITS_PER_MAJOR,
    to_fraction,

    # Inventario y clientes
    Item,
    Customer,

    # Canasta
    Basket,

    # Descuentos
    DiscountRule,
    DiscountRuleSet,
    DiscountType,

    # Registros
    PaymentRecord,
    TransactionRecord,

    # Auditoría
    AuditLog,
    AuditType,
)

from .errors import (
    PosError,
    InvalidQuantity,
    InvalidAmount,
    NotPriced,
    NoActiveSale,
    PaymentAlreadyFinalized,
    InsufficientPayment,
    UnknownItem,
    UnknownCustomer,
    CollaboratorUnavailable,
    FinalizationError,
)

__all__ = [
    # Dinero
    'Money',
    'MINOR_UNITS_PER_MAJOR',
    'to_fraction',

    # Inventario y clientes
    'Item',
    'Customer',

    # Canasta
    'Basket',

    # Descuentos
    'DiscountRule',
    'DiscountRuleSet',
    'DiscountType',

    # Registros
    'PaymentRecord',
    'TransactionRecord',

    # Auditoría
    'AuditLog',
    'AuditType',

    # Errores
    'PosError',
    'InvalidQuantity',
    'InvalidAmount',
    'NotPriced',
    'NoActiveSale',
    'PaymentAlreadyFinalized',
    'InsufficientPayment',
    'UnknownItem',
    'UnknownCustomer',
    'CollaboratorUnavailable',
    'FinalizationError',
]
