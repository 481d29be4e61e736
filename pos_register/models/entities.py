# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto del negocio de caja.
# Los montos se manejan SIEMPRE con Money (unidades menores exactas),
# nunca con float.
# ==============================================================================

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, Iterator, List, Optional, Tuple
from datetime import datetime

from .errors import InvalidAmount, InvalidQuantity


# Unidades menores por unidad mayor (céntimos por sol/euro/corona)
MINOR_UNITS_PER_MAJOR = 100


def to_fraction(value: Any) -> Fraction:
    """
    Convierte un valor numérico exacto a Fraction.

    Acepta int, Fraction, Decimal y str ("0.06"). Los float se rechazan
    porque no representan montos de forma exacta.
    """
    if isinstance(value, float):
        raise InvalidAmount(value)
    if isinstance(value, (int, Fraction, Decimal)):
        return Fraction(value)
    if isinstance(value, str):
        try:
            return Fraction(value)
        except ValueError:
            raise InvalidAmount(value) from None
    raise InvalidAmount(value)


# ==============================================================================
# ENUMERACIONES
# ==============================================================================

class DiscountType(str, Enum):
    """Tipos de regla de descuento."""
    ITEM = "ITEM"                        # Porcentaje sobre un ítem concreto
    TOTAL_THRESHOLD = "TOTAL_THRESHOLD"  # Porcentaje si el total supera un umbral
    CUSTOMER = "CUSTOMER"                # Porcentaje por cliente/fidelidad


class AuditType(str, Enum):
    """Tipos de eventos de auditoría."""
    VENTA = "VENTA"
    PAGO = "PAGO"
    SISTEMA = "SISTEMA"


# ==============================================================================
# DINERO
# ==============================================================================

@dataclass(frozen=True, order=True)
class Money:
    """
    Valor monetario inmutable expresado en unidades menores.

    El monto es un racional exacto: sumar, restar y multiplicar nunca
    pierde precisión. El redondeo a unidades menores enteras solo ocurre
    al presentar (`minor_units`, `str`).

    Attributes:
        amount: Monto en unidades menores (p.ej. céntimos)
    """
    amount: Fraction = Fraction(0)

    def __post_init__(self):
        object.__setattr__(self, 'amount', to_fraction(self.amount))

    @classmethod
    def zero(cls) -> 'Money':
        return cls(0)

    def plus(self, other: 'Money') -> 'Money':
        return Money(self.amount + other.amount)

    def minus(self, other: 'Money') -> 'Money':
        return Money(self.amount - other.amount)

    def multiplied_by(self, factor: Any) -> 'Money':
        """Multiplica por un factor exacto (cantidad, tasa o proporción)."""
        return Money(self.amount * to_fraction(factor))

    def ratio_to(self, other: 'Money') -> Fraction:
        """Proporción exacta self / other. `other` no puede ser cero."""
        return self.amount / other.amount

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_negative(self) -> bool:
        return self.amount < 0

    @property
    def minor_units(self) -> int:
        """Monto redondeado (mitad hacia arriba) a unidades menores enteras."""
        exact = Decimal(self.amount.numerator) / Decimal(self.amount.denominator)
        return int(exact.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    def __str__(self) -> str:
        major = Decimal(self.minor_units) / Decimal(MINOR_UNITS_PER_MAJOR)
        return f"{major:.2f}"


# ==============================================================================
# ENTIDADES DE INVENTARIO Y CLIENTES
# ==============================================================================

@dataclass(frozen=True)
class Item:
    """
    Ítem de referencia obtenido del inventario.

    Attributes:
        item_id: Identificador único del ítem
        name: Nombre para mostrar
        unit_price: Precio unitario
        vat_rate: Tasa de IVA como fracción (0.06 = 6%)
    """
    item_id: str
    name: str
    unit_price: Money
    vat_rate: Fraction = Fraction(0)

    def __post_init__(self):
        object.__setattr__(self, 'vat_rate', to_fraction(self.vat_rate))

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para respuestas JSON."""
        return {
            'item_id': self.item_id,
            'name': self.name,
            'unit_price': self.unit_price.minor_units,
            'vat_rate': str(Decimal(self.vat_rate.numerator) / Decimal(self.vat_rate.denominator)),
        }


@dataclass(frozen=True)
class Customer:
    """Cliente registrado."""
    customer_id: str
    name: str = ''
    loyalty_tier: str = ''


# ==============================================================================
# CANASTA
# ==============================================================================

class Basket:
    """
    Canasta de la venta en curso: mapeo ordenado ítem → cantidad.

    El orden de inserción se conserva para la boleta. Agregar un ítem
    existente incrementa su cantidad, nunca lo duplica.
    """

    def __init__(self, lines: Optional[List[Tuple[Item, int]]] = None):
        self._entries: Dict[Item, int] = {}
        for item, quantity in lines or []:
            self.add(item, quantity)

    def add(self, item: Item, quantity: int = 1) -> int:
        """
        Agrega `quantity` unidades del ítem.

        Returns:
            Cantidad total del ítem en la canasta

        Raises:
            InvalidQuantity: Si la cantidad no es un entero >= 1
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidQuantity(quantity, item.item_id)
        self._entries[item] = self._entries.get(item, 0) + quantity
        return self._entries[item]

    def items(self) -> List[Tuple[Item, int]]:
        """Pares (ítem, cantidad) en orden de inserción (copia de solo lectura)."""
        return list(self._entries.items())

    def quantity_of(self, item_id: str) -> int:
        for item, quantity in self._entries.items():
            if item.item_id == item_id:
                return quantity
        return 0

    def subtotal(self) -> Money:
        """Suma de precio unitario × cantidad. Se recalcula en cada llamada."""
        total = Money.zero()
        for item, quantity in self._entries.items():
            total = total.plus(item.unit_price.multiplied_by(quantity))
        return total

    def vat_total(self) -> Money:
        """Suma del IVA de cada línea. Se recalcula en cada llamada."""
        total = Money.zero()
        for item, quantity in self._entries.items():
            item_vat = item.unit_price.multiplied_by(item.vat_rate)
            total = total.plus(item_vat.multiplied_by(quantity))
        return total

    def is_empty(self) -> bool:
        return not self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Tuple[Item, int]]:
        return iter(self.items())


# ==============================================================================
# REGLAS DE DESCUENTO
# ==============================================================================

@dataclass(frozen=True)
class DiscountRule:
    """
    Condición de elegibilidad para un descuento porcentual.

    Attributes:
        rule_id: Identificador de la regla
        discount_type: ITEM, TOTAL_THRESHOLD o CUSTOMER
        rate: Porcentaje como fracción (0.10 = 10%)
        item_id: Ítem al que aplica (solo ITEM)
        min_quantity: Cantidad mínima del ítem (solo ITEM)
        threshold: Total mínimo antes de descuento (solo TOTAL_THRESHOLD)
        customer_id: Si se define, la regla solo aplica a ese cliente
        description: Texto para la boleta
    """
    rule_id: str
    discount_type: DiscountType
    rate: Fraction
    item_id: Optional[str] = None
    min_quantity: int = 1
    threshold: Optional[Money] = None
    customer_id: Optional[str] = None
    description: str = ''

    def __post_init__(self):
        object.__setattr__(self, 'rate', to_fraction(self.rate))


@dataclass(frozen=True)
class DiscountRuleSet:
    """Instantánea inmutable de reglas, obtenida una vez por transacción."""
    rules: Tuple[DiscountRule, ...] = ()
    customer_id: Optional[str] = None

    def __len__(self) -> int:
        return len(self.rules)


# ==============================================================================
# REGISTROS DE PAGO Y TRANSACCIÓN
# ==============================================================================

_DISCOUNT_FIELDS = ('discount', 'total_price_after_discount', 'total_vat_after_discount')


@dataclass(frozen=True)
class PaymentRecord:
    """
    Resultado de precios, descuento y vuelto de una venta.

    Los campos de descuento están todos presentes o todos ausentes.
    """
    total_price: Money
    total_vat: Money
    amount_paid: Money
    change: Money
    discount: Optional[Money] = None
    total_price_after_discount: Optional[Money] = None
    total_vat_after_discount: Optional[Money] = None

    def __post_init__(self):
        present = [getattr(self, name) is not None for name in _DISCOUNT_FIELDS]
        if any(present) and not all(present):
            raise ValueError('Los campos de descuento deben definirse juntos')

    @property
    def has_discount(self) -> bool:
        return self.discount is not None

    @property
    def effective_total(self) -> Money:
        """Total cobrado: con descuento si lo hubo, si no el total original."""
        if self.has_discount:
            return self.total_price_after_discount
        return self.total_price

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario (montos en unidades menores)."""
        d = {
            'total_price': self.total_price.minor_units,
            'total_vat': self.total_vat.minor_units,
            'amount_paid': self.amount_paid.minor_units,
            'change': self.change.minor_units,
        }
        if self.has_discount:
            for name in _DISCOUNT_FIELDS:
                d[name] = getattr(self, name).minor_units
        return d


@dataclass(frozen=True)
class TransactionRecord:
    """
    Registro completo de una venta finalizada (la "boleta").

    Attributes:
        receipt: Número de boleta (identificador único)
        lines: Instantánea de la canasta (ítem, cantidad)
        payment: Registro de pago
        ts: Timestamp ISO de la venta
        customer_id: Cliente identificado (opcional)
    """
    receipt: str
    lines: Tuple[Tuple[Item, int], ...]
    payment: PaymentRecord
    ts: str = ''
    customer_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'lines', tuple(self.lines))
        if not self.ts:
            object.__setattr__(self, 'ts', datetime.now().isoformat(timespec='seconds'))

    @property
    def basket(self) -> Basket:
        return Basket(list(self.lines))

    @property
    def items_count(self) -> int:
        return sum(quantity for _, quantity in self.lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para respuestas JSON."""
        d = {
            'receipt': self.receipt,
            'ts': self.ts,
            'items': [
                dict(item.to_dict(), quantity=quantity)
                for item, quantity in self.lines
            ],
            'payment': self.payment.to_dict(),
        }
        if self.customer_id:
            d['customer_id'] = self.customer_id
        return d


# ==============================================================================
# ENTIDADES DE AUDITORÍA
# ==============================================================================

@dataclass
class AuditLog:
    """
    Registro de auditoría.

    Attributes:
        type: Tipo de evento (VENTA, PAGO, SISTEMA)
        message: Mensaje descriptivo humanizado
        timestamp: Fecha y hora del evento
        related_id: ID relacionado (boleta)
        details: Detalles adicionales
    """
    type: str
    message: str
    timestamp: str = ''
    related_id: str = ''
    details: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        return {
            'type': self.type,
            'message': self.message,
            'timestamp': self.timestamp,
            'related_id': self.related_id,
            'details': self.details
        }
