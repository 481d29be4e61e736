# ==============================================================================
# ERRORES DEL DOMINIO
# ==============================================================================
# Taxonomía de errores del motor de caja. Todos heredan de PosError y llevan
# un diccionario `context` (paso, boleta, montos) para que la capa de
# presentación pueda mostrar un mensaje preciso.
# ==============================================================================

from typing import Any, Dict, Optional


class PosError(Exception):
    """Error base del sistema de caja."""

    code = 'POS_ERROR'

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para la respuesta JSON."""
        return {
            'ok': False,
            'error': self.message,
            'code': self.code,
            'context': {k: str(v) for k, v in self.context.items()},
        }


# ==============================================================================
# ERRORES DE VALIDACIÓN DE ENTRADA
# ==============================================================================

class InvalidQuantity(PosError):
    """La cantidad de un ítem debe ser un entero mayor o igual a 1."""
    code = 'INVALID_QUANTITY'

    def __init__(self, quantity: Any, item_id: str = ''):
        super().__init__(
            f'Cantidad inválida: {quantity!r} (debe ser un entero >= 1)',
            {'quantity': quantity, 'item_id': item_id}
        )
        self.quantity = quantity


class InvalidAmount(PosError):
    """Monto monetario no representable (p.ej. un float)."""
    code = 'INVALID_AMOUNT'

    def __init__(self, amount: Any):
        super().__init__(
            f'Monto inválido: {amount!r} (use unidades menores enteras)',
            {'amount': amount}
        )


class NotPriced(PosError):
    """Se intentó descontar o pagar antes de calcular el total de la canasta."""
    code = 'NOT_PRICED'

    def __init__(self, step: str):
        super().__init__(
            f'No se puede ejecutar "{step}" antes de calcular el total',
            {'step': step}
        )


class NoActiveSale(PosError):
    """No hay una venta en curso."""
    code = 'NO_ACTIVE_SALE'

    def __init__(self, step: str):
        super().__init__(f'No hay venta activa para "{step}"', {'step': step})


class PaymentAlreadyFinalized(PosError):
    """El registro de pago ya fue creado y es inmutable."""
    code = 'PAYMENT_FINALIZED'

    def __init__(self, step: str):
        super().__init__(
            f'El pago ya fue finalizado; "{step}" no está permitido',
            {'step': step}
        )


# ==============================================================================
# ERRORES DE REGLAS DE NEGOCIO
# ==============================================================================

class InsufficientPayment(PosError):
    """El monto entregado no cubre el total efectivo de la venta."""
    code = 'INSUFFICIENT_PAYMENT'

    def __init__(self, amount_paid, effective_total):
        shortfall = effective_total.minus(amount_paid)
        super().__init__(
            f'Pago insuficiente: entregado {amount_paid}, total {effective_total}, '
            f'falta {shortfall}',
            {
                'step': 'finalize_payment',
                'amount_paid': amount_paid,
                'effective_total': effective_total,
                'shortfall': shortfall,
            }
        )
        self.amount_paid = amount_paid
        self.effective_total = effective_total
        self.shortfall = shortfall


# ==============================================================================
# ERRORES DE COLABORADORES EXTERNOS
# ==============================================================================

class UnknownItem(PosError):
    """El identificador de ítem no existe en el inventario."""
    code = 'UNKNOWN_ITEM'

    def __init__(self, item_id: str):
        super().__init__(f'Ítem no encontrado: {item_id}', {'item_id': item_id})
        self.item_id = item_id


class UnknownCustomer(PosError):
    """El cliente no está registrado."""
    code = 'UNKNOWN_CUSTOMER'

    def __init__(self, customer_id: str):
        super().__init__(
            f'Cliente no registrado: {customer_id}',
            {'customer_id': customer_id}
        )
        self.customer_id = customer_id


class CollaboratorUnavailable(PosError):
    """Un sistema externo no responde."""
    code = 'COLLABORATOR_UNAVAILABLE'

    def __init__(self, collaborator: str, detail: str = ''):
        message = f'Sistema externo no disponible: {collaborator}'
        if detail:
            message += f' ({detail})'
        super().__init__(message, {'collaborator': collaborator})
        self.collaborator = collaborator


class FinalizationError(PosError):
    """Falló un paso del protocolo de finalización de la transacción."""
    code = 'FINALIZATION_FAILED'

    def __init__(self, step: str, receipt: str):
        super().__init__(
            f'Falló el paso "{step}" al finalizar la venta {receipt}',
            {'step': step, 'receipt': receipt}
        )
        self.step = step
        self.receipt = receipt
