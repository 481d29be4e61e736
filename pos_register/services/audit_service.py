# ==============================================================================
# SERVICIO DE AUDITORÍA
# ==============================================================================
# Registra en el log de auditoría cada pago y cada venta finalizada.
# Es observador de pago Y de finalización.
#
# La regla de oro: Si entra dinero → siempre log de PAGO
# ==============================================================================

from typing import Any, Dict, List, Optional

from pos_register.models import AuditLog, AuditType, Money, TransactionRecord
from pos_register.repositories.audit_repository import AuditRepository
from pos_register.services.observers import FinalizationObserver, PaymentObserver


class AuditService(PaymentObserver, FinalizationObserver):
    """
    Servicio para registro y consulta de auditoría.

    Centraliza:
    - Registro de eventos con mensajes humanizados
    - Categorización de eventos (VENTA, PAGO, SISTEMA)
    """

    def __init__(self, audit_repo: AuditRepository):
        """
        Args:
            audit_repo: Repositorio de auditoría
        """
        self.audit_repo = audit_repo

    # =========================================================================
    # REGISTRO DE EVENTOS
    # =========================================================================

    def log(
        self,
        log_type: str,
        message: str,
        related_id: str = '',
        details: Optional[Dict[str, Any]] = None
    ) -> AuditLog:
        """
        Registra un evento de auditoría genérico.

        Args:
            log_type: Tipo de evento (VENTA, PAGO, SISTEMA)
            message: Mensaje descriptivo humanizado
            related_id: ID relacionado (boleta)
            details: Detalles adicionales
        """
        return self.audit_repo.log(log_type, message, related_id, details)

    def on_payment_finalized(self, realized_revenue: Money) -> None:
        """REGLA DE ORO: cada pago completado queda registrado."""
        self.log(
            AuditType.PAGO.value,
            f"Pago recibido: {realized_revenue}",
            details={'amount': realized_revenue.minor_units}
        )

    def on_transaction_finalized(self, record: TransactionRecord) -> None:
        payment = record.payment
        message = (
            f"Venta {record.receipt} finalizada - Total: {payment.effective_total}"
            f" - {record.items_count} artículos"
        )
        if payment.has_discount:
            message += f" - Descuento: {payment.discount}"
        self.log(
            AuditType.VENTA.value,
            message,
            record.receipt,
            {
                'total': payment.effective_total.minor_units,
                'items_count': record.items_count,
                'customer_id': record.customer_id,
            }
        )

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_logs(self, log_type: Optional[str] = None) -> List[AuditLog]:
        """Eventos registrados, opcionalmente filtrados por tipo."""
        if log_type:
            return self.audit_repo.get_by_type(log_type)
        return self.audit_repo.get_all()
