# ==============================================================================
# REPOSITORIO DE CONTABILIDAD
# ==============================================================================
# Libro contable externo: recibe un registro de pago por cada venta.
# ==============================================================================

from pos_register.models import Money, TransactionRecord
from pos_register.repositories.base import ListRepository


class AccountingRepository(ListRepository[TransactionRecord]):
    """Libro de pagos del sistema contable externo."""

    def record_payment(self, record: TransactionRecord) -> None:
        self.append(record)

    def total_booked(self) -> Money:
        """Ingresos contabilizados (total efectivo de cada venta)."""
        total = Money.zero()
        for record in self._records:
            total = total.plus(record.payment.effective_total)
        return total
